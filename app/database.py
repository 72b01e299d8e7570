"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL in production; any SQLAlchemy URL works since
no query relies on backend-specific functions. All models are imported in
create_tables() so a single call creates every table.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,   # Auto-reconnect if DB connection drops
        "pool_size": 10,
        "max_overflow": 20,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,                  # Set True to log all SQL queries (debug only)
    **_engine_kwargs(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency: yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from app.models.customer import Customer           # noqa
    from app.models.vehicle import Vehicle             # noqa
    from app.models.service import Service             # noqa
    from app.models.service_media import ServiceMedia  # noqa

    Base.metadata.create_all(bind=bind or engine)
