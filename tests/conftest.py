"""Shared fixtures: an in-memory SQLite database, a RecordStore over it, and an API client."""

import sys
import os
import tempfile
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Must be set before app.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "workshop-test-logs"))

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, create_tables, get_db
from app.main import app
from app.services.record_store import RecordStore

BASE_TIME = datetime(2024, 1, 1, 9, 0, 0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return RecordStore(db)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def add_vehicle(store):
    """add_vehicle(customer, plate, make, model, age_days=None); later calls get newer created_at unless age_days is given."""
    counter = {"n": 0}

    def _add(customer, plate, make="Toyota", model="Corolla", year=2018, age_days=None):
        counter["n"] += 1
        offset = age_days if age_days is not None else -counter["n"]
        return store.create_vehicle(
            customer_id=customer.id if hasattr(customer, "id") else customer,
            plate_number=plate,
            make=make,
            model=model,
            year=year,
            created_at=BASE_TIME - timedelta(days=offset),
        )

    return _add
