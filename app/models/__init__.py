# Workshop Records: Database Models
# Import all models here for SQLAlchemy discovery

from app.models.customer import Customer           # noqa
from app.models.vehicle import Vehicle             # noqa
from app.models.service import Service             # noqa
from app.models.service_media import ServiceMedia  # noqa
