"""
Record store: every read and write the workshop API performs against the
database goes through RecordStore, so the search pipeline and the routers
share one set of queries.

Lookups are case-insensitive where the business key is (plates, names) and
digit-normalized for phones. Database errors are not caught here; they
propagate to the caller.
"""

import re
from typing import Optional, Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.models.customer import Customer
from app.models.service import Service
from app.models.service_media import ServiceMedia
from app.models.vehicle import Vehicle
from app.utils.logger import get_logger

logger = get_logger(__name__)

LIKE_ESCAPE = "\\"

_NON_DIGITS = re.compile(r"\D")


class RecordStore:
    def __init__(self, db: Session):
        self.db = db

    # ── Customers ──────────────────────────────────────────────────────────
    def list_customers(self) -> list[Customer]:
        return self.db.query(Customer).order_by(Customer.created_at.desc(), Customer.id.desc()).all()

    def get_customer(self, customer_id: Optional[int]) -> Optional[Customer]:
        if customer_id is None:
            return None
        return self.db.get(Customer, customer_id)

    def get_customer_by_normalized_phone(self, phone: str) -> Optional[Customer]:
        """Match on digits only, so "(555) 123-4567" finds "555-123-4567"."""
        digits = _NON_DIGITS.sub("", phone or "")
        if not digits:
            return None
        return (
            self.db.query(Customer)
            .filter(Customer.phone_digits == digits)
            .order_by(Customer.id)
            .first()
        )

    def get_customers_by_exact_name(self, name: str) -> list[Customer]:
        trimmed = (name or "").strip()
        if not trimmed:
            return []
        return (
            self.db.query(Customer)
            .filter(func.lower(Customer.name) == trimmed.lower())
            .order_by(Customer.id)
            .all()
        )

    def create_customer(self, **fields) -> Customer:
        customer = Customer(**fields)
        self.db.add(customer)
        self.db.commit()
        self.db.refresh(customer)
        logger.info(f"Customer created: id={customer.id} phone={customer.phone}")
        return customer

    def update_customer(self, customer_id: int, **fields) -> Optional[Customer]:
        customer = self.get_customer(customer_id)
        if not customer:
            return None
        for key, value in fields.items():
            setattr(customer, key, value)
        self.db.commit()
        self.db.refresh(customer)
        return customer

    def delete_customer(self, customer_id: int) -> bool:
        customer = self.get_customer(customer_id)
        if not customer:
            return False
        self.db.delete(customer)
        self.db.commit()
        logger.info(f"Customer deleted: id={customer_id}")
        return True

    # ── Vehicles ───────────────────────────────────────────────────────────
    def list_vehicles(self) -> list[Vehicle]:
        return self.db.query(Vehicle).order_by(Vehicle.created_at.desc(), Vehicle.id.desc()).all()

    def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        return self.db.get(Vehicle, vehicle_id)

    def get_vehicle_by_plate(self, plate_number: str) -> Optional[Vehicle]:
        """Exact, case-insensitive plate match. % and _ are plain characters here."""
        plate = (plate_number or "").strip()
        if not plate:
            return None
        return self.db.query(Vehicle).filter(func.upper(Vehicle.plate_number) == plate.upper()).first()

    def get_vehicles_by_customer(self, customer_id: int) -> list[Vehicle]:
        return self.db.query(Vehicle).filter(Vehicle.customer_id == customer_id).order_by(Vehicle.id).all()

    def create_vehicle(self, **fields) -> Vehicle:
        vehicle = Vehicle(**fields)
        self.db.add(vehicle)
        self.db.commit()
        self.db.refresh(vehicle)
        logger.info(f"Vehicle created: id={vehicle.id} plate={vehicle.plate_number}")
        return vehicle

    def update_vehicle(self, vehicle_id: int, **fields) -> Optional[Vehicle]:
        vehicle = self.get_vehicle(vehicle_id)
        if not vehicle:
            return None
        for key, value in fields.items():
            setattr(vehicle, key, value)
        self.db.commit()
        self.db.refresh(vehicle)
        return vehicle

    def delete_vehicle(self, vehicle_id: int) -> bool:
        vehicle = self.get_vehicle(vehicle_id)
        if not vehicle:
            return False
        self.db.delete(vehicle)
        self.db.commit()
        logger.info(f"Vehicle deleted: id={vehicle_id}")
        return True

    def search_vehicle_rows(
        self,
        text_patterns: Sequence[str],
        digit_patterns: Sequence[str],
        limit: int,
    ) -> list[tuple[Vehicle, Optional[Customer]]]:
        """
        Vehicles LEFT JOIN owners where any LIKE pattern hits plate, make, model,
        owner name (text patterns, case-insensitive) or owner phone digits
        (digit patterns). Patterns must already carry their % wrappers and have
        literal % and _ escaped with a backslash. Newest vehicles first.
        No patterns means no rows, never a full scan.
        """
        conditions = []
        for pattern in text_patterns:
            conditions.append(Vehicle.plate_number.ilike(pattern, escape=LIKE_ESCAPE))
            conditions.append(Vehicle.make.ilike(pattern, escape=LIKE_ESCAPE))
            conditions.append(Vehicle.model.ilike(pattern, escape=LIKE_ESCAPE))
            conditions.append(Customer.name.ilike(pattern, escape=LIKE_ESCAPE))
        for pattern in digit_patterns:
            conditions.append(Customer.phone_digits.like(pattern, escape=LIKE_ESCAPE))

        if not conditions:
            return []

        rows = (
            self.db.query(Vehicle, Customer)
            .outerjoin(Customer, Vehicle.customer_id == Customer.id)
            .filter(or_(*conditions))
            .order_by(Vehicle.created_at.desc(), Vehicle.id.desc())
            .limit(limit)
            .all()
        )
        logger.debug(f"Vehicle candidate query: {len(conditions)} predicates → {len(rows)} rows")
        return [(vehicle, customer) for vehicle, customer in rows]

    # ── Services ───────────────────────────────────────────────────────────
    def list_services(self) -> list[Service]:
        return self.db.query(Service).order_by(Service.service_date.desc(), Service.id.desc()).all()

    def get_service(self, service_id: int) -> Optional[Service]:
        return self.db.get(Service, service_id)

    def get_services_by_vehicle(self, vehicle_id: int) -> list[Service]:
        return (
            self.db.query(Service)
            .filter(Service.vehicle_id == vehicle_id)
            .order_by(Service.service_date.desc(), Service.id.desc())
            .all()
        )

    def get_services_by_customer(self, customer_id: int) -> list[Service]:
        return (
            self.db.query(Service)
            .filter(Service.customer_id == customer_id)
            .order_by(Service.service_date.desc(), Service.id.desc())
            .all()
        )

    def create_service(self, **fields) -> Service:
        service = Service(**fields)
        self.db.add(service)
        self.db.commit()
        self.db.refresh(service)
        return service

    def add_service_media(self, entries: Sequence[dict]) -> list[ServiceMedia]:
        if not entries:
            return []
        media = [ServiceMedia(**entry) for entry in entries]
        self.db.add_all(media)
        self.db.commit()
        for item in media:
            self.db.refresh(item)
        return media

    def get_service_media(self, service_id: int) -> list[ServiceMedia]:
        return (
            self.db.query(ServiceMedia)
            .filter(ServiceMedia.service_id == service_id)
            .order_by(ServiceMedia.created_at.desc(), ServiceMedia.id.desc())
            .all()
        )
