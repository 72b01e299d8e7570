"""
Service visit creation.

Resolves the vehicle (by plate, or by id), copies the owner onto the
service row, and normalizes costs: labor and parts default to 0 and the
total defaults to labor + parts, all rounded to cents.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from app.models.service import Service
from app.schemas.service import ServiceCreate
from app.services.record_store import RecordStore
from app.utils.logger import get_logger

logger = get_logger(__name__)

CENTS = Decimal("0.01")


class VehicleNotFound(LookupError):
    pass


class MissingVehicle(ValueError):
    pass


def to_money(value: Optional[Decimal]) -> Decimal:
    return Decimal(value if value is not None else 0).quantize(CENTS, rounding=ROUND_HALF_UP)


def create_service_record(store: RecordStore, body: ServiceCreate) -> Service:
    plate = (body.plate_number or "").strip().upper()
    if plate:
        vehicle = store.get_vehicle_by_plate(plate)
        if not vehicle:
            raise VehicleNotFound(f"Vehicle with plate {plate} was not found")
    elif body.vehicle_id is not None:
        vehicle = store.get_vehicle(body.vehicle_id)
        if not vehicle:
            raise VehicleNotFound(f"Vehicle {body.vehicle_id} was not found")
    else:
        raise MissingVehicle("A valid plate number is required to create a service")

    labor = to_money(body.labor_cost)
    parts = to_money(body.parts_cost)
    total = to_money(body.total_cost) if body.total_cost is not None else labor + parts

    fields = body.model_dump(exclude={"plate_number", "vehicle_id", "labor_cost", "parts_cost", "total_cost"},
                             exclude_none=True)
    service = store.create_service(
        vehicle_id=vehicle.id,
        customer_id=vehicle.customer_id,
        labor_cost=labor,
        parts_cost=parts,
        total_cost=total,
        **fields,
    )
    logger.info(f"Service {service.id} recorded for {vehicle.plate_number}: total={total}")
    return service
