"""
Primary match resolution for the vehicle lookup.

Tries, in order, to pin the term to exactly one vehicle:
  1. plate-like term  → exact plate (plates are unique, trusted outright)
  2. ≥ 7 digits       → customer by phone digits, if they own exactly one vehicle
  3. any term         → customer by exact name, if one customer owns exactly one vehicle
Whenever a step finds owners but more than one vehicle, those vehicles become
seed suggestions (tagged "phone" or "name") instead of an arbitrary pick.
Read-only: the resolver never writes.
"""

from dataclasses import dataclass, field
from typing import Optional

from app.config import settings
from app.models.customer import Customer
from app.models.service import Service
from app.models.vehicle import Vehicle
from app.services.record_store import RecordStore
from app.services.suggestion_assembler import Suggestion
from app.services.term_normalizer import NormalizedTerm
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class VehicleLookup:
    vehicle: Vehicle
    customer: Optional[Customer]
    services: list[Service] = field(default_factory=list)


@dataclass(frozen=True)
class PrimaryResolution:
    match: Optional[VehicleLookup]
    seeds: tuple[Suggestion, ...] = ()


def build_vehicle_lookup(store: RecordStore, vehicle: Vehicle) -> VehicleLookup:
    """Vehicle with its owner (None if the owner row is gone) and full service history."""
    return VehicleLookup(
        vehicle=vehicle,
        customer=store.get_customer(vehicle.customer_id),
        services=store.get_services_by_vehicle(vehicle.id),
    )


def resolve_primary_match(store: RecordStore, term: NormalizedTerm) -> PrimaryResolution:
    seeds: list[Suggestion] = []

    if term.plate_like:
        vehicle = store.get_vehicle_by_plate(term.upper)
        if vehicle:
            logger.debug(f"Plate match for '{term.text}': vehicle {vehicle.id}")
            return PrimaryResolution(match=build_vehicle_lookup(store, vehicle))

    if len(term.digits) >= settings.PHONE_MIN_DIGITS:
        customer = store.get_customer_by_normalized_phone(term.digits)
        if customer:
            vehicles = store.get_vehicles_by_customer(customer.id)
            if len(vehicles) == 1:
                logger.debug(f"Phone match for '{term.text}': customer {customer.id}")
                return PrimaryResolution(match=build_vehicle_lookup(store, vehicles[0]))
            seeds.extend(Suggestion(vehicle=v, customer=customer, reason="phone") for v in vehicles)

    customers = store.get_customers_by_exact_name(term.text)
    if len(customers) == 1:
        vehicles = store.get_vehicles_by_customer(customers[0].id)
        if len(vehicles) == 1:
            logger.debug(f"Name match for '{term.text}': customer {customers[0].id}")
            return PrimaryResolution(match=build_vehicle_lookup(store, vehicles[0]), seeds=tuple(seeds))
        seeds.extend(Suggestion(vehicle=v, customer=customers[0], reason="name") for v in vehicles)
    elif len(customers) > 1:
        for customer in customers:
            vehicles = store.get_vehicles_by_customer(customer.id)
            seeds.extend(Suggestion(vehicle=v, customer=customer, reason="name") for v in vehicles)

    return PrimaryResolution(match=None, seeds=tuple(seeds))
