# app/schemas/search.py: response shapes for /vehicles/search and /vehicles/lookup
from pydantic import BaseModel
from typing import Literal, Optional

from app.schemas.customer import CustomerOut
from app.schemas.service import ServiceOut
from app.schemas.vehicle import VehicleOut


class VehicleLookupOut(BaseModel):
    vehicle: VehicleOut
    customer: Optional[CustomerOut]
    services: list[ServiceOut]

    class Config:
        from_attributes = True


class SuggestionOut(BaseModel):
    vehicle: VehicleOut
    customer: Optional[CustomerOut]
    reason: Literal["plate", "phone", "name", "vehicle", "partial"]

    class Config:
        from_attributes = True


class VehicleSearchOut(BaseModel):
    match: Optional[VehicleLookupOut]
    suggestions: list[SuggestionOut]

    class Config:
        from_attributes = True
