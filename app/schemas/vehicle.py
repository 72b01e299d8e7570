from pydantic import BaseModel, Field
from datetime import datetime


class VehicleCreate(BaseModel):
    customer_id: int
    plate_number: str = Field(min_length=1, max_length=50)
    make: str
    model: str
    year: int = Field(ge=1900, le=2100)


class VehicleOut(BaseModel):
    id: int
    customer_id: int
    plate_number: str
    make: str
    model: str
    year: int
    created_at: datetime

    class Config:
        from_attributes = True
