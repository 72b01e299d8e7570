from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

ServiceStatus = Literal["scheduled", "in_progress", "completed", "closed"]


class ServiceCreate(BaseModel):
    """Either plate_number or vehicle_id identifies the vehicle; plate wins when both are sent."""
    plate_number: Optional[str] = None
    vehicle_id: Optional[int] = None
    service_date: Optional[datetime] = None
    work_performed: str
    parts_replaced: Optional[str] = None
    labor_cost: Optional[Decimal] = None
    parts_cost: Optional[Decimal] = None
    total_cost: Optional[Decimal] = None
    mechanic_name: Optional[str] = None
    notes: Optional[str] = None
    status: ServiceStatus = "completed"
    odometer: Optional[int] = None
    next_service_due: Optional[datetime] = None


class ServiceOut(BaseModel):
    id: int
    vehicle_id: int
    customer_id: int
    service_date: datetime
    work_performed: str
    parts_replaced: Optional[str]
    labor_cost: Decimal
    parts_cost: Decimal
    total_cost: Decimal
    mechanic_name: Optional[str]
    notes: Optional[str]
    status: str
    odometer: Optional[int]
    next_service_due: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ServiceMediaOut(BaseModel):
    id: int
    service_id: int
    file_name: str
    file_type: str
    file_size: int
    url: str
    created_at: datetime
