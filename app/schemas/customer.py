from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional


class CustomerCreate(BaseModel):
    phone: str
    name: str
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def phone_has_digits(cls, value: str) -> str:
        if not any(ch.isdigit() for ch in value):
            raise ValueError("phone must contain at least one digit")
        return value.strip()


class CustomerOut(BaseModel):
    id: int
    phone: str
    name: str
    email: Optional[str]
    address: Optional[str]
    notes: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
