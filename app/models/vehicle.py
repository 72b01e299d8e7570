"""
Vehicles table: cars brought into the workshop, linked to their owner.
Plate numbers are unique and stored uppercased.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates
from app.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    plate_number = Column(String(50), unique=True, nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    customer = relationship("Customer", back_populates="vehicles")

    @validates("plate_number")
    def _upper_plate(self, key, value):
        return value.strip().upper() if value else value

    def __repr__(self):
        return f"<Vehicle {self.plate_number} {self.make} {self.model} customer={self.customer_id}>"
