"""
Customers table: one row per workshop customer.
Phone is the unique identifier; phone_digits keeps a digits-only copy so
lookups ignore formatting like dashes, spaces and parentheses.
"""

import re
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship, validates
from app.database import Base

_NON_DIGITS = re.compile(r"\D")


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    phone = Column(String(50), unique=True, nullable=False)
    phone_digits = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False, index=True)
    email = Column(String(200))
    address = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    vehicles = relationship("Vehicle", back_populates="customer", passive_deletes=True)

    @validates("phone")
    def _sync_phone_digits(self, key, value):
        self.phone_digits = _NON_DIGITS.sub("", value or "")
        return value

    def __repr__(self):
        return f"<Customer {self.id} name={self.name} phone={self.phone}>"
