"""
Services table: repair and maintenance history, one row per visit.
Costs are stored as Numeric(10, 2); total_cost defaults to labor + parts.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, Numeric, ForeignKey
from app.database import Base

SERVICE_STATUSES = ("scheduled", "in_progress", "completed", "closed")


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    service_date = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    work_performed = Column(Text, nullable=False)
    parts_replaced = Column(Text)
    labor_cost = Column(Numeric(10, 2), nullable=False, default=0)
    parts_cost = Column(Numeric(10, 2), nullable=False, default=0)
    total_cost = Column(Numeric(10, 2), nullable=False, default=0)
    mechanic_name = Column(String(200))
    notes = Column(Text)
    status = Column(String(20), nullable=False, default="completed")  # scheduled | in_progress | completed | closed
    odometer = Column(Integer)
    next_service_due = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Service {self.id} vehicle={self.vehicle_id} status={self.status} total={self.total_cost}>"
