# scootershop/models/service.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Float, Integer, Boolean, DateTime, Enum, Uuid
from scootershop.core.database import Base

class ServiceStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"

class Service(Base):
    __tablename__ = "services"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    customer_name = Column(String(length=200), nullable=False)
    customer_phone = Column(String(length=30), nullable=False)
    customer_address = Column(String(length=500), nullable=False, default="")
    customer_email = Column(String(length=255), nullable=False, default="")
    is_registered_customer = Column(Boolean, nullable=False, default=False)

    scooter_brand = Column(String(length=100), nullable=False)
    scooter_model = Column(String(length=100), nullable=False)
    serial_number = Column(String(length=100), nullable=False, default="")
    problem = Column(String, nullable=False)
    solution = Column(String, nullable=False, default="")

    cost = Column(Float, nullable=False)
    labor_cost = Column(Float, nullable=False, default=0.0)
    parts_cost = Column(Float, nullable=False, default=0.0)

    status = Column(Enum(ServiceStatus), nullable=False, default=ServiceStatus.pending)
    received_date = Column(DateTime, nullable=False, default=datetime.now)
    completed_date = Column(DateTime, nullable=True)
    notes = Column(String, nullable=False, default="")
    warranty_days = Column(Integer, nullable=False, default=30)
    customer_rating = Column(Integer, nullable=True)
    customer_feedback = Column(String, nullable=False, default="")

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    def __repr__(self):
        return f"<Service {self.scooter_brand} {self.scooter_model} status={self.status}>"
