# scootershop/models/customer.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Float, Integer, DateTime, Enum, Uuid
from scootershop.core.database import Base

class CustomerType(str, enum.Enum):
    normal = "normal"
    vip = "vip"
    premium = "premium"
    gold = "gold"

class CustomerStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    blocked = "blocked"

class Customer(Base):
    __tablename__ = "customers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(String(length=100), nullable=False)
    last_name = Column(String(length=100), nullable=False)
    phone = Column(String(length=30), nullable=False, unique=True, index=True)
    email = Column(String(length=255), nullable=True)
    address = Column(String(length=500), nullable=True)
    birth_date = Column(DateTime, nullable=True)
    notes = Column(String, nullable=True)

    # Loyalty and spending statistics, maintained by sales and services
    loyalty_points = Column(Integer, nullable=False, default=0)
    total_spent = Column(Float, nullable=False, default=0.0)
    visit_count = Column(Integer, nullable=False, default=0)
    last_visit = Column(DateTime, nullable=True)
    last_purchase_date = Column(DateTime, nullable=True)
    current_debt = Column(Float, nullable=False, default=0.0)

    customer_type = Column(Enum(CustomerType), nullable=False, default=CustomerType.normal)
    status = Column(Enum(CustomerStatus), nullable=False, default=CustomerStatus.active)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Customer name={self.full_name} phone={self.phone}>"
