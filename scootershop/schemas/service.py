# scootershop/schemas/service.py
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
import uuid

from scootershop.models.service import ServiceStatus

class ServiceBase(BaseModel):
    customer_id: Optional[uuid.UUID] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = ""
    customer_email: Optional[str] = ""
    scooter_brand: str = Field(..., min_length=1)
    scooter_model: str = Field(..., min_length=1)
    serial_number: Optional[str] = ""
    problem: str = Field(..., min_length=1)
    solution: Optional[str] = ""
    cost: float = Field(..., ge=0)
    labor_cost: float = Field(0.0, ge=0)
    parts_cost: float = Field(0.0, ge=0)
    status: ServiceStatus = ServiceStatus.pending
    received_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    notes: Optional[str] = ""
    warranty_days: int = Field(30, ge=0)
    customer_rating: Optional[int] = Field(None, ge=1, le=5)
    customer_feedback: Optional[str] = ""

class ServiceCreate(ServiceBase):
    pass

class ServiceUpdate(ServiceBase):
    pass

class ServiceRead(ServiceBase):
    id: uuid.UUID
    customer_name: str
    customer_phone: str
    is_registered_customer: bool
    received_date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
