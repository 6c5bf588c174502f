# scootershop/schemas/receivable.py
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
import uuid

from scootershop.models.receivable import PaymentPlan, Priority, ReceivableStatus, ReceivableType

class ReceivableBase(BaseModel):
    customer_id: Optional[uuid.UUID] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    amount: float = Field(..., ge=0)
    description: Optional[str] = ""
    type: ReceivableType
    due_date: Optional[datetime] = None
    notes: Optional[str] = ""

class ReceivableCreate(ReceivableBase):
    status: ReceivableStatus = ReceivableStatus.unpaid
    payment_plan: PaymentPlan = PaymentPlan.single
    transaction_id: Optional[uuid.UUID] = None
    service_id: Optional[uuid.UUID] = None
    priority: Priority = Priority.normal
    mark_as_paid: bool = False

class ReceivableUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    type: Optional[ReceivableType] = None
    status: Optional[ReceivableStatus] = None
    due_date: Optional[datetime] = None
    notes: Optional[str] = None
    paid_amount: Optional[float] = Field(None, ge=0)
    mark_as_paid: bool = False

class ReceivableRead(ReceivableBase):
    id: uuid.UUID
    first_name: str
    last_name: str
    phone: str
    is_registered_customer: bool
    status: ReceivableStatus
    payment_plan: PaymentPlan
    transaction_id: Optional[uuid.UUID] = None
    service_id: Optional[uuid.UUID] = None
    paid_date: Optional[datetime] = None
    paid_amount: float
    remaining_amount: float
    priority: Priority
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
