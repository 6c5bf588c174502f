# scootershop/schemas/transaction.py
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
import uuid

from scootershop.models.transaction import DiscountType, PaymentType, TransactionType

class TransactionBase(BaseModel):
    type: TransactionType
    amount: float = Field(..., gt=0)
    description: str = Field(..., min_length=1, description="E.g. Xiaomi Pro 2 sale")
    category: Optional[str] = "General"
    product_id: Optional[uuid.UUID] = None
    quantity: int = Field(1, ge=1)
    customer_id: Optional[uuid.UUID] = None
    customer_name: Optional[str] = None
    customer_surname: Optional[str] = None
    customer_phone: Optional[str] = None

class TransactionCreate(TransactionBase):
    discount: float = Field(0.0, ge=0)
    discount_type: DiscountType = DiscountType.amount
    original_amount: Optional[float] = None
    payment_type: PaymentType = PaymentType.cash
    service_id: Optional[uuid.UUID] = None

class TransactionUpdate(TransactionBase):
    pass

class TransactionRead(TransactionBase):
    id: uuid.UUID
    is_registered_customer: bool
    discount: float
    discount_type: DiscountType
    original_amount: float
    payment_type: PaymentType
    service_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
