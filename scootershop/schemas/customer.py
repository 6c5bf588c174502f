# scootershop/schemas/customer.py
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

from scootershop.models.customer import CustomerStatus, CustomerType
from scootershop.schemas.receivable import ReceivableRead
from scootershop.schemas.service import ServiceRead
from scootershop.schemas.transaction import TransactionRead

class CustomerBase(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("first_name", "last_name", "phone", "email", "address", "notes", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        # Blank optional text is stored as NULL
        return value.strip() or None

class CustomerCreate(CustomerBase):
    pass

class CustomerUpdate(CustomerBase):
    customer_type: Optional[CustomerType] = None
    status: Optional[CustomerStatus] = None

class CustomerRead(CustomerBase):
    id: uuid.UUID
    loyalty_points: int
    total_spent: float
    visit_count: int
    last_visit: Optional[datetime] = None
    last_purchase_date: Optional[datetime] = None
    current_debt: float
    customer_type: CustomerType
    status: CustomerStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CustomerUpsert(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    sale_amount: float = Field(0.0, ge=0)

class CustomerUpsertResult(BaseModel):
    message: str
    existing: bool
    id: uuid.UUID

class LoyaltyPointsAdd(BaseModel):
    points: int = Field(..., gt=0, description="Points to add")

class CustomerInsights(BaseModel):
    average_basket: float
    lifetime_value: float
    risk_level: str
    loyalty_level: str
    profitability: str

class CustomerProfile(BaseModel):
    customer: CustomerRead
    full_name: str
    days_since_last_purchase: Optional[int] = None
    last_purchase_date: Optional[datetime] = None
    stats: Dict[str, Any]
    insights: CustomerInsights
    transactions: List[TransactionRead]
    services: List[ServiceRead]
    receivables: List[ReceivableRead]
    next_service_reminder: Optional[datetime] = None
    loyalty_reward: Optional[int] = None
