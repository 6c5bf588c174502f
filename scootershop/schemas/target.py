# scootershop/schemas/target.py
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

from scootershop.models.target import TargetPeriod, TargetStatus

class TargetBase(BaseModel):
    title: Optional[str] = Field(None, description="E.g. Monthly scooter sales")
    target_amount: Optional[float] = None
    period: Optional[str] = Field(None, description="daily, weekly, monthly or yearly")
    description: Optional[str] = ""

    @field_validator("title", "description")
    @classmethod
    def _strip(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value

# Presence and period are checked by the route so failures surface as 400
class TargetCreate(TargetBase):
    pass

class TargetUpdate(TargetBase):
    pass

class TargetRead(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    target_amount: float
    current_amount: float
    period: TargetPeriod
    start_date: datetime
    end_date: datetime
    status: TargetStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    progress_percentage: float = 0.0

    class Config:
        from_attributes = True

class TargetRefreshFailure(BaseModel):
    target_id: uuid.UUID
    title: str
    error: str

class TargetListResponse(BaseModel):
    targets: List[TargetRead]
    failures: List[TargetRefreshFailure] = []
