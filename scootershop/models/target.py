# scootershop/models/target.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Float, DateTime, Enum, Uuid
from scootershop.core.database import Base

class TargetPeriod(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"

class TargetStatus(str, enum.Enum):
    active = "active"
    completed = "completed"
    expired = "expired"

class Target(Base):
    __tablename__ = "targets"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(length=150), nullable=False)
    description = Column(String(length=500), nullable=False, default="")
    target_amount = Column(Float, nullable=False)
    # Recomputed from income/sale transactions inside the current window
    current_amount = Column(Float, nullable=False, default=0.0)
    period = Column(Enum(TargetPeriod), nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = Column(Enum(TargetStatus), nullable=False, default=TargetStatus.active)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def progress_percentage(self) -> float:
        if not self.target_amount:
            return 0.0
        return round((self.current_amount or 0.0) / self.target_amount * 100, 1)

    def __repr__(self):
        return f"<Target title={self.title} {self.current_amount}/{self.target_amount} period={self.period}>"
