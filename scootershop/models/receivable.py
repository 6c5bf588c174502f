# scootershop/models/receivable.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Float, Boolean, DateTime, Enum, Uuid
from scootershop.core.database import Base

class ReceivableType(str, enum.Enum):
    receivable = "receivable"   # the customer owes the shop
    payable = "payable"         # the shop owes the customer

class ReceivableStatus(str, enum.Enum):
    unpaid = "unpaid"
    paid = "paid"
    partial = "partial"

class PaymentPlan(str, enum.Enum):
    single = "single"
    installment = "installment"

class Priority(str, enum.Enum):
    low = "low"
    normal = "normal"
    high = "high"
    urgent = "urgent"

class Receivable(Base):
    __tablename__ = "receivables"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    first_name = Column(String(length=100), nullable=False)
    last_name = Column(String(length=100), nullable=False)
    phone = Column(String(length=30), nullable=False)
    is_registered_customer = Column(Boolean, nullable=False, default=False)

    amount = Column(Float, nullable=False)
    description = Column(String, nullable=False, default="")
    type = Column(Enum(ReceivableType), nullable=False)
    status = Column(Enum(ReceivableStatus), nullable=False, default=ReceivableStatus.unpaid)
    payment_plan = Column(Enum(PaymentPlan), nullable=False, default=PaymentPlan.single)

    transaction_id = Column(Uuid(as_uuid=True), ForeignKey("transactions.id", ondelete="SET NULL"), nullable=True)
    service_id = Column(Uuid(as_uuid=True), ForeignKey("services.id", ondelete="SET NULL"), nullable=True)

    due_date = Column(DateTime, nullable=True)
    paid_date = Column(DateTime, nullable=True)
    paid_amount = Column(Float, nullable=False, default=0.0)
    remaining_amount = Column(Float, nullable=False, default=0.0)
    notes = Column(String, nullable=False, default="")
    priority = Column(Enum(Priority), nullable=False, default=Priority.normal)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    def settle(self, now: datetime) -> None:
        """Derive remaining amount and status from what has been paid so far."""
        self.remaining_amount = (self.amount or 0.0) - (self.paid_amount or 0.0)
        if not self.paid_amount:
            self.status = ReceivableStatus.unpaid
        elif self.paid_amount >= self.amount:
            self.status = ReceivableStatus.paid
            self.paid_date = self.paid_date or now
        else:
            self.status = ReceivableStatus.partial

    def __repr__(self):
        return f"<Receivable {self.type} amount={self.amount} status={self.status}>"
