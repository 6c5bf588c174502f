# scootershop/models/transaction.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Float, Integer, Boolean, DateTime, Enum, Uuid
from scootershop.core.database import Base

class TransactionType(str, enum.Enum):
    income = "income"
    expense = "expense"
    sale = "sale"

class DiscountType(str, enum.Enum):
    amount = "amount"
    percent = "percent"

class PaymentType(str, enum.Enum):
    cash = "cash"
    credit = "credit"
    installment = "installment"

# Only these count toward revenue targets
REVENUE_TYPES = (TransactionType.income, TransactionType.sale)

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(Enum(TransactionType), nullable=False)
    amount = Column(Float, nullable=False)
    description = Column(String(length=255), nullable=False)
    category = Column(String(length=100), nullable=False, default="General")

    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)

    # Walk-in customers only carry the name/phone snapshot
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    customer_name = Column(String(length=100), nullable=True)
    customer_surname = Column(String(length=100), nullable=True)
    customer_phone = Column(String(length=30), nullable=True)
    is_registered_customer = Column(Boolean, nullable=False, default=False)

    discount = Column(Float, nullable=False, default=0.0)
    discount_type = Column(Enum(DiscountType), nullable=False, default=DiscountType.amount)
    original_amount = Column(Float, nullable=False, default=0.0)
    payment_type = Column(Enum(PaymentType), nullable=False, default=PaymentType.cash)

    service_id = Column(Uuid(as_uuid=True), ForeignKey("services.id", ondelete="SET NULL"), nullable=True)

    # Doubles as the event timestamp for target progress
    created_at = Column(DateTime, default=datetime.now, index=True)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def is_revenue(self) -> bool:
        return self.type in REVENUE_TYPES

    def __repr__(self):
        return f"<Transaction type={self.type} amount={self.amount} date={self.created_at}>"
