# scootershop/crud/customer.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from scootershop.models.customer import Customer
from typing import List, Optional
from datetime import datetime
import uuid
from scootershop.schemas.customer import CustomerCreate, CustomerUpdate

async def get_customers(db: AsyncSession) -> List[Customer]:
    result = await db.execute(select(Customer).order_by(desc(Customer.created_at)))
    return result.scalars().all()

async def get_customer_by_id(customer_id: uuid.UUID, db: AsyncSession) -> Optional[Customer]:
    result = await db.execute(select(Customer).where(Customer.id == customer_id))
    return result.scalar_one_or_none()

async def get_customer_by_phone(phone: str, db: AsyncSession,
                                exclude_id: Optional[uuid.UUID] = None) -> Optional[Customer]:
    query = select(Customer).where(Customer.phone == phone.strip())
    if exclude_id is not None:
        query = query.where(Customer.id != exclude_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()

async def create_customer(customer_in: CustomerCreate, db: AsyncSession, **stats) -> Customer:
    new_customer = Customer(**customer_in.model_dump(), **stats)
    db.add(new_customer)
    await db.commit()
    await db.refresh(new_customer)
    return new_customer

async def update_customer(customer: Customer, customer_in: CustomerUpdate, db: AsyncSession) -> Customer:
    for field, value in customer_in.model_dump(exclude_none=True).items():
        setattr(customer, field, value)
    # Clearable optional fields
    for field in ("email", "address", "birth_date", "notes"):
        setattr(customer, field, getattr(customer_in, field))
    db.add(customer)
    await db.commit()
    await db.refresh(customer)
    return customer

async def delete_customer(customer: Customer, db: AsyncSession) -> None:
    await db.delete(customer)
    await db.commit()

async def record_visit(customer: Customer, amount: float, loyalty_points: int,
                       db: AsyncSession, purchase: bool = True) -> Customer:
    """Bump spending statistics after a sale, completed service or upsert."""
    now = datetime.now()
    customer.total_spent = (customer.total_spent or 0.0) + amount
    customer.visit_count = (customer.visit_count or 0) + 1
    customer.loyalty_points = (customer.loyalty_points or 0) + loyalty_points
    customer.last_visit = now
    if purchase:
        customer.last_purchase_date = now
    db.add(customer)
    await db.commit()
    await db.refresh(customer)
    return customer

async def add_loyalty_points(customer: Customer, points: int, db: AsyncSession) -> Customer:
    customer.loyalty_points = (customer.loyalty_points or 0) + points
    db.add(customer)
    await db.commit()
    await db.refresh(customer)
    return customer

async def add_debt(customer: Customer, amount: float, db: AsyncSession) -> Customer:
    customer.current_debt = (customer.current_debt or 0.0) + amount
    db.add(customer)
    await db.commit()
    await db.refresh(customer)
    return customer
