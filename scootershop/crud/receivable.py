# scootershop/crud/receivable.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, or_
from scootershop.models.receivable import Receivable
from typing import Any, Dict, List, Optional
from datetime import datetime
import uuid

async def get_receivables(db: AsyncSession) -> List[Receivable]:
    result = await db.execute(select(Receivable).order_by(desc(Receivable.created_at)))
    return result.scalars().all()

async def get_receivable_by_id(receivable_id: uuid.UUID, db: AsyncSession) -> Optional[Receivable]:
    result = await db.execute(select(Receivable).where(Receivable.id == receivable_id))
    return result.scalar_one_or_none()

async def get_receivables_for_customer(customer_id: uuid.UUID, phone: str, db: AsyncSession) -> List[Receivable]:
    result = await db.execute(
        select(Receivable)
        .where(or_(Receivable.customer_id == customer_id, Receivable.phone == phone))
        .order_by(desc(Receivable.created_at))
    )
    return result.scalars().all()

async def create_receivable(fields: Dict[str, Any], db: AsyncSession) -> Receivable:
    new_receivable = Receivable(**fields)
    new_receivable.settle(datetime.now())
    db.add(new_receivable)
    await db.commit()
    await db.refresh(new_receivable)
    return new_receivable

async def update_receivable(receivable: Receivable, fields: Dict[str, Any], db: AsyncSession) -> Receivable:
    for field, value in fields.items():
        setattr(receivable, field, value)
    receivable.settle(datetime.now())
    db.add(receivable)
    await db.commit()
    await db.refresh(receivable)
    return receivable

async def delete_receivable(receivable: Receivable, db: AsyncSession) -> None:
    await db.delete(receivable)
    await db.commit()
