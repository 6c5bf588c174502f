# scootershop/crud/transaction.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, or_
from scootershop.models.transaction import Transaction, TransactionType
from typing import Any, Dict, List, Optional
import uuid

async def get_transactions(db: AsyncSession) -> List[Transaction]:
    result = await db.execute(select(Transaction).order_by(desc(Transaction.created_at)))
    return result.scalars().all()

async def get_transaction_by_id(transaction_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(select(Transaction).where(Transaction.id == transaction_id))
    return result.scalar_one_or_none()

async def get_transactions_for_customer(customer_id: uuid.UUID, phone: str, db: AsyncSession) -> List[Transaction]:
    """Transactions linked to the customer record or carrying the same phone number."""
    result = await db.execute(
        select(Transaction)
        .where(or_(Transaction.customer_id == customer_id, Transaction.customer_phone == phone))
        .order_by(desc(Transaction.created_at))
    )
    return result.scalars().all()

async def get_service_income(service_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(
            Transaction.service_id == service_id,
            Transaction.type == TransactionType.income,
        )
    )
    return result.scalars().first()

async def create_transaction(fields: Dict[str, Any], db: AsyncSession) -> Transaction:
    new_tx = Transaction(**fields)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx

async def update_transaction(tx: Transaction, fields: Dict[str, Any], db: AsyncSession) -> Transaction:
    for field, value in fields.items():
        setattr(tx, field, value)
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx

async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    await db.delete(tx)
    await db.commit()
