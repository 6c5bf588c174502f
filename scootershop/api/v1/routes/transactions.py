# scootershop/api/v1/routes/transactions.py
import logging
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional
import uuid

from scootershop.core.database import get_async_session
from scootershop.crud.customer import get_customer_by_id, record_visit
from scootershop.crud.product import adjust_stock, get_product_by_id, record_sale
from scootershop.crud.receivable import create_receivable
from scootershop.crud.transaction import (
    create_transaction,
    delete_transaction,
    get_transaction_by_id,
    get_transactions,
    update_transaction,
)
from scootershop.models.customer import Customer
from scootershop.models.receivable import PaymentPlan, Priority, ReceivableStatus, ReceivableType
from scootershop.models.transaction import REVENUE_TYPES, PaymentType, Transaction, TransactionType
from scootershop.schemas.transaction import (
    TransactionBase,
    TransactionCreate,
    TransactionRead,
    TransactionUpdate,
)
from scootershop.utils.target_progress import refresh_active_targets

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

async def _resolve_customer(tx_in: TransactionBase, db: AsyncSession):
    """Copy a registered customer's details onto the transaction, or keep the walk-in snapshot."""
    customer: Optional[Customer] = None
    if tx_in.customer_id:
        customer = await get_customer_by_id(tx_in.customer_id, db)
    if customer:
        logger.info(f"👑 Registered customer transaction: {customer.full_name}")
        return customer, {
            "customer_id": customer.id,
            "customer_name": customer.first_name,
            "customer_surname": customer.last_name,
            "customer_phone": customer.phone,
            "is_registered_customer": True,
        }
    return None, {
        "customer_id": None,
        "customer_name": tx_in.customer_name or None,
        "customer_surname": tx_in.customer_surname or None,
        "customer_phone": tx_in.customer_phone or None,
        "is_registered_customer": False,
    }

async def _deduct_stock(product_id: Optional[uuid.UUID], quantity: int, db: AsyncSession) -> None:
    if not product_id:
        return
    product = await get_product_by_id(product_id, db)
    if product:
        await record_sale(product, quantity, db)
        logger.info(f"📦 Stock updated: {product.name}, remaining {product.stock}")

async def _restore_stock(product_id: Optional[uuid.UUID], quantity: int, db: AsyncSession) -> None:
    if not product_id:
        return
    product = await get_product_by_id(product_id, db)
    if product:
        await adjust_stock(product, quantity, db)

async def _create_sale_receivable(tx: Transaction, now: datetime, db: AsyncSession) -> None:
    # Credit sales are due in 30 days, installment sales in 7
    days = 30 if tx.payment_type == PaymentType.credit else 7
    plan = PaymentPlan.installment if tx.payment_type == PaymentType.installment else PaymentPlan.single
    fields: Dict[str, Any] = {
        "customer_id": tx.customer_id,
        "first_name": tx.customer_name or "",
        "last_name": tx.customer_surname or "",
        "phone": tx.customer_phone or "",
        "is_registered_customer": tx.is_registered_customer,
        "amount": tx.amount,
        "description": f"Sale receivable: {tx.description}",
        "type": ReceivableType.receivable,
        "status": ReceivableStatus.unpaid,
        "payment_plan": plan,
        "transaction_id": tx.id,
        "due_date": now + timedelta(days=days),
        "priority": Priority.normal,
    }
    await create_receivable(fields, db)
    logger.info(f"📋 Receivable created for {tx.payment_type.value} sale {tx.id}")

@router.get("", response_model=List[TransactionRead])
async def read_transactions(db: AsyncSession = Depends(get_async_session)):
    return await get_transactions(db)

@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(transaction_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    tx = await get_transaction_by_id(transaction_id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return tx

@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction_endpoint(tx_in: TransactionCreate, db: AsyncSession = Depends(get_async_session)):
    logger.info(f"📝 New {tx_in.type.value} transaction: {tx_in.amount} ({tx_in.description})")
    now = datetime.now()
    customer, customer_fields = await _resolve_customer(tx_in, db)

    fields = tx_in.model_dump()
    fields.update(customer_fields)
    fields["category"] = tx_in.category or "General"
    if not tx_in.original_amount:
        fields["original_amount"] = tx_in.amount
    tx = await create_transaction(fields, db)

    if tx.type == TransactionType.sale:
        await _deduct_stock(tx.product_id, tx.quantity, db)
        if tx.payment_type != PaymentType.cash:
            await _create_sale_receivable(tx, now, db)
        if customer:
            await record_visit(customer, tx.amount, int(tx.amount // 10), db)

    if tx.is_revenue:
        await refresh_active_targets(db)
    return tx

@router.put("/{transaction_id}", response_model=TransactionRead)
async def update_transaction_endpoint(
    transaction_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    tx = await get_transaction_by_id(transaction_id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")

    old_type, old_product_id, old_quantity = tx.type, tx.product_id, tx.quantity
    if old_type == TransactionType.sale:
        await _restore_stock(old_product_id, old_quantity, db)

    _, customer_fields = await _resolve_customer(tx_in, db)
    fields = tx_in.model_dump()
    fields.update(customer_fields)
    fields["category"] = tx_in.category or "General"
    tx = await update_transaction(tx, fields, db)

    if tx.type == TransactionType.sale and tx.product_id:
        product = await get_product_by_id(tx.product_id, db)
        if product:
            await adjust_stock(product, -tx.quantity, db)

    if old_type in REVENUE_TYPES or tx.is_revenue:
        await refresh_active_targets(db)
    return tx

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction_endpoint(transaction_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    tx = await get_transaction_by_id(transaction_id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")

    was_revenue = tx.is_revenue
    if tx.type == TransactionType.sale:
        await _restore_stock(tx.product_id, tx.quantity, db)
    await delete_transaction(tx, db)

    if was_revenue:
        await refresh_active_targets(db)
    return None
