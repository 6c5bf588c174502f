# scootershop/api/v1/routes/receivables.py
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from scootershop.core.database import get_async_session
from scootershop.crud.customer import add_debt, get_customer_by_id, get_customer_by_phone
from scootershop.crud.receivable import (
    create_receivable,
    delete_receivable,
    get_receivable_by_id,
    get_receivables,
    update_receivable,
)
from scootershop.models.receivable import ReceivableStatus, ReceivableType
from scootershop.schemas.receivable import ReceivableCreate, ReceivableRead, ReceivableUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receivables", tags=["receivables"])

@router.get("", response_model=List[ReceivableRead])
async def read_receivables(db: AsyncSession = Depends(get_async_session)):
    return await get_receivables(db)

@router.get("/{receivable_id}", response_model=ReceivableRead)
async def read_receivable(receivable_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    receivable = await get_receivable_by_id(receivable_id, db)
    if not receivable:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Receivable not found")
    return receivable

@router.post("", response_model=ReceivableRead, status_code=status.HTTP_201_CREATED)
async def create_receivable_endpoint(rec_in: ReceivableCreate, db: AsyncSession = Depends(get_async_session)):
    customer = None
    if rec_in.customer_id:
        customer = await get_customer_by_id(rec_in.customer_id, db)
    elif rec_in.phone:
        customer = await get_customer_by_phone(rec_in.phone, db)

    fields = rec_in.model_dump(exclude={"mark_as_paid"})
    fields["description"] = rec_in.description or ""
    fields["notes"] = rec_in.notes or ""
    if customer:
        fields.update(
            customer_id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            phone=customer.phone,
            is_registered_customer=True,
        )
    else:
        if not rec_in.first_name or not rec_in.last_name or not rec_in.phone:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="First name, last name and phone are required",
            )
        fields.update(customer_id=None, is_registered_customer=False)

    if rec_in.mark_as_paid or rec_in.status == ReceivableStatus.paid:
        fields["paid_amount"] = rec_in.amount
        fields["paid_date"] = datetime.now()
    receivable = await create_receivable(fields, db)
    logger.info(f"📋 {receivable.type.value} created: {receivable.amount} for {receivable.first_name} {receivable.last_name}")

    if customer and receivable.type == ReceivableType.receivable and receivable.status == ReceivableStatus.unpaid:
        await add_debt(customer, receivable.amount, db)
    return receivable

@router.put("/{receivable_id}", response_model=ReceivableRead)
async def update_receivable_endpoint(
    receivable_id: uuid.UUID,
    rec_in: ReceivableUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    receivable = await get_receivable_by_id(receivable_id, db)
    if not receivable:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Receivable not found")

    fields = rec_in.model_dump(exclude_none=True, exclude={"mark_as_paid", "status"})
    amount = fields.get("amount", receivable.amount)
    if rec_in.status == ReceivableStatus.paid and rec_in.mark_as_paid:
        fields["paid_amount"] = amount
        fields["paid_date"] = datetime.now()
    elif rec_in.status == ReceivableStatus.unpaid:
        fields["paid_amount"] = 0.0
        fields["paid_date"] = None
    return await update_receivable(receivable, fields, db)

@router.delete("/{receivable_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_receivable_endpoint(receivable_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    receivable = await get_receivable_by_id(receivable_id, db)
    if not receivable:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Receivable not found")
    await delete_receivable(receivable, db)
    return None
