# scootershop/api/v1/routes/customers.py
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from scootershop.core.database import get_async_session
from scootershop.crud.customer import (
    add_loyalty_points,
    create_customer,
    delete_customer,
    get_customer_by_id,
    get_customer_by_phone,
    get_customers,
    record_visit,
    update_customer,
)
from scootershop.crud.receivable import get_receivables_for_customer
from scootershop.crud.service import get_services_for_customer
from scootershop.crud.transaction import get_transactions_for_customer
from scootershop.schemas.customer import (
    CustomerCreate,
    CustomerProfile,
    CustomerRead,
    CustomerUpdate,
    CustomerUpsert,
    CustomerUpsertResult,
    LoyaltyPointsAdd,
)
from scootershop.schemas.receivable import ReceivableRead
from scootershop.schemas.service import ServiceRead
from scootershop.schemas.transaction import TransactionRead
from scootershop.utils.customer_insights import build_customer_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])

@router.get("", response_model=List[CustomerRead])
async def read_customers(db: AsyncSession = Depends(get_async_session)):
    return await get_customers(db)

@router.get("/find-by-phone", response_model=Optional[CustomerRead])
async def find_customer_by_phone(
    phone: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    if not phone or not phone.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Phone number is required")
    return await get_customer_by_phone(phone, db)

@router.post("/upsert", response_model=CustomerUpsertResult)
async def upsert_customer(payload: CustomerUpsert, db: AsyncSession = Depends(get_async_session)):
    """Record a visit for the customer with this phone, creating them on first sight."""
    phone = payload.phone.strip()
    points = int(payload.sale_amount // 100)
    customer = await get_customer_by_phone(phone, db)

    if customer:
        customer.first_name = payload.first_name.strip()
        customer.last_name = payload.last_name.strip()
        await record_visit(customer, payload.sale_amount, points, db, purchase=False)
        logger.info(f"👤 Customer visit recorded: {customer.full_name}")
        return CustomerUpsertResult(message="Customer updated", existing=True, id=customer.id)

    customer = await create_customer(
        CustomerCreate(first_name=payload.first_name, last_name=payload.last_name, phone=phone),
        db,
        total_spent=payload.sale_amount,
        visit_count=1,
        loyalty_points=points,
        last_visit=datetime.now(),
    )
    logger.info(f"👤 New customer created: {customer.full_name}")
    return CustomerUpsertResult(message="Customer created", existing=False, id=customer.id)

@router.get("/{customer_id}", response_model=CustomerRead)
async def read_customer(customer_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    customer = await get_customer_by_id(customer_id, db)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer

@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer_endpoint(customer_in: CustomerCreate, db: AsyncSession = Depends(get_async_session)):
    if await get_customer_by_phone(customer_in.phone, db):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A customer with this phone number already exists",
        )
    customer = await create_customer(customer_in, db)
    logger.info(f"👤 Customer created: {customer.full_name}")
    return customer

@router.put("/{customer_id}", response_model=CustomerRead)
async def update_customer_endpoint(
    customer_id: uuid.UUID,
    customer_in: CustomerUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    customer = await get_customer_by_id(customer_id, db)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    if await get_customer_by_phone(customer_in.phone, db, exclude_id=customer_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Another customer already uses this phone number",
        )
    return await update_customer(customer, customer_in, db)

@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer_endpoint(customer_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    customer = await get_customer_by_id(customer_id, db)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    await delete_customer(customer, db)
    return None

@router.put("/{customer_id}/loyalty", response_model=CustomerRead)
async def add_customer_loyalty(
    customer_id: uuid.UUID,
    payload: LoyaltyPointsAdd,
    db: AsyncSession = Depends(get_async_session),
):
    customer = await get_customer_by_id(customer_id, db)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return await add_loyalty_points(customer, payload.points, db)

@router.get("/{customer_id}/profile", response_model=CustomerProfile)
async def read_customer_profile(customer_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    customer = await get_customer_by_id(customer_id, db)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")

    transactions = await get_transactions_for_customer(customer.id, customer.phone, db)
    services = await get_services_for_customer(customer.id, customer.phone, db)
    receivables = await get_receivables_for_customer(customer.id, customer.phone, db)

    profile = build_customer_profile(customer, transactions, services, datetime.now())
    return CustomerProfile(
        customer=CustomerRead.model_validate(customer),
        transactions=[TransactionRead.model_validate(t) for t in transactions],
        services=[ServiceRead.model_validate(s) for s in services],
        receivables=[ReceivableRead.model_validate(r) for r in receivables],
        **profile,
    )
