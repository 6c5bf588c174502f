# scootershop/api/v1/routes/services.py
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List
import uuid

from scootershop.core.database import get_async_session
from scootershop.crud.customer import get_customer_by_id, record_visit
from scootershop.crud.service import (
    create_service,
    delete_service,
    get_service_by_id,
    get_services,
    update_service,
)
from scootershop.crud.transaction import create_transaction, get_service_income
from scootershop.models.service import Service, ServiceStatus
from scootershop.models.transaction import TransactionType
from scootershop.schemas.service import ServiceBase, ServiceCreate, ServiceRead, ServiceUpdate
from scootershop.utils.target_progress import refresh_active_targets

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/services", tags=["services"])

async def _service_fields(service_in: ServiceBase, db: AsyncSession) -> Dict[str, Any]:
    fields = service_in.model_dump()
    for name in ("customer_address", "customer_email", "serial_number", "solution", "notes", "customer_feedback"):
        fields[name] = fields[name] or ""
    fields["is_registered_customer"] = False

    customer = await get_customer_by_id(service_in.customer_id, db) if service_in.customer_id else None
    if customer:
        fields.update(
            customer_id=customer.id,
            customer_name=customer.full_name,
            customer_phone=customer.phone,
            customer_address=customer.address or "",
            customer_email=customer.email or "",
            is_registered_customer=True,
        )
    else:
        fields["customer_id"] = None
        if not service_in.customer_name or not service_in.customer_phone:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Customer name and phone are required",
            )
    if fields["received_date"] is None:
        fields.pop("received_date")
    return fields

async def _book_service_income(service: Service, db: AsyncSession) -> None:
    """Record the income for a completed job once, then bring the targets up to date."""
    if await get_service_income(service.id, db):
        logger.info(f"⚠️ Income already recorded for service {service.id}")
        return

    tx = await create_transaction({
        "type": TransactionType.income,
        "amount": service.cost,
        "description": (
            f"Service income: {service.customer_name} - "
            f"{service.scooter_brand} {service.scooter_model} ({service.problem})"
        ),
        "category": "Service",
        "original_amount": service.cost,
        "customer_id": service.customer_id,
        "customer_name": service.customer_name,
        "customer_phone": service.customer_phone,
        "is_registered_customer": service.is_registered_customer,
        "service_id": service.id,
    }, db)
    logger.info(f"💰 Service income recorded: {tx.id}")

    if service.customer_id:
        customer = await get_customer_by_id(service.customer_id, db)
        if customer:
            await record_visit(customer, service.cost, 0, db, purchase=False)

    await refresh_active_targets(db)

@router.get("", response_model=List[ServiceRead])
async def read_services(db: AsyncSession = Depends(get_async_session)):
    return await get_services(db)

@router.get("/{service_id}", response_model=ServiceRead)
async def read_service(service_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    service = await get_service_by_id(service_id, db)
    if not service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return service

@router.post("", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service_endpoint(service_in: ServiceCreate, db: AsyncSession = Depends(get_async_session)):
    fields = await _service_fields(service_in, db)
    if service_in.status == ServiceStatus.completed and not fields.get("completed_date"):
        fields["completed_date"] = datetime.now()
    service = await create_service(fields, db)
    logger.info(f"🛠️ Service created: {service.scooter_brand} {service.scooter_model} for {service.customer_name}")

    if service.status == ServiceStatus.completed and service.cost > 0:
        await _book_service_income(service, db)
    return service

@router.put("/{service_id}", response_model=ServiceRead)
async def update_service_endpoint(
    service_id: uuid.UUID,
    service_in: ServiceUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    service = await get_service_by_id(service_id, db)
    if not service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")

    previous_status = service.status
    fields = await _service_fields(service_in, db)
    completing = service_in.status == ServiceStatus.completed and previous_status != ServiceStatus.completed
    if completing and not fields.get("completed_date"):
        fields["completed_date"] = datetime.now()
    service = await update_service(service, fields, db)
    logger.info(f"🔧 Service {service.id}: {previous_status.value} → {service.status.value}")

    if completing and service.cost > 0:
        await _book_service_income(service, db)
    return service

@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service_endpoint(service_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    service = await get_service_by_id(service_id, db)
    if not service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    await delete_service(service, db)
    return None
