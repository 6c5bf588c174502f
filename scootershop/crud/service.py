# scootershop/crud/service.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, or_
from scootershop.models.service import Service
from typing import Any, Dict, List, Optional
import uuid

async def get_services(db: AsyncSession) -> List[Service]:
    result = await db.execute(select(Service).order_by(desc(Service.received_date)))
    return result.scalars().all()

async def get_service_by_id(service_id: uuid.UUID, db: AsyncSession) -> Optional[Service]:
    result = await db.execute(select(Service).where(Service.id == service_id))
    return result.scalar_one_or_none()

async def get_services_for_customer(customer_id: uuid.UUID, phone: str, db: AsyncSession) -> List[Service]:
    result = await db.execute(
        select(Service)
        .where(or_(Service.customer_id == customer_id, Service.customer_phone == phone))
        .order_by(desc(Service.received_date))
    )
    return result.scalars().all()

async def create_service(fields: Dict[str, Any], db: AsyncSession) -> Service:
    new_service = Service(**fields)
    db.add(new_service)
    await db.commit()
    await db.refresh(new_service)
    return new_service

async def update_service(service: Service, fields: Dict[str, Any], db: AsyncSession) -> Service:
    for field, value in fields.items():
        setattr(service, field, value)
    db.add(service)
    await db.commit()
    await db.refresh(service)
    return service

async def delete_service(service: Service, db: AsyncSession) -> None:
    await db.delete(service)
    await db.commit()
