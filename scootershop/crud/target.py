# scootershop/crud/target.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from scootershop.models.target import Target, TargetPeriod, TargetStatus
from typing import List, Optional, Tuple
from datetime import datetime
import uuid
from scootershop.schemas.target import TargetCreate, TargetUpdate

async def get_active_targets(db: AsyncSession) -> List[Target]:
    result = await db.execute(select(Target).where(Target.status == TargetStatus.active))
    return result.scalars().all()

async def get_target_by_id(target_id: uuid.UUID, db: AsyncSession) -> Optional[Target]:
    result = await db.execute(select(Target).where(Target.id == target_id))
    return result.scalar_one_or_none()

async def create_target(target_in: TargetCreate, period: TargetPeriod,
                        window: Tuple[datetime, datetime], db: AsyncSession) -> Target:
    new_target = Target(
        title=target_in.title,
        description=target_in.description or "",
        target_amount=float(target_in.target_amount),
        current_amount=0.0,
        period=period,
        start_date=window[0],
        end_date=window[1],
        status=TargetStatus.active,
    )
    db.add(new_target)
    await db.commit()
    await db.refresh(new_target)
    return new_target

async def update_target(target: Target, target_in: TargetUpdate, period: TargetPeriod,
                        window: Tuple[datetime, datetime], db: AsyncSession) -> Target:
    target.title = target_in.title
    target.description = target_in.description or ""
    target.target_amount = float(target_in.target_amount)
    target.period = period
    target.start_date, target.end_date = window
    db.add(target)
    await db.commit()
    await db.refresh(target)
    return target

async def delete_target(target: Target, db: AsyncSession) -> None:
    await db.delete(target)
    await db.commit()
