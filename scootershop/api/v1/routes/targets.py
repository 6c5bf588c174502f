# scootershop/api/v1/routes/targets.py
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from scootershop.core.database import get_async_session
from scootershop.core.exceptions import EventSourceUnavailable
from scootershop.crud.target import (
    create_target,
    delete_target,
    get_target_by_id,
    update_target,
)
from scootershop.schemas.target import (
    TargetBase,
    TargetCreate,
    TargetListResponse,
    TargetRead,
    TargetRefreshFailure,
    TargetUpdate,
)
from scootershop.utils.target_progress import (
    SqlTargetStore,
    TransactionEventSource,
    compute_window,
    parse_period,
    recompute_target,
    refresh_targets,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/targets", tags=["targets"])

def _validate(target_in: TargetBase):
    if not target_in.title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
    if not target_in.target_amount or target_in.target_amount <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Target amount must be positive")
    if not target_in.period:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Period is required")
    # InvalidPeriod is turned into a 400 by the app-level handler
    period = parse_period(target_in.period)
    return period, compute_window(period, datetime.now())

async def _recompute_or_keep(target, db: AsyncSession) -> None:
    try:
        await recompute_target(target, TransactionEventSource(db), SqlTargetStore(db))
    except EventSourceUnavailable as e:
        # Serve the last stored progress
        logger.error(f"❌ Target refresh failed for {target.id} ({target.title}): {e}")

@router.get("", response_model=TargetListResponse)
async def read_targets(db: AsyncSession = Depends(get_async_session)):
    """Recompute every target against its current window, then list them newest first."""
    store = SqlTargetStore(db)
    report = await refresh_targets(TransactionEventSource(db), store, only_active=False)
    targets = await store.list_targets()
    failures = [
        TargetRefreshFailure(target_id=r.target_id, title=r.title, error=r.error)
        for r in report.failed
    ]
    return TargetListResponse(
        targets=[TargetRead.model_validate(t) for t in targets],
        failures=failures,
    )

@router.get("/{target_id}", response_model=TargetRead)
async def read_target(target_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    target = await get_target_by_id(target_id, db)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Target not found")
    await _recompute_or_keep(target, db)
    return target

@router.post("", response_model=TargetRead, status_code=status.HTTP_201_CREATED)
async def create_target_endpoint(target_in: TargetCreate, db: AsyncSession = Depends(get_async_session)):
    period, window = _validate(target_in)
    target = await create_target(target_in, period, window, db)
    logger.info(f"🎯 Target created: {target.title} ({period.value}, {target.target_amount})")
    return target

@router.put("/{target_id}", response_model=TargetRead)
async def update_target_endpoint(
    target_id: uuid.UUID,
    target_in: TargetUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    target = await get_target_by_id(target_id, db)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Target not found")
    period, window = _validate(target_in)
    target = await update_target(target, target_in, period, window, db)
    await _recompute_or_keep(target, db)
    return target

@router.delete("/{target_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_target_endpoint(target_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    target = await get_target_by_id(target_id, db)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Target not found")
    await delete_target(target, db)
    return None
