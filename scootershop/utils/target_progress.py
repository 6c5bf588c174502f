# scootershop/utils/target_progress.py
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional, Protocol, Sequence, Tuple, Union

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from scootershop.core.config import settings
from scootershop.core.exceptions import EventSourceUnavailable, InvalidPeriod, ShopError
from scootershop.models.target import Target, TargetPeriod, TargetStatus
from scootershop.models.transaction import REVENUE_TYPES, Transaction, TransactionType

logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────
# PERIOD WINDOWS
# ────────────────────────────────────────────────────────────────────────────────
def parse_period(period: Union[str, TargetPeriod]) -> TargetPeriod:
    try:
        return TargetPeriod(period)
    except ValueError:
        raise InvalidPeriod(period) from None


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def compute_window(
    period: Union[str, TargetPeriod],
    now: datetime,
    first_day_of_week: Optional[int] = None,
) -> Tuple[datetime, datetime]:
    """
    Return the half-open window [start, end) of the period instance containing `now`.

    `first_day_of_week` counts from Sunday = 0; it defaults to the
    FIRST_DAY_OF_WEEK setting. Timezone info on `now` is carried over.
    """
    period = parse_period(period)
    tz = now.tzinfo

    if period == TargetPeriod.daily:
        start = _midnight(now)
        end = start + timedelta(days=1)
    elif period == TargetPeriod.weekly:
        if first_day_of_week is None:
            first_day_of_week = settings.FIRST_DAY_OF_WEEK
        day_index = (now.weekday() + 1) % 7          # Sunday = 0
        offset = (day_index - first_day_of_week) % 7
        start = _midnight(now) - timedelta(days=offset)
        end = start + timedelta(days=7)
    elif period == TargetPeriod.monthly:
        start = datetime(now.year, now.month, 1, tzinfo=tz)
        if now.month == 12:
            end = datetime(now.year + 1, 1, 1, tzinfo=tz)
        else:
            end = datetime(now.year, now.month + 1, 1, tzinfo=tz)
    else:
        start = datetime(now.year, 1, 1, tzinfo=tz)
        end = datetime(now.year + 1, 1, 1, tzinfo=tz)

    return start, end


def derive_status(current_amount: float, target_amount: float,
                  now: datetime, end: datetime) -> TargetStatus:
    # Completion wins over expiry
    if current_amount >= target_amount:
        return TargetStatus.completed
    if now > end:
        return TargetStatus.expired
    return TargetStatus.active


# ────────────────────────────────────────────────────────────────────────────────
# COLLABORATORS
# ────────────────────────────────────────────────────────────────────────────────
class EventSource(Protocol):
    async def sum_amounts(self, types: Sequence[TransactionType],
                          start: datetime, end: datetime) -> float:
        """Sum of amounts of events with a type in `types` and start <= occurred_at < end."""
        ...


class TargetStore(Protocol):
    async def list_targets(self, only_active: bool = False) -> List[Any]:
        ...

    async def get_target(self, target_id: uuid.UUID) -> Optional[Any]:
        ...

    async def save_progress(self, target: Any, progress: "TargetProgress") -> None:
        ...


# ────────────────────────────────────────────────────────────────────────────────
# RESULTS
# ────────────────────────────────────────────────────────────────────────────────
@dataclass
class TargetProgress:
    target_id: Any
    current_amount: float
    status: TargetStatus
    start_date: datetime
    end_date: datetime
    updated_at: datetime

    @property
    def fields(self) -> dict:
        return {
            "current_amount": self.current_amount,
            "status": self.status,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "updated_at": self.updated_at,
        }


@dataclass
class TargetRefreshResult:
    target_id: Any
    title: str
    progress: Optional[TargetProgress] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RefreshReport:
    results: List[TargetRefreshResult] = field(default_factory=list)

    @property
    def refreshed(self) -> List[TargetRefreshResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> List[TargetRefreshResult]:
        return [r for r in self.results if not r.ok]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed


# ────────────────────────────────────────────────────────────────────────────────
# MAIN ENTRY
# ────────────────────────────────────────────────────────────────────────────────
async def calculate_progress(target: Any, event_source: EventSource,
                             now: datetime) -> TargetProgress:
    """Derive a target's progress for the window containing `now` without persisting it."""
    start, end = compute_window(target.period, now)
    current_amount = await event_source.sum_amounts(REVENUE_TYPES, start, end)
    current_amount = float(current_amount or 0.0)
    status = derive_status(current_amount, target.target_amount, now, end)

    logger.info(f"📊 Target '{target.title}': {current_amount}/{target.target_amount} "
                f"in [{start.isoformat()}, {end.isoformat()})")
    if status == TargetStatus.completed:
        logger.info(f"🎉 Target completed: {target.title}")

    return TargetProgress(
        target_id=target.id,
        current_amount=current_amount,
        status=status,
        start_date=start,
        end_date=end,
        updated_at=now,
    )


async def recompute_target(target: Any, event_source: EventSource,
                           target_store: TargetStore,
                           now: Optional[datetime] = None) -> TargetProgress:
    """Recompute a single target and write the result back through the store."""
    now = now or datetime.now()
    progress = await calculate_progress(target, event_source, now)
    await target_store.save_progress(target, progress)
    return progress


async def refresh_targets(event_source: EventSource, target_store: TargetStore,
                          now: Optional[datetime] = None,
                          only_active: bool = True) -> RefreshReport:
    """
    Recompute every target (or every active one).

    A failure on one target is logged and reported in its result; the target
    keeps its previously stored values and the remaining targets still refresh.
    """
    now = now or datetime.now()
    targets = await target_store.list_targets(only_active=only_active)
    report = RefreshReport()

    for target in targets:
        try:
            progress = await recompute_target(target, event_source, target_store, now)
        except ShopError as e:
            logger.error(f"❌ Target refresh failed for {target.id} ({target.title}): {e}")
            report.results.append(TargetRefreshResult(target.id, target.title, error=str(e)))
            continue
        report.results.append(TargetRefreshResult(target.id, target.title, progress=progress))

    logger.info(f"🎯 Refreshed {len(report.refreshed)}/{len(report.results)} targets")
    return report


# ────────────────────────────────────────────────────────────────────────────────
# DATABASE HELPERS
# ────────────────────────────────────────────────────────────────────────────────
class TransactionEventSource:
    """
    Financial events backed by the transactions table, keyed on created_at.

    Sums run on their own connection so a failed query never leaves the
    session (and the targets loaded in it) in a rolled-back state.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def sum_amounts(self, types: Iterable[TransactionType],
                          start: datetime, end: datetime) -> float:
        query = select(func.coalesce(func.sum(Transaction.amount), 0.0)).where(
            Transaction.type.in_(list(types)),
            Transaction.created_at >= start,
            Transaction.created_at < end,
        )
        try:
            async with self.db.bind.connect() as conn:
                result = await conn.execute(query)
                total = result.scalar_one()
        except (SQLAlchemyError, OSError) as e:
            raise EventSourceUnavailable(str(e)) from e
        return float(total or 0.0)


class SqlTargetStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_targets(self, only_active: bool = False) -> List[Target]:
        query = select(Target).order_by(Target.created_at.desc())
        if only_active:
            query = query.where(Target.status == TargetStatus.active)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_target(self, target_id: uuid.UUID) -> Optional[Target]:
        result = await self.db.execute(select(Target).where(Target.id == target_id))
        return result.scalar_one_or_none()

    async def save_progress(self, target: Target, progress: TargetProgress) -> None:
        for name, value in progress.fields.items():
            setattr(target, name, value)
        self.db.add(target)
        await self.db.commit()


async def refresh_active_targets(db: AsyncSession) -> RefreshReport:
    """Called after a revenue event is recorded."""
    logger.info("🎯 Target refresh triggered")
    return await refresh_targets(TransactionEventSource(db), SqlTargetStore(db), only_active=True)
