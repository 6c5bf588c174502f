# scootershop/utils/notifications.py
import math
from datetime import datetime, timedelta
from typing import Any, List, Sequence

from scootershop.models.receivable import ReceivableStatus, ReceivableType
from scootershop.models.service import ServiceStatus
from scootershop.models.target import TargetStatus
from scootershop.schemas.notification import NotificationRead

RECEIVABLE_DUE_SOON_DAYS = 3
WARRANTY_ENDING_DAYS = 7
TARGET_NEAR_PERCENT = 90.0

# Most urgent first
_STATUS_ORDER = {"alert": 0, "warning": 1, "info": 2, "completed": 3}


def _days_until(moment: datetime, now: datetime) -> int:
    return math.ceil((moment - now).total_seconds() / 86400)


def stock_notifications(products: Sequence[Any], now: datetime) -> List[NotificationRead]:
    return [
        NotificationRead(
            id=f"stock-{p.id}",
            title=f"Low stock: {p.name}",
            message=f"Only {p.stock} left in stock (minimum {p.min_stock}).",
            type="low_stock",
            status="warning",
            created_at=now,
        )
        for p in products if p.stock <= p.min_stock
    ]


def receivable_notifications(receivables: Sequence[Any], now: datetime) -> List[NotificationRead]:
    notifications = []
    due_soon_limit = now + timedelta(days=RECEIVABLE_DUE_SOON_DAYS)
    for r in receivables:
        if r.status == ReceivableStatus.paid or r.due_date is None:
            continue
        who = f"{r.first_name} {r.last_name}"
        owed = "owes you" if r.type == ReceivableType.receivable else "is owed"
        if r.due_date < now:
            notifications.append(NotificationRead(
                id=f"receivable-overdue-{r.id}",
                title=f"Overdue: {who}",
                message=f"{who} {owed} {r.remaining_amount:.2f}, due {r.due_date.date().isoformat()}.",
                type="receivable_overdue",
                status="alert",
                created_at=now,
            ))
        elif r.due_date <= due_soon_limit:
            notifications.append(NotificationRead(
                id=f"receivable-{r.id}",
                title=f"Payment due soon: {who}",
                message=f"Due in {_days_until(r.due_date, now)} day(s). {who} {owed} {r.remaining_amount:.2f}.",
                type="receivable_due",
                status="info",
                created_at=now,
            ))
    return notifications


def target_notifications(targets: Sequence[Any], now: datetime) -> List[NotificationRead]:
    """Targets close to or past their amount; targets whose window has ended are skipped."""
    notifications = []
    for t in targets:
        if t.end_date <= now:
            continue
        progress = t.progress_percentage
        if t.status == TargetStatus.completed:
            notifications.append(NotificationRead(
                id=f"target-complete-{t.id}",
                title=f"Target completed: {t.title}",
                message=f"{progress:.1f}% reached ({t.current_amount:.2f} of {t.target_amount:.2f}).",
                type="target_completed",
                status="completed",
                created_at=now,
            ))
        elif t.status == TargetStatus.active and progress >= TARGET_NEAR_PERCENT:
            notifications.append(NotificationRead(
                id=f"target-progress-{t.id}",
                title=f"Almost there: {t.title}",
                message=f"{progress:.1f}% done, {t.target_amount - t.current_amount:.2f} to go.",
                type="target_near",
                status="info",
                created_at=now,
            ))
    return notifications


def warranty_notifications(services: Sequence[Any], now: datetime) -> List[NotificationRead]:
    notifications = []
    for s in services:
        if s.status != ServiceStatus.completed or s.completed_date is None:
            continue
        days_left = _days_until(s.completed_date + timedelta(days=s.warranty_days), now)
        if 0 <= days_left <= WARRANTY_ENDING_DAYS:
            notifications.append(NotificationRead(
                id=f"warranty-{s.id}",
                title=f"Warranty ending: {s.customer_name}",
                message=f"{s.scooter_brand} {s.scooter_model} warranty ends in {days_left} day(s).",
                type="warranty_ending",
                status="warning",
                created_at=now,
            ))
    return notifications


def build_notifications(products, receivables, targets, services, now: datetime) -> List[NotificationRead]:
    notifications = (
        stock_notifications(products, now)
        + receivable_notifications(receivables, now)
        + target_notifications(targets, now)
        + warranty_notifications(services, now)
    )
    return sorted(notifications, key=lambda n: _STATUS_ORDER[n.status])
