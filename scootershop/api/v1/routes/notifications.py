# scootershop/api/v1/routes/notifications.py
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from scootershop.core.database import get_async_session
from scootershop.crud.product import get_products
from scootershop.crud.receivable import get_receivables
from scootershop.crud.service import get_services
from scootershop.schemas.notification import NotificationRead
from scootershop.utils.notifications import build_notifications
from scootershop.utils.target_progress import SqlTargetStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])

@router.get("", response_model=List[NotificationRead])
async def get_notifications(
    limit: int = Query(50, ge=1, description="Maximum number of notifications to return"),
    db: AsyncSession = Depends(get_async_session),
):
    """Alerts for low stock, due or overdue debts, targets and ending warranties, most urgent first."""
    notifications = build_notifications(
        products=await get_products(db),
        receivables=await get_receivables(db),
        targets=await SqlTargetStore(db).list_targets(),
        services=await get_services(db),
        now=datetime.now(),
    )
    logger.info(f"🔔 {len(notifications)} notifications generated")
    return notifications[:limit]
