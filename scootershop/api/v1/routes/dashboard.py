# scootershop/api/v1/routes/dashboard.py
import logging
from collections import Counter
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Sequence

from scootershop.core.database import get_async_session
from scootershop.crud.customer import get_customers
from scootershop.crud.product import get_products
from scootershop.crud.receivable import get_receivables
from scootershop.crud.service import get_services
from scootershop.crud.target import get_active_targets
from scootershop.crud.transaction import get_transactions
from scootershop.models.customer import CustomerType
from scootershop.models.receivable import ReceivableStatus, ReceivableType
from scootershop.models.service import ServiceStatus
from scootershop.models.transaction import REVENUE_TYPES, TransactionType
from scootershop.utils.target_progress import compute_window

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

TREND_DAYS = 7

def _revenue_between(transactions: Sequence[Any], start: datetime, end: datetime) -> Dict[str, float]:
    hits = [tx for tx in transactions if tx.type in REVENUE_TYPES and start <= tx.created_at < end]
    return {"total": sum(tx.amount for tx in hits), "count": len(hits)}

def build_dashboard(transactions, products, customers, receivables, services, active_targets,
                    now: datetime) -> Dict[str, Any]:
    revenue = {}
    for period, label in (("daily", "today"), ("weekly", "this_week"),
                          ("monthly", "this_month"), ("yearly", "this_year")):
        start, end = compute_window(period, now)
        revenue[label] = _revenue_between(transactions, start, end)

    total_income = sum(tx.amount for tx in transactions if tx.type in REVENUE_TYPES)
    total_expenses = sum(tx.amount for tx in transactions if tx.type == TransactionType.expense)

    low_stock = [p for p in products if 0 < p.stock <= p.min_stock]
    out_of_stock = [p for p in products if p.stock == 0]

    customer_value = sum(c.total_spent or 0.0 for c in customers)
    top_customers = sorted(customers, key=lambda c: c.total_spent or 0.0, reverse=True)[:5]

    def _unpaid(kind: ReceivableType) -> float:
        return sum(r.remaining_amount for r in receivables
                   if r.type == kind and r.status != ReceivableStatus.paid)

    receivable_total = _unpaid(ReceivableType.receivable)
    payable_total = _unpaid(ReceivableType.payable)

    progress = [t.progress_percentage for t in active_targets]

    # Daily revenue for the last TREND_DAYS days, oldest first
    today_start, _ = compute_window("daily", now)
    trend: List[Dict[str, Any]] = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today_start - timedelta(days=offset)
        day_revenue = _revenue_between(transactions, day, day + timedelta(days=1))
        trend.append({"date": day.date().isoformat(), "revenue": day_revenue["total"],
                      "transactions": day_revenue["count"]})

    service_status = Counter(s.status.value for s in services)

    return {
        "revenue": revenue,
        "total_income": total_income,
        "total_expenses": total_expenses,
        "net_profit": total_income - total_expenses,
        "service_revenue": sum(s.cost for s in services if s.status == ServiceStatus.completed),
        "products": {
            "total": len(products),
            "total_stock": sum(p.stock for p in products),
            "low_stock_count": len(low_stock),
            "out_of_stock_count": len(out_of_stock),
            "low_stock": [
                {"id": str(p.id), "name": p.name, "stock": p.stock,
                 "min_stock": p.min_stock, "category": p.category}
                for p in low_stock
            ],
        },
        "customers": {
            "total": len(customers),
            "vip": sum(1 for c in customers if c.customer_type != CustomerType.normal),
            "total_loyalty_points": sum(c.loyalty_points or 0 for c in customers),
            "average_value": customer_value / len(customers) if customers else 0.0,
            "total_value": customer_value,
        },
        "top_customers": [
            {"id": str(c.id), "name": c.full_name, "total_spent": c.total_spent,
             "visit_count": c.visit_count, "customer_type": c.customer_type.value,
             "loyalty_points": c.loyalty_points}
            for c in top_customers
        ],
        "receivables": {
            "receivable_unpaid": receivable_total,
            "payable_unpaid": payable_total,
            "net": receivable_total - payable_total,
        },
        "targets": {
            "active": len(active_targets),
            "average_progress": round(sum(progress) / len(progress), 1) if progress else 0.0,
        },
        "revenue_trend": trend,
        "service_status": {s.value: service_status.get(s.value, 0) for s in ServiceStatus},
        "last_updated": now.isoformat(),
    }

@router.get("")
async def get_dashboard(db: AsyncSession = Depends(get_async_session)) -> Dict:
    """Shop-wide summary: revenue windows, stock, customers, debts, targets and trends."""
    summary = build_dashboard(
        transactions=await get_transactions(db),
        products=await get_products(db),
        customers=await get_customers(db),
        receivables=await get_receivables(db),
        services=await get_services(db),
        active_targets=await get_active_targets(db),
        now=datetime.now(),
    )
    logger.info(f"📊 Dashboard built: today's revenue {summary['revenue']['today']['total']}")
    return summary
