# scootershop/utils/customer_insights.py
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Sequence

from scootershop.models.service import ServiceStatus
from scootershop.models.transaction import TransactionType

# Days after the latest visit when a check-up is suggested
SERVICE_REMINDER_DAYS = 90


def risk_level(days_since_last_purchase: Optional[int]) -> str:
    if days_since_last_purchase is None:
        return "new"
    if days_since_last_purchase > 180:
        return "high"
    if days_since_last_purchase > 90:
        return "medium"
    return "low"


def loyalty_level(points: int) -> str:
    if points > 1000:
        return "champion"
    if points > 500:
        return "loyal"
    if points > 100:
        return "regular"
    return "new"


def profitability(total_spent: float) -> str:
    if total_spent > 5000:
        return "high"
    if total_spent > 2000:
        return "medium"
    return "low"


def loyalty_reward(points: int) -> Optional[int]:
    """10 units of discount per full 100 points; None below the first 100."""
    if points < 100:
        return None
    return (points // 100) * 10


def build_customer_profile(customer: Any, transactions: Sequence[Any], services: Sequence[Any],
                           now: datetime) -> Dict[str, Any]:
    """
    Derive the statistics and insights shown on a customer's profile.

    The last purchase date comes from the newest sale transaction when there
    is one, falling back to the stored `last_purchase_date`.
    """
    sales = [t for t in transactions if t.type == TransactionType.sale]
    last_sale = max(sales, key=lambda t: t.created_at) if sales else None
    last_purchase = last_sale.created_at if last_sale else customer.last_purchase_date
    days_since = (now - last_purchase).days if last_purchase else None

    total_spent = customer.total_spent or 0.0
    service_total = sum(s.cost or 0.0 for s in services)
    ratings = [s.customer_rating for s in services if s.customer_rating]

    stats = {
        "total_transactions": len(transactions),
        "total_purchases": len(sales),
        "total_services": len(services),
        "completed_services": sum(1 for s in services if s.status == ServiceStatus.completed),
        "average_service_rating": round(sum(ratings) / len(ratings), 2) if ratings else 0,
        "total_spent_including_services": total_spent + service_total,
    }

    insights = {
        "average_basket": round(total_spent / len(sales), 2) if sales else 0.0,
        "lifetime_value": total_spent + service_total,
        "risk_level": risk_level(days_since) if sales else "new",
        "loyalty_level": loyalty_level(customer.loyalty_points or 0),
        "profitability": profitability(total_spent),
    }

    next_reminder = None
    if services:
        latest = max(s.received_date for s in services)
        next_reminder = latest + timedelta(days=SERVICE_REMINDER_DAYS)

    return {
        "full_name": customer.full_name,
        "days_since_last_purchase": days_since,
        "last_purchase_date": last_purchase,
        "stats": stats,
        "insights": insights,
        "next_service_reminder": next_reminder,
        "loyalty_reward": loyalty_reward(customer.loyalty_points or 0),
    }
