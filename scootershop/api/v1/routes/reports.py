# scootershop/api/v1/routes/reports.py
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from enum import Enum
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional, Sequence

from scootershop.core.database import get_async_session
from scootershop.crud.customer import get_customers
from scootershop.crud.product import get_products
from scootershop.crud.transaction import get_transactions
from scootershop.models.transaction import REVENUE_TYPES, TransactionType
from scootershop.utils.target_progress import compute_window

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

TOP_PRODUCTS = 5
MAX_ANALYSED_TRANSACTIONS = 1000

class RevenuePeriod(str, Enum):
    today = "today"
    week = "week"
    month = "month"
    year = "year"

_WINDOW_FOR = {
    RevenuePeriod.today: "daily",
    RevenuePeriod.week: "weekly",
    RevenuePeriod.month: "monthly",
    RevenuePeriod.year: "yearly",
}

def _flows(transactions: Sequence[Any]) -> Dict[str, float]:
    income = sum(tx.amount for tx in transactions if tx.type in REVENUE_TYPES)
    expense = sum(tx.amount for tx in transactions if tx.type == TransactionType.expense)
    return {"income": income, "expense": expense, "profit": income - expense}

def _grouped_flows(transactions: Sequence[Any], key) -> List[Dict[str, Any]]:
    groups = defaultdict(list)
    for tx in transactions:
        groups[key(tx)].append(tx)
    return [{"key": k, **_flows(txs), "transactions": len(txs)} for k, txs in sorted(groups.items())]

def _transaction_profit(tx, products_by_id: Dict[Any, Any]) -> float:
    if tx.type == TransactionType.sale:
        product = products_by_id.get(tx.product_id)
        cost = (tx.quantity or 1) * product.buy_price if product else 0.0
        return tx.amount - cost
    if tx.type == TransactionType.income:
        return tx.amount
    return -tx.amount

def build_report(transactions, products, now: datetime, days: int = 30) -> Dict[str, Any]:
    """
    Income, expense and profit over the last `days` days:
    - daily and monthly breakdowns
    - per category and type totals
    - best selling products and per product profitability
    """
    start = (now - timedelta(days=days)).replace(hour=0, minute=0, second=0, microsecond=0)
    recent = [tx for tx in transactions if tx.created_at >= start]
    products_by_id = {p.id: p for p in products}

    daily = [
        {"date": row.pop("key"), **row}
        for row in _grouped_flows(recent, lambda tx: tx.created_at.date().isoformat())
    ]
    monthly = [
        {"month": row.pop("key"), **row}
        for row in _grouped_flows(recent, lambda tx: tx.created_at.strftime("%Y-%m"))
    ]

    by_category = defaultdict(float)
    for tx in recent:
        by_category[(tx.category or "General", tx.type.value)] += tx.amount
    category_breakdown = [
        {"category": category, "type": kind, "amount": amount}
        for (category, kind), amount in sorted(by_category.items())
    ]

    sold = defaultdict(lambda: {"sales": 0, "revenue": 0.0})
    for tx in recent:
        if tx.type == TransactionType.sale and tx.product_id in products_by_id:
            sold[tx.product_id]["sales"] += tx.quantity or 1
            sold[tx.product_id]["revenue"] += tx.amount

    profitability = []
    for product_id, stats in sold.items():
        product = products_by_id[product_id]
        total_cost = stats["sales"] * product.buy_price
        profit = stats["revenue"] - total_cost
        profitability.append({
            "name": product.name,
            "category": product.category,
            "total_sold": stats["sales"],
            "total_revenue": stats["revenue"],
            "total_cost": total_cost,
            "profit": profit,
            "profit_per_unit": product.sell_price - product.buy_price,
            "profit_margin": profit / stats["revenue"] * 100 if stats["revenue"] > 0 else 0.0,
            "sell_price": product.sell_price,
            "buy_price": product.buy_price,
        })

    top_products = sorted(
        ({"name": p["name"], "sales": p["total_sold"], "revenue": p["total_revenue"]} for p in profitability),
        key=lambda p: p["sales"], reverse=True,
    )[:TOP_PRODUCTS]

    totals = _flows(recent)
    return {
        "daily_stats": daily,
        "monthly_stats": monthly,
        "category_breakdown": category_breakdown,
        "top_products": top_products,
        "product_profitability": sorted(profitability, key=lambda p: p["profit"], reverse=True),
        "summary": {
            "total_revenue": totals["income"],
            "total_expenses": totals["expense"],
            "total_profit": totals["profit"],
            "total_sales": sum(tx.quantity or 1 for tx in recent if tx.type == TransactionType.sale),
        },
    }

def build_revenue_analysis(transactions, products, customers, now: datetime,
                           period: RevenuePeriod = RevenuePeriod.month,
                           category: Optional[str] = None) -> Dict[str, Any]:
    """Revenue, expenses and profit for the current day/week/month/year, optionally for one category."""
    start, _ = compute_window(_WINDOW_FOR[period], now)
    _, end = compute_window("daily", now)

    selected = [
        tx for tx in transactions
        if start <= tx.created_at < end and (category is None or tx.category == category)
    ]
    selected.sort(key=lambda tx: tx.created_at, reverse=True)

    products_by_id = {p.id: p for p in products}
    customers_by_id = {c.id: c for c in customers}

    total_revenue = sum(tx.amount for tx in selected if tx.type in REVENUE_TYPES)
    sales = [tx for tx in selected if tx.type == TransactionType.sale]
    sales_revenue = sum(tx.amount for tx in sales)
    total_expenses = sum(tx.amount for tx in selected if tx.type == TransactionType.expense)
    net_profit = total_revenue - total_expenses

    categories = [
        {"category": row.pop("key"), "revenue": row["income"], "expense": row["expense"],
         "profit": row["profit"], "count": row["transactions"]}
        for row in _grouped_flows(selected, lambda tx: tx.category or "Unspecified")
    ]
    categories.sort(key=lambda c: c["revenue"], reverse=True)

    daily = [
        {"date": row.pop("key"), "revenue": row["income"], "expenses": row["expense"],
         "profit": row["profit"], "transactions": row["transactions"]}
        for row in _grouped_flows(selected, lambda tx: tx.created_at.date().isoformat())
    ]

    rows = []
    for tx in selected[:MAX_ANALYSED_TRANSACTIONS]:
        product = products_by_id.get(tx.product_id)
        customer = customers_by_id.get(tx.customer_id)
        if customer:
            customer_name = customer.full_name
        else:
            customer_name = " ".join(n for n in (tx.customer_name, tx.customer_surname) if n)
        rows.append({
            "id": str(tx.id),
            "type": tx.type.value,
            "amount": tx.amount,
            "description": tx.description,
            "category": tx.category or "General",
            "product_id": str(tx.product_id) if tx.product_id else None,
            "product_name": product.name if product else "",
            "quantity": tx.quantity,
            "customer_name": customer_name,
            "created_at": tx.created_at.isoformat(),
            "profit": _transaction_profit(tx, products_by_id),
        })

    return {
        "transactions": rows,
        "summary": {
            "total_revenue": total_revenue,
            "total_expenses": total_expenses,
            "net_profit": net_profit,
            "profit_margin": net_profit / total_revenue * 100 if total_revenue > 0 else 0.0,
            "sales_revenue": sales_revenue,
            "other_revenue": total_revenue - sales_revenue,
            "sales_count": len(sales),
            "average_transaction": sales_revenue / len(sales) if sales else 0.0,
            "top_categories": categories,
            "daily_breakdown": daily,
        },
        "period": {
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "days": (end - start).days,
        },
    }

@router.get("")
async def get_report(
    days: int = Query(30, ge=1, description="How many days back to report on"),
    db: AsyncSession = Depends(get_async_session),
) -> Dict:
    report = build_report(await get_transactions(db), await get_products(db), datetime.now(), days)
    logger.info(f"📈 Report built for the last {days} days: profit {report['summary']['total_profit']}")
    return report

@router.get("/revenue")
async def get_revenue_analysis(
    period: RevenuePeriod = Query(RevenuePeriod.month, description="Window to analyse"),
    category: str = Query("all", description="Transaction category, or 'all'"),
    db: AsyncSession = Depends(get_async_session),
) -> Dict:
    analysis = build_revenue_analysis(
        transactions=await get_transactions(db),
        products=await get_products(db),
        customers=await get_customers(db),
        now=datetime.now(),
        period=period,
        category=None if category == "all" else category,
    )
    logger.info(f"📊 Revenue analysis ({period.value}, {category}): "
                f"{len(analysis['transactions'])} transactions analysed")
    return analysis
