"""Tests for the report and revenue analysis builders"""
import uuid
from datetime import datetime
from types import SimpleNamespace

import pytest

from scootershop.api.v1.routes.reports import RevenuePeriod, build_report, build_revenue_analysis
from scootershop.models.transaction import TransactionType

SCOOTER = SimpleNamespace(id=uuid.uuid4(), name="Xiaomi Pro 2", category="Scooters",
                          buy_price=100.0, sell_price=300.0)
AYSE = SimpleNamespace(id=uuid.uuid4(), full_name="Ayse Demir")


def tx(kind, amount, created_at, category="General", product=None, quantity=1, customer=None):
    return SimpleNamespace(
        id=uuid.uuid4(), type=kind, amount=amount, description=f"{kind.value} {amount}",
        created_at=created_at, category=category, quantity=quantity,
        product_id=product.id if product else None,
        customer_id=customer.id if customer else None,
        customer_name=None, customer_surname=None,
    )


class TestBuildReport:
    NOW = datetime(2025, 6, 1, 12, 0)

    @pytest.fixture
    def report(self):
        transactions = [
            tx(TransactionType.sale, 500, datetime(2025, 5, 31, 10), product=SCOOTER, quantity=2),
            tx(TransactionType.income, 200, datetime(2025, 6, 1, 9), category="Service"),
            tx(TransactionType.expense, 150, datetime(2025, 5, 20, 18), category="Rent"),
            # Older than 30 days
            tx(TransactionType.sale, 999, datetime(2025, 4, 20), product=SCOOTER),
        ]
        return build_report(transactions, [SCOOTER], self.NOW, days=30)

    def test_summary(self, report):
        assert report["summary"] == {
            "total_revenue": 700, "total_expenses": 150, "total_profit": 550, "total_sales": 2,
        }

    def test_daily_and_monthly(self, report):
        assert [d["date"] for d in report["daily_stats"]] == ["2025-05-20", "2025-05-31", "2025-06-01"]
        assert report["daily_stats"][0]["profit"] == -150
        assert report["monthly_stats"] == [
            {"month": "2025-05", "income": 500, "expense": 150, "profit": 350, "transactions": 2},
            {"month": "2025-06", "income": 200, "expense": 0, "profit": 200, "transactions": 1},
        ]

    def test_category_breakdown(self, report):
        assert {"category": "Rent", "type": "expense", "amount": 150} in report["category_breakdown"]
        assert {"category": "Service", "type": "income", "amount": 200} in report["category_breakdown"]

    def test_products(self, report):
        assert report["top_products"] == [{"name": "Xiaomi Pro 2", "sales": 2, "revenue": 500}]
        [row] = report["product_profitability"]
        assert row["total_cost"] == 200
        assert row["profit"] == 300
        assert row["profit_margin"] == 60.0
        assert row["profit_per_unit"] == 200

    def test_empty(self):
        report = build_report([], [], self.NOW)
        assert report["daily_stats"] == []
        assert report["top_products"] == []
        assert report["summary"]["total_profit"] == 0


class TestRevenueAnalysis:
    NOW = datetime(2025, 6, 15, 12, 0)

    @pytest.fixture
    def transactions(self):
        return [
            tx(TransactionType.sale, 300, datetime(2025, 6, 10), category="Scooters", product=SCOOTER,
               customer=AYSE),
            tx(TransactionType.income, 100, datetime(2025, 6, 15, 9), category="Service"),
            tx(TransactionType.expense, 50, datetime(2025, 6, 2), category="Rent"),
            tx(TransactionType.sale, 999, datetime(2025, 5, 31), category="Scooters"),
        ]

    def test_month(self, transactions):
        analysis = build_revenue_analysis(transactions, [SCOOTER], [AYSE], self.NOW)
        summary = analysis["summary"]
        assert summary["total_revenue"] == 400
        assert summary["total_expenses"] == 50
        assert summary["net_profit"] == 350
        assert summary["profit_margin"] == 87.5
        assert summary["sales_revenue"] == 300
        assert summary["other_revenue"] == 100
        assert summary["average_transaction"] == 300
        assert [c["category"] for c in summary["top_categories"]] == ["Scooters", "Service", "Rent"]
        assert analysis["period"] == {"start_date": "2025-06-01T00:00:00",
                                      "end_date": "2025-06-16T00:00:00", "days": 15}

    def test_rows_newest_first_with_profit(self, transactions):
        rows = build_revenue_analysis(transactions, [SCOOTER], [AYSE], self.NOW)["transactions"]
        assert [r["type"] for r in rows] == ["income", "sale", "expense"]
        sale = rows[1]
        assert sale["profit"] == 200
        assert sale["product_name"] == "Xiaomi Pro 2"
        assert sale["customer_name"] == "Ayse Demir"
        assert rows[2]["profit"] == -50

    def test_category_filter(self, transactions):
        analysis = build_revenue_analysis(transactions, [SCOOTER], [AYSE], self.NOW, category="Service")
        assert analysis["summary"]["total_revenue"] == 100
        assert analysis["summary"]["sales_count"] == 0
        assert analysis["summary"]["average_transaction"] == 0

    def test_today(self, transactions):
        analysis = build_revenue_analysis(transactions, [SCOOTER], [AYSE], self.NOW, RevenuePeriod.today)
        assert analysis["summary"]["total_revenue"] == 100
        assert analysis["period"]["days"] == 1
