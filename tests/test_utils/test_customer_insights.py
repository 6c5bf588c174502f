"""Tests for customer profile insights"""
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from scootershop.models.service import ServiceStatus
from scootershop.models.transaction import TransactionType
from scootershop.utils.customer_insights import (
    build_customer_profile,
    loyalty_level,
    loyalty_reward,
    profitability,
    risk_level,
)

NOW = datetime(2025, 6, 1, 12, 0)


def customer(**overrides):
    values = dict(full_name="Ayse Demir", total_spent=0.0, loyalty_points=0, last_purchase_date=None)
    values.update(overrides)
    return SimpleNamespace(**values)


def sale(amount, days_ago):
    return SimpleNamespace(type=TransactionType.sale, amount=amount, created_at=NOW - timedelta(days=days_ago))


def service(cost, days_ago, status=ServiceStatus.completed, rating=None):
    return SimpleNamespace(cost=cost, status=status, customer_rating=rating,
                           received_date=NOW - timedelta(days=days_ago))


@pytest.mark.parametrize("days, expected", [(None, "new"), (0, "low"), (90, "low"), (91, "medium"), (181, "high")])
def test_risk_level(days, expected):
    assert risk_level(days) == expected


@pytest.mark.parametrize("points, expected", [(0, "new"), (100, "new"), (101, "regular"), (501, "loyal"), (1001, "champion")])
def test_loyalty_level(points, expected):
    assert loyalty_level(points) == expected


@pytest.mark.parametrize("spent, expected", [(0, "low"), (2001, "medium"), (5001, "high")])
def test_profitability(spent, expected):
    assert profitability(spent) == expected


def test_loyalty_reward():
    assert loyalty_reward(99) is None
    assert loyalty_reward(250) == 20


def test_profile_without_history():
    profile = build_customer_profile(customer(), [], [], NOW)

    assert profile["days_since_last_purchase"] is None
    assert profile["insights"]["risk_level"] == "new"
    assert profile["insights"]["average_basket"] == 0.0
    assert profile["next_service_reminder"] is None
    assert profile["stats"]["total_transactions"] == 0


def test_profile_uses_latest_sale():
    c = customer(total_spent=600.0, loyalty_points=60)
    transactions = [sale(200, 100), sale(400, 10)]
    services = [service(300, 30, rating=4), service(100, 5, status=ServiceStatus.pending, rating=2)]

    profile = build_customer_profile(c, transactions, services, NOW)

    assert profile["days_since_last_purchase"] == 10
    assert profile["insights"]["risk_level"] == "low"
    assert profile["insights"]["average_basket"] == 300.0
    assert profile["insights"]["lifetime_value"] == 1000.0
    assert profile["stats"]["completed_services"] == 1
    assert profile["stats"]["average_service_rating"] == 3
    assert profile["next_service_reminder"] == NOW - timedelta(days=5) + timedelta(days=90)
