"""
Pytest fixtures for testing
"""
import asyncio
import os
import tempfile

# Settings are read at import time, so the environment must be ready first
_DB_DIR = tempfile.mkdtemp(prefix="scootershop-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["ADMIN_PASSWORD"] = "letmein"
os.environ["ENVIRONMENT"] = "test"
os.environ["FIRST_DAY_OF_WEEK"] = "0"

import pytest
from fastapi.testclient import TestClient

from scootershop.core.database import Base, engine
from scootershop.main import app

ADMIN_PASSWORD = "letmein"


async def _drop_all():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def anon_client():
    """Test client without a session; tables are created on startup and dropped afterwards."""
    with TestClient(app) as client:
        yield client
    asyncio.run(_drop_all())


@pytest.fixture
def client(anon_client):
    """Test client logged in as the shop admin"""
    response = anon_client.post("/api/auth", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return anon_client


@pytest.fixture
def make_customer(client):
    def _make(**overrides):
        payload = {"first_name": "Ayse", "last_name": "Demir", "phone": "05551112233"}
        payload.update(overrides)
        response = client.post("/api/customers", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_product(client):
    def _make(**overrides):
        payload = {"name": "Xiaomi Pro 2", "buy_price": 100, "sell_price": 150, "stock": 10}
        payload.update(overrides)
        response = client.post("/api/products", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_transaction(client):
    def _make(**overrides):
        payload = {"type": "sale", "amount": 500, "description": "Scooter sale"}
        payload.update(overrides)
        response = client.post("/api/transactions", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_target(client):
    def _make(**overrides):
        payload = {"title": "Monthly sales", "target_amount": 1000, "period": "monthly"}
        payload.update(overrides)
        response = client.post("/api/targets", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make
