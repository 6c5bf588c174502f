"""
Tests for revenue targets
"""
import uuid
from datetime import datetime

import pytest

from scootershop.core.exceptions import EventSourceUnavailable
from scootershop.utils.target_progress import TransactionEventSource


def test_create_target(make_target):
    target = make_target()

    now = datetime.now()
    assert target["current_amount"] == 0
    assert target["status"] == "active"
    assert target["progress_percentage"] == 0
    assert target["created_at"] is not None
    assert target["updated_at"] is not None
    assert datetime.fromisoformat(target["start_date"]) == datetime(now.year, now.month, 1)


@pytest.mark.parametrize("payload, detail", [
    ({"target_amount": 1000, "period": "monthly"}, "Title is required"),
    ({"title": "Sales", "target_amount": 0, "period": "monthly"}, "Target amount must be positive"),
    ({"title": "Sales", "target_amount": 1000}, "Period is required"),
])
def test_create_target_validation(client, payload, detail):
    response = client.post("/api/targets", json=payload)
    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_create_target_invalid_period(client):
    response = client.post("/api/targets", json={"title": "Sales", "target_amount": 1000, "period": "hourly"})
    assert response.status_code == 400
    assert "Invalid period" in response.json()["detail"]


def test_list_recomputes_from_revenue(client, make_target, make_transaction):
    target = make_target(target_amount=1000)
    make_transaction(type="sale", amount=800)
    make_transaction(type="income", amount=300, description="Repair")
    make_transaction(type="expense", amount=500, description="Rent")

    response = client.get("/api/targets")
    assert response.status_code == 200
    body = response.json()
    assert body["failures"] == []
    [listed] = body["targets"]
    assert listed["id"] == target["id"]
    assert listed["current_amount"] == 1100
    assert listed["status"] == "completed"
    assert listed["progress_percentage"] == 110.0


def test_list_newest_first(client, make_target):
    make_target(title="First")
    make_target(title="Second")
    titles = [t["title"] for t in client.get("/api/targets").json()["targets"]]
    assert titles == ["Second", "First"]


def test_revenue_transaction_refreshes_active_targets(client, make_target, make_transaction):
    make_target(target_amount=1000)
    make_transaction(type="sale", amount=500)

    # The dashboard reads stored progress without recomputing
    dashboard = client.get("/api/dashboard").json()
    assert dashboard["targets"]["average_progress"] == 50.0


def test_expense_does_not_count(client, make_target, make_transaction):
    target = make_target(target_amount=1000)
    make_transaction(type="expense", amount=700, description="Parts order")
    assert client.get(f"/api/targets/{target['id']}").json()["current_amount"] == 0


def test_deleted_sale_lowers_progress(client, make_target, make_transaction):
    target = make_target(target_amount=1000)
    tx = make_transaction(type="sale", amount=400)
    assert client.get(f"/api/targets/{target['id']}").json()["current_amount"] == 400

    client.delete(f"/api/transactions/{tx['id']}")
    assert client.get(f"/api/targets/{target['id']}").json()["current_amount"] == 0


def test_update_target(client, make_target):
    target = make_target()
    response = client.put(f"/api/targets/{target['id']}", json={
        "title": "Yearly sales", "target_amount": 50000, "period": "yearly", "description": "Big goal",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["period"] == "yearly"
    assert body["description"] == "Big goal"
    assert datetime.fromisoformat(body["start_date"]) == datetime(datetime.now().year, 1, 1)
    assert body["created_at"] == target["created_at"]
    assert datetime.fromisoformat(body["updated_at"]) >= datetime.fromisoformat(target["updated_at"])


def test_update_target_invalid_period(client, make_target):
    target = make_target()
    response = client.put(f"/api/targets/{target['id']}", json={
        "title": "Sales", "target_amount": 100, "period": "quarterly",
    })
    assert response.status_code == 400


def test_missing_target(client):
    missing = uuid.uuid4()
    assert client.get(f"/api/targets/{missing}").status_code == 404
    assert client.put(f"/api/targets/{missing}", json={
        "title": "x", "target_amount": 1, "period": "daily",
    }).status_code == 404
    assert client.delete(f"/api/targets/{missing}").status_code == 404


def test_delete_target(client, make_target):
    target = make_target()
    assert client.delete(f"/api/targets/{target['id']}").status_code == 204
    assert client.get(f"/api/targets/{target['id']}").status_code == 404


def test_unavailable_events_keep_stored_progress(client, make_target, make_transaction, monkeypatch):
    target = make_target(target_amount=1000)
    make_transaction(type="sale", amount=250)

    async def _unavailable(self, types, start, end):
        raise EventSourceUnavailable("database went away")

    monkeypatch.setattr(TransactionEventSource, "sum_amounts", _unavailable)

    response = client.get("/api/targets")
    assert response.status_code == 200
    body = response.json()
    assert body["targets"][0]["current_amount"] == 250
    assert body["failures"] == [{"target_id": target["id"], "title": "Monthly sales", "error": "database went away"}]

    single = client.get(f"/api/targets/{target['id']}")
    assert single.status_code == 200
    assert single.json()["current_amount"] == 250


def test_raising_amount_reopens_completed_target(client, make_target, make_transaction):
    target = make_target(target_amount=500)
    make_transaction(type="sale", amount=600)
    assert client.get("/api/dashboard").json()["targets"]["active"] == 0

    response = client.put(f"/api/targets/{target['id']}", json={
        "title": "Monthly sales", "target_amount": 5000, "period": "monthly",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["current_amount"] == 600
    assert body["status"] == "active"

    # Active again, so the next sale refreshes it without a list
    make_transaction(type="sale", amount=10)
    dashboard = client.get("/api/dashboard").json()
    assert dashboard["targets"] == {"active": 1, "average_progress": 12.2}


def test_update_keeps_stored_progress_when_events_unavailable(client, make_target, make_transaction,
                                                              monkeypatch):
    target = make_target(target_amount=1000)
    make_transaction(type="sale", amount=250)

    async def _unavailable(self, types, start, end):
        raise EventSourceUnavailable("database went away")

    monkeypatch.setattr(TransactionEventSource, "sum_amounts", _unavailable)

    response = client.put(f"/api/targets/{target['id']}", json={
        "title": "Monthly sales", "target_amount": 2000, "period": "monthly",
    })
    assert response.status_code == 200
    assert response.json()["current_amount"] == 250
    assert response.json()["target_amount"] == 2000
