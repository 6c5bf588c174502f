"""
Tests for the notifications feed
"""
from datetime import datetime, timedelta


def _receivable(client, due_date):
    response = client.post("/api/receivables", json={
        "first_name": "Ali", "last_name": "Kaya", "phone": "0555", "amount": 300,
        "type": "receivable", "due_date": due_date.isoformat(),
    })
    assert response.status_code == 201, response.text


def test_empty_feed(client):
    assert client.get("/api/notifications").json() == []


def test_feed(client, make_product, make_target, make_transaction):
    make_product(name="Bell", stock=1, min_stock=5)
    make_target(target_amount=2000)
    make_transaction(amount=1500)
    now = datetime.now()
    _receivable(client, now - timedelta(days=2))
    _receivable(client, now + timedelta(days=1))
    response = client.post("/api/services", json={
        "customer_name": "Mehmet Yilmaz", "customer_phone": "05320000000",
        "scooter_brand": "Xiaomi", "scooter_model": "Pro 2", "problem": "Flat tire",
        "cost": 400, "status": "completed", "warranty_days": 5,
    })
    assert response.status_code == 201, response.text

    notifications = client.get("/api/notifications").json()
    assert [n["type"] for n in notifications] == [
        "receivable_overdue", "low_stock", "warranty_ending", "receivable_due", "target_near",
    ]
    assert all(n["is_read"] is False for n in notifications)

    assert len(client.get("/api/notifications", params={"limit": 2}).json()) == 2


def test_notifications_require_session(anon_client):
    assert anon_client.get("/api/notifications").status_code == 401
