"""
Tests for receivables and payables
"""
import uuid

import pytest

RECEIVABLE = {
    "first_name": "Ali",
    "last_name": "Kaya",
    "phone": "0555",
    "amount": 300,
    "type": "receivable",
}


@pytest.fixture
def make_receivable(client):
    def _make(**overrides):
        payload = dict(RECEIVABLE)
        payload.update(overrides)
        response = client.post("/api/receivables", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


def test_create_unpaid(make_receivable):
    rec = make_receivable()
    assert rec["status"] == "unpaid"
    assert rec["remaining_amount"] == 300
    assert rec["paid_amount"] == 0
    assert rec["is_registered_customer"] is False


def test_mark_as_paid_on_create(make_receivable):
    rec = make_receivable(mark_as_paid=True)
    assert rec["status"] == "paid"
    assert rec["paid_amount"] == 300
    assert rec["remaining_amount"] == 0
    assert rec["paid_date"] is not None


def test_registered_customer_by_phone_takes_on_debt(client, make_customer, make_receivable):
    customer = make_customer(phone="0555", first_name="Ali", last_name="Veli")
    rec = make_receivable(first_name=None, last_name=None)

    assert rec["is_registered_customer"] is True
    assert rec["customer_id"] == customer["id"]
    assert rec["last_name"] == "Veli"
    assert client.get(f"/api/customers/{customer['id']}").json()["current_debt"] == 300


def test_payable_does_not_add_debt(client, make_customer, make_receivable):
    customer = make_customer(phone="0555")
    make_receivable(type="payable")
    assert client.get(f"/api/customers/{customer['id']}").json()["current_debt"] == 0


def test_walk_in_requires_names(client):
    response = client.post("/api/receivables", json={"phone": "0999", "amount": 10, "type": "receivable"})
    assert response.status_code == 400


def test_partial_then_paid_then_reset(client, make_receivable):
    rec = make_receivable()

    partial = client.put(f"/api/receivables/{rec['id']}", json={"paid_amount": 100}).json()
    assert partial["status"] == "partial"
    assert partial["remaining_amount"] == 200

    paid = client.put(f"/api/receivables/{rec['id']}", json={"status": "paid", "mark_as_paid": True}).json()
    assert paid["status"] == "paid"
    assert paid["paid_amount"] == 300
    assert paid["remaining_amount"] == 0

    reset = client.put(f"/api/receivables/{rec['id']}", json={"status": "unpaid"}).json()
    assert reset["status"] == "unpaid"
    assert reset["paid_amount"] == 0
    assert reset["paid_date"] is None


def test_list_and_delete(client, make_receivable):
    first = make_receivable(description="first")
    make_receivable(description="second")
    assert [r["description"] for r in client.get("/api/receivables").json()] == ["second", "first"]

    assert client.delete(f"/api/receivables/{first['id']}").status_code == 204
    assert len(client.get("/api/receivables").json()) == 1


def test_missing_receivable(client):
    missing = uuid.uuid4()
    assert client.put(f"/api/receivables/{missing}", json={"paid_amount": 1}).status_code == 404
    assert client.delete(f"/api/receivables/{missing}").status_code == 404
