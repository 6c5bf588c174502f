"""
Tests for customers, phone lookup, upsert, loyalty and profile
"""
import uuid


def test_create_and_read(client, make_customer):
    customer = make_customer(email="  ", notes=" VIP rider ")
    assert customer["email"] is None
    assert customer["notes"] == "VIP rider"
    assert customer["loyalty_points"] == 0
    assert customer["customer_type"] == "normal"
    assert client.get(f"/api/customers/{customer['id']}").json()["phone"] == "05551112233"


def test_duplicate_phone_is_rejected(client, make_customer):
    make_customer()
    response = client.post("/api/customers", json={"first_name": "B", "last_name": "C", "phone": "05551112233"})
    assert response.status_code == 400


def test_required_fields(client):
    response = client.post("/api/customers", json={"first_name": "A", "phone": "0500"})
    assert response.status_code == 422


def test_update_rejects_phone_of_another_customer(client, make_customer):
    make_customer(phone="0500")
    other = make_customer(phone="0600")
    response = client.put(f"/api/customers/{other['id']}", json={
        "first_name": "X", "last_name": "Y", "phone": "0500",
    })
    assert response.status_code == 400


def test_update_keeps_own_phone(client, make_customer):
    customer = make_customer()
    response = client.put(f"/api/customers/{customer['id']}", json={
        "first_name": "Ayse", "last_name": "Yildiz", "phone": "05551112233", "customer_type": "vip",
    })
    assert response.status_code == 200
    assert response.json()["last_name"] == "Yildiz"
    assert response.json()["customer_type"] == "vip"


def test_find_by_phone(client, make_customer):
    customer = make_customer()
    assert client.get("/api/customers/find-by-phone", params={"phone": "05551112233"}).json()["id"] == customer["id"]

    missing = client.get("/api/customers/find-by-phone", params={"phone": "0000"})
    assert missing.status_code == 200
    assert missing.json() is None

    assert client.get("/api/customers/find-by-phone").status_code == 400


def test_upsert_creates_then_updates(client):
    first = client.post("/api/customers/upsert", json={
        "first_name": "Can", "last_name": "Oz", "phone": " 0530 ", "sale_amount": 250,
    }).json()
    assert first["existing"] is False

    created = client.get(f"/api/customers/{first['id']}").json()
    assert created["phone"] == "0530"
    assert created["total_spent"] == 250
    assert created["visit_count"] == 1
    assert created["loyalty_points"] == 2

    second = client.post("/api/customers/upsert", json={
        "first_name": "Cem", "last_name": "Oz", "phone": "0530", "sale_amount": 100,
    }).json()
    assert second == {"message": "Customer updated", "existing": True, "id": first["id"]}

    updated = client.get(f"/api/customers/{first['id']}").json()
    assert updated["first_name"] == "Cem"
    assert updated["total_spent"] == 350
    assert updated["visit_count"] == 2
    assert updated["loyalty_points"] == 3


def test_add_loyalty_points(client, make_customer):
    customer = make_customer()
    response = client.put(f"/api/customers/{customer['id']}/loyalty", json={"points": 50})
    assert response.json()["loyalty_points"] == 50

    assert client.put(f"/api/customers/{customer['id']}/loyalty", json={"points": 0}).status_code == 422


def test_profile(client, make_customer, make_transaction):
    customer = make_customer()
    make_transaction(amount=300, customer_id=customer["id"])
    make_transaction(amount=100, customer_phone="05551112233", description="Walk-in under same phone")

    profile = client.get(f"/api/customers/{customer['id']}/profile").json()
    assert profile["full_name"] == "Ayse Demir"
    assert len(profile["transactions"]) == 2
    assert profile["stats"]["total_purchases"] == 2
    assert profile["days_since_last_purchase"] == 0
    assert profile["insights"]["risk_level"] == "low"
    assert profile["insights"]["average_basket"] == 150.0
    assert profile["insights"]["loyalty_level"] == "new"


def test_delete_customer(client, make_customer):
    customer = make_customer()
    assert client.delete(f"/api/customers/{customer['id']}").status_code == 204
    assert client.get(f"/api/customers/{customer['id']}").status_code == 404


def test_missing_customer(client):
    missing = uuid.uuid4()
    assert client.get(f"/api/customers/{missing}").status_code == 404
    assert client.get(f"/api/customers/{missing}/profile").status_code == 404
    assert client.put(f"/api/customers/{missing}/loyalty", json={"points": 5}).status_code == 404
