"""
Tests for the income/expense report and revenue analysis
"""


def test_report(client, make_product, make_transaction):
    product = make_product(buy_price=100, sell_price=150)
    make_transaction(amount=300, product_id=product["id"], quantity=2)
    make_transaction(type="expense", amount=80, description="Rent", category="Rent")

    body = client.get("/api/reports", params={"days": 7}).json()
    assert body["summary"] == {"total_revenue": 300, "total_expenses": 80, "total_profit": 220, "total_sales": 2}
    assert body["top_products"] == [{"name": "Xiaomi Pro 2", "sales": 2, "revenue": 300}]
    assert body["product_profitability"][0]["profit"] == 100
    assert len(body["daily_stats"]) == 1


def test_report_rejects_bad_days(client):
    assert client.get("/api/reports", params={"days": 0}).status_code == 422


def test_revenue_analysis_by_category(client, make_transaction):
    make_transaction(type="income", amount=200, description="Repair", category="Service")
    make_transaction(amount=500, category="Scooters")

    everything = client.get("/api/reports/revenue").json()
    assert everything["summary"]["total_revenue"] == 700
    assert everything["summary"]["sales_count"] == 1

    service_only = client.get("/api/reports/revenue", params={"period": "today", "category": "Service"}).json()
    assert service_only["summary"]["total_revenue"] == 200
    assert [t["description"] for t in service_only["transactions"]] == ["Repair"]
    assert service_only["period"]["days"] == 1


def test_revenue_analysis_rejects_unknown_period(client):
    assert client.get("/api/reports/revenue", params={"period": "decade"}).status_code == 422


def test_reports_require_session(anon_client):
    assert anon_client.get("/api/reports").status_code == 401
    assert anon_client.get("/api/reports/revenue").status_code == 401
