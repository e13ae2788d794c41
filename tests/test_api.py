from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from stocktrack.core.config import Settings
from stocktrack.main import create_app
from stocktrack.services.alert_reconciler import AlertReconciler


def _create(client, **overrides):
    payload = {"name": "Widget", "sku": "W-1", "quantity": 5, "min_threshold": 10}
    payload.update(overrides)
    return client.post("/api/inventory", json=payload)


def test_root_and_health(client):
    assert client.get("/").status_code == 200

    response = client.get("/api/health")
    body = response.json()

    assert response.status_code == 200
    assert body["status"] == "OK"
    assert body["environment"] == "test"
    assert "uptime" in body
    assert response.headers["X-Response-Time"].endswith("ms")


def test_low_stock_item_end_to_end(client):
    response = _create(client)
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Item created successfully"
    assert body["data"]["sku"] == "W-1"
    assert body["data"]["unit"] == "units"

    stats = client.get("/api/inventory/stats").json()["data"]
    assert stats["total_items"] == 1
    assert stats["low_stock_items"] == 1

    low_stock = client.get("/api/inventory", params={"low_stock": "true"}).json()
    assert [item["sku"] for item in low_stock["data"]] == ["W-1"]

    active = client.get("/api/alerts/active").json()
    assert active["count"] == 1
    alert = active["data"][0]
    assert alert["sku"] == "W-1"
    assert alert["item_name"] == "Widget"
    # 5 <= 10 // 2
    assert alert["severity"] == "high"
    assert alert["is_resolved"] is False


def test_warning_alert_above_half_threshold(client):
    _create(client, quantity=8)

    alert = client.get("/api/alerts/active").json()["data"][0]

    assert alert["severity"] == "warning"


def test_create_duplicate_sku_returns_409(client):
    _create(client)

    response = _create(client, name="Another")

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "SKU already exists"}
    assert client.get("/api/inventory").json()["count"] == 1


def test_create_missing_fields_returns_400(client):
    response = client.post("/api/inventory", json={"name": "Widget"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert {detail["field"] for detail in body["details"]} == {"sku", "quantity"}
    assert "sku" in body["message"]


def test_create_succeeds_when_alert_check_hits_database_error(client, monkeypatch):
    def locked(self, item_id):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(AlertReconciler, "_open_alert", locked)

    response = _create(client, name="W", sku="W-9", quantity=1)

    assert response.status_code == 201
    assert response.json()["data"]["sku"] == "W-9"

    monkeypatch.undo()
    listed = client.get("/api/inventory").json()
    assert [item["sku"] for item in listed["data"]] == ["W-9"]
    assert client.get("/api/alerts").json()["count"] == 0


def test_get_unknown_item_returns_404(client):
    response = client.get("/api/inventory/999")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Item not found"}


def test_update_item_and_recover(client):
    item_id = _create(client).json()["data"]["id"]

    response = client.put(f"/api/inventory/{item_id}", json={"quantity": 40, "location": "Shelf 2"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["quantity"] == 40
    assert data["location"] == "Shelf 2"
    assert data["name"] == "Widget"

    assert client.get("/api/alerts/active").json()["count"] == 0
    resolved = client.get("/api/alerts").json()["data"]
    assert len(resolved) == 1
    assert resolved[0]["is_resolved"] is True
    assert resolved[0]["resolved_at"] is not None


def test_update_unknown_item_returns_404(client):
    response = client.put("/api/inventory/12", json={"name": "Ghost"})

    assert response.status_code == 404


def test_stock_adjustments(client):
    item_id = _create(client, quantity=20).json()["data"]["id"]

    response = client.patch(f"/api/inventory/{item_id}/stock", json={"quantity": 5, "operation": "add"})
    assert response.status_code == 200
    assert response.json()["data"]["quantity"] == 25
    assert response.json()["message"] == "Stock updated successfully"

    response = client.patch(f"/api/inventory/{item_id}/stock", json={"quantity": 100, "operation": "remove"})
    assert response.json()["data"]["quantity"] == 0

    alert = client.get("/api/alerts/active").json()["data"][0]
    assert alert["severity"] == "critical"


def test_stock_adjustment_rejects_bad_operation(client):
    item_id = _create(client, quantity=20).json()["data"]["id"]

    response = client.patch(f"/api/inventory/{item_id}/stock", json={"quantity": 5, "operation": "steal"})

    assert response.status_code == 400
    assert client.get(f"/api/inventory/{item_id}").json()["data"]["quantity"] == 20


def test_stock_adjustment_unknown_item(client):
    response = client.patch("/api/inventory/77/stock", json={"quantity": 1, "operation": "add"})

    assert response.status_code == 404


def test_delete_item_removes_alerts_keeps_activity(client):
    item_id = _create(client).json()["data"]["id"]

    response = client.delete(f"/api/inventory/{item_id}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Item deleted successfully"}

    assert client.get(f"/api/inventory/{item_id}").status_code == 404
    assert client.get("/api/alerts").json()["count"] == 0

    activity = client.get("/api/activity").json()["data"]
    assert [entry["action"] for entry in activity] == ["DELETE", "CREATE"]
    assert all(entry["item_id"] is None for entry in activity)


def test_list_filters_by_category(client):
    _create(client, name="Paper", sku="P-1", category="Office")
    _create(client, name="Mouse", sku="M-1", category="Electronics")

    response = client.get("/api/inventory", params={"category": "Office"}).json()

    assert response["count"] == 1
    assert response["data"][0]["sku"] == "P-1"


def test_resolve_and_delete_alert(client):
    _create(client)
    alert_id = client.get("/api/alerts/active").json()["data"][0]["id"]

    response = client.patch(f"/api/alerts/{alert_id}/resolve")
    assert response.status_code == 200
    assert response.json()["message"] == "Alert resolved successfully"
    assert client.get("/api/alerts/active").json()["count"] == 0

    response = client.delete(f"/api/alerts/{alert_id}")
    assert response.status_code == 200
    assert client.get("/api/alerts").json()["count"] == 0

    assert client.patch(f"/api/alerts/{alert_id}/resolve").status_code == 404
    assert client.delete(f"/api/alerts/{alert_id}").status_code == 404


def test_activity_filtered_by_item(client):
    first = _create(client).json()["data"]["id"]
    _create(client, name="Gadget", sku="G-1")
    client.patch(f"/api/inventory/{first}/stock", json={"quantity": 2, "operation": "add"})

    activity = client.get("/api/activity", params={"item_id": first}).json()

    assert [entry["action"] for entry in activity["data"]] == ["ADD", "CREATE"]


def test_unknown_route_returns_404(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json()["path"] == "/api/nowhere"
    assert response.json()["success"] is False


def _app(tmp_path, database, **overrides):
    options = {
        "ENV": "test",
        "DATABASE_URL": f"sqlite:///{tmp_path / 'inventory.db'}",
        "ENABLE_LOGGING": False,
    }
    options.update(overrides)
    return create_app(settings=Settings(_env_file=None, **options), database=database)


def _adjust_three_times(app, item_id):
    payload = {"quantity": 1, "operation": "add"}

    with TestClient(app) as client:
        return [
            client.patch(f"/api/inventory/{item_id}/stock", json=payload).status_code
            for _ in range(3)
        ]


def test_stock_endpoint_is_rate_limited(tmp_path, database, make_item):
    item = make_item()
    app = _app(tmp_path, database, RATE_LIMIT_ENABLED=True, STOCK_RATE_LIMIT="2/minute")

    assert _adjust_three_times(app, item.id) == [200, 200, 429]


def test_rate_limits_are_scoped_to_each_app(tmp_path, database, make_item):
    item = make_item()
    limited = _app(tmp_path, database, RATE_LIMIT_ENABLED=True, STOCK_RATE_LIMIT="1/minute")
    unlimited = _app(tmp_path, database, RATE_LIMIT_ENABLED=False)
    fresh = _app(tmp_path, database, RATE_LIMIT_ENABLED=True, STOCK_RATE_LIMIT="1/minute")

    # Building later apps leaves the first one's settings alone
    assert _adjust_three_times(limited, item.id) == [200, 429, 429]
    assert _adjust_three_times(unlimited, item.id) == [200, 200, 200]
    # Same client and limit, separate counters
    assert _adjust_three_times(fresh, item.id) == [200, 429, 429]


def test_unhandled_error_returns_500_with_timing(settings, database):
    app = create_app(settings=settings, database=database)

    def explode():
        raise RuntimeError("boom")

    app.add_api_route("/api/explode", explode)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/explode")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Internal Server Error"
    assert "RuntimeError: boom" in body["stack"]
    assert response.headers["X-Response-Time"].endswith("ms")
