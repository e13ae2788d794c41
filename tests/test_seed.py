from fastapi.testclient import TestClient
from sqlalchemy import func

from stocktrack.main import create_app
from stocktrack.models import Alert, InventoryItem
from stocktrack.seed import SEED_ITEMS, seed


def test_seed_loads_sample_items_and_alerts(db):
    assert seed(db) == len(SEED_ITEMS)

    assert db.query(func.count(InventoryItem.id)).scalar() == 8

    # Office Paper A4 (8/10), Ballpoint Pens (5/8), Sticky Notes (3/5)
    open_alerts = db.query(Alert).join(Alert.item).order_by(InventoryItem.sku).all()
    assert [alert.item.sku for alert in open_alerts] == ["PAPER-A4-001", "PEN-BLUE-001", "STICKY-001"]
    assert [alert.severity for alert in open_alerts] == ["warning", "warning", "warning"]


def test_seed_skips_populated_database(db, make_item):
    make_item()

    assert seed(db) == 0
    assert db.query(func.count(InventoryItem.id)).scalar() == 1


def test_app_seeds_on_startup_when_enabled(settings, database):
    settings = settings.model_copy(update={"SEED_ON_STARTUP": True})

    with TestClient(create_app(settings=settings, database=database)) as client:
        body = client.get("/api/inventory").json()
        active = client.get("/api/alerts/active").json()

    assert body["count"] == len(SEED_ITEMS)
    assert body["data"][0]["name"] == "Ballpoint Pens (Blue)"
    assert active["count"] == 3
