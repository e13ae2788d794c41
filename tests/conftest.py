import pytest
from fastapi.testclient import TestClient

from stocktrack.core.config import Settings
from stocktrack.database import Database
from stocktrack.main import create_app
from stocktrack.services.alert_reconciler import AlertReconciler
from stocktrack.services.item_store import ItemStore


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'inventory.db'}",
        ENABLE_LOGGING=False,
        RATE_LIMIT_ENABLED=False,
    )


@pytest.fixture
def database(settings):
    database = Database(settings.DATABASE_URL)
    database.init()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return ItemStore(db)


@pytest.fixture
def reconciler(db):
    return AlertReconciler(db)


@pytest.fixture
def make_item(store):
    def _make_item(**overrides):
        fields = {
            "name": "Widget",
            "sku": "W-1",
            "quantity": 50,
            "min_threshold": 10,
        }
        fields.update(overrides)
        return store.create(fields)

    return _make_item


@pytest.fixture
def client(settings, database):
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client
