import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from torc.admin import admin_app
from torc.main import app
from torc.models import Order
from torc.services import get_order_service
from torc.services.menu import StaticMenuSource
from torc.services.orders import OrderService
from torc.services.popularity import PopularityTracker
from torc.services.registry import ActiveSessionRegistry
from torc.services.session_store import SessionStore

MENU = ["Latte", "Mocha", "Espresso"]


TIMESTAMP = datetime(2024, 5, 1, 9, 30, 15, tzinfo=timezone.utc)


def make_order(order_id="1", drink="Latte", customer_name="Ada", instructions="", timestamp=TIMESTAMP):
    return Order(
        order_id=order_id,
        drink=drink,
        customer_name=customer_name,
        instructions=instructions,
        timestamp=timestamp,
    )


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "Sessions")


@pytest.fixture
def tracker(tmp_path):
    return PopularityTracker(tmp_path / "popular.json", lock_timeout=5)


@pytest.fixture
def registry():
    return ActiveSessionRegistry()


@pytest.fixture
def menu():
    return StaticMenuSource(MENU)


@pytest.fixture
def service(store, tracker, registry, menu):
    return OrderService(store=store, tracker=tracker, registry=registry, menu=menu)


@pytest.fixture
def client(service):
    """Public API client wired to a tmp_path-backed service."""
    app.dependency_overrides[get_order_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(service):
    """Admin API client sharing the same service as ``client``."""
    admin_app.dependency_overrides[get_order_service] = lambda: service
    yield TestClient(admin_app)
    admin_app.dependency_overrides.clear()
