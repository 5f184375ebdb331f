"""
Pytest configuration for resellerhub tests.
Builds the app on an in-memory SQLite database with SimpleCache.
"""

import os

# Config reads SECRET_KEY at import time
os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import datetime, timedelta

import pytest

from resellerhub import create_app
from resellerhub.config import TestConfig
from resellerhub.constants import Collection, OrderStatus, PaymentStatus
from resellerhub.extensions import db, cache
from resellerhub.services.store import DocumentStore
from resellerhub.services.order_service import OrderService
from resellerhub.services.shipment_service import ShipmentService
from resellerhub.services.stats_service import StatsService


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        cache.clear()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 10, 0, 0))


@pytest.fixture
def store(app, clock):
    return DocumentStore(clock=clock)


@pytest.fixture
def order_service(store):
    return OrderService(store)


@pytest.fixture
def shipment_service(store):
    return ShipmentService(store)


@pytest.fixture
def stats_service(store):
    return StatsService(store)


@pytest.fixture
def make_order(store):
    """Insert an order record directly, bypassing intake validation."""
    def _make_order(**overrides):
        record = {
            "order_number": "ORD-001",
            "reseller_id": "res-1",
            "reseller_name": "Toko Maju",
            "reseller_email": "maju@example.com",
            "reseller_phone": "08123456789",
            "items": [
                {"name": "Kaos Polos", "quantity": 2, "price": 50000, "weight": 1.5},
                {"name": "Topi", "quantity": 1, "price": 30000},
            ],
            "total_amount": 130000,
            "shipping_address": {
                "name": "Budi",
                "phone": "08987654321",
                "address": "Jl. Merdeka 10",
                "city": "Bandung",
                "province": "Jawa Barat",
                "postal_code": "40111",
            },
            "payment_method": "transfer",
            "order_status": OrderStatus.PENDING,
            "payment_status": PaymentStatus.WAITING_PAYMENT,
        }
        record.update(overrides)
        order_id = store.insert(Collection.ORDERS, record)
        return store.get(Collection.ORDERS, order_id)
    return _make_order


@pytest.fixture
def make_shipment(store, make_order, shipment_service):
    """Create a shipment through the service from a fresh confirmed order."""
    def _make_shipment(order_overrides=None, **carrier_input):
        overrides = {"order_status": OrderStatus.CONFIRMED}
        overrides.update(order_overrides or {})
        order = make_order(**overrides)
        carrier_input.setdefault("courier", "JNE")
        carrier_input.setdefault("cost", 15000)
        result = shipment_service.create_shipment_from_order(order["id"], carrier_input)
        assert result["success"], result
        return store.get(Collection.SHIPMENTS, result["shipment_id"])
    return _make_shipment
