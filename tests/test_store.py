"""
Tests for the DocumentStore port.
"""

import pytest

from resellerhub.constants import Collection, ShipmentStatus
from resellerhub.errors import NotFound, StoreError, ValidationError
from resellerhub.models import Shipment
from resellerhub.extensions import db
from resellerhub.services.store import SERVER_TIMESTAMP


def _shipment(**overrides):
    record = {
        "shipment_number": "SHIP2026000001ABCD",
        "order_id": 1,
        "status": ShipmentStatus.PREPARING,
        "shipping_cost": 0,
    }
    record.update(overrides)
    return record


class TestDocumentStore:
    def test_insert_stamps_timestamps(self, store, clock):
        shipment_id = store.insert(Collection.SHIPMENTS, _shipment())
        record = store.get(Collection.SHIPMENTS, shipment_id)
        assert record["created_at"] == clock.now
        assert record["updated_at"] == clock.now

    def test_update_bumps_updated_at_only(self, store, clock):
        shipment_id = store.insert(Collection.SHIPMENTS, _shipment())
        clock.advance(minutes=10)
        store.update(Collection.SHIPMENTS, shipment_id, {"notes": "x", "created_at": clock.now})
        record = store.get(Collection.SHIPMENTS, shipment_id)
        assert record["updated_at"] == clock.now
        assert record["created_at"] != clock.now

    def test_server_timestamp_sentinel(self, store, clock):
        shipment_id = store.insert(Collection.SHIPMENTS, _shipment())
        clock.advance(days=1)
        store.update(Collection.SHIPMENTS, shipment_id, {"actual_delivery": SERVER_TIMESTAMP})
        assert store.get(Collection.SHIPMENTS, shipment_id)["actual_delivery"] == clock.now

    def test_cost_string_normalized_on_write(self, store):
        shipment_id = store.insert(Collection.SHIPMENTS, _shipment(shipping_cost="Rp 12.500"))
        assert store.get(Collection.SHIPMENTS, shipment_id)["shipping_cost"] == 12500

    def test_legacy_status_normalized_on_write(self, store):
        shipment_id = store.insert(Collection.SHIPMENTS, _shipment(status="processing"))
        assert store.get(Collection.SHIPMENTS, shipment_id)["status"] == ShipmentStatus.IN_TRANSIT

    def test_legacy_status_normalized_on_read(self, store):
        row = Shipment(shipment_number="SHIP-RAW", order_id=1, status="pending", shipping_cost=0)
        db.session.add(row)
        db.session.commit()
        assert store.get(Collection.SHIPMENTS, row.id)["status"] == ShipmentStatus.PREPARING

    def test_unknown_status_rejected(self, store):
        with pytest.raises(ValidationError):
            store.insert(Collection.SHIPMENTS, _shipment(status="lost"))

    def test_unknown_fields_ignored(self, store):
        shipment_id = store.insert(Collection.SHIPMENTS, _shipment(colour="red", id=999))
        assert shipment_id != 999
        assert "colour" not in store.get(Collection.SHIPMENTS, shipment_id)

    def test_query_equality_filter_newest_first(self, store, clock):
        first = store.insert(Collection.SHIPMENTS, _shipment(order_id=5))
        clock.advance(seconds=1)
        second = store.insert(Collection.SHIPMENTS, _shipment(order_id=5))
        store.insert(Collection.SHIPMENTS, _shipment(order_id=6))
        ids = [r["id"] for r in store.query(Collection.SHIPMENTS, {"order_id": 5})]
        assert ids == [second, first]

    def test_missing_records(self, store):
        with pytest.raises(NotFound):
            store.get(Collection.ORDERS, 1)
        with pytest.raises(NotFound):
            store.get(Collection.ORDERS, "not-a-number")
        with pytest.raises(NotFound):
            store.update(Collection.SHIPMENTS, 1, {"notes": "x"})
        with pytest.raises(NotFound):
            store.delete(Collection.SHIPMENTS, 1)

    def test_unknown_collection(self, store):
        with pytest.raises(StoreError):
            store.get("users", 1)

    def test_delete(self, store):
        shipment_id = store.insert(Collection.SHIPMENTS, _shipment())
        store.delete(Collection.SHIPMENTS, shipment_id)
        with pytest.raises(NotFound):
            store.get(Collection.SHIPMENTS, shipment_id)
