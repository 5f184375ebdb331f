"""Document-style store port over the SQLAlchemy models.

Services talk to collections of plain dict records through `DocumentStore`
instead of touching the ORM, so every write is a single, independent commit
in the same way the hosted document database behaved. Shipment status and
cost are normalised here, on both write and read, so nothing above this
layer ever sees the legacy status vocabulary or a currency string.
"""
from datetime import datetime
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from resellerhub.extensions import db
from resellerhub.models import Order, Shipment, ShipmentLog
from resellerhub.constants import Collection, ShipmentStatus
from resellerhub.errors import NotFound, StoreError, ValidationError
from resellerhub.utils import parse_cost

# Replaced by the store clock when written
SERVER_TIMESTAMP = object()

MODELS = {
    Collection.ORDERS: Order,
    Collection.SHIPMENTS: Shipment,
    Collection.SHIPMENT_LOGS: ShipmentLog,
}

NOT_FOUND_MESSAGES = {
    Collection.ORDERS: 'Order not found',
    Collection.SHIPMENTS: 'Shipment not found',
    Collection.SHIPMENT_LOGS: 'Shipment log entry not found',
}


class DocumentStore:
    def __init__(self, session=None, clock=None):
        self._session = session
        self.clock = clock or datetime.now

    @property
    def session(self):
        return self._session or db.session

    def get(self, collection, record_id):
        model = self._model(collection)
        obj = self.session.get(model, self._coerce_id(collection, record_id)) if record_id is not None else None
        if obj is None:
            raise NotFound(NOT_FOUND_MESSAGES[collection])
        return self._to_dict(collection, obj)

    def query(self, collection, filters=None, order_by='created_at', descending=True):
        model = self._model(collection)
        q = model.query
        try:
            if filters:
                q = q.filter_by(**filters)
        except SQLAlchemyError as e:
            raise StoreError(f"Invalid filter for {collection}: {e}") from e
        if order_by:
            column = getattr(model, order_by)
            # id breaks ties between records stamped in the same instant
            if descending:
                q = q.order_by(column.desc(), model.id.desc())
            else:
                q = q.order_by(column.asc(), model.id.asc())
        try:
            return [self._to_dict(collection, obj) for obj in q.all()]
        except SQLAlchemyError as e:
            raise StoreError(f'Could not read {collection}: {e}') from e

    def insert(self, collection, record):
        model = self._model(collection)
        fields = self._prepare(collection, record)
        now = self.clock()
        if collection == Collection.SHIPMENT_LOGS:
            fields.setdefault('timestamp', now)
        else:
            fields['created_at'] = now
            fields['updated_at'] = now

        obj = model(**fields)
        self.session.add(obj)
        self._commit(f'Could not save to {collection}')
        return obj.id

    def update(self, collection, record_id, fields):
        model = self._model(collection)
        obj = self.session.get(model, self._coerce_id(collection, record_id))
        if obj is None:
            raise NotFound(NOT_FOUND_MESSAGES[collection])

        changes = self._prepare(collection, fields)
        changes.pop('created_at', None)
        if hasattr(obj, 'updated_at'):
            changes['updated_at'] = self.clock()

        for key, value in changes.items():
            setattr(obj, key, value)
        self._commit(f'Could not update {collection}')

    def delete(self, collection, record_id):
        model = self._model(collection)
        obj = self.session.get(model, self._coerce_id(collection, record_id))
        if obj is None:
            raise NotFound(NOT_FOUND_MESSAGES[collection])
        self.session.delete(obj)
        self._commit(f'Could not delete from {collection}')

    def _model(self, collection):
        try:
            return MODELS[collection]
        except KeyError:
            raise StoreError(f'Unknown collection: {collection}')

    def _coerce_id(self, collection, record_id):
        try:
            return int(record_id)
        except (TypeError, ValueError):
            raise NotFound(NOT_FOUND_MESSAGES[collection])

    def _commit(self, message):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.error(f"{message}: {e}")
            raise StoreError(f'{message}: {e}') from e

    def _prepare(self, collection, record):
        model = self._model(collection)
        columns = set(model.__table__.columns.keys())
        fields = {}
        for key, value in record.items():
            if key == 'id' or key not in columns:
                continue
            if value is SERVER_TIMESTAMP:
                value = self.clock()
            fields[key] = value

        if collection == Collection.SHIPMENTS:
            if 'status' in fields:
                fields['status'] = self._normalize_status(fields['status'])
            if 'shipping_cost' in fields:
                fields['shipping_cost'] = parse_cost(fields['shipping_cost'])
        elif collection == Collection.SHIPMENT_LOGS and 'status' in fields:
            fields['status'] = self._normalize_status(fields['status'])
        return fields

    def _normalize_status(self, value):
        status = ShipmentStatus.normalize(value)
        if status is None:
            raise ValidationError(f"Unknown shipment status: '{value}'")
        if ShipmentStatus.is_legacy(value):
            current_app.logger.warning(
                f"Legacy shipment status '{value}' mapped to '{status}'"
            )
        return status

    def _to_dict(self, collection, obj):
        record = {c.name: getattr(obj, c.name) for c in obj.__table__.columns}
        if collection == Collection.SHIPMENTS:
            # Rows written outside this store may still carry old values
            record['status'] = ShipmentStatus.normalize(record['status']) or record['status']
            record['shipping_cost'] = parse_cost(record.get('shipping_cost'))
        return record
