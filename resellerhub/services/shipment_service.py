import secrets
import string
from datetime import datetime
from flask import current_app

from resellerhub.constants import (
    Collection, ShipmentStatus, LogActor, DEFAULT_ITEM_WEIGHT, SHIPMENT_NUMBER_PREFIX
)
from resellerhub.errors import InvalidState, NotFound, ValidationError
from resellerhub import workflow
from resellerhub.utils import clean_string, format_address_line
from . import service_operation
from .store import DocumentStore, SERVER_TIMESTAMP

_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def generate_shipment_number(now=None):
    """SHIP + year + last six digits of the epoch milliseconds + 4 random chars."""
    now = now or datetime.now()
    millis = str(int(now.timestamp() * 1000))[-6:]
    suffix = ''.join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(4))
    return f"{SHIPMENT_NUMBER_PREFIX}{now.year}{millis}{suffix}"


def compute_total_weight(items):
    total = 0
    for item in items or []:
        weight = item.get('weight')
        if weight is None:
            weight = DEFAULT_ITEM_WEIGHT
        total += float(weight) * int(item.get('quantity', 0))
    return total


def snapshot_recipient(order):
    """Copy the delivery details out of the order.

    The result is a value copy: later edits to the order's address never
    reach the shipment.
    """
    address = order.get('shipping_address') or None
    if isinstance(address, dict):
        address = dict(address)
        name = address.get('name') or order.get('reseller_name')
        phone = address.get('phone') or order.get('reseller_phone')
        address_line = format_address_line(address)
    else:
        # Free-text addresses on older orders are kept as the display line only
        address_line = clean_string(address) if isinstance(address, str) else ''
        address = None
        name = order.get('reseller_name')
        phone = order.get('reseller_phone')

    return {
        'recipient_name': name,
        'recipient_phone': phone,
        'shipping_address': address,
        'address_line': address_line,
    }


def build_shipment(order, carrier_input, now=None):
    """Derive a new shipment record from an order and the admin's carrier input."""
    carrier_input = carrier_input or {}
    items = [dict(item) for item in order.get('items') or []]

    record = {
        'shipment_number': generate_shipment_number(now),
        'tracking_number': clean_string(carrier_input.get('tracking_number')) or None,
        'order_id': order['id'],
        'order_number': order.get('order_number'),
        'reseller_id': order.get('reseller_id'),
        'reseller_name': order.get('reseller_name'),
        'reseller_email': order.get('reseller_email'),
        'reseller_phone': order.get('reseller_phone'),
        'items': items,
        'total_weight': compute_total_weight(items),
        'courier': clean_string(carrier_input.get('courier')) or current_app.config['DEFAULT_COURIER'],
        'service': clean_string(carrier_input.get('service')) or current_app.config['DEFAULT_SERVICE'],
        'shipping_cost': carrier_input.get('cost', carrier_input.get('shipping_cost', 0)),
        'estimated_delivery': clean_string(
            carrier_input.get('estimated_delivery', carrier_input.get('estimated_days'))
        ) or None,
        'notes': clean_string(carrier_input.get('notes')),
        'admin_notes': '',
        'status': ShipmentStatus.PREPARING,
    }
    record.update(snapshot_recipient(order))
    return record


class ShipmentService:
    def __init__(self, store=None):
        self.store = store or DocumentStore()

    @service_operation
    def list_eligible_orders(self):
        orders = self.store.query(Collection.ORDERS)
        return {'success': True, 'orders': [o for o in orders if workflow.is_eligible_for_shipment(o)]}

    @service_operation
    def create_shipment_from_order(self, order_id, carrier_input=None):
        if not order_id:
            raise ValidationError('Select an order first')

        order = self.store.get(Collection.ORDERS, order_id)
        if not workflow.is_eligible_for_shipment(order):
            raise InvalidState(
                f"Order {order['order_number']} is not confirmed or paid yet"
            )

        existing = self.store.query(Collection.SHIPMENTS, {'order_id': order['id']})
        active = [s for s in existing if workflow.is_active_shipment(s)]
        if active:
            raise InvalidState(
                f"Order {order['order_number']} already has shipment {active[0]['shipment_number']}"
            )

        record = build_shipment(order, carrier_input, self.store.clock())
        shipment_id = self.store.insert(Collection.SHIPMENTS, record)
        self._append_log(shipment_id, record['status'], 'Shipment created', LogActor.SYSTEM)

        current_app.logger.info(
            f"Shipment {record['shipment_number']} created for order {order['order_number']}"
        )
        return {
            'success': True,
            'shipment_id': shipment_id,
            'shipment_number': record['shipment_number'],
        }

    @service_operation
    def get_shipment(self, shipment_id):
        return {'success': True, 'shipment': self.store.get(Collection.SHIPMENTS, shipment_id)}

    @service_operation
    def list_shipments(self, status=None):
        filters = {}
        if status and status != 'all':
            filters['status'] = workflow.validate_shipment_status(status)
        return {'success': True, 'shipments': self.store.query(Collection.SHIPMENTS, filters)}

    @service_operation
    def get_shipment_by_number(self, shipment_number):
        shipments = self.store.query(
            Collection.SHIPMENTS, {'shipment_number': clean_string(shipment_number)}
        )
        if not shipments:
            raise NotFound('Shipment not found')
        return {'success': True, 'shipment': shipments[0]}

    @service_operation
    def list_shipments_by_reseller(self, reseller_id):
        shipments = self.store.query(Collection.SHIPMENTS, {'reseller_id': reseller_id})
        return {'success': True, 'shipments': shipments}

    @service_operation
    def get_shipment_logs(self, shipment_id):
        # Logs outlive their shipment, so only the id shape is checked
        try:
            shipment_id = int(shipment_id)
        except (TypeError, ValueError):
            raise NotFound('Shipment not found')
        logs = self.store.query(
            Collection.SHIPMENT_LOGS, {'shipment_id': shipment_id}, order_by='timestamp'
        )
        return {'success': True, 'logs': logs}

    @service_operation
    def update_shipment_status(self, shipment_id, new_status, notes='', actor=LogActor.SYSTEM):
        # Any status may follow any other; only the vocabulary is checked
        status = workflow.validate_shipment_status(new_status)
        self.store.get(Collection.SHIPMENTS, shipment_id)

        fields = {'status': status, 'admin_notes': notes}
        if status == ShipmentStatus.DELIVERED:
            fields['actual_delivery'] = SERVER_TIMESTAMP

        self.store.update(Collection.SHIPMENTS, shipment_id, fields)
        self._append_log(shipment_id, status, notes, actor)
        current_app.logger.info(f"Shipment {shipment_id} status -> {status} by {actor}")
        return {'success': True}

    @service_operation
    def update_tracking(self, shipment_id, tracking_number, status=None, notes=''):
        tracking_number = clean_string(tracking_number)
        if not tracking_number:
            raise ValidationError('Tracking number is required')

        shipment = self.store.get(Collection.SHIPMENTS, shipment_id)
        status = workflow.validate_shipment_status(status) if status else shipment['status']

        fields = {'tracking_number': tracking_number, 'status': status}
        if notes:
            fields['admin_notes'] = notes
        if status == ShipmentStatus.DELIVERED and shipment['status'] != ShipmentStatus.DELIVERED:
            fields['actual_delivery'] = SERVER_TIMESTAMP

        self.store.update(Collection.SHIPMENTS, shipment_id, fields)
        self._append_log(
            shipment_id, status, notes or f'Tracking number set to {tracking_number}', LogActor.ADMIN
        )
        return {'success': True}

    @service_operation
    def delete_shipment(self, shipment_id):
        shipment = self.store.get(Collection.SHIPMENTS, shipment_id)
        if not workflow.can_delete_shipment(shipment):
            raise InvalidState(
                f"Only preparing or cancelled shipments can be deleted (current status: {shipment['status']})"
            )

        # Log first: a failed append must leave the shipment in place
        self._append_log(
            shipment['id'], shipment['status'],
            f"Shipment {shipment['shipment_number']} deleted", LogActor.SYSTEM
        )
        self.store.delete(Collection.SHIPMENTS, shipment_id)
        current_app.logger.info(f"Shipment {shipment['shipment_number']} deleted")
        return {'success': True}

    def _append_log(self, shipment_id, status, message, actor):
        return self.store.insert(Collection.SHIPMENT_LOGS, {
            'shipment_id': int(shipment_id),
            'status': status,
            'message': message,
            'actor': actor,
            'timestamp': SERVER_TIMESTAMP,
        })
