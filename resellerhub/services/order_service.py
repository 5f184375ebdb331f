from datetime import datetime
from flask import current_app

from resellerhub.constants import Collection, OrderStatus, PaymentStatus
from resellerhub.errors import ValidationError
from resellerhub import workflow
from resellerhub.utils import clean_string
from . import service_operation
from .store import DocumentStore

ORDER_FIELDS = (
    'order_number', 'reseller_id', 'reseller_name', 'reseller_email', 'reseller_phone',
    'total_commission', 'shipping_address', 'payment_method', 'payment_proof_url',
)


def generate_order_number(now=None):
    now = now or datetime.now()
    return f"ORD{now.strftime('%Y%m%d%H%M%S')}{now.microsecond // 1000:03d}"


def normalize_items(items):
    if not items:
        raise ValidationError('An order needs at least one item')
    if not isinstance(items, list):
        raise ValidationError('Items must be a list of line items')

    normalized = []
    for i, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ValidationError(f'Item {i} is not a valid line item')
        name = clean_string(item.get('name'))
        if not name:
            raise ValidationError(f'Item {i} has no name')
        try:
            quantity = int(item.get('quantity', item.get('qty', 0)))
            price = float(item.get('price', 0))
        except (TypeError, ValueError):
            raise ValidationError(f'Item {i} has an invalid quantity or price')
        if quantity < 1:
            raise ValidationError(f'Item {i}: quantity must be at least 1')
        if price < 0:
            raise ValidationError(f'Item {i}: price cannot be negative')

        line = {'name': name, 'quantity': quantity, 'price': price}
        if item.get('weight') is not None:
            try:
                line['weight'] = float(item['weight'])
            except (TypeError, ValueError):
                raise ValidationError(f'Item {i} has an invalid weight')
        normalized.append(line)
    return normalized


class OrderService:
    def __init__(self, store=None):
        self.store = store or DocumentStore()

    @service_operation
    def create_order(self, data):
        if not clean_string(data.get('reseller_id')):
            raise ValidationError('Reseller is required')

        items = normalize_items(data.get('items'))
        address = data.get('shipping_address')
        if address is not None and not isinstance(address, dict):
            raise ValidationError('Shipping address must be an object')

        record = {key: data.get(key) for key in ORDER_FIELDS}
        record['items'] = items
        record['order_number'] = record['order_number'] or generate_order_number(self.store.clock())
        if data.get('total_amount') is not None:
            try:
                record['total_amount'] = float(data['total_amount'])
            except (TypeError, ValueError):
                raise ValidationError('Total amount must be a number')
        else:
            record['total_amount'] = sum(it['price'] * it['quantity'] for it in items)

        record['order_status'] = workflow.validate_order_status(
            data.get('order_status') or OrderStatus.PENDING
        )
        record['payment_status'] = workflow.validate_payment_status(
            data.get('payment_status') or PaymentStatus.WAITING_PAYMENT
        )

        order_id = self.store.insert(Collection.ORDERS, record)
        current_app.logger.info(f"Order {record['order_number']} created (id={order_id})")
        return {'success': True, 'order_id': order_id, 'order_number': record['order_number']}

    @service_operation
    def get_order(self, order_id):
        order = self.store.get(Collection.ORDERS, order_id)
        order['actions'] = workflow.available_actions(order)
        return {'success': True, 'order': order}

    @service_operation
    def list_orders(self, status=None, search=None):
        filters = {}
        if status and status != 'all':
            filters['order_status'] = workflow.validate_order_status(status)

        orders = self.store.query(Collection.ORDERS, filters)

        term = clean_string(search).lower()
        if term:
            orders = [
                o for o in orders
                if any(term in (o.get(key) or '').lower()
                       for key in ('order_number', 'reseller_name', 'reseller_email'))
            ]

        for order in orders:
            order['actions'] = workflow.available_actions(order)
        return {'success': True, 'orders': orders}

    @service_operation
    def update_order_status(self, order_id, new_status, admin_message='', tracking_number=None):
        workflow.validate_order_status(new_status)
        order = self.store.get(Collection.ORDERS, order_id)
        workflow.check_order_transition(order, new_status)

        fields = {'order_status': new_status, 'admin_message': admin_message}
        if tracking_number:
            fields['tracking_number'] = clean_string(tracking_number)

        self.store.update(Collection.ORDERS, order_id, fields)
        current_app.logger.info(
            f"Order {order_id} status {order['order_status']} -> {new_status}"
        )
        return {'success': True}

    @service_operation
    def update_payment_status(self, order_id, new_payment_status, new_order_status=None, admin_message=''):
        workflow.validate_payment_status(new_payment_status)
        if new_order_status is not None:
            workflow.validate_order_status(new_order_status)
        self.store.get(Collection.ORDERS, order_id)

        # Both axes go out in one update
        fields = {'payment_status': new_payment_status, 'admin_message': admin_message}
        if new_order_status is not None:
            fields['order_status'] = new_order_status

        self.store.update(Collection.ORDERS, order_id, fields)
        current_app.logger.info(
            f"Order {order_id} payment -> {new_payment_status}"
            + (f", status -> {new_order_status}" if new_order_status else '')
        )
        return {'success': True}

    def approve_payment(self, order_id, admin_message='Payment verified and approved'):
        return self.update_payment_status(
            order_id, PaymentStatus.PAID, OrderStatus.CONFIRMED, admin_message
        )

    def reject_payment(self, order_id, admin_message='Payment rejected: invalid proof of payment'):
        return self.update_payment_status(
            order_id, PaymentStatus.FAILED, OrderStatus.CANCELLED, admin_message
        )

    @service_operation
    def delete_order(self, order_id):
        order = self.store.get(Collection.ORDERS, order_id)
        workflow.check_order_deletable(order)
        self.store.delete(Collection.ORDERS, order_id)
        current_app.logger.info(f"Order {order_id} ({order['order_number']}) deleted")
        return {'success': True}
