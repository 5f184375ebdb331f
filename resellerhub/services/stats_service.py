"""Dashboard statistics.

Every figure comes from a full scan of the collection; there is no
pagination and no incremental bookkeeping.
"""
from collections import Counter
from datetime import timedelta
from flask import current_app

from resellerhub.constants import Collection, OrderStatus, PaymentStatus, ShipmentStatus
from resellerhub.utils import parse_cost, parse_timestamp
from . import service_operation
from .store import DocumentStore

ORDER_STATUS_BUCKETS = [
    OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.SHIPPED,
    OrderStatus.DELIVERED, OrderStatus.COMPLETED, OrderStatus.CANCELLED,
]


def compute_order_stats(orders):
    stats = {'total': 0, PaymentStatus.WAITING_VERIFICATION: 0}
    stats.update({status: 0 for status in ORDER_STATUS_BUCKETS})

    for order in orders:
        stats['total'] += 1
        if order.get('order_status') in ORDER_STATUS_BUCKETS:
            stats[order['order_status']] += 1
        # Counted independently of the order status bucket above
        if order.get('payment_status') == PaymentStatus.WAITING_VERIFICATION:
            stats[PaymentStatus.WAITING_VERIFICATION] += 1
    return stats


def _delivery_deadline(value):
    deadline = parse_timestamp(value)
    if deadline is None:
        return None
    # A bare date means "by the end of that day"
    if isinstance(value, str) and len(value.strip()) == 10:
        deadline = deadline + timedelta(days=1) - timedelta(microseconds=1)
    return deadline


def is_on_time(shipment):
    """True/False for delivered shipments with both dates, otherwise None."""
    delivered_at = parse_timestamp(shipment.get('actual_delivery'))
    deadline = _delivery_deadline(shipment.get('estimated_delivery'))
    if delivered_at is None or deadline is None:
        return None
    return delivered_at <= deadline


def compute_shipment_stats(shipments, now):
    stats = {'total': 0}
    stats.update({status: 0 for status in ShipmentStatus.ALL})

    total_cost = 0
    couriers = Counter()
    on_time = 0
    evaluated = 0
    this_month = 0
    this_month_cost = 0

    for shipment in shipments:
        stats['total'] += 1
        status = shipment.get('status')
        if status in ShipmentStatus.ALL:
            stats[status] += 1

        cost = parse_cost(shipment.get('shipping_cost'))
        total_cost += cost

        couriers[shipment.get('courier') or 'unknown'] += 1

        result = is_on_time(shipment)
        if result is not None:
            evaluated += 1
            if result:
                on_time += 1

        created_at = parse_timestamp(shipment.get('created_at'))
        if created_at and created_at.year == now.year and created_at.month == now.month:
            this_month += 1
            this_month_cost += cost

    stats.update({
        'total_cost': total_cost,
        'average_cost': total_cost / stats['total'] if stats['total'] else 0,
        'by_courier': dict(couriers),
        'on_time': on_time,
        'on_time_rate': on_time / evaluated if evaluated else 0,
        'this_month': this_month,
        'this_month_cost': this_month_cost,
    })
    return stats


class StatsService:
    def __init__(self, store=None):
        self.store = store or DocumentStore()

    @service_operation
    def get_order_stats(self):
        orders = self.store.query(Collection.ORDERS, order_by=None)
        current_app.logger.info(f"Computing order stats over {len(orders)} orders")
        return {'success': True, 'stats': compute_order_stats(orders)}

    @service_operation
    def get_shipment_stats(self):
        shipments = self.store.query(Collection.SHIPMENTS, order_by=None)
        current_app.logger.info(f"Computing shipment stats over {len(shipments)} shipments")
        return {'success': True, 'stats': compute_shipment_stats(shipments, self.store.clock())}
