"""Order and shipment workflow rules.

Pure functions over store records (plain dicts). Order status and payment
status are separate axes and are validated separately.
"""
from resellerhub.constants import OrderStatus, PaymentStatus, ShipmentStatus, AdminAction
from resellerhub.errors import InvalidState, InvalidTransition, ValidationError


def validate_order_status(status):
    if status not in OrderStatus.ALL:
        raise ValidationError(f"Unknown order status: '{status}'")
    return status


def validate_payment_status(status):
    if status not in PaymentStatus.ALL:
        raise ValidationError(f"Unknown payment status: '{status}'")
    return status


def validate_shipment_status(status):
    normalized = ShipmentStatus.normalize(status)
    if normalized is None:
        raise ValidationError(f"Unknown shipment status: '{status}'")
    return normalized


def is_terminal(order):
    return order.get('order_status') in OrderStatus.TERMINAL


def check_order_transition(order, new_status):
    """Raise InvalidTransition if `order` may not move to `new_status`.

    Terminal orders only accept an update to their current status, which is
    how an admin attaches a note to a finished order.
    """
    current = order.get('order_status')
    if current in OrderStatus.TERMINAL and new_status != current:
        raise InvalidTransition(
            f"Order is already {current}; its status can no longer be changed"
        )


def can_delete_order(order):
    return order.get('order_status') in OrderStatus.DELETABLE


def check_order_deletable(order):
    if not can_delete_order(order):
        raise InvalidState(
            f"Only pending or cancelled orders can be deleted (current status: {order.get('order_status')})"
        )


def available_actions(order):
    actions = [{
        'type': AdminAction.DETAIL,
        'label': AdminAction.LABELS[AdminAction.DETAIL],
    }]

    if order.get('payment_status') == PaymentStatus.WAITING_VERIFICATION:
        actions.append({
            'type': AdminAction.VERIFY_PAYMENT,
            'label': AdminAction.LABELS[AdminAction.VERIFY_PAYMENT],
            'urgent': True,
        })

    if not is_terminal(order):
        actions.append({
            'type': AdminAction.UPDATE_STATUS,
            'label': AdminAction.LABELS[AdminAction.UPDATE_STATUS],
        })

    if can_delete_order(order):
        actions.append({
            'type': AdminAction.DELETE,
            'label': AdminAction.LABELS[AdminAction.DELETE],
            'danger': True,
        })

    return actions


def is_eligible_for_shipment(order):
    return (
        order.get('order_status') == OrderStatus.CONFIRMED
        or order.get('payment_status') == PaymentStatus.PAID
    )


def is_active_shipment(shipment):
    return shipment.get('status') not in ShipmentStatus.INACTIVE


def can_delete_shipment(shipment):
    return shipment.get('status') in ShipmentStatus.DELETABLE
