from flask import request

from resellerhub.services.order_service import OrderService
from . import api_bp
from .utils import to_response, rate_limited, json_body

@api_bp.route('/orders', methods=['GET'])
def list_orders():
    result = OrderService().list_orders(
        status=request.args.get('status'),
        search=request.args.get('q'),
    )
    return to_response(result)

@api_bp.route('/orders', methods=['POST'])
@rate_limited
def create_order():
    return to_response(OrderService().create_order(json_body()), 201)

@api_bp.route('/orders/<int:order_id>', methods=['GET'])
def get_order(order_id):
    return to_response(OrderService().get_order(order_id))

@api_bp.route('/orders/<int:order_id>/status', methods=['POST'])
@rate_limited
def update_order_status(order_id):
    data = json_body()
    result = OrderService().update_order_status(
        order_id,
        data.get('status'),
        data.get('admin_message', ''),
        tracking_number=data.get('tracking_number'),
    )
    return to_response(result)

@api_bp.route('/orders/<int:order_id>/payment', methods=['POST'])
@rate_limited
def update_payment_status(order_id):
    data = json_body()
    result = OrderService().update_payment_status(
        order_id,
        data.get('payment_status'),
        data.get('order_status'),
        data.get('admin_message', ''),
    )
    return to_response(result)

@api_bp.route('/orders/<int:order_id>/payment/approve', methods=['POST'])
@rate_limited
def approve_payment(order_id):
    data = json_body()
    service = OrderService()
    if data.get('admin_message'):
        return to_response(service.approve_payment(order_id, data['admin_message']))
    return to_response(service.approve_payment(order_id))

@api_bp.route('/orders/<int:order_id>/payment/reject', methods=['POST'])
@rate_limited
def reject_payment(order_id):
    data = json_body()
    service = OrderService()
    if data.get('admin_message'):
        return to_response(service.reject_payment(order_id, data['admin_message']))
    return to_response(service.reject_payment(order_id))

@api_bp.route('/orders/<int:order_id>', methods=['DELETE'])
@rate_limited
def delete_order(order_id):
    return to_response(OrderService().delete_order(order_id))
