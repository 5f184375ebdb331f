from flask import request

from resellerhub.constants import LogActor
from resellerhub.services.shipment_service import ShipmentService
from . import api_bp
from .utils import to_response, rate_limited, json_body

@api_bp.route('/shipments', methods=['GET'])
def list_shipments():
    service = ShipmentService()
    if request.args.get('reseller_id'):
        return to_response(service.list_shipments_by_reseller(request.args['reseller_id']))
    return to_response(service.list_shipments(status=request.args.get('status')))

@api_bp.route('/shipments/eligible_orders', methods=['GET'])
def eligible_orders():
    return to_response(ShipmentService().list_eligible_orders())

@api_bp.route('/shipments', methods=['POST'])
@rate_limited
def create_shipment():
    data = json_body()
    result = ShipmentService().create_shipment_from_order(data.get('order_id'), data)
    return to_response(result, 201)

@api_bp.route('/shipments/<int:shipment_id>', methods=['GET'])
def get_shipment(shipment_id):
    return to_response(ShipmentService().get_shipment(shipment_id))

@api_bp.route('/shipments/number/<shipment_number>', methods=['GET'])
def get_shipment_by_number(shipment_number):
    return to_response(ShipmentService().get_shipment_by_number(shipment_number))

@api_bp.route('/shipments/<int:shipment_id>/logs', methods=['GET'])
def shipment_logs(shipment_id):
    return to_response(ShipmentService().get_shipment_logs(shipment_id))

@api_bp.route('/shipments/<int:shipment_id>/status', methods=['POST'])
@rate_limited
def update_shipment_status(shipment_id):
    data = json_body()
    result = ShipmentService().update_shipment_status(
        shipment_id, data.get('status'), data.get('notes', ''), actor=LogActor.ADMIN
    )
    return to_response(result)

@api_bp.route('/shipments/<int:shipment_id>/tracking', methods=['POST'])
@rate_limited
def update_tracking(shipment_id):
    data = json_body()
    result = ShipmentService().update_tracking(
        shipment_id, data.get('tracking_number'), data.get('status'), data.get('notes', '')
    )
    return to_response(result)

@api_bp.route('/shipments/<int:shipment_id>', methods=['DELETE'])
@rate_limited
def delete_shipment(shipment_id):
    return to_response(ShipmentService().delete_shipment(shipment_id))
