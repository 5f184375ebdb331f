from resellerhub.services.stats_service import StatsService
from . import api_bp
from .utils import to_response

@api_bp.route('/stats/orders', methods=['GET'])
def order_stats():
    return to_response(StatsService().get_order_stats())

@api_bp.route('/stats/shipments', methods=['GET'])
def shipment_stats():
    return to_response(StatsService().get_shipment_stats())
