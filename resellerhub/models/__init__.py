from resellerhub.extensions import db

from .order import Order
from .shipment import Shipment, ShipmentLog
