from datetime import datetime
from . import db
from resellerhub.constants import ShipmentStatus

class Shipment(db.Model):
    __tablename__ = 'shipments'

    id = db.Column(db.Integer, primary_key=True)
    shipment_number = db.Column(db.String(50), nullable=False, index=True)
    # Carrier-issued, unrelated to shipment_number
    tracking_number = db.Column(db.String(100), nullable=True)

    # No foreign key: the order may be deleted later, the snapshot stays
    order_id = db.Column(db.Integer, nullable=False, index=True)
    order_number = db.Column(db.String(50))

    # Snapshot of the order at creation time
    reseller_id = db.Column(db.String(128), index=True)
    reseller_name = db.Column(db.String(200))
    reseller_email = db.Column(db.String(200))
    reseller_phone = db.Column(db.String(50))
    recipient_name = db.Column(db.String(200))
    recipient_phone = db.Column(db.String(50))
    shipping_address = db.Column(db.JSON, nullable=True)
    address_line = db.Column(db.String(500))
    items = db.Column(db.JSON, nullable=False, default=list)

    courier = db.Column(db.String(50), index=True)
    service = db.Column(db.String(50))
    total_weight = db.Column(db.Float, default=0)
    shipping_cost = db.Column(db.Float, default=0)
    estimated_delivery = db.Column(db.String(100), nullable=True)
    actual_delivery = db.Column(db.DateTime, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=ShipmentStatus.PREPARING, index=True)
    notes = db.Column(db.Text, nullable=True)
    admin_notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)


class ShipmentLog(db.Model):
    __tablename__ = 'shipment_logs'

    id = db.Column(db.Integer, primary_key=True)
    # Kept after the shipment row is deleted
    shipment_id = db.Column(db.Integer, nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False)
    message = db.Column(db.Text)
    actor = db.Column(db.String(50), nullable=False, default='system')
    timestamp = db.Column(db.DateTime, default=datetime.now, nullable=False)
