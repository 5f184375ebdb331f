from datetime import datetime
from . import db
from resellerhub.constants import OrderStatus, PaymentStatus

class Order(db.Model):
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    # Display only, duplicates are possible
    order_number = db.Column(db.String(50), nullable=False, index=True)

    reseller_id = db.Column(db.String(128), nullable=False, index=True)
    reseller_name = db.Column(db.String(200))
    reseller_email = db.Column(db.String(200))
    reseller_phone = db.Column(db.String(50))

    # [{name, quantity, price, weight?}]
    items = db.Column(db.JSON, nullable=False, default=list)
    total_amount = db.Column(db.Float, default=0)
    total_commission = db.Column(db.Float, nullable=True)

    # {name, phone, address, city, province, postal_code}
    shipping_address = db.Column(db.JSON, nullable=True)

    payment_method = db.Column(db.String(50))
    payment_proof_url = db.Column(db.String(500), nullable=True)
    tracking_number = db.Column(db.String(100), nullable=True)
    admin_message = db.Column(db.Text, nullable=True)

    order_status = db.Column(db.String(20), nullable=False, default=OrderStatus.PENDING, index=True)
    payment_status = db.Column(db.String(30), nullable=False, default=PaymentStatus.WAITING_PAYMENT, index=True)

    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
