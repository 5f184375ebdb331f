class OrderStatus:
    """Order fulfilment status"""
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    SHIPPED = 'shipped'
    DELIVERED = 'delivered'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    # Lifecycle order
    ALL = [PENDING, CONFIRMED, SHIPPED, DELIVERED, COMPLETED, CANCELLED]

    # No status change allowed once reached (notes only)
    TERMINAL = [COMPLETED, CANCELLED]

    # Only these may be hard-deleted
    DELETABLE = [PENDING, CANCELLED]


class PaymentStatus:
    """Payment status, tracked independently of OrderStatus"""
    WAITING_PAYMENT = 'waiting_payment'
    WAITING_VERIFICATION = 'waiting_verification'
    PAID = 'paid'
    FAILED = 'failed'

    ALL = [WAITING_PAYMENT, WAITING_VERIFICATION, PAID, FAILED]


class ShipmentStatus:
    """Canonical shipment status"""
    PREPARING = 'preparing'
    IN_TRANSIT = 'in_transit'
    DELIVERED = 'delivered'
    RETURNED = 'returned'
    CANCELLED = 'cancelled'
    FAILED = 'failed'

    ALL = [PREPARING, IN_TRANSIT, DELIVERED, RETURNED, CANCELLED, FAILED]

    DELETABLE = [PREPARING, CANCELLED]

    # A shipment in any other status blocks a new one for the same order
    INACTIVE = [RETURNED, CANCELLED, FAILED]

    # Vocabulary written by the generic shipment screens
    LEGACY_MAP = {
        'pending': PREPARING,
        'processing': IN_TRANSIT,
        'processed': IN_TRANSIT,
        'shipped': IN_TRANSIT,
    }

    @classmethod
    def normalize(cls, value):
        """Map a raw status onto the canonical vocabulary.

        Returns None for unknown values so callers decide whether that is
        a validation failure or bad data to skip.
        """
        if value is None:
            return None
        value = str(value).strip().lower()
        if value in cls.ALL:
            return value
        return cls.LEGACY_MAP.get(value)

    @classmethod
    def is_legacy(cls, value):
        return value is not None and str(value).strip().lower() in cls.LEGACY_MAP


class AdminAction:
    """Actions offered to the admin on an order row"""
    DETAIL = 'detail'
    VERIFY_PAYMENT = 'payment'
    UPDATE_STATUS = 'update'
    DELETE = 'delete'

    LABELS = {
        DETAIL: 'View detail',
        VERIFY_PAYMENT: 'Verify payment',
        UPDATE_STATUS: 'Update status',
        DELETE: 'Delete order',
    }


class LogActor:
    """Who triggered a shipment log entry"""
    SYSTEM = 'system'
    ADMIN = 'admin'


class Collection:
    """Store collection names"""
    ORDERS = 'orders'
    SHIPMENTS = 'shipments'
    SHIPMENT_LOGS = 'shipmentLogs'


DEFAULT_ITEM_WEIGHT = 0.5
SHIPMENT_NUMBER_PREFIX = 'SHIP'
