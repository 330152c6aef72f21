# models/__init__.py
from .base import Base, utc_now
from .owner import Owner
from .property import Property
from .tenant import Tenant
from .lease import Lease, LeaseStatus, GuaranteeType, AdjustmentIndex
from .payment import Payment, PaymentStatus, PaymentMethod, OPEN_PAYMENT_STATUSES

__all__ = [
     "Base",
     "utc_now",
     "Owner",
     "Property",
     "Tenant",
     "Lease",
     "LeaseStatus",
     "GuaranteeType",
     "AdjustmentIndex",
     "Payment",
     "PaymentStatus",
     "PaymentMethod",
     "OPEN_PAYMENT_STATUSES",
]
