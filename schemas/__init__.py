# schemas/__init__.py
from .owner import OwnerCreate, OwnerUpdate, OwnerResponse
from .property import PropertyCreate, PropertyUpdate, PropertyResponse, PropertyWithOwner
from .tenant import TenantCreate, TenantUpdate, TenantResponse
from .payment import (
     PaymentSettle,
     PaymentResponse,
     PaymentWithLease,
     SettlementResponse,
     OverdueSweepResponse,
)
from .lease import (
     LeaseCreate,
     LeaseUpdate,
     LeaseResponse,
     LeaseWithDetails,
     LeaseWithPayments,
     LeaseBalanceResponse,
     LeaseSyncResponse,
)
from .dashboard import DashboardStats

__all__ = [
     "OwnerCreate",
     "OwnerUpdate",
     "OwnerResponse",
     "PropertyCreate",
     "PropertyUpdate",
     "PropertyResponse",
     "PropertyWithOwner",
     "TenantCreate",
     "TenantUpdate",
     "TenantResponse",
     "PaymentSettle",
     "PaymentResponse",
     "PaymentWithLease",
     "SettlementResponse",
     "OverdueSweepResponse",
     "LeaseCreate",
     "LeaseUpdate",
     "LeaseResponse",
     "LeaseWithDetails",
     "LeaseWithPayments",
     "LeaseBalanceResponse",
     "LeaseSyncResponse",
     "DashboardStats",
]
