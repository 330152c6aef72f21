# services/__init__.py
from .exceptions import (
     DomainError,
     ValidationError,
     ConstraintViolationError,
     NotFoundError,
     DebtOutstandingError,
     PaymentConflictError,
     BillingProviderError,
)
from .ledger_store import LedgerStore
from .billing_bridge import BillingBridge, GeneratedInvoice, get_billing_bridge
from .settlement_service import SettlementResult, settle_payment, mark_overdue_payments
from .billing_sync import BillingSync, first_billing_due_date, handle_webhook
from .lease_originator import LeaseOriginator
from .termination_guard import ensure_no_outstanding_debt, apply_lease_update
from .dashboard_service import DashboardService
from .seed import seed_database

__all__ = [
     "DomainError",
     "ValidationError",
     "ConstraintViolationError",
     "NotFoundError",
     "DebtOutstandingError",
     "PaymentConflictError",
     "BillingProviderError",
     "LedgerStore",
     "BillingBridge",
     "GeneratedInvoice",
     "get_billing_bridge",
     "SettlementResult",
     "settle_payment",
     "mark_overdue_payments",
     "BillingSync",
     "first_billing_due_date",
     "handle_webhook",
     "LeaseOriginator",
     "ensure_no_outstanding_debt",
     "apply_lease_update",
     "DashboardService",
     "seed_database",
]
