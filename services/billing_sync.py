# services/billing_sync.py
"""
Glue between the ledger and the billing provider.

- ensure_subscription: make sure a lease has a provider subscription,
  provisioning the tenant's customer and the owner's payout subaccount
  on the way (each id is persisted as soon as it is obtained)
- import_invoices: bring provider-generated invoices into the ledger
- handle_webhook: translate provider notifications into ledger changes

Provider calls are always made outside of an open ledger transaction.
"""
import calendar
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Tuple

from models import Lease, PaymentMethod, PaymentStatus
from services.billing_bridge import BillingBridge
from services.exceptions import PaymentConflictError
from services.ledger_store import LedgerStore
from services.settlement_service import settle_payment

logger = logging.getLogger(__name__)

SETTLED_EVENTS = ("PAYMENT_RECEIVED", "PAYMENT_CONFIRMED")
OVERDUE_EVENT = "PAYMENT_OVERDUE"


def first_billing_due_date(lease: Lease) -> date:
     """
     First due date of the recurring billing.

     The guarantee charge start date wins when set; otherwise the lease's due
     day in the month after the start date (clamped to that month's length,
     so a due day of 31 lands on Feb 28/29).
     """
     if lease.guarantee_charge_start_date:
          return lease.guarantee_charge_start_date

     year, month = lease.start_date.year, lease.start_date.month + 1
     if month > 12:
          year, month = year + 1, 1
     last_day = calendar.monthrange(year, month)[1]
     return date(year, month, min(lease.due_day, last_day))


class BillingSync:
     """Keeps leases, tenants and owners linked to their billing provider counterparts."""

     def __init__(self, store: LedgerStore, bridge: BillingBridge, split_percent: Decimal):
          self.store = store
          self.bridge = bridge
          self.split_percent = split_percent

     def ensure_subscription(self, lease: Lease) -> str:
          """
          Return the lease's subscription id, creating it when missing.

          Raises:
               BillingProviderError: any provider call failed
          """
          if lease.external_subscription_id:
               return lease.external_subscription_id

          tenant = lease.tenant
          owner = lease.property.owner

          customer_id = tenant.external_customer_id
          if not customer_id:
               customer_id = self.bridge.create_customer(tenant)
               with self.store.transaction():
                    self.store.update_tenant(tenant.id, {"external_customer_id": customer_id})
               logger.info("Billing customer provisioned", extra={"tenant_id": tenant.id})

          payout_id = owner.external_payout_account_id
          if not payout_id:
               payout_id = self.bridge.create_payout_account(owner)
               with self.store.transaction():
                    self.store.update_owner(owner.id, {"external_payout_account_id": payout_id})
               logger.info("Payout account provisioned", extra={"owner_id": owner.id})

          subscription_id = self.bridge.create_recurring_billing(
               customer_id=customer_id,
               amount=Decimal(lease.value),
               first_due_date=first_billing_due_date(lease),
               payout_account_id=payout_id,
               split_percent=self.split_percent,
               description=f"Rent - lease #{lease.id} - {lease.property.address}",
          )
          with self.store.transaction():
               self.store.update_lease(lease.id, {"external_subscription_id": subscription_id})
          logger.info("Recurring billing created", extra={"lease_id": lease.id})
          return subscription_id

     def import_invoices(self, lease: Lease) -> int:
          """Create a PENDING payment for every generated invoice not yet in the ledger."""
          if not lease.external_subscription_id:
               return 0

          invoices = self.bridge.list_generated_invoices(lease.external_subscription_id)
          imported = 0
          with self.store.transaction():
               for invoice in invoices:
                    if self.store.find_payment_by_external_id(invoice.external_invoice_id):
                         continue
                    self.store.create_payment(
                         lease_id=lease.id,
                         amount=invoice.value,
                         due_date=invoice.due_date,
                         status=PaymentStatus.PENDING,
                         payment_method=PaymentMethod.BILLING_PROVIDER,
                         external_payment_id=invoice.external_invoice_id,
                    )
                    imported += 1
          if imported:
               logger.info("Imported %s invoice(s)", imported, extra={"lease_id": lease.id})
          return imported

     def sync(self, lease_id: int) -> Tuple[str, int]:
          lease = self.store.get_lease(lease_id)
          subscription_id = self.ensure_subscription(lease)
          return subscription_id, self.import_invoices(lease)


def handle_webhook(store: LedgerStore, payload: Dict[str, Any]) -> Optional[str]:
     """
     Apply a provider notification to the ledger.

     Only invoices linked to a local payment are acted on. Returns a short
     description of what changed, or None when the event was ignored.
     """
     event = payload.get("event")
     invoice = payload.get("payment")
     if not isinstance(invoice, dict):
          if invoice is not None:
               logger.warning("Webhook %s with a malformed payment ignored", event)
          return None
     invoice_id = invoice.get("id")
     if not event or not invoice_id:
          return None

     payment = store.find_payment_by_external_id(str(invoice_id))
     if payment is None:
          logger.info("Webhook %s for unknown invoice %s ignored", event, invoice_id)
          return None

     if event in SETTLED_EVENTS:
          value = invoice.get("value")
          try:
               received = Decimal(str(value)) if value is not None else Decimal(payment.amount)
          except InvalidOperation:
               logger.warning("Webhook %s with a non-numeric value ignored", event, extra={"payment_id": payment.id})
               return None
          if not received.is_finite() or received <= 0:
               logger.warning("Webhook %s with a non-positive value ignored", event, extra={"payment_id": payment.id})
               return None
          try:
               settle_payment(
                    store,
                    payment.id,
                    amount_received=received,
                    payment_method=PaymentMethod.BILLING_PROVIDER,
               )
          except PaymentConflictError:
               logger.info("Webhook %s for an already settled payment ignored", event, extra={"payment_id": payment.id})
               return None
          return "settled"

     if event == OVERDUE_EVENT:
          if payment.status != PaymentStatus.PENDING:
               return None
          with store.transaction():
               store.update_payment(payment.id, {"status": PaymentStatus.OVERDUE})
          logger.info("Payment marked overdue by provider", extra={"payment_id": payment.id})
          return "overdue"

     return None
