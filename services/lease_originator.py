# services/lease_originator.py
"""
Lease Originator - creates a lease together with its opening installments.

The lease, its first-month rent and (for deposit guarantees) the deposit
already in hand are written in one transaction. Setting up recurring
billing happens after that commit and can never undo it.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from models import GuaranteeType, Lease, LeaseStatus, PaymentMethod, PaymentStatus, utc_now
from services.billing_sync import BillingSync
from services.exceptions import BillingProviderError, NotFoundError
from services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)

FIRST_MONTH_NOTE = "first month rent"
DEPOSIT_NOTE = "security deposit received at signing"


class LeaseOriginator:
     """Service class for lease creation."""

     def __init__(self, store: LedgerStore, billing_sync: Optional[BillingSync] = None):
          self.store = store
          self.billing_sync = billing_sync

     def originate(self, data: Dict[str, Any]) -> Lease:
          """
          Create a lease and its opening payments.

          Args:
               data: Validated lease fields (snake_case, as dumped from LeaseCreate)

          Returns:
               The committed Lease, with `external_subscription_id` set when
               the billing provider accepted the subscription

          Raises:
               NotFoundError: property, its owner, or tenant doesn't exist
          """
          prop = self._resolve_property(data.get("property_id"))
          if prop.owner is None:
               raise NotFoundError("Owner", prop.owner_id)
          tenant_id = data.get("tenant_id")
          if tenant_id is None:
               raise NotFoundError("Tenant", tenant_id)
          self.store.get_tenant(tenant_id)

          fields = dict(data)
          fields["status"] = LeaseStatus.ACTIVE

          with self.store.transaction():
               lease = self.store.create_lease(fields)
               self.store.create_payment(
                    lease_id=lease.id,
                    amount=lease.value,
                    due_date=lease.start_date,
                    status=PaymentStatus.PENDING,
                    payment_method=PaymentMethod.BILLING_PROVIDER,
                    notes=FIRST_MONTH_NOTE,
               )
               installments = 1

               deposit = Decimal(lease.guarantee_amount or 0)
               if lease.guarantee_type == GuaranteeType.DEPOSIT and deposit > 0:
                    self.store.create_payment(
                         lease_id=lease.id,
                         amount=deposit,
                         due_date=lease.start_date,
                         status=PaymentStatus.RECEIVED,
                         payment_method=PaymentMethod.CASH,
                         notes=DEPOSIT_NOTE,
                         amount_received=deposit,
                         payment_date=utc_now(),
                    )
                    installments += 1

          logger.info("Lease created with %s installment(s)", installments, extra={"lease_id": lease.id})

          self._start_recurring_billing(lease)
          return lease

     def _resolve_property(self, property_id):
          if property_id is None:
               raise NotFoundError("Property", property_id)
          return self.store.get_property(property_id)

     def _start_recurring_billing(self, lease: Lease) -> None:
          if self.billing_sync is None:
               logger.info("Billing provider not configured; skipping subscription", extra={"lease_id": lease.id})
               return
          try:
               self.billing_sync.ensure_subscription(lease)
          except BillingProviderError as exc:
               logger.warning(
                    "Recurring billing not created: %s", exc.message,
                    extra={"lease_id": lease.id, "status_code": exc.provider_status},
               )
