# services/termination_guard.py
"""
Lease Termination Guard.

A lease may not become TERMINATED while any of its installments is still
PENDING or OVERDUE. The check and the update run in the same transaction
with the lease row locked, and a refused termination writes nothing.
"""
import logging
from decimal import Decimal
from typing import Any, Dict

from models import Lease, LeaseStatus, OPEN_PAYMENT_STATUSES
from services.exceptions import DebtOutstandingError, ValidationError
from services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)


def ensure_no_outstanding_debt(store: LedgerStore, lease_id: int) -> None:
     """
     Raise DebtOutstandingError if the lease has unsettled installments.

     Raises:
          NotFoundError: lease doesn't exist
          DebtOutstandingError: one or more payments are PENDING or OVERDUE
     """
     store.get_lease(lease_id)
     open_payments = store.list_lease_payments(lease_id, statuses=OPEN_PAYMENT_STATUSES)
     if not open_payments:
          return

     outstanding = sum((Decimal(p.amount) for p in open_payments), Decimal("0.00"))
     logger.info(
          "Termination blocked: %s open payment(s) totalling %s", len(open_payments), outstanding,
          extra={"lease_id": lease_id},
     )
     raise DebtOutstandingError(lease_id, len(open_payments), outstanding)


def apply_lease_update(store: LedgerStore, lease_id: int, changes: Dict[str, Any]) -> Lease:
     """
     Generic lease update with the status machine enforced.

     ACTIVE -> TERMINATED is guarded by ensure_no_outstanding_debt, and
     nothing leaves TERMINATED. Re-sending TERMINATED for a terminated lease
     goes through the guard again and only updates the metadata.
     """
     with store.transaction():
          lease = store.get_lease(lease_id, for_update=True)
          target = changes.get("status")

          if target is not None and lease.status == LeaseStatus.TERMINATED and target != LeaseStatus.TERMINATED:
               raise ValidationError(f"Lease #{lease_id} is terminated; its status can no longer change")

          start = changes.get("start_date") or lease.start_date
          end = changes.get("end_date") or lease.end_date
          if end <= start:
               raise ValidationError("endDate must be after startDate")

          if target == LeaseStatus.TERMINATED:
               ensure_no_outstanding_debt(store, lease_id)
               changes = dict(changes)
               changes.setdefault("termination_outstanding_debt", Decimal("0.00"))

          lease = store.update_lease(lease_id, changes)

     if target == LeaseStatus.TERMINATED:
          logger.info("Lease terminated", extra={"lease_id": lease_id})
     return lease
