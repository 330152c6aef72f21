# services/settlement_service.py
"""
Payment Settlement Engine - records money collected against an installment.

The amount a payment was created with is what was due; settlement compares
the received sum against it:

- received >= due: the payment becomes RECEIVED in place
- 0 < received < due: the payment becomes RECEIVED for the partial sum and a
  new PENDING payment is opened for the shortfall, same lease and due date
- received <= 0 or absent: plain edit of method / notes / due date

Both receive paths run in a single transaction. The payment row is locked
for the read and claimed with a compare-and-set on status, so two requests
settling the same installment cannot both credit it.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from models import Payment, PaymentMethod, PaymentStatus, utc_now
from services.exceptions import PaymentConflictError
from services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


@dataclass
class SettlementResult:
     payment: Payment
     remainder: Optional[Payment] = None
     overpayment: Decimal = Decimal("0.00")


def remainder_note(payment_id: int) -> str:
     return f"remaining balance from partial settlement (ref #{payment_id})"


def settle_payment(
     store: LedgerStore,
     payment_id: int,
     amount_received: Optional[Decimal] = None,
     payment_method: Optional[PaymentMethod] = None,
     notes: Optional[str] = None,
     due_date: Optional[date] = None,
) -> SettlementResult:
     """
     Apply a settlement (or a plain edit) to one payment.

     Args:
          store: Ledger store bound to the request session
          payment_id: Installment being settled
          amount_received: Sum collected; None or <= 0 means "just edit the fields"
          payment_method: How the money arrived (kept as-is when None)
          notes: Free text stored on the installment
          due_date: Only honoured on the plain-edit path

     Returns:
          SettlementResult with the updated payment, the remainder installment
          opened for a partial settlement, and any excess over the amount due

     Raises:
          NotFoundError: payment id does not resolve
          PaymentConflictError: payment is already RECEIVED
     """
     received = None
     if amount_received is not None:
          received = Decimal(amount_received).quantize(CENT, rounding=ROUND_HALF_UP)

     if received is None or received <= 0:
          return SettlementResult(payment=_edit_payment(store, payment_id, payment_method, notes, due_date))

     with store.transaction():
          payment = store.get_payment(payment_id, for_update=True)
          if payment.status == PaymentStatus.RECEIVED:
               raise PaymentConflictError(f"Payment #{payment_id} is already settled")

          due = Decimal(payment.amount)
          method = payment_method or payment.payment_method
          changes = {
               Payment.status: PaymentStatus.RECEIVED,
               Payment.payment_date: utc_now(),
               Payment.payment_method: method,
               Payment.amount_received: received,
          }
          if notes is not None:
               changes[Payment.notes] = notes

          if not store.claim_payment_settlement(payment.id, changes):
               raise PaymentConflictError(f"Payment #{payment_id} was settled by another request")
          store.db.refresh(payment)

          remainder = None
          overpayment = Decimal("0.00")
          if received < due:
               remainder = store.create_payment(
                    lease_id=payment.lease_id,
                    amount=due - received,
                    due_date=payment.due_date,
                    status=PaymentStatus.PENDING,
                    payment_method=method,
                    notes=remainder_note(payment.id),
               )
          elif received > due:
               overpayment = received - due

     if remainder is not None:
          logger.info(
               "Partial settlement: received %s of %s, remainder #%s opened for %s",
               received, due, remainder.id, remainder.amount,
               extra={"payment_id": payment_id, "lease_id": payment.lease_id},
          )
     elif overpayment > 0:
          logger.info(
               "Payment settled with overpayment of %s", overpayment,
               extra={"payment_id": payment_id, "lease_id": payment.lease_id},
          )
     else:
          logger.info("Payment settled", extra={"payment_id": payment_id, "lease_id": payment.lease_id})

     return SettlementResult(payment=payment, remainder=remainder, overpayment=overpayment)


def _edit_payment(
     store: LedgerStore,
     payment_id: int,
     payment_method: Optional[PaymentMethod],
     notes: Optional[str],
     due_date: Optional[date],
) -> Payment:
     changes = {}
     if payment_method is not None:
          changes["payment_method"] = payment_method
     if notes is not None:
          changes["notes"] = notes
     if due_date is not None:
          changes["due_date"] = due_date

     with store.transaction():
          payment = store.update_payment(payment_id, changes)
     return payment


def mark_overdue_payments(store: LedgerStore, today: Optional[date] = None) -> int:
     """Flip every PENDING installment whose due date has passed to OVERDUE. Returns rows changed."""
     today = today or date.today()
     with store.transaction():
          count = store.mark_overdue(today)
     if count:
          logger.info("Marked %s payment(s) overdue as of %s", count, today.isoformat())
     return count
