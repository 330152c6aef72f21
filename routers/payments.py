# routers/payments.py
"""
Payment ledger API.

PUT /api/payments/{id}: settle an installment (full or partial) or edit it.
POST /api/payments/mark-overdue: flip past-due PENDING installments to OVERDUE.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from models import PaymentStatus
from schemas.payment import (
     PaymentSettle,
     PaymentResponse,
     PaymentWithLease,
     SettlementResponse,
     OverdueSweepResponse,
)
from services.ledger_store import LedgerStore
from services.settlement_service import settle_payment, mark_overdue_payments

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("", response_model=List[PaymentWithLease], summary="List payments with lease")
def list_payments(
     status: Optional[PaymentStatus] = Query(None, description="Filter by payment status"),
     db: Session = Depends(get_session),
):
     return LedgerStore(db).list_payments(status=status)


@router.get("/{payment_id}", response_model=PaymentResponse, summary="Get payment by ID")
def get_payment(payment_id: int, db: Session = Depends(get_session)):
     return LedgerStore(db).get_payment(payment_id)


@router.put("/{payment_id}", response_model=SettlementResponse, summary="Settle or edit payment")
def update_payment(payment_id: int, body: PaymentSettle, db: Session = Depends(get_session)):
     """
     Settle a payment.

     - **amountReceived** >= amount due: payment becomes RECEIVED
     - 0 < **amountReceived** < amount due: payment becomes RECEIVED for the
       partial sum and a new PENDING payment is opened for the rest
     - **amountReceived** absent or <= 0: only method / notes / due date change

     Settling a payment that is already RECEIVED returns 409.
     """
     result = settle_payment(
          LedgerStore(db),
          payment_id,
          amount_received=body.amount_received,
          payment_method=body.payment_method,
          notes=body.notes,
          due_date=body.due_date,
     )
     return SettlementResponse(
          payment=PaymentResponse.model_validate(result.payment),
          remainder=PaymentResponse.model_validate(result.remainder) if result.remainder else None,
          overpayment=result.overpayment,
     )


@router.post("/mark-overdue", response_model=OverdueSweepResponse, summary="Mark past-due payments overdue")
def mark_overdue(
     as_of: Optional[date] = Query(None, alias="asOf", description="Reference date (defaults to today)"),
     db: Session = Depends(get_session),
):
     today = as_of or date.today()
     count = mark_overdue_payments(LedgerStore(db), today)
     return OverdueSweepResponse(marked_overdue=count, as_of=today)
