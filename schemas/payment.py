# schemas/payment.py
"""
Pydantic schemas for the payment ledger and the settlement API.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict, Field

from models import LeaseStatus, PaymentStatus, PaymentMethod
from .common import CamelInput, CamelModel, FlexibleDate


class PaymentSettle(CamelInput):
     """
     Request body for PUT /api/payments/{id}.

     A positive `amountReceived` runs the settlement workflow (full or partial).
     Zero, negative or absent means a plain edit of the other fields.
     """
     amount_received: Optional[Decimal] = Field(None, max_digits=12, description="Amount actually collected")
     payment_method: Optional[PaymentMethod] = None
     notes: Optional[str] = None
     due_date: Optional[FlexibleDate] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "amountReceived": "1000.00",
                    "paymentMethod": "INSTANT_TRANSFER",
                    "notes": "tenant paid part at the office",
               }
          }
     )


class PaymentResponse(CamelModel):
     id: int
     lease_id: int
     amount: Decimal
     status: PaymentStatus
     due_date: date
     payment_date: Optional[datetime] = None
     payment_method: PaymentMethod
     amount_received: Optional[Decimal] = None
     notes: Optional[str] = None
     external_payment_id: Optional[str] = None
     created_at: Optional[datetime] = None


class PaymentLease(CamelModel):
     """The lease fields shown next to a payment in the ledger list."""
     id: int
     property_id: int
     tenant_id: int
     value: Decimal
     due_day: int
     status: LeaseStatus


class PaymentWithLease(PaymentResponse):
     lease: PaymentLease


class SettlementResponse(CamelModel):
     """Outcome of a settlement: the updated installment plus any remainder created."""
     payment: PaymentResponse
     remainder: Optional[PaymentResponse] = None
     overpayment: Decimal = Decimal("0.00")


class OverdueSweepResponse(CamelModel):
     marked_overdue: int
     as_of: date
