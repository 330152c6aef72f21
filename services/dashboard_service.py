# services/dashboard_service.py
"""
Dashboard Service - read-only financial totals.

Computed on every call, nothing is cached.
"""
from decimal import Decimal
from typing import Dict

from models import Lease, LeaseStatus, OPEN_PAYMENT_STATUSES, Payment, PaymentStatus, Property, Tenant
from services.ledger_store import LedgerStore


class DashboardService:
     """Service class for portfolio and per-lease aggregates."""

     @staticmethod
     def get_stats(store: LedgerStore) -> Dict[str, object]:
          """
          Portfolio-wide totals.

          Returns:
               Dict with total_properties, total_tenants, active_leases,
               pending_payments_amount (amount over PENDING + OVERDUE) and
               received_payments_amount (amount_received over RECEIVED)
          """
          return {
               "total_properties": store.count(Property),
               "total_tenants": store.count(Tenant),
               "active_leases": store.count(Lease, Lease.status == LeaseStatus.ACTIVE),
               "pending_payments_amount": store.sum(Payment.amount, Payment.status.in_(OPEN_PAYMENT_STATUSES)),
               "received_payments_amount": store.sum(Payment.amount_received, Payment.status == PaymentStatus.RECEIVED),
          }

     @staticmethod
     def lease_balance(store: LedgerStore, lease_id: int) -> Dict[str, object]:
          """
          Balance summary of one lease, bucketed by payment status.

          Pending and overdue buckets sum the amount due; the received bucket
          sums what was actually collected.

          Raises:
               NotFoundError: lease doesn't exist
          """
          store.get_lease(lease_id)

          def bucket(status: PaymentStatus, column) -> Dict[str, object]:
               criteria = (Payment.lease_id == lease_id, Payment.status == status)
               return {"count": store.count(Payment, *criteria), "amount": store.sum(column, *criteria)}

          pending = bucket(PaymentStatus.PENDING, Payment.amount)
          overdue = bucket(PaymentStatus.OVERDUE, Payment.amount)
          received = bucket(PaymentStatus.RECEIVED, Payment.amount_received)

          return {
               "lease_id": lease_id,
               "total_payments": pending["count"] + overdue["count"] + received["count"],
               "outstanding_amount": (pending["amount"] + overdue["amount"]).quantize(Decimal("0.01")),
               "pending": pending,
               "overdue": overdue,
               "received": received,
          }
