# schemas/dashboard.py
from decimal import Decimal

from .common import CamelModel


class DashboardStats(CamelModel):
     """Portfolio-wide counts and money totals (sums over no rows are 0)."""
     total_properties: int
     total_tenants: int
     active_leases: int
     pending_payments_amount: Decimal
     received_payments_amount: Decimal
