from datetime import date
from decimal import Decimal

from models import PaymentStatus
from services.dashboard_service import DashboardService
from services.settlement_service import mark_overdue_payments, settle_payment
from tests.factories import make_lease


def test_stats_on_empty_database_are_zero(store):
    stats = DashboardService.get_stats(store)

    assert stats == {
        "total_properties": 0,
        "total_tenants": 0,
        "active_leases": 0,
        "pending_payments_amount": Decimal("0"),
        "received_payments_amount": Decimal("0"),
    }


def test_pending_sums_amount_and_received_sums_amount_received(store):
    lease = make_lease(store, deposit=Decimal("4500.00"))
    with store.transaction():
        store.create_payment(lease.id, Decimal("2500.00"), date(2024, 2, 5))
    mark_overdue_payments(store, date(2024, 1, 15))

    rent = store.list_lease_payments(lease.id, statuses=[PaymentStatus.OVERDUE])[0]
    settle_payment(store, rent.id, Decimal("1000.00"))

    stats = DashboardService.get_stats(store)

    # open: the Feb rent (2500) plus the remainder of the partial settlement (1500)
    assert stats["pending_payments_amount"] == Decimal("4000.00")
    # received: deposit (4500) plus the partial amount actually collected (1000)
    assert stats["received_payments_amount"] == Decimal("5500.00")
    assert stats["total_properties"] == 1
    assert stats["total_tenants"] == 1
    assert stats["active_leases"] == 1


def test_lease_balance_buckets(store):
    lease = make_lease(store, deposit=Decimal("4500.00"))
    mark_overdue_payments(store, date(2024, 1, 15))

    balance = DashboardService.lease_balance(store, lease.id)

    assert balance["total_payments"] == 2
    assert balance["pending"] == {"count": 0, "amount": Decimal("0")}
    assert balance["overdue"] == {"count": 1, "amount": Decimal("2500.00")}
    assert balance["received"] == {"count": 1, "amount": Decimal("4500.00")}
    assert balance["outstanding_amount"] == Decimal("2500.00")
