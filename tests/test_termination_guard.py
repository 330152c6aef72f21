from datetime import date
from decimal import Decimal

import pytest

from models import LeaseStatus, PaymentStatus
from services.exceptions import DebtOutstandingError, ValidationError
from services.settlement_service import mark_overdue_payments, settle_payment
from services.termination_guard import apply_lease_update, ensure_no_outstanding_debt
from tests.factories import make_lease

TERMINATION = {
    "status": LeaseStatus.TERMINATED,
    "termination_date": date(2024, 6, 30),
    "key_return_date": date(2024, 7, 1),
    "key_return_term_signed": True,
    "termination_contract_signed": True,
    "settlement_with_debt_signed": False,
    "settlement_without_debt_signed": True,
}


def _settle_everything(store, lease):
    for payment in store.list_lease_payments(lease.id, statuses=[PaymentStatus.PENDING, PaymentStatus.OVERDUE]):
        settle_payment(store, payment.id, payment.amount)


def test_pending_payment_blocks_termination(store):
    lease = make_lease(store)

    with pytest.raises(DebtOutstandingError) as exc:
        apply_lease_update(store, lease.id, TERMINATION)

    assert exc.value.open_count == 1
    assert exc.value.outstanding == Decimal("2500.00")
    assert exc.value.to_body()["code"] == "DEBT_OUTSTANDING"

    stored = store.get_lease(lease.id)
    assert stored.status == LeaseStatus.ACTIVE
    assert stored.termination_date is None
    assert stored.key_return_term_signed is False


def test_overdue_payment_blocks_termination(store):
    lease = make_lease(store)
    mark_overdue_payments(store, date(2024, 2, 1))

    with pytest.raises(DebtOutstandingError):
        ensure_no_outstanding_debt(store, lease.id)


def test_remainder_of_partial_settlement_still_blocks(store):
    lease = make_lease(store)
    rent = store.list_lease_payments(lease.id)[0]
    settle_payment(store, rent.id, Decimal("1000"))

    with pytest.raises(DebtOutstandingError) as exc:
        apply_lease_update(store, lease.id, TERMINATION)
    assert exc.value.outstanding == Decimal("1500.00")


def test_termination_succeeds_once_everything_is_settled(store):
    lease = make_lease(store, deposit=Decimal("4500.00"))
    _settle_everything(store, lease)

    terminated = apply_lease_update(store, lease.id, TERMINATION)

    assert terminated.status == LeaseStatus.TERMINATED
    assert terminated.termination_date == date(2024, 6, 30)
    assert terminated.key_return_date == date(2024, 7, 1)
    assert terminated.key_return_term_signed is True
    assert terminated.settlement_without_debt_signed is True
    assert terminated.termination_outstanding_debt == Decimal("0")


def test_terminated_lease_cannot_be_reactivated(store):
    lease = make_lease(store)
    _settle_everything(store, lease)
    apply_lease_update(store, lease.id, TERMINATION)

    with pytest.raises(ValidationError):
        apply_lease_update(store, lease.id, {"status": LeaseStatus.ACTIVE})

    assert store.get_lease(lease.id).status == LeaseStatus.TERMINATED


def test_lease_can_be_expired_manually(store):
    lease = make_lease(store)

    updated = apply_lease_update(store, lease.id, {"status": LeaseStatus.EXPIRED})

    assert updated.status == LeaseStatus.EXPIRED


def test_update_rejects_period_ending_before_start(store):
    lease = make_lease(store)

    with pytest.raises(ValidationError):
        apply_lease_update(store, lease.id, {"end_date": date(2023, 12, 31)})


def test_plain_update_does_not_run_the_guard(store):
    lease = make_lease(store)

    updated = apply_lease_update(store, lease.id, {"due_day": 10, "termination_reason": "tenant moving"})

    assert updated.due_day == 10
    assert updated.status == LeaseStatus.ACTIVE
