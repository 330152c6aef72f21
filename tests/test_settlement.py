from datetime import date, timedelta
from decimal import Decimal

import pytest

from models import Payment, PaymentMethod, PaymentStatus, utc_now
from services.exceptions import NotFoundError, PaymentConflictError
from services.settlement_service import mark_overdue_payments, remainder_note, settle_payment
from tests.factories import make_lease


def _rent_payment(store, lease):
    return store.list_lease_payments(lease.id, statuses=[PaymentStatus.PENDING])[0]


def test_full_settlement_changes_one_row_and_creates_none(store):
    lease = make_lease(store)
    rent = _rent_payment(store, lease)
    before = utc_now()

    result = settle_payment(store, rent.id, Decimal("2500.00"), PaymentMethod.INSTANT_TRANSFER)

    assert result.remainder is None
    assert result.overpayment == Decimal("0")
    assert store.count(Payment) == 1
    settled = store.get_payment(rent.id)
    assert settled.status == PaymentStatus.RECEIVED
    assert settled.amount_received == Decimal("2500.00")
    assert settled.payment_method == PaymentMethod.INSTANT_TRANSFER
    assert settled.payment_date.tzinfo is None
    assert abs(settled.payment_date - before) < timedelta(minutes=1)


def test_partial_settlement_opens_remainder_for_the_shortfall(store):
    lease = make_lease(store)
    rent = _rent_payment(store, lease)

    result = settle_payment(store, rent.id, Decimal("1000"), PaymentMethod.CASH, notes="paid at the office")

    original = store.get_payment(rent.id)
    assert original.status == PaymentStatus.RECEIVED
    assert original.amount_received == Decimal("1000.00")
    assert original.amount == Decimal("2500.00")
    assert original.notes == "paid at the office"

    remainder = result.remainder
    assert remainder is not None
    assert remainder.amount == Decimal("1500.00")
    assert remainder.status == PaymentStatus.PENDING
    assert remainder.due_date == original.due_date
    assert remainder.lease_id == lease.id
    assert remainder.notes == remainder_note(rent.id)
    assert remainder.payment_method == PaymentMethod.CASH

    assert original.amount_received + remainder.amount == Decimal("2500.00")
    assert store.count(Payment) == 2


def test_overpayment_is_recorded_and_reported(store):
    lease = make_lease(store)
    rent = _rent_payment(store, lease)

    result = settle_payment(store, rent.id, Decimal("2600.00"))

    assert result.remainder is None
    assert result.overpayment == Decimal("100.00")
    assert store.get_payment(rent.id).amount_received == Decimal("2600.00")
    assert store.count(Payment) == 1


def test_received_amount_is_rounded_to_cents(store):
    lease = make_lease(store)
    rent = _rent_payment(store, lease)

    result = settle_payment(store, rent.id, Decimal("999.995"))

    assert result.payment.amount_received == Decimal("1000.00")
    assert result.remainder.amount == Decimal("1500.00")


def test_settling_twice_is_a_conflict(store):
    lease = make_lease(store)
    rent = _rent_payment(store, lease)
    settle_payment(store, rent.id, Decimal("1000"))

    with pytest.raises(PaymentConflictError):
        settle_payment(store, rent.id, Decimal("1000"))

    # still exactly one remainder
    assert store.count(Payment, Payment.status == PaymentStatus.PENDING) == 1


def test_zero_amount_is_a_plain_edit(store):
    lease = make_lease(store)
    rent = _rent_payment(store, lease)
    new_due = date(2024, 1, 10)

    result = settle_payment(store, rent.id, Decimal("0"), PaymentMethod.CARD, notes="moved", due_date=new_due)

    payment = result.payment
    assert payment.status == PaymentStatus.PENDING
    assert payment.amount_received is None
    assert payment.payment_method == PaymentMethod.CARD
    assert payment.notes == "moved"
    assert payment.due_date == new_due
    assert result.remainder is None


def test_settling_unknown_payment_is_not_found(store):
    with pytest.raises(NotFoundError):
        settle_payment(store, 12345, Decimal("10"))


def test_mark_overdue_only_touches_past_due_pending(store):
    lease = make_lease(store, deposit=Decimal("4500.00"))
    today = date(2024, 3, 1)
    with store.transaction():
        future = store.create_payment(lease.id, Decimal("2500.00"), today + timedelta(days=4))

    count = mark_overdue_payments(store, today)

    assert count == 1
    statuses = {p.id: p.status for p in store.list_lease_payments(lease.id)}
    assert statuses[future.id] == PaymentStatus.PENDING
    assert sorted(s.value for s in statuses.values()) == ["OVERDUE", "PENDING", "RECEIVED"]


def test_overdue_payment_can_still_be_settled(store):
    lease = make_lease(store)
    rent = _rent_payment(store, lease)
    mark_overdue_payments(store, date(2024, 2, 1))
    assert store.get_payment(rent.id).status == PaymentStatus.OVERDUE

    result = settle_payment(store, rent.id, Decimal("2500.00"))

    assert result.payment.status == PaymentStatus.RECEIVED
