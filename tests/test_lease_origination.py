from datetime import date
from decimal import Decimal

import pytest

from models import GuaranteeType, Lease, LeaseStatus, Payment, PaymentMethod, PaymentStatus
from services.billing_sync import BillingSync, first_billing_due_date
from services.exceptions import ConstraintViolationError, NotFoundError
from services.lease_originator import DEPOSIT_NOTE, FIRST_MONTH_NOTE, LeaseOriginator
from tests.factories import FakeBillingBridge, lease_fields, make_lease, make_owner, make_property, make_tenant


@pytest.mark.parametrize("guarantee_type", [None, GuaranteeType.SURETY_INSURANCE, GuaranteeType.GUARANTOR])
def test_lease_without_deposit_gets_only_first_month(store, guarantee_type):
    lease = make_lease(store, guarantee_type=guarantee_type, guarantee_amount=Decimal("1000.00"))

    payments = store.list_lease_payments(lease.id)
    assert len(payments) == 1
    rent = payments[0]
    assert rent.status == PaymentStatus.PENDING
    assert rent.amount == Decimal("2500.00")
    assert rent.due_date == date(2024, 1, 1)
    assert rent.payment_method == PaymentMethod.BILLING_PROVIDER
    assert rent.notes == FIRST_MONTH_NOTE
    assert lease.status == LeaseStatus.ACTIVE


def test_deposit_lease_gets_rent_and_received_deposit(store):
    lease = make_lease(store, deposit=Decimal("4500.00"))

    payments = store.list_lease_payments(lease.id)
    assert len(payments) == 2
    rent = next(p for p in payments if p.status == PaymentStatus.PENDING)
    deposit = next(p for p in payments if p.status == PaymentStatus.RECEIVED)

    assert rent.amount == Decimal("2500.00")
    assert deposit.amount == Decimal("4500.00")
    assert deposit.amount_received == Decimal("4500.00")
    assert deposit.payment_date is not None
    assert deposit.payment_method == PaymentMethod.CASH
    assert deposit.notes == DEPOSIT_NOTE


def test_zero_deposit_creates_no_deposit_payment(store):
    lease = make_lease(store, deposit=Decimal("0"))
    assert len(store.list_lease_payments(lease.id)) == 1


def test_dangling_property_or_tenant_is_not_found(store):
    owner = make_owner(store)
    prop = make_property(store, owner.id)
    tenant = make_tenant(store)
    originator = LeaseOriginator(store)

    with pytest.raises(NotFoundError):
        originator.originate(lease_fields(999, tenant.id))
    with pytest.raises(NotFoundError):
        originator.originate(lease_fields(prop.id, 999))

    assert store.count(Lease) == 0
    assert store.count(Payment) == 0


def test_lease_and_installments_are_written_atomically(store, monkeypatch):
    owner = make_owner(store)
    prop = make_property(store, owner.id)
    tenant = make_tenant(store)

    def refuse(**kwargs):
        raise ConstraintViolationError("payment rejected")

    monkeypatch.setattr(store, "create_payment", refuse)

    with pytest.raises(ConstraintViolationError):
        LeaseOriginator(store).originate(lease_fields(prop.id, tenant.id))

    assert store.count(Lease) == 0


def test_recurring_billing_is_created_with_owner_split(store, fake_billing):
    sync = BillingSync(store, fake_billing, Decimal("90"))

    lease = make_lease(store, billing_sync=sync, deposit=Decimal("4500.00"))

    assert fake_billing.call_names() == ["create_customer", "create_payout_account", "create_recurring_billing"]
    _, kwargs = fake_billing.calls[-1]
    assert kwargs["split_percent"] == Decimal("90")
    assert kwargs["amount"] == Decimal("2500.00")
    assert kwargs["first_due_date"] == date(2024, 2, 5)
    assert kwargs["payout_account_id"] == f"wallet_{lease.property.owner_id}"

    stored = store.get_lease(lease.id)
    assert stored.external_subscription_id == f"sub_cus_{lease.tenant_id}"
    assert store.get_tenant(lease.tenant_id).external_customer_id == f"cus_{lease.tenant_id}"
    assert store.get_owner(lease.property.owner_id).external_payout_account_id == f"wallet_{lease.property.owner_id}"


@pytest.mark.parametrize("failing_call", ["create_customer", "create_payout_account", "create_recurring_billing"])
def test_billing_failure_never_undoes_the_lease(store, failing_call):
    bridge = FakeBillingBridge(fail_on={failing_call})
    sync = BillingSync(store, bridge, Decimal("90"))

    lease = make_lease(store, billing_sync=sync, deposit=Decimal("4500.00"))

    stored = store.get_lease(lease.id)
    assert stored.status == LeaseStatus.ACTIVE
    assert stored.external_subscription_id is None
    assert len(store.list_lease_payments(lease.id)) == 2


def test_existing_provider_ids_are_reused(store, fake_billing):
    owner = make_owner(store, external_payout_account_id="wallet_existing")
    prop = make_property(store, owner.id)
    tenant = make_tenant(store, external_customer_id="cus_existing")
    sync = BillingSync(store, fake_billing, Decimal("90"))

    lease = LeaseOriginator(store, sync).originate(lease_fields(prop.id, tenant.id))

    assert fake_billing.call_names() == ["create_recurring_billing"]
    assert lease.external_subscription_id == "sub_cus_existing"


def _lease_stub(start, due_day, charge_start=None):
    return Lease(start_date=start, due_day=due_day, guarantee_charge_start_date=charge_start)


def test_first_billing_due_date_is_next_month_due_day():
    assert first_billing_due_date(_lease_stub(date(2024, 1, 1), 5)) == date(2024, 2, 5)


def test_first_billing_due_date_clamps_to_month_length():
    assert first_billing_due_date(_lease_stub(date(2024, 1, 15), 31)) == date(2024, 2, 29)
    assert first_billing_due_date(_lease_stub(date(2023, 1, 15), 30)) == date(2023, 2, 28)


def test_first_billing_due_date_rolls_over_the_year():
    assert first_billing_due_date(_lease_stub(date(2024, 12, 10), 10)) == date(2025, 1, 10)


def test_guarantee_charge_start_date_wins():
    lease = _lease_stub(date(2024, 1, 1), 5, charge_start=date(2024, 4, 5))
    assert first_billing_due_date(lease) == date(2024, 4, 5)
