from datetime import date, datetime
from decimal import Decimal

import pytest

from models import Lease, Payment, PaymentStatus
from services.exceptions import ConstraintViolationError, NotFoundError
from tests.factories import make_lease, make_owner, make_property, make_tenant


def test_owner_crud_round_trip(store):
    owner = make_owner(store, city="São Paulo")

    with store.transaction():
        store.update_owner(owner.id, {"phone": "11999990000"})

    fetched = store.get_owner(owner.id)
    assert fetched.phone == "11999990000"
    assert fetched.city == "São Paulo"
    assert [o.id for o in store.list_owners()] == [owner.id]

    with store.transaction():
        store.delete_owner(owner.id)
    assert store.list_owners() == []


def test_get_missing_entity_raises_not_found(store):
    with pytest.raises(NotFoundError) as exc:
        store.get_tenant(999)
    assert exc.value.message == "Tenant not found"
    assert exc.value.status_code == 404

    with pytest.raises(NotFoundError):
        store.update_owner(999, {"name": "x"})

    with pytest.raises(NotFoundError):
        store.delete_lease(999)


def test_property_with_dangling_owner_is_a_constraint_violation(store):
    with pytest.raises(ConstraintViolationError):
        make_property(store, owner_id=424242)
    assert store.list_properties() == []


def test_owner_with_properties_cannot_be_deleted(store):
    owner = make_owner(store)
    make_property(store, owner.id)

    with pytest.raises(ConstraintViolationError):
        with store.transaction():
            store.delete_owner(owner.id)

    assert store.get_owner(owner.id) is not None


def test_list_properties_and_leases_load_relations(store):
    lease = make_lease(store)

    props = store.list_properties()
    assert props[0].owner.name == "Adriana Silva"

    leases = store.list_leases()
    assert leases[0].id == lease.id
    assert leases[0].tenant.name == "João Souza"
    assert leases[0].property.address.startswith("Av. Paulista")


def test_delete_lease_removes_its_payments(store):
    lease = make_lease(store, deposit=Decimal("4500.00"))
    assert store.count(Payment, Payment.lease_id == lease.id) == 2

    with store.transaction():
        removed = store.delete_lease(lease.id)

    assert removed == 2
    assert store.count(Lease) == 0
    assert store.count(Payment) == 0


def test_tenant_with_lease_cannot_be_deleted(store):
    lease = make_lease(store)

    with pytest.raises(ConstraintViolationError):
        with store.transaction():
            store.delete_tenant(lease.tenant_id)


def test_received_payment_requires_date_and_amount(store):
    lease = make_lease(store)

    with pytest.raises(ConstraintViolationError):
        store.create_payment(
            lease_id=lease.id,
            amount=Decimal("100.00"),
            due_date=date(2024, 2, 5),
            status=PaymentStatus.RECEIVED,
        )


def test_payment_for_missing_lease_is_rejected(store):
    with pytest.raises(ConstraintViolationError):
        store.create_payment(lease_id=77, amount=Decimal("10.00"), due_date=date(2024, 1, 1))


def test_external_payment_id_is_unique(store):
    lease = make_lease(store)
    with store.transaction():
        store.create_payment(lease.id, Decimal("2500.00"), date(2024, 2, 5), external_payment_id="pay_1")

    with pytest.raises(ConstraintViolationError):
        with store.transaction():
            store.create_payment(lease.id, Decimal("2500.00"), date(2024, 3, 5), external_payment_id="pay_1")

    assert store.find_payment_by_external_id("pay_1") is not None


def test_list_payments_filters_by_status(store):
    make_lease(store, deposit=Decimal("4500.00"))

    pending = store.list_payments(status=PaymentStatus.PENDING)
    received = store.list_payments(status=PaymentStatus.RECEIVED)

    assert [p.amount for p in pending] == [Decimal("2500.00")]
    assert [p.amount for p in received] == [Decimal("4500.00")]
    assert len(store.list_payments()) == 2
    assert pending[0].lease.value == Decimal("2500.00")


def test_claim_payment_settlement_is_compare_and_set(store):
    lease = make_lease(store)
    payment = store.list_lease_payments(lease.id)[0]
    changes = {
        Payment.status: PaymentStatus.RECEIVED,
        Payment.amount_received: Decimal("2500.00"),
        Payment.payment_date: datetime(2024, 1, 3),
    }

    with store.transaction():
        assert store.claim_payment_settlement(payment.id, changes) is True
    with store.transaction():
        assert store.claim_payment_settlement(payment.id, changes) is False


def test_sum_over_no_rows_is_zero(store):
    total = store.sum(Payment.amount, Payment.status == PaymentStatus.OVERDUE)
    assert total == Decimal("0")
    assert isinstance(total, Decimal)
    assert store.count(Payment) == 0


def test_tenant_update_and_listing(store):
    tenant = make_tenant(store)
    with store.transaction():
        store.update_tenant(tenant.id, {"external_customer_id": "cus_1"})
    assert store.list_tenants()[0].external_customer_id == "cus_1"
