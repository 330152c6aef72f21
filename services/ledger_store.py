# services/ledger_store.py
"""
Ledger Store - the only component that reads and writes persisted entities.

Writes are flushed, never committed, by the individual methods; callers group
them with `transaction()` so multi-row operations (lease + installments,
settlement + remainder, lease + payments delete) land atomically.
"""
import logging
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Type

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from models import (
     Owner,
     Property,
     Tenant,
     Lease,
     Payment,
     PaymentStatus,
     PaymentMethod,
)
from services.exceptions import ConstraintViolationError, NotFoundError

logger = logging.getLogger(__name__)


class LedgerStore:
     """Typed CRUD and aggregate queries over owners, properties, tenants, leases and payments."""

     def __init__(self, db: Session):
          self.db = db

     # ------------------------------------------------------------------
     # Transactions
     # ------------------------------------------------------------------

     @contextmanager
     def transaction(self):
          """Commit everything written inside the block, or nothing."""
          try:
               yield self
               self.db.commit()
          except IntegrityError as exc:
               self.db.rollback()
               raise ConstraintViolationError(_integrity_message(exc)) from exc
          except Exception:
               self.db.rollback()
               raise

     def _flush(self) -> None:
          try:
               self.db.flush()
          except IntegrityError as exc:
               self.db.rollback()
               raise ConstraintViolationError(_integrity_message(exc)) from exc

     def _get(self, model: Type, entity_id: int, label: str, for_update: bool = False):
          query = self.db.query(model).filter(model.id == entity_id)
          if for_update:
               query = query.with_for_update()
          obj = query.first()
          if obj is None:
               raise NotFoundError(label, entity_id)
          return obj

     def _apply(self, obj, changes: Dict[str, Any]):
          for key, value in changes.items():
               setattr(obj, key, value)
          self._flush()
          return obj

     def _delete(self, obj) -> None:
          self.db.delete(obj)
          self._flush()

     # ------------------------------------------------------------------
     # Owners
     # ------------------------------------------------------------------

     def list_owners(self) -> List[Owner]:
          return self.db.query(Owner).order_by(Owner.id).all()

     def get_owner(self, owner_id: int) -> Owner:
          return self._get(Owner, owner_id, "Owner")

     def create_owner(self, data: Dict[str, Any]) -> Owner:
          owner = Owner(**data)
          self.db.add(owner)
          self._flush()
          return owner

     def update_owner(self, owner_id: int, changes: Dict[str, Any]) -> Owner:
          return self._apply(self.get_owner(owner_id), changes)

     def delete_owner(self, owner_id: int) -> None:
          self._delete(self.get_owner(owner_id))

     # ------------------------------------------------------------------
     # Properties
     # ------------------------------------------------------------------

     def list_properties(self) -> List[Property]:
          """Properties with their owner loaded."""
          return (
               self.db.query(Property)
               .options(joinedload(Property.owner))
               .order_by(Property.id)
               .all()
          )

     def get_property(self, property_id: int) -> Property:
          return self._get(Property, property_id, "Property")

     def create_property(self, data: Dict[str, Any]) -> Property:
          self._require(Owner, data.get("owner_id"), "Owner")
          prop = Property(**data)
          self.db.add(prop)
          self._flush()
          return prop

     def update_property(self, property_id: int, changes: Dict[str, Any]) -> Property:
          prop = self.get_property(property_id)
          if "owner_id" in changes:
               self._require(Owner, changes["owner_id"], "Owner")
          return self._apply(prop, changes)

     def delete_property(self, property_id: int) -> None:
          self._delete(self.get_property(property_id))

     # ------------------------------------------------------------------
     # Tenants
     # ------------------------------------------------------------------

     def list_tenants(self) -> List[Tenant]:
          return self.db.query(Tenant).order_by(Tenant.id).all()

     def get_tenant(self, tenant_id: int) -> Tenant:
          return self._get(Tenant, tenant_id, "Tenant")

     def create_tenant(self, data: Dict[str, Any]) -> Tenant:
          tenant = Tenant(**data)
          self.db.add(tenant)
          self._flush()
          return tenant

     def update_tenant(self, tenant_id: int, changes: Dict[str, Any]) -> Tenant:
          return self._apply(self.get_tenant(tenant_id), changes)

     def delete_tenant(self, tenant_id: int) -> None:
          self._delete(self.get_tenant(tenant_id))

     # ------------------------------------------------------------------
     # Leases
     # ------------------------------------------------------------------

     def list_leases(self) -> List[Lease]:
          """Leases with property and tenant loaded, newest first."""
          return (
               self.db.query(Lease)
               .options(joinedload(Lease.property), joinedload(Lease.tenant))
               .order_by(Lease.id.desc())
               .all()
          )

     def get_lease(self, lease_id: int, for_update: bool = False) -> Lease:
          return self._get(Lease, lease_id, "Lease", for_update=for_update)

     def create_lease(self, data: Dict[str, Any]) -> Lease:
          self._require(Property, data.get("property_id"), "Property")
          self._require(Tenant, data.get("tenant_id"), "Tenant")
          lease = Lease(**data)
          self.db.add(lease)
          self._flush()
          return lease

     def update_lease(self, lease_id: int, changes: Dict[str, Any]) -> Lease:
          lease = self.get_lease(lease_id)
          if "property_id" in changes:
               self._require(Property, changes["property_id"], "Property")
          if "tenant_id" in changes:
               self._require(Tenant, changes["tenant_id"], "Tenant")
          return self._apply(lease, changes)

     def delete_lease(self, lease_id: int) -> int:
          """Delete a lease and, first, every payment that belongs to it. Returns payments removed."""
          lease = self.get_lease(lease_id)
          self._flush()
          removed = (
               self.db.query(Payment)
               .filter(Payment.lease_id == lease.id)
               .delete(synchronize_session=False)
          )
          self.db.expire_all()
          self._delete(lease)
          logger.info("Deleted lease with %s payment(s)", removed, extra={"lease_id": lease_id})
          return removed

     # ------------------------------------------------------------------
     # Payments
     # ------------------------------------------------------------------

     def list_payments(self, status: Optional[PaymentStatus] = None) -> List[Payment]:
          """Payments with their lease loaded, optionally filtered by status."""
          query = self.db.query(Payment).options(joinedload(Payment.lease))
          if status is not None:
               query = query.filter(Payment.status == status)
          return query.order_by(Payment.due_date, Payment.id).all()

     def list_lease_payments(
          self,
          lease_id: int,
          statuses: Optional[Iterable[PaymentStatus]] = None,
     ) -> List[Payment]:
          query = self.db.query(Payment).filter(Payment.lease_id == lease_id)
          if statuses is not None:
               query = query.filter(Payment.status.in_(list(statuses)))
          return query.order_by(Payment.due_date, Payment.id).all()

     def get_payment(self, payment_id: int, for_update: bool = False) -> Payment:
          return self._get(Payment, payment_id, "Payment", for_update=for_update)

     def find_payment_by_external_id(self, external_payment_id: str) -> Optional[Payment]:
          return (
               self.db.query(Payment)
               .filter(Payment.external_payment_id == external_payment_id)
               .first()
          )

     def create_payment(
          self,
          lease_id: int,
          amount: Decimal,
          due_date: date,
          status: PaymentStatus = PaymentStatus.PENDING,
          payment_method: PaymentMethod = PaymentMethod.BILLING_PROVIDER,
          notes: Optional[str] = None,
          amount_received: Optional[Decimal] = None,
          payment_date: Optional[datetime] = None,
          external_payment_id: Optional[str] = None,
     ) -> Payment:
          """
          Canonical way to create an installment.

          Every path that adds a payment (lease origination, partial-settlement
          remainder, invoice import, seeding) goes through here so the
          RECEIVED invariant is checked in one place.

          Raises:
               ConstraintViolationError: if the lease doesn't exist, or a RECEIVED
                    payment is created without payment_date / amount_received
          """
          self._require(Lease, lease_id, "Lease")
          if status == PaymentStatus.RECEIVED and (payment_date is None or amount_received is None):
               raise ConstraintViolationError(
                    "A received payment needs both a payment date and an amount received"
               )

          payment = Payment(
               lease_id=lease_id,
               amount=amount,
               due_date=due_date,
               status=status,
               payment_method=payment_method,
               notes=notes,
               amount_received=amount_received,
               payment_date=payment_date,
               external_payment_id=external_payment_id,
          )
          self.db.add(payment)
          self._flush()
          return payment

     def update_payment(self, payment_id: int, changes: Dict[str, Any]) -> Payment:
          return self._apply(self.get_payment(payment_id), changes)

     def claim_payment_settlement(self, payment_id: int, changes: Dict[str, Any]) -> bool:
          """
          Compare-and-set: apply `changes` only if the payment is not RECEIVED yet.

          Returns False when another writer settled the payment first.
          """
          self._flush()
          updated = (
               self.db.query(Payment)
               .filter(Payment.id == payment_id, Payment.status != PaymentStatus.RECEIVED)
               .update(changes, synchronize_session=False)
          )
          self.db.expire_all()
          return updated == 1

     def mark_overdue(self, today: date) -> int:
          self._flush()
          updated = (
               self.db.query(Payment)
               .filter(Payment.status == PaymentStatus.PENDING, Payment.due_date < today)
               .update({Payment.status: PaymentStatus.OVERDUE}, synchronize_session=False)
          )
          self.db.expire_all()
          return updated

     # ------------------------------------------------------------------
     # Aggregates
     # ------------------------------------------------------------------

     def count(self, model: Type, *criteria) -> int:
          return int(self.db.query(func.count(model.id)).filter(*criteria).scalar() or 0)

     def sum(self, column, *criteria) -> Decimal:
          """SUM(column) over the matching rows; zero rows sum to Decimal('0')."""
          total = self.db.query(func.coalesce(func.sum(column), 0)).filter(*criteria).scalar()
          return Decimal(str(total or 0)).quantize(Decimal("0.01"))

     # ------------------------------------------------------------------
     # Helpers
     # ------------------------------------------------------------------

     def _require(self, model: Type, entity_id: Optional[int], label: str) -> None:
          if entity_id is None or self.db.get(model, entity_id) is None:
               raise ConstraintViolationError(f"{label} #{entity_id} does not exist")


def _integrity_message(exc: IntegrityError) -> str:
     detail = str(exc.orig) if exc.orig is not None else str(exc)
     if "FOREIGN KEY" in detail.upper():
          return "Operation violates a reference between records (is it still in use?)"
     if "UNIQUE" in detail.upper():
          return "A record with the same unique value already exists"
     return "Operation violates a storage constraint"
