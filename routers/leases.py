# routers/leases.py
"""
Lease API routes.

- POST creates the lease with its opening installments (recurring billing is best effort)
- PATCH is the generic update; `status: TERMINATED` is refused while debt is outstanding
- DELETE removes the lease together with its payments
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from config import Settings, get_settings
from database import get_session
from schemas.lease import (
     LeaseCreate,
     LeaseUpdate,
     LeaseResponse,
     LeaseWithDetails,
     LeaseWithPayments,
     LeaseBalanceResponse,
     LeaseSyncResponse,
)
from schemas.payment import PaymentResponse
from services.billing_bridge import BillingBridge, get_billing_bridge
from services.billing_sync import BillingSync
from services.dashboard_service import DashboardService
from services.exceptions import BillingProviderError
from services.lease_originator import LeaseOriginator
from services.ledger_store import LedgerStore
from services.termination_guard import apply_lease_update

router = APIRouter(prefix="/api/leases", tags=["leases"])


def _billing_sync(
     store: LedgerStore,
     bridge: Optional[BillingBridge],
     settings: Settings,
) -> Optional[BillingSync]:
     if bridge is None:
          return None
     return BillingSync(store, bridge, settings.billing_owner_split_percent)


@router.get("", response_model=List[LeaseWithDetails], summary="List leases with property and tenant")
def list_leases(db: Session = Depends(get_session)):
     return LedgerStore(db).list_leases()


@router.get("/{lease_id}", response_model=LeaseWithDetails, summary="Get lease by ID")
def get_lease(lease_id: int, db: Session = Depends(get_session)):
     return LedgerStore(db).get_lease(lease_id)


@router.post(
     "",
     response_model=LeaseWithPayments,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new lease"
)
def create_lease(
     lease_data: LeaseCreate,
     db: Session = Depends(get_session),
     bridge: Optional[BillingBridge] = Depends(get_billing_bridge),
     settings: Settings = Depends(get_settings),
):
     """
     Create a lease and its opening payments.

     - first month rent: PENDING, due on **startDate**
     - security deposit (only for **guaranteeType** DEPOSIT with a positive
       **guaranteeAmount**): already RECEIVED in cash

     The recurring billing subscription is requested afterwards; if the
     provider fails the lease is still created, without **externalSubscriptionId**.
     """
     store = LedgerStore(db)
     originator = LeaseOriginator(store, _billing_sync(store, bridge, settings))
     return originator.originate(lease_data.changes())


@router.patch("/{lease_id}", response_model=LeaseResponse, summary="Update lease")
def update_lease(lease_id: int, lease_data: LeaseUpdate, db: Session = Depends(get_session)):
     """
     Partial update.

     Terminating (**status** TERMINATED) fails with 400 and code
     DEBT_OUTSTANDING while any payment of the lease is PENDING or OVERDUE.
     """
     return apply_lease_update(LedgerStore(db), lease_id, lease_data.changes())


@router.delete("/{lease_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete lease")
def delete_lease(lease_id: int, db: Session = Depends(get_session)):
     store = LedgerStore(db)
     with store.transaction():
          store.delete_lease(lease_id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{lease_id}/payments", response_model=List[PaymentResponse], summary="List payments of a lease")
def list_lease_payments(lease_id: int, db: Session = Depends(get_session)):
     store = LedgerStore(db)
     store.get_lease(lease_id)
     return store.list_lease_payments(lease_id)


@router.get("/{lease_id}/balance", response_model=LeaseBalanceResponse, summary="Lease balance summary")
def get_lease_balance(lease_id: int, db: Session = Depends(get_session)):
     return DashboardService.lease_balance(LedgerStore(db), lease_id)


@router.post("/{lease_id}/sync", response_model=LeaseSyncResponse, summary="Sync lease with billing provider")
def sync_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     bridge: Optional[BillingBridge] = Depends(get_billing_bridge),
     settings: Settings = Depends(get_settings),
):
     """
     Create the recurring billing if it is missing, then import the invoices
     the provider generated for it. Provider failures surface as 502.
     """
     store = LedgerStore(db)
     store.get_lease(lease_id)
     billing_sync = _billing_sync(store, bridge, settings)
     if billing_sync is None:
          raise BillingProviderError("Billing provider is not configured")

     subscription_id, imported = billing_sync.sync(lease_id)
     return LeaseSyncResponse(
          success=True,
          message="Lease synchronized with billing provider",
          subscription_id=subscription_id,
          imported_invoices=imported,
     )
