# routers/tenants.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_session
from schemas.tenant import TenantCreate, TenantUpdate, TenantResponse
from services.ledger_store import LedgerStore

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


@router.get("", response_model=List[TenantResponse], summary="List tenants")
def list_tenants(db: Session = Depends(get_session)):
     return LedgerStore(db).list_tenants()


@router.get("/{tenant_id}", response_model=TenantResponse, summary="Get tenant by ID")
def get_tenant(tenant_id: int, db: Session = Depends(get_session)):
     return LedgerStore(db).get_tenant(tenant_id)


@router.post(
     "",
     response_model=TenantResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new tenant"
)
def create_tenant(tenant_data: TenantCreate, db: Session = Depends(get_session)):
     store = LedgerStore(db)
     with store.transaction():
          tenant = store.create_tenant(tenant_data.changes())
     return tenant


@router.put("/{tenant_id}", response_model=TenantResponse, summary="Update tenant")
def update_tenant(tenant_id: int, tenant_data: TenantUpdate, db: Session = Depends(get_session)):
     store = LedgerStore(db)
     with store.transaction():
          tenant = store.update_tenant(tenant_id, tenant_data.changes())
     return tenant


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete tenant")
def delete_tenant(tenant_id: int, db: Session = Depends(get_session)):
     store = LedgerStore(db)
     with store.transaction():
          store.delete_tenant(tenant_id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)
