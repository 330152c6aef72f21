# routers/owners.py
"""
Owner API routes.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_session
from schemas.owner import OwnerCreate, OwnerUpdate, OwnerResponse
from services.ledger_store import LedgerStore

router = APIRouter(prefix="/api/owners", tags=["owners"])


@router.get("", response_model=List[OwnerResponse], summary="List owners")
def list_owners(db: Session = Depends(get_session)):
     return LedgerStore(db).list_owners()


@router.get("/{owner_id}", response_model=OwnerResponse, summary="Get owner by ID")
def get_owner(owner_id: int, db: Session = Depends(get_session)):
     return LedgerStore(db).get_owner(owner_id)


@router.post(
     "",
     response_model=OwnerResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new owner"
)
def create_owner(owner_data: OwnerCreate, db: Session = Depends(get_session)):
     store = LedgerStore(db)
     with store.transaction():
          owner = store.create_owner(owner_data.changes())
     return owner


@router.put("/{owner_id}", response_model=OwnerResponse, summary="Update owner")
def update_owner(owner_id: int, owner_data: OwnerUpdate, db: Session = Depends(get_session)):
     """Partial update: only the fields sent are changed."""
     store = LedgerStore(db)
     with store.transaction():
          owner = store.update_owner(owner_id, owner_data.changes())
     return owner


@router.delete("/{owner_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete owner")
def delete_owner(owner_id: int, db: Session = Depends(get_session)):
     """Fails with 400 while the owner still has properties."""
     store = LedgerStore(db)
     with store.transaction():
          store.delete_owner(owner_id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)
