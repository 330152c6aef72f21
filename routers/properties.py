# routers/properties.py
"""
Property API routes. Listing includes each property's owner.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_session
from schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse, PropertyWithOwner
from services.ledger_store import LedgerStore

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get("", response_model=List[PropertyWithOwner], summary="List properties with owner")
def list_properties(db: Session = Depends(get_session)):
     return LedgerStore(db).list_properties()


@router.get("/{property_id}", response_model=PropertyWithOwner, summary="Get property by ID")
def get_property(property_id: int, db: Session = Depends(get_session)):
     return LedgerStore(db).get_property(property_id)


@router.post(
     "",
     response_model=PropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new property"
)
def create_property(property_data: PropertyCreate, db: Session = Depends(get_session)):
     """
     Create a property.

     - **ownerId**: must reference an existing owner (400 otherwise)
     """
     store = LedgerStore(db)
     with store.transaction():
          prop = store.create_property(property_data.changes())
     return prop


@router.put("/{property_id}", response_model=PropertyResponse, summary="Update property")
def update_property(property_id: int, property_data: PropertyUpdate, db: Session = Depends(get_session)):
     store = LedgerStore(db)
     with store.transaction():
          prop = store.update_property(property_id, property_data.changes())
     return prop


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete property")
def delete_property(property_id: int, db: Session = Depends(get_session)):
     store = LedgerStore(db)
     with store.transaction():
          store.delete_property(property_id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)
