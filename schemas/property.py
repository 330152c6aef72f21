# schemas/property.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelInput, CamelModel
from .owner import OwnerResponse


class PropertyCreate(CamelInput):
     address: str = Field(..., min_length=1, max_length=500)
     description: Optional[str] = None
     owner_id: int = Field(..., gt=0)


class PropertyUpdate(CamelInput):
     non_nullable = ("address", "owner_id")

     address: Optional[str] = Field(None, min_length=1, max_length=500)
     description: Optional[str] = None
     owner_id: Optional[int] = Field(None, gt=0)


class PropertyResponse(CamelModel):
     id: int
     address: str
     description: Optional[str] = None
     owner_id: int
     created_at: Optional[datetime] = None


class PropertyWithOwner(PropertyResponse):
     owner: OwnerResponse
