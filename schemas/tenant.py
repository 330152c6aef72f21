# schemas/tenant.py
from datetime import datetime
from typing import Optional

from pydantic import Field, EmailStr

from .common import CamelInput, CamelModel


class TenantCreate(CamelInput):
     name: str = Field(..., min_length=1, max_length=255)
     email: EmailStr
     tax_id: str = Field(..., min_length=11, max_length=20, description="CPF or CNPJ")
     phone: Optional[str] = Field(None, max_length=50)


class TenantUpdate(CamelInput):
     non_nullable = ("name", "email", "tax_id")

     name: Optional[str] = Field(None, min_length=1, max_length=255)
     email: Optional[EmailStr] = None
     tax_id: Optional[str] = Field(None, min_length=11, max_length=20)
     phone: Optional[str] = Field(None, max_length=50)


class TenantResponse(CamelModel):
     id: int
     name: str
     email: str
     tax_id: str
     phone: Optional[str] = None
     external_customer_id: Optional[str] = None
     created_at: Optional[datetime] = None
