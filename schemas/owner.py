# schemas/owner.py
from datetime import date, datetime
from typing import Optional

from pydantic import Field, EmailStr

from .common import CamelInput, CamelModel


class OwnerCreate(CamelInput):
     name: str = Field(..., min_length=1, max_length=255)
     email: EmailStr
     tax_id: str = Field(..., min_length=11, max_length=20, description="CPF or CNPJ")
     phone: Optional[str] = Field(None, max_length=50)
     birth_date: Optional[date] = None
     address: Optional[str] = Field(None, max_length=255)
     address_number: Optional[str] = Field(None, max_length=20)
     province: Optional[str] = Field(None, max_length=100)
     postal_code: Optional[str] = Field(None, max_length=20)
     city: Optional[str] = Field(None, max_length=100)
     state: Optional[str] = Field(None, min_length=2, max_length=2)
     bank_info: Optional[str] = None
     pix_key: Optional[str] = Field(None, max_length=255)


class OwnerUpdate(CamelInput):
     non_nullable = ("name", "email", "tax_id")

     name: Optional[str] = Field(None, min_length=1, max_length=255)
     email: Optional[EmailStr] = None
     tax_id: Optional[str] = Field(None, min_length=11, max_length=20)
     phone: Optional[str] = Field(None, max_length=50)
     birth_date: Optional[date] = None
     address: Optional[str] = Field(None, max_length=255)
     address_number: Optional[str] = Field(None, max_length=20)
     province: Optional[str] = Field(None, max_length=100)
     postal_code: Optional[str] = Field(None, max_length=20)
     city: Optional[str] = Field(None, max_length=100)
     state: Optional[str] = Field(None, min_length=2, max_length=2)
     bank_info: Optional[str] = None
     pix_key: Optional[str] = Field(None, max_length=255)


class OwnerResponse(CamelModel):
     id: int
     name: str
     email: str
     tax_id: str
     phone: Optional[str] = None
     birth_date: Optional[date] = None
     address: Optional[str] = None
     address_number: Optional[str] = None
     province: Optional[str] = None
     postal_code: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     bank_info: Optional[str] = None
     pix_key: Optional[str] = None
     external_payout_account_id: Optional[str] = None
     created_at: Optional[datetime] = None
