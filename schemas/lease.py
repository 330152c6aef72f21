# schemas/lease.py
"""
Pydantic schemas for lease creation, lease updates (including termination)
and lease responses.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import ConfigDict, Field, model_validator

from models import LeaseStatus, GuaranteeType, AdjustmentIndex
from .common import CamelInput, CamelModel, FlexibleDate
from .property import PropertyResponse
from .tenant import TenantResponse
from .payment import PaymentResponse


class LeaseCreate(CamelInput):
     """Schema for creating a new lease (spawns its first installments)."""
     property_id: int = Field(..., gt=0)
     tenant_id: int = Field(..., gt=0)
     value: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Monthly rent")
     due_day: int = Field(..., ge=1, le=31, description="Day of month the rent is due")
     start_date: FlexibleDate
     end_date: FlexibleDate
     adjustment_index: AdjustmentIndex

     guarantee_type: Optional[GuaranteeType] = None
     guarantee_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     guarantee_charge_start_date: Optional[FlexibleDate] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "propertyId": 1,
                    "tenantId": 1,
                    "value": "2500.00",
                    "dueDay": 5,
                    "startDate": "2024-01-01",
                    "endDate": "2025-01-01",
                    "adjustmentIndex": "IPCA",
                    "guaranteeType": "DEPOSIT",
                    "guaranteeAmount": "4500.00",
               }
          }
     )

     @model_validator(mode="after")
     def _check_period(self):
          if self.end_date <= self.start_date:
               raise ValueError("endDate must be after startDate")
          return self


class LeaseUpdate(CamelInput):
     """
     Partial lease update. Sending `status: TERMINATED` runs the
     termination guard before anything is written.
     """
     property_id: Optional[int] = Field(None, gt=0)
     tenant_id: Optional[int] = Field(None, gt=0)
     value: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     due_day: Optional[int] = Field(None, ge=1, le=31)
     start_date: Optional[FlexibleDate] = None
     end_date: Optional[FlexibleDate] = None
     adjustment_index: Optional[AdjustmentIndex] = None
     status: Optional[LeaseStatus] = None

     guarantee_type: Optional[GuaranteeType] = None
     guarantee_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     guarantee_charge_start_date: Optional[FlexibleDate] = None

     termination_date: Optional[FlexibleDate] = None
     key_return_date: Optional[FlexibleDate] = None
     termination_reason: Optional[str] = None
     termination_outstanding_debt: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     key_return_term_signed: Optional[bool] = None
     termination_contract_signed: Optional[bool] = None
     settlement_with_debt_signed: Optional[bool] = None
     settlement_without_debt_signed: Optional[bool] = None

     non_nullable = (
          "property_id", "tenant_id", "value", "due_day", "start_date", "end_date",
          "adjustment_index", "status", "termination_outstanding_debt",
          "key_return_term_signed", "termination_contract_signed",
          "settlement_with_debt_signed", "settlement_without_debt_signed",
     )

     @model_validator(mode="after")
     def _check_period(self):
          if self.start_date and self.end_date and self.end_date <= self.start_date:
               raise ValueError("endDate must be after startDate")
          return self


class LeaseResponse(CamelModel):
     id: int
     property_id: int
     tenant_id: int
     value: Decimal
     due_day: int
     start_date: date
     end_date: date
     adjustment_index: AdjustmentIndex
     status: LeaseStatus
     guarantee_type: Optional[GuaranteeType] = None
     guarantee_amount: Optional[Decimal] = None
     guarantee_charge_start_date: Optional[date] = None
     termination_date: Optional[date] = None
     key_return_date: Optional[date] = None
     termination_reason: Optional[str] = None
     termination_outstanding_debt: Decimal = Decimal("0")
     key_return_term_signed: bool = False
     termination_contract_signed: bool = False
     settlement_with_debt_signed: bool = False
     settlement_without_debt_signed: bool = False
     external_subscription_id: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None


class LeaseWithDetails(LeaseResponse):
     property: PropertyResponse
     tenant: TenantResponse


class LeaseWithPayments(LeaseResponse):
     payments: List[PaymentResponse] = []


class LeaseBalanceBucket(CamelModel):
     count: int
     amount: Decimal


class LeaseBalanceResponse(CamelModel):
     lease_id: int
     total_payments: int
     outstanding_amount: Decimal
     pending: LeaseBalanceBucket
     overdue: LeaseBalanceBucket
     received: LeaseBalanceBucket


class LeaseSyncResponse(CamelModel):
     success: bool
     message: str
     subscription_id: Optional[str] = None
     imported_invoices: int = 0
