# models/lease.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, Boolean, Text, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class LeaseStatus(str, enum.Enum):
     """Lease lifecycle. Nothing leaves TERMINATED."""
     ACTIVE = "ACTIVE"
     EXPIRED = "EXPIRED"
     TERMINATED = "TERMINATED"


class GuaranteeType(str, enum.Enum):
     DEPOSIT = "DEPOSIT"
     SURETY_INSURANCE = "SURETY_INSURANCE"
     GUARANTOR = "GUARANTOR"


class AdjustmentIndex(str, enum.Enum):
     """Inflation index used for the yearly rent adjustment."""
     IPCA = "IPCA"
     IGP_M = "IGP-M"
     INPC = "INPC"
     IVAR = "IVAR"


def _enum_values(enum_cls):
     return [member.value for member in enum_cls]


class Lease(Base):
     """
     Lease model - rental agreement between one tenant and one property.

     Created by the lease originator together with its first installments.
     Payments must be deleted explicitly before a lease can be removed.
     """
     __tablename__ = "leases"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)

     # Pricing
     value = Column(Numeric(12, 2), nullable=False)
     due_day = Column(Integer, nullable=False)
     adjustment_index = Column(
          Enum(AdjustmentIndex, name="adjustment_index", values_callable=_enum_values, create_constraint=True),
          nullable=False,
     )

     # Lease period
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)

     status = Column(
          Enum(LeaseStatus, name="lease_status", values_callable=_enum_values, create_constraint=True),
          default=LeaseStatus.ACTIVE,
          nullable=False,
          index=True,
     )

     # Guarantee
     guarantee_type = Column(
          Enum(GuaranteeType, name="guarantee_type", values_callable=_enum_values, create_constraint=True),
          nullable=True,
     )
     guarantee_amount = Column(Numeric(12, 2), nullable=True)
     guarantee_charge_start_date = Column(Date, nullable=True)  # regular billing starts here after a deposit advance

     # Termination
     termination_date = Column(Date, nullable=True)
     key_return_date = Column(Date, nullable=True)
     termination_reason = Column(Text, nullable=True)
     termination_outstanding_debt = Column(Numeric(12, 2), default=0, nullable=False)
     key_return_term_signed = Column(Boolean, default=False, nullable=False)
     termination_contract_signed = Column(Boolean, default=False, nullable=False)
     settlement_with_debt_signed = Column(Boolean, default=False, nullable=False)
     settlement_without_debt_signed = Column(Boolean, default=False, nullable=False)

     external_subscription_id = Column(String(100), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     property = relationship("Property", back_populates="leases")
     tenant = relationship("Tenant", back_populates="leases")
     payments = relationship("Payment", back_populates="lease", passive_deletes="all", order_by="Payment.id")

     def __repr__(self):
          return f"<Lease(id={self.id}, tenant_id={self.tenant_id}, property_id={self.property_id}, status='{self.status}')>"
