# models/payment.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Text, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base
from .lease import _enum_values


class PaymentStatus(str, enum.Enum):
     """Enumeration for installment settlement status."""
     PENDING = "PENDING"
     RECEIVED = "RECEIVED"
     OVERDUE = "OVERDUE"


# Statuses that count as debt still owed on a lease
OPEN_PAYMENT_STATUSES = (PaymentStatus.PENDING, PaymentStatus.OVERDUE)


class PaymentMethod(str, enum.Enum):
     BILLING_PROVIDER = "BILLING_PROVIDER"
     CASH = "CASH"
     CARD = "CARD"
     INSTANT_TRANSFER = "INSTANT_TRANSFER"
     OTHER = "OTHER"


class Payment(Base):
     """
     Payment model - one installment owed under a lease.

     `amount` is what was due when the row was created and never changes;
     `amount_received` is what was actually collected. Only the settlement
     engine moves a payment to RECEIVED, and it always sets `payment_date`
     and `amount_received` together.
     """
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     lease_id = Column(Integer, ForeignKey("leases.id"), nullable=False, index=True)

     amount = Column(Numeric(12, 2), nullable=False)
     status = Column(
          Enum(PaymentStatus, name="payment_status", values_callable=_enum_values, create_constraint=True),
          default=PaymentStatus.PENDING,
          nullable=False,
          index=True,
     )
     due_date = Column(Date, nullable=False, index=True)
     payment_date = Column(DateTime, nullable=True)
     payment_method = Column(
          Enum(PaymentMethod, name="payment_method", values_callable=_enum_values, create_constraint=True),
          default=PaymentMethod.BILLING_PROVIDER,
          nullable=False,
     )
     amount_received = Column(Numeric(12, 2), nullable=True)
     notes = Column(Text, nullable=True)
     external_payment_id = Column(String(100), nullable=True, unique=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     lease = relationship("Lease", back_populates="payments")

     def __repr__(self):
          return f"<Payment(id={self.id}, amount={self.amount}, status='{self.status}', due_date={self.due_date})>"

     @property
     def is_open(self) -> bool:
          """Check if the installment still counts as debt."""
          return self.status in OPEN_PAYMENT_STATUSES
