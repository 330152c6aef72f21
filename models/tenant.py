# models/tenant.py
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class Tenant(Base):
     """
     Tenant model - the person paying rent.
     Optionally linked to a billing-provider customer.
     """
     __tablename__ = "tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Personal info
     name = Column(String(255), nullable=False)
     email = Column(String(255), nullable=False)
     tax_id = Column(String(20), nullable=False)  # CPF / CNPJ
     phone = Column(String(50), nullable=True)

     external_customer_id = Column(String(100), nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     leases = relationship("Lease", back_populates="tenant", passive_deletes="all")

     def __repr__(self):
          return f"<Tenant(id={self.id}, name='{self.name}')>"
