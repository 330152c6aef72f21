# models/owner.py
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class Owner(Base):
     """
     Owner model - the person or company that receives the rent.

     Banking details are kept for manual payouts; `external_payout_account_id`
     stays NULL until the billing provider has provisioned a payout subaccount
     used for the split.
     """
     __tablename__ = "owners"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     email = Column(String(255), nullable=False)
     tax_id = Column(String(20), nullable=False)  # CPF / CNPJ
     phone = Column(String(50), nullable=True)
     birth_date = Column(Date, nullable=True)

     # Address (required by the provider to open a subaccount)
     address = Column(String(255), nullable=True)
     address_number = Column(String(20), nullable=True)
     province = Column(String(100), nullable=True)
     postal_code = Column(String(20), nullable=True)
     city = Column(String(100), nullable=True)
     state = Column(String(2), nullable=True)

     # Payout
     bank_info = Column(Text, nullable=True)
     pix_key = Column(String(255), nullable=True)
     external_payout_account_id = Column(String(100), nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     properties = relationship("Property", back_populates="owner", passive_deletes="all")

     def __repr__(self):
          return f"<Owner(id={self.id}, name='{self.name}')>"
