# models/property.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Property(Base):
     """
     Property model - a rentable unit, owned by exactly one Owner.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     address = Column(String(500), nullable=False)
     description = Column(Text, nullable=True)
     owner_id = Column(Integer, ForeignKey("owners.id"), nullable=False, index=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     owner = relationship("Owner", back_populates="properties")
     leases = relationship("Lease", back_populates="property", passive_deletes="all")

     def __repr__(self):
          return f"<Property(id={self.id}, address='{self.address}')>"
