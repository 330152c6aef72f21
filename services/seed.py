# services/seed.py
"""
Demo data for an empty database (enabled with SEED_DEMO_DATA=true).
"""
import logging
from datetime import date, datetime
from decimal import Decimal

from models import AdjustmentIndex, PaymentMethod, PaymentStatus
from services.lease_originator import LeaseOriginator
from services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)


def seed_database(store: LedgerStore) -> bool:
     """Seed one owner, property, tenant and lease. Returns False if owners already exist."""
     if store.list_owners():
          return False

     logger.info("Seeding database...")

     with store.transaction():
          owner = store.create_owner({
               "name": "Adriana Silva",
               "email": "adriana@example.com",
               "tax_id": "123.456.789-00",
               "bank_info": "Banco do Brasil, Ag 1234, CC 56789-0",
          })
          prop = store.create_property({
               "address": "Av. Paulista, 1000 - Apt 405, São Paulo - SP",
               "description": "Apartamento moderno no centro",
               "owner_id": owner.id,
          })
          tenant = store.create_tenant({
               "name": "João Souza",
               "email": "joao@example.com",
               "tax_id": "987.654.321-00",
               "phone": "(11) 98765-4321",
          })

     # Demo data never talks to the billing provider
     lease = LeaseOriginator(store).originate({
          "property_id": prop.id,
          "tenant_id": tenant.id,
          "value": Decimal("2500.00"),
          "due_day": 5,
          "start_date": date(2024, 1, 1),
          "end_date": date(2025, 1, 1),
          "adjustment_index": AdjustmentIndex.IPCA,
     })

     with store.transaction():
          store.create_payment(
               lease_id=lease.id,
               amount=Decimal("2500.00"),
               due_date=date(2024, 2, 5),
               status=PaymentStatus.RECEIVED,
               payment_method=PaymentMethod.INSTANT_TRANSFER,
               amount_received=Decimal("2500.00"),
               payment_date=datetime(2024, 2, 5),
          )
          store.create_payment(
               lease_id=lease.id,
               amount=Decimal("2500.00"),
               due_date=date(2024, 3, 5),
          )

     logger.info("Database seeded successfully", extra={"lease_id": lease.id})
     return True
