# services/billing_bridge.py
"""
Billing Bridge - thin adapter over the external billing provider (Asaas API v3).

Only the four calls the ledger needs are spoken here: customers for tenants,
payout subaccounts for owners, monthly subscriptions with an owner split,
and the invoices a subscription has generated. Every non-2xx response or
network failure is raised as BillingProviderError; callers decide whether
that is fatal.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config import Settings, get_settings
from models import Owner, Tenant
from services.exceptions import BillingProviderError

logger = logging.getLogger(__name__)


def _digits(value: Optional[str]) -> Optional[str]:
     if value is None:
          return None
     return re.sub(r"\D", "", value)


@dataclass(frozen=True)
class GeneratedInvoice:
     """One invoice the provider generated for a subscription."""
     external_invoice_id: str
     status: str
     value: Decimal
     due_date: date
     invoice_url: Optional[str] = None


class BillingBridge:
     """Synchronous client for the billing provider."""

     def __init__(
          self,
          api_key: str,
          base_url: str,
          timeout: float = 20.0,
          max_retries: int = 3,
          session: Optional[requests.Session] = None,
     ):
          self.base_url = base_url.rstrip("/")
          self.timeout = timeout
          self.session = session or requests.Session()
          self.session.headers.update({
               "Content-Type": "application/json",
               "access_token": api_key,
          })
          # Reads are idempotent and retried with backoff; POSTs are never retried
          retry = Retry(
               total=max_retries,
               backoff_factor=0.5,
               status_forcelist=(429, 500, 502, 503, 504),
               allowed_methods=frozenset({"GET"}),
               raise_on_status=False,
          )
          self.session.mount("https://", HTTPAdapter(max_retries=retry))
          self.session.mount("http://", HTTPAdapter(max_retries=retry))

     @classmethod
     def from_settings(cls, settings: Settings) -> "BillingBridge":
          return cls(
               api_key=settings.billing_api_key,
               base_url=settings.billing_base_url,
               timeout=settings.billing_timeout_seconds,
               max_retries=settings.billing_max_retries,
          )

     def _request(self, method: str, endpoint: str, payload: Optional[dict] = None) -> Any:
          url = f"{self.base_url}{endpoint}"
          try:
               response = self.session.request(method, url, json=payload, timeout=self.timeout)
          except requests.RequestException as exc:
               logger.warning("Billing provider unreachable: %s %s (%s)", method, endpoint, exc)
               raise BillingProviderError(f"Billing provider unreachable: {exc}") from exc

          if response.status_code not in (200, 201):
               try:
                    details = response.json()
               except ValueError:
                    details = response.text
               raise BillingProviderError(
                    f"Billing provider error {response.status_code} on {method} {endpoint}",
                    status_code=response.status_code,
                    details=details,
               )

          try:
               return response.json()
          except ValueError as exc:
               raise BillingProviderError(
                    f"Billing provider returned a non-JSON body on {method} {endpoint}",
                    status_code=response.status_code,
               ) from exc

     @staticmethod
     def _require_id(data: Any, key: str, what: str) -> str:
          value = data.get(key) if isinstance(data, dict) else None
          if not value:
               raise BillingProviderError(f"Billing provider response for {what} has no '{key}'", details=data)
          return str(value)

     # ------------------------------------------------------------------
     # Customers (tenants)
     # ------------------------------------------------------------------

     def create_customer(self, tenant: Tenant) -> str:
          """Register the tenant as a paying customer. Returns the provider customer id."""
          data = self._request("POST", "/customers", {
               "name": tenant.name,
               "cpfCnpj": _digits(tenant.tax_id),
               "email": tenant.email,
               "mobilePhone": _digits(tenant.phone),
          })
          return self._require_id(data, "id", "customer")

     # ------------------------------------------------------------------
     # Payout subaccounts (owners)
     # ------------------------------------------------------------------

     def create_payout_account(self, owner: Owner) -> str:
          """
          Open a subaccount for the owner so rent can be split to them.

          Returns the wallet id used in split instructions (falls back to the
          account id when the provider does not send a wallet id).
          """
          tax_id = _digits(owner.tax_id) or ""
          data = self._request("POST", "/accounts", {
               "name": owner.name,
               "email": owner.email,
               "cpfCnpj": tax_id,
               "birthDate": owner.birth_date.isoformat() if owner.birth_date else None,
               "companyType": "LIMITED" if len(tax_id) > 11 else "INDIVIDUAL",
               "phone": _digits(owner.phone),
               "mobilePhone": _digits(owner.phone),
               "address": owner.address,
               "addressNumber": owner.address_number,
               "province": owner.province,
               "postalCode": _digits(owner.postal_code),
               "city": owner.city,
               "state": owner.state,
               "incomeValue": 5000,
          })
          if isinstance(data, dict) and data.get("walletId"):
               return str(data["walletId"])
          return self._require_id(data, "id", "payout account")

     # ------------------------------------------------------------------
     # Subscriptions (leases)
     # ------------------------------------------------------------------

     def create_recurring_billing(
          self,
          customer_id: str,
          amount: Decimal,
          first_due_date: date,
          payout_account_id: str,
          split_percent: Decimal,
          description: Optional[str] = None,
     ) -> str:
          """Create a monthly subscription with `split_percent` of each charge routed to the owner."""
          data = self._request("POST", "/subscriptions", {
               "customer": customer_id,
               "billingType": "BOLETO",
               "value": float(amount),
               "nextDueDate": first_due_date.isoformat(),
               "cycle": "MONTHLY",
               "description": description,
               "split": [
                    {"walletId": payout_account_id, "percentualValue": float(split_percent)},
               ],
          })
          return self._require_id(data, "id", "subscription")

     def list_generated_invoices(self, subscription_id: str) -> List[GeneratedInvoice]:
          data = self._request("GET", f"/subscriptions/{subscription_id}/payments")
          rows = data.get("data", []) if isinstance(data, dict) else []
          invoices = []
          for row in rows:
               invoices.append(GeneratedInvoice(
                    external_invoice_id=str(row["id"]),
                    status=str(row.get("status", "")),
                    value=Decimal(str(row.get("value", "0"))),
                    due_date=date.fromisoformat(row["dueDate"]),
                    invoice_url=row.get("invoiceUrl"),
               ))
          return invoices


def get_billing_bridge() -> Optional[BillingBridge]:
     """
     FastAPI dependency. Returns None when no provider key is configured,
     in which case billing steps are skipped.
     """
     settings = get_settings()
     if not settings.billing_api_key:
          return None
     return BillingBridge.from_settings(settings)
