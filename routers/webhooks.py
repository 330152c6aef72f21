# routers/webhooks.py
"""
Inbound billing provider notifications.

Every well-formed call is acknowledged with {"received": true} so the provider
does not keep retrying. Events about invoices linked to a local payment are
applied to the ledger (paid -> settled, overdue -> OVERDUE).
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from config import Settings, get_settings
from database import get_session
from services.billing_sync import handle_webhook
from services.exceptions import DomainError
from services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


@router.post("/billing", summary="Billing provider webhook")
def billing_webhook(
     payload: dict = Body(...),
     access_token: Optional[str] = Header(None, alias="asaas-access-token"),
     db: Session = Depends(get_session),
     settings: Settings = Depends(get_settings),
):
     if settings.billing_webhook_token and access_token != settings.billing_webhook_token:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook token")

     event = payload.get("event")
     logger.info("Billing webhook received: %s", event)

     try:
          action = handle_webhook(LedgerStore(db), payload)
     except DomainError as exc:
          logger.warning("Billing webhook %s not applied: %s", event, exc.message)
          action = None

     if action:
          logger.info("Billing webhook %s applied: %s", event, action)
     return {"received": True}
