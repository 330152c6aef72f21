# routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from schemas.dashboard import DashboardStats
from services.dashboard_service import DashboardService
from services.ledger_store import LedgerStore

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats, summary="Portfolio totals")
def get_dashboard_stats(db: Session = Depends(get_session)):
     return DashboardService.get_stats(LedgerStore(db))
