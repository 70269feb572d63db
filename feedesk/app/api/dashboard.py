"""Dashboard route."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from feedesk.app.api.deps import get_ledger
from feedesk.app.schemas.dashboard import DashboardSummary
from feedesk.app.services.dashboard_service import get_dashboard_summary
from feedesk.app.services.ledger import Ledger

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/", response_model=DashboardSummary)
async def get_dashboard(
    today: date | None = Query(default=None),
    ledger: Ledger = Depends(get_ledger),
):
    return get_dashboard_summary(ledger, today=today)
