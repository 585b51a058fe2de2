# backend/edara/routers/dashboard.py
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import DashboardStatsOut
from ..services.dashboard_rollups import portfolio_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsOut)
def dashboard_stats(
    as_of: Optional[date] = Query(default=None, description="defaults to today (UTC)"),
    db: Session = Depends(get_db),
):
    return portfolio_stats(db, as_of=as_of)
