# backend/edara/services/dashboard_rollups.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..domain.date_windows import today_utc
from ..models import Invoice, MaintenanceRequest, Notification, Property, Tenant, Unit


@dataclass(frozen=True)
class PortfolioStats:
    properties: int
    units: int
    tenants: int
    vacant_units: int
    vacancy_rate_pct: Optional[float]
    monthly_revenue: float
    paid_invoices_this_month: int
    pending_invoices: int
    overdue_invoices: int
    open_maintenance: int
    unread_notifications: int
    month: str


def _count(db: Session, stmt) -> int:
    return int(db.scalar(stmt) or 0)


def _month_bounds(as_of: date) -> tuple[date, date]:
    start = as_of.replace(day=1)
    if start.month == 12:
        nxt = start.replace(year=start.year + 1, month=1)
    else:
        nxt = start.replace(month=start.month + 1)
    return start, nxt


def portfolio_stats(db: Session, *, as_of: Optional[date] = None) -> PortfolioStats:
    """
    Top-of-dashboard cards.

    - vacant: unit.status == "vacant" or blank
    - monthly revenue: paid invoices whose issue_date falls in the current month
    """
    as_of = as_of or today_utc()
    m_start, m_next = _month_bounds(as_of)

    units_total = _count(db, select(func.count(Unit.id)))
    vacant = _count(
        db,
        select(func.count(Unit.id)).where(or_(Unit.status == "vacant", Unit.status == "", Unit.status.is_(None))),
    )

    paid_this_month = (
        select(Invoice)
        .where(Invoice.status == "paid")
        .where(Invoice.issue_date >= m_start, Invoice.issue_date < m_next)
        .subquery()
    )
    revenue = db.scalar(select(func.coalesce(func.sum(paid_this_month.c.amount), 0.0)))
    paid_count = _count(db, select(func.count()).select_from(paid_this_month))

    return PortfolioStats(
        properties=_count(db, select(func.count(Property.id))),
        units=units_total,
        tenants=_count(db, select(func.count(Tenant.id))),
        vacant_units=vacant,
        vacancy_rate_pct=round(vacant / units_total * 100, 1) if units_total else None,
        monthly_revenue=float(revenue or 0.0),
        paid_invoices_this_month=paid_count,
        pending_invoices=_count(db, select(func.count(Invoice.id)).where(Invoice.status == "pending")),
        overdue_invoices=_count(db, select(func.count(Invoice.id)).where(Invoice.status == "overdue")),
        open_maintenance=_count(
            db, select(func.count(MaintenanceRequest.id)).where(MaintenanceRequest.status != "completed")
        ),
        unread_notifications=_count(db, select(func.count(Notification.id)).where(Notification.is_read.is_(False))),
        month=m_start.strftime("%Y-%m"),
    )
