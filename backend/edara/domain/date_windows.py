# backend/edara/domain/date_windows.py
"""
Date-window thresholds and helpers used by the alert scan and reminder finder.

All "today" values are UTC calendar dates. Window bounds are inclusive unless
the helper name says otherwise.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional

# pending invoice due within N days -> payment_reminder
REMINDER_WINDOW_DAYS = 3
# active contract ending within N days -> lease_expiring
EXPIRY_WINDOW_DAYS = 30
# completed maintenance updated within the last N days -> maintenance_update
MAINTENANCE_LOOKBACK_DAYS = 7
# default look-ahead for WhatsApp reminder eligibility
WHATSAPP_DEFAULT_WINDOW_DAYS = 5


def utcnow() -> datetime:
    return datetime.utcnow()


def today_utc() -> date:
    return utcnow().date()


def as_date(v: Any) -> Optional[date]:
    if v is None:
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    try:
        return date.fromisoformat(str(v)[:10])
    except ValueError:
        return None


def as_datetime(v: Any) -> Optional[datetime]:
    if v is None:
        return None
    if isinstance(v, datetime):
        return v
    if isinstance(v, date):
        return datetime(v.year, v.month, v.day)
    try:
        return datetime.fromisoformat(str(v))
    except ValueError:
        return None


def days_from(today: date, n: int) -> date:
    return today + timedelta(days=n)


def in_window(d: Any, start: date, end: date) -> bool:
    """start <= d <= end; unparseable dates never match."""
    dd = as_date(d)
    if dd is None:
        return False
    return start <= dd <= end


def is_before(d: Any, today: date) -> bool:
    dd = as_date(d)
    if dd is None:
        return False
    return dd < today


def lookback_cutoff(now: datetime, days: int) -> datetime:
    return now - timedelta(days=days)
