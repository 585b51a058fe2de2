# backend/edara/domain/alert_rules.py
"""
Alert rule evaluator.

Works on duck-typed rows (ORM objects or plain dataclasses) so it can be
exercised without a database. Each rule is independent: a contract may be
"expiring" in one scan and "expired" in a later one because the key differs.

Keys (Notification.related_id):
  overdue-<invoice.id>, reminder-<invoice.id>, expiring-<contract.id>,
  expired-<contract.id>, maint-<request.id>
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Any, Iterable, Iterator, Optional

from .date_windows import (
    EXPIRY_WINDOW_DAYS,
    MAINTENANCE_LOOKBACK_DAYS,
    REMINDER_WINDOW_DAYS,
    as_date,
    as_datetime,
    days_from,
    in_window,
    is_before,
    lookback_cutoff,
)
from .dedup import DedupFilter
from .whatsapp import format_amount

ALERT_TYPES = (
    "payment_overdue",
    "payment_reminder",
    "maintenance_update",
    "lease_expiring",
    "lease_expired",
    "system",
)

UNKNOWN_TENANT = "Unknown"
UNKNOWN_PROPERTY = "Property"


@dataclass(frozen=True)
class AlertCandidate:
    type: str
    title: str
    message: str
    related_id: str
    tenant_id: Optional[int] = None
    property_id: Optional[int] = None

    def as_row(self) -> dict[str, Any]:
        return asdict(self)


def _status(row: Any) -> str:
    # exact match, same as the SQL store filters
    return getattr(row, "status", None) or ""


def tenant_name(row: Any) -> str:
    t = getattr(row, "tenant", None)
    if t is None:
        return UNKNOWN_TENANT
    first = (getattr(t, "first_name", "") or "").strip()
    last = (getattr(t, "last_name", "") or "").strip()
    name = f"{first} {last}".strip()
    return name or UNKNOWN_TENANT


def property_name(row: Any) -> str:
    p = getattr(row, "property", None)
    if p is None:
        return UNKNOWN_PROPERTY
    return (getattr(p, "name", "") or "").strip() or UNKNOWN_PROPERTY


def _iso(v: Any) -> str:
    d = as_date(v)
    return d.isoformat() if d else str(v)


# -------------------------
# Rules
# -------------------------
def overdue_invoice_alerts(invoices: Iterable[Any]) -> Iterator[AlertCandidate]:
    for inv in invoices:
        if _status(inv) != "overdue":
            continue
        yield AlertCandidate(
            type="payment_overdue",
            title=f"Overdue Payment: {inv.invoice_number}",
            message=(
                f"{tenant_name(inv)} has an overdue invoice of {format_amount(inv.amount)} "
                f"(due {_iso(inv.due_date)})"
            ),
            related_id=f"overdue-{inv.id}",
            tenant_id=getattr(inv, "tenant_id", None),
            property_id=getattr(inv, "property_id", None),
        )


def payment_reminder_alerts(invoices: Iterable[Any], *, today: date) -> Iterator[AlertCandidate]:
    end = days_from(today, REMINDER_WINDOW_DAYS)
    for inv in invoices:
        if _status(inv) != "pending" or not in_window(inv.due_date, today, end):
            continue
        yield AlertCandidate(
            type="payment_reminder",
            title=f"Payment Due Soon: {inv.invoice_number}",
            message=f"{tenant_name(inv)}'s payment of {format_amount(inv.amount)} is due on {_iso(inv.due_date)}",
            related_id=f"reminder-{inv.id}",
            tenant_id=getattr(inv, "tenant_id", None),
            property_id=getattr(inv, "property_id", None),
        )


def lease_expiring_alerts(contracts: Iterable[Any], *, today: date) -> Iterator[AlertCandidate]:
    end = days_from(today, EXPIRY_WINDOW_DAYS)
    for c in contracts:
        if _status(c) != "active" or not in_window(c.end_date, today, end):
            continue
        yield AlertCandidate(
            type="lease_expiring",
            title=f"Lease Expiring: {c.contract_id}",
            message=f"{tenant_name(c)}'s contract at {property_name(c)} expires on {_iso(c.end_date)}",
            related_id=f"expiring-{c.id}",
            tenant_id=getattr(c, "tenant_id", None),
            property_id=getattr(c, "property_id", None),
        )


def lease_expired_alerts(contracts: Iterable[Any], *, today: date) -> Iterator[AlertCandidate]:
    for c in contracts:
        if _status(c) != "active" or not is_before(c.end_date, today):
            continue
        yield AlertCandidate(
            type="lease_expired",
            title=f"Lease Expired: {c.contract_id}",
            message=f"{tenant_name(c)}'s contract expired on {_iso(c.end_date)}. Renewal required.",
            related_id=f"expired-{c.id}",
            tenant_id=getattr(c, "tenant_id", None),
            property_id=getattr(c, "property_id", None),
        )


def maintenance_completed_alerts(requests: Iterable[Any], *, now: datetime) -> Iterator[AlertCandidate]:
    cutoff = lookback_cutoff(now, MAINTENANCE_LOOKBACK_DAYS)
    for m in requests:
        updated = as_datetime(getattr(m, "updated_at", None))
        if _status(m) != "completed" or updated is None or updated < cutoff:
            continue
        yield AlertCandidate(
            type="maintenance_update",
            title="Maintenance Completed",
            message=f'"{m.title}" at {property_name(m)} has been completed',
            related_id=f"maint-{m.id}",
            tenant_id=None,
            property_id=getattr(m, "property_id", None),
        )


def evaluate_alerts(
    *,
    invoices: Iterable[Any],
    contracts: Iterable[Any],
    maintenance_requests: Iterable[Any],
    existing_keys: Iterable[Optional[str]],
    today: date,
    now: datetime,
) -> list[AlertCandidate]:
    """
    Run all five rules and return candidates whose key has not been seen.

    Dedup is global across rules and is seeded from the persisted related_id
    values. Ordering: overdue, reminder, expiring, expired, maintenance.
    """
    invoices = list(invoices)
    contracts = list(contracts)

    dedup = DedupFilter(existing_keys)
    proposed: list[AlertCandidate] = []

    for stream in (
        overdue_invoice_alerts(invoices),
        payment_reminder_alerts(invoices, today=today),
        lease_expiring_alerts(contracts, today=today),
        lease_expired_alerts(contracts, today=today),
        maintenance_completed_alerts(maintenance_requests, now=now),
    ):
        for cand in stream:
            if dedup.is_new(cand.related_id):
                proposed.append(cand)

    return proposed
