# backend/edara/services/notification_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.orm import Session, selectinload

from ..domain.alert_rules import evaluate_alerts
from ..domain.date_windows import (
    MAINTENANCE_LOOKBACK_DAYS,
    lookback_cutoff,
    utcnow,
)
from ..domain.notification_settings import NotificationSettings
from ..models import Notification
from .alert_store import AlertStore

log = logging.getLogger("edara.notifications")


def generate_notifications(
    store: AlertStore,
    *,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> int:
    """
    One scan pass: read sources, evaluate rules, drop known keys, batch-insert.

    - Existing related_id snapshot is read once, before the source tables.
    - Any ReadFailure aborts the pass before anything is written.
    - Inserts are one batch; a WriteFailure leaves no partial rows.
    - Re-running with unchanged data inserts nothing.

    Returns the number of notifications inserted.
    """
    now = now or utcnow()
    today = today or now.date()

    existing = store.list_notification_keys()

    # overdue has no date window; reminder window is checked by the rules
    invoices = store.list_invoices(statuses=("overdue", "pending"))
    contracts = store.list_contracts(status="active")
    maintenance = store.list_maintenance_requests(
        status="completed",
        updated_since=lookback_cutoff(now, MAINTENANCE_LOOKBACK_DAYS),
    )

    candidates = evaluate_alerts(
        invoices=invoices,
        contracts=contracts,
        maintenance_requests=maintenance,
        existing_keys=existing,
        today=today,
        now=now,
    )

    inserted = store.insert_notifications(candidates) if candidates else 0
    log.info("notification scan finished", extra={"inserted": inserted})
    return inserted


# -------------------------
# Inbox
# -------------------------
@dataclass(frozen=True)
class NotificationView:
    id: int
    type: str
    title: str
    message: str
    tenant_id: Optional[int]
    property_id: Optional[int]
    related_id: Optional[str]
    is_read: bool
    created_at: Optional[datetime]
    tenant_name: Optional[str]
    property_name: Optional[str]


def _view(n: Notification) -> NotificationView:
    t = n.tenant
    p = n.property
    return NotificationView(
        id=n.id,
        type=n.type,
        title=n.title,
        message=n.message,
        tenant_id=n.tenant_id,
        property_id=n.property_id,
        related_id=n.related_id,
        is_read=bool(n.is_read),
        created_at=n.created_at,
        tenant_name=t.full_name if t is not None else None,
        property_name=p.name if p is not None else None,
    )


def list_notifications(
    db: Session,
    *,
    unread_only: bool = False,
    limit: int = 200,
    display: Optional[NotificationSettings] = None,
) -> list[NotificationView]:
    """Newest first. `display` hides types the operator switched off."""
    q = (
        select(Notification)
        .options(selectinload(Notification.tenant), selectinload(Notification.property))
        .order_by(desc(Notification.created_at), desc(Notification.id))
    )
    if unread_only:
        q = q.where(Notification.is_read.is_(False))
    if display is not None:
        hidden = [t for t in display.keys() if not display.is_enabled(t)]
        if hidden:
            q = q.where(Notification.type.notin_(hidden))

    return [_view(n) for n in db.scalars(q.limit(limit)).all()]


def unread_count(db: Session) -> int:
    return int(db.scalar(select(func.count(Notification.id)).where(Notification.is_read.is_(False))) or 0)


def mark_read(db: Session, notification_id: int) -> bool:
    res = db.execute(update(Notification).where(Notification.id == notification_id).values(is_read=True))
    db.commit()
    return bool(res.rowcount)


def mark_all_read(db: Session) -> int:
    res = db.execute(update(Notification).where(Notification.is_read.is_(False)).values(is_read=True))
    db.commit()
    return int(res.rowcount or 0)


def delete_notification(db: Session, notification_id: int) -> bool:
    res = db.execute(delete(Notification).where(Notification.id == notification_id))
    db.commit()
    return bool(res.rowcount)


def clear_notifications(db: Session) -> int:
    res = db.execute(delete(Notification))
    db.commit()
    n = int(res.rowcount or 0)
    log.info("notifications cleared: %s", n)
    return n
