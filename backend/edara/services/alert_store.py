# backend/edara/services/alert_store.py
"""
Store collaborator for the alert scan and the WhatsApp reminder flow.

`AlertStore` is the minimal contract the scan needs; `SqlAlertStore` is the
SQLAlchemy implementation used by routers and the CLI. Tests can pass any
object with the same methods.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Protocol, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..models import Contract, Invoice, MaintenanceRequest, Notification, WhatsAppReminder
from ..domain.alert_rules import AlertCandidate


class ReadFailure(RuntimeError):
    """A collaborator read errored; the scan is aborted before any write."""


class WriteFailure(RuntimeError):
    """A batched insert (or delete) errored and was rolled back."""


class AlertStore(Protocol):
    def list_invoices(
        self,
        *,
        statuses: Sequence[str],
        due_from: Optional[date] = None,
        due_to: Optional[date] = None,
    ) -> list[Any]:
        ...

    def list_contracts(self, *, status: str) -> list[Any]:
        ...

    def list_maintenance_requests(self, *, status: str, updated_since: Optional[datetime] = None) -> list[Any]:
        ...

    def list_notification_keys(self) -> set[str]:
        ...

    def insert_notifications(self, candidates: Sequence[AlertCandidate]) -> int:
        ...

    def list_remindered_invoice_ids(self) -> set[int]:
        ...

    def insert_reminder_log(
        self,
        *,
        invoice_id: int,
        tenant_id: Optional[int],
        phone: str,
        message: str,
        status: str,
        sent_at: Optional[datetime],
    ) -> Any:
        ...

    def delete_reminder_log(self, reminder_id: int) -> bool:
        ...


class SqlAlertStore:
    """SQLAlchemy-backed AlertStore. Commits its own writes."""

    def __init__(self, db: Session) -> None:
        self._db = db

    # -------------------------
    # reads
    # -------------------------
    def _read(self, stmt, what: str) -> list[Any]:
        try:
            return list(self._db.scalars(stmt).all())
        except SQLAlchemyError as e:
            self._db.rollback()
            raise ReadFailure(f"failed to read {what}: {e.__class__.__name__}") from e

    def list_invoices(
        self,
        *,
        statuses: Sequence[str],
        due_from: Optional[date] = None,
        due_to: Optional[date] = None,
    ) -> list[Invoice]:
        q = (
            select(Invoice)
            .where(Invoice.status.in_(list(statuses)))
            .options(selectinload(Invoice.tenant), selectinload(Invoice.property))
        )
        if due_from is not None:
            q = q.where(Invoice.due_date >= due_from)
        if due_to is not None:
            q = q.where(Invoice.due_date <= due_to)
        return self._read(q.order_by(Invoice.id), "invoices")

    def list_contracts(self, *, status: str) -> list[Contract]:
        q = (
            select(Contract)
            .where(Contract.status == status)
            .options(selectinload(Contract.tenant), selectinload(Contract.property))
            .order_by(Contract.id)
        )
        return self._read(q, "contracts")

    def list_maintenance_requests(
        self, *, status: str, updated_since: Optional[datetime] = None
    ) -> list[MaintenanceRequest]:
        q = (
            select(MaintenanceRequest)
            .where(MaintenanceRequest.status == status)
            .options(selectinload(MaintenanceRequest.property))
        )
        if updated_since is not None:
            q = q.where(MaintenanceRequest.updated_at >= updated_since)
        return self._read(q.order_by(MaintenanceRequest.id), "maintenance_requests")

    def list_notification_keys(self) -> set[str]:
        rows = self._read(select(Notification.related_id), "notifications")
        return {r for r in rows if r}

    def list_remindered_invoice_ids(self) -> set[int]:
        rows = self._read(select(WhatsAppReminder.invoice_id), "whatsapp_reminders")
        return {int(r) for r in rows if r is not None}

    # -------------------------
    # writes
    # -------------------------
    def insert_notifications(self, candidates: Sequence[AlertCandidate]) -> int:
        if not candidates:
            return 0
        now = datetime.utcnow()
        try:
            self._db.add_all(
                [Notification(**c.as_row(), is_read=False, created_at=now) for c in candidates]
            )
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise WriteFailure(f"failed to insert notifications: {e.__class__.__name__}") from e
        return len(candidates)

    def insert_reminder_log(
        self,
        *,
        invoice_id: int,
        tenant_id: Optional[int],
        phone: str,
        message: str,
        status: str,
        sent_at: Optional[datetime],
    ) -> WhatsAppReminder:
        row = WhatsAppReminder(
            invoice_id=invoice_id,
            tenant_id=tenant_id,
            phone=phone,
            message=message,
            status=status,
            sent_at=sent_at,
            created_at=datetime.utcnow(),
        )
        try:
            self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
        except SQLAlchemyError as e:
            self._db.rollback()
            raise WriteFailure(f"failed to log whatsapp reminder: {e.__class__.__name__}") from e
        return row

    def delete_reminder_log(self, reminder_id: int) -> bool:
        try:
            res = self._db.execute(delete(WhatsAppReminder).where(WhatsAppReminder.id == reminder_id))
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise WriteFailure(f"failed to delete whatsapp reminder: {e.__class__.__name__}") from e
        return bool(res.rowcount)

