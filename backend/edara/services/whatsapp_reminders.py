# backend/edara/services/whatsapp_reminders.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import desc, select
from sqlalchemy.orm import Session, selectinload

from ..config import settings
from ..domain.date_windows import days_from, in_window, today_utc, utcnow
from ..domain.whatsapp import build_reminder_message, get_whatsapp_link
from ..models import WhatsAppReminder
from .alert_store import AlertStore

log = logging.getLogger("edara.whatsapp")


@dataclass(frozen=True)
class EligibleInvoice:
    invoice: Any
    tenant: Any


@dataclass(frozen=True)
class ReminderDraft:
    invoice_id: int
    tenant_id: Optional[int]
    tenant_name: str
    phone: str
    message: str
    whatsapp_link: str
    amount: float
    due_date: date
    invoice_number: str


def build_link(phone: str, message: str) -> str:
    return get_whatsapp_link(
        phone,
        message,
        country_code=settings.whatsapp_country_code,
        base_url=settings.whatsapp_base_url,
    )


def find_upcoming_due_invoices(
    store: AlertStore,
    *,
    days_ahead: Optional[int] = None,
    today: Optional[date] = None,
) -> list[EligibleInvoice]:
    """
    Pending invoices due in [today, today+days_ahead] that have no reminder log
    row yet and whose tenant has a non-blank phone. Store order is preserved.
    days_ahead defaults to settings.whatsapp_default_window_days.
    """
    today = today or today_utc()
    if days_ahead is None:
        days_ahead = settings.whatsapp_default_window_days
    end = days_from(today, days_ahead)

    invoices = store.list_invoices(statuses=("pending",), due_from=today, due_to=end)
    reminded = store.list_remindered_invoice_ids()

    eligible: list[EligibleInvoice] = []
    for inv in invoices:
        if getattr(inv, "status", None) != "pending" or not in_window(inv.due_date, today, end):
            continue
        if inv.id in reminded:
            continue
        tenant = getattr(inv, "tenant", None)
        phone = (getattr(tenant, "phone", None) or "").strip() if tenant is not None else ""
        if not phone:
            continue
        eligible.append(EligibleInvoice(invoice=inv, tenant=tenant))

    log.info("whatsapp eligibility scan", extra={"eligible": len(eligible), "days_ahead": days_ahead})
    return eligible


def generate_whatsapp_reminders(
    store: AlertStore,
    *,
    days_ahead: Optional[int] = None,
    today: Optional[date] = None,
) -> list[ReminderDraft]:
    """Message + link for each eligible invoice. Nothing is written."""
    drafts: list[ReminderDraft] = []
    for e in find_upcoming_due_invoices(store, days_ahead=days_ahead, today=today):
        inv, tenant = e.invoice, e.tenant
        name = f"{tenant.first_name} {tenant.last_name}"
        message = build_reminder_message(
            name,
            inv.invoice_number,
            inv.amount,
            inv.due_date,
            signature=settings.reminder_signature,
            currency=settings.currency_code,
        )
        drafts.append(
            ReminderDraft(
                invoice_id=inv.id,
                tenant_id=getattr(inv, "tenant_id", None),
                tenant_name=name,
                phone=tenant.phone,
                message=message,
                whatsapp_link=build_link(tenant.phone, message),
                amount=float(inv.amount),
                due_date=inv.due_date,
                invoice_number=inv.invoice_number,
            )
        )
    return drafts


def log_whatsapp_reminder(
    store: AlertStore,
    *,
    invoice_id: int,
    tenant_id: Optional[int],
    phone: str,
    message: str,
    now: Optional[datetime] = None,
) -> Any:
    """Record the reminder as sent at the moment the link is handed out. Delivery is not verified."""
    row = store.insert_reminder_log(
        invoice_id=invoice_id,
        tenant_id=tenant_id,
        phone=phone,
        message=message,
        status="sent",
        sent_at=now or utcnow(),
    )
    log.info("whatsapp reminder logged", extra={"invoice_id": invoice_id, "tenant_id": tenant_id})
    return row


def send_whatsapp_reminder(
    store: AlertStore,
    *,
    invoice_id: int,
    tenant_id: Optional[int],
    phone: str,
    message: str,
    now: Optional[datetime] = None,
) -> str:
    log_whatsapp_reminder(store, invoice_id=invoice_id, tenant_id=tenant_id, phone=phone, message=message, now=now)
    return build_link(phone, message)


def delete_whatsapp_reminder(store: AlertStore, reminder_id: int) -> bool:
    return store.delete_reminder_log(reminder_id)


def list_whatsapp_reminders(db: Session, *, limit: int = 200) -> list[WhatsAppReminder]:
    q = (
        select(WhatsAppReminder)
        .options(selectinload(WhatsAppReminder.invoice), selectinload(WhatsAppReminder.tenant))
        .order_by(desc(WhatsAppReminder.created_at), desc(WhatsAppReminder.id))
        .limit(limit)
    )
    return list(db.scalars(q).all())
