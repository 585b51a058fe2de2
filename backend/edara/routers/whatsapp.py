# backend/edara/routers/whatsapp.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import ReminderDraftOut, ReminderSendIn, ReminderSendOut, WhatsAppReminderOut
from ..services import whatsapp_reminders as svc
from ..services.alert_store import ReadFailure, SqlAlertStore, WriteFailure
from ..services.ownership import must_get_invoice

router = APIRouter(prefix="/whatsapp", tags=["whatsapp"])


def _log_out(r) -> dict:
    return {
        **r.model_dump(),
        "invoice_number": r.invoice.invoice_number if r.invoice is not None else None,
        "tenant_name": r.tenant.full_name if r.tenant is not None else None,
    }


@router.get("/reminders", response_model=list[WhatsAppReminderOut])
def list_reminders(
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
):
    return [_log_out(r) for r in svc.list_whatsapp_reminders(db, limit=limit)]


@router.get("/upcoming", response_model=list[ReminderDraftOut])
def upcoming(
    days_ahead: Optional[int] = Query(default=None, ge=0, le=90),
    db: Session = Depends(get_db),
):
    """Eligible invoices with a ready-to-open wa.me link. Nothing is logged."""
    try:
        return svc.generate_whatsapp_reminders(SqlAlertStore(db), days_ahead=days_ahead)
    except ReadFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/send", response_model=ReminderSendOut)
def send(payload: ReminderSendIn, db: Session = Depends(get_db)):
    """Log the reminder as sent and hand back the link for the operator to open."""
    inv = must_get_invoice(db, invoice_id=payload.invoice_id)
    try:
        link = svc.send_whatsapp_reminder(
            SqlAlertStore(db),
            invoice_id=inv.id,
            tenant_id=payload.tenant_id if payload.tenant_id is not None else inv.tenant_id,
            phone=payload.phone,
            message=payload.message,
        )
    except WriteFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return ReminderSendOut(whatsapp_link=link)


@router.get("/link", response_model=ReminderSendOut)
def link(phone: str = Query(min_length=1), message: str = Query(default="")):
    return ReminderSendOut(whatsapp_link=svc.build_link(phone, message))


@router.delete("/reminders/{reminder_id}")
def delete_reminder(reminder_id: int, db: Session = Depends(get_db)):
    try:
        deleted = svc.delete_whatsapp_reminder(SqlAlertStore(db), reminder_id)
    except WriteFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="reminder not found")
    return {"ok": True}
