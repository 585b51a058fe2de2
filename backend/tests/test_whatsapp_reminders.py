# backend/tests/test_whatsapp_reminders.py
from __future__ import annotations

from datetime import datetime, timedelta

from edara.config import settings
from edara.domain.date_windows import today_utc
from edara.models import Invoice, Property, Tenant, WhatsAppReminder
from edara.services.alert_store import SqlAlertStore
from edara.services.whatsapp_reminders import (
    delete_whatsapp_reminder,
    find_upcoming_due_invoices,
    generate_whatsapp_reminders,
    log_whatsapp_reminder,
    send_whatsapp_reminder,
)


def _tenant(db, p, first, phone):
    t = Tenant(first_name=first, last_name="Test", email=f"{first.lower()}@example.com", phone=phone, property_id=p.id)
    db.add(t)
    db.commit()
    return t


def _invoice(db, t, number, days, status="pending"):
    today = today_utc()
    inv = Invoice(
        invoice_number=number,
        tenant_id=t.id,
        property_id=t.property_id,
        issue_date=today,
        due_date=today + timedelta(days=days),
        amount=150.25,
        status=status,
    )
    db.add(inv)
    db.commit()
    return inv


def _setup(db):
    p = Property(name="Sea View", address="2 Gulf Rd", city="Salmiya", state="Hawalli", zip="20001")
    db.add(p)
    db.commit()
    jane = _tenant(db, p, "Jane", "5123 4567")
    nophone = _tenant(db, p, "Blank", "   ")
    return p, jane, nophone


def test_eligibility_filters(db):
    p, jane, nophone = _setup(db)
    ok = _invoice(db, jane, "INV-OK", 2)
    edge = _invoice(db, jane, "INV-EDGE", 5)
    _invoice(db, jane, "INV-LATE", 6)
    _invoice(db, jane, "INV-PAID", 1, status="paid")
    _invoice(db, jane, "INV-PAST", -1)
    _invoice(db, nophone, "INV-NOPHONE", 1)
    _invoice(db, _tenant(db, p, "Empty", ""), "INV-EMPTY", 1)
    _invoice(db, _tenant(db, p, "Null", None), "INV-NULL", 1)

    found = find_upcoming_due_invoices(SqlAlertStore(db), days_ahead=5)
    assert [e.invoice.id for e in found] == [ok.id, edge.id]


def test_window_defaults_to_setting(db, monkeypatch):
    _, jane, _ = _setup(db)
    far = _invoice(db, jane, "INV-FAR", 7)
    store = SqlAlertStore(db)

    assert find_upcoming_due_invoices(store) == []
    monkeypatch.setattr(settings, "whatsapp_default_window_days", 7)
    assert [e.invoice.id for e in find_upcoming_due_invoices(store)] == [far.id]


def test_reminded_invoice_is_excluded(db):
    _, jane, _ = _setup(db)
    inv = _invoice(db, jane, "INV-1", 1)
    store = SqlAlertStore(db)

    assert len(find_upcoming_due_invoices(store)) == 1
    row = log_whatsapp_reminder(store, invoice_id=inv.id, tenant_id=jane.id, phone=jane.phone, message="hi")
    assert row.status == "sent"
    assert row.sent_at is not None
    assert find_upcoming_due_invoices(store) == []


def test_drafts_carry_message_and_link(db):
    _, jane, _ = _setup(db)
    inv = _invoice(db, jane, "INV-9", 3)

    drafts = generate_whatsapp_reminders(SqlAlertStore(db), days_ahead=5)
    assert len(drafts) == 1
    d = drafts[0]
    assert d.invoice_id == inv.id
    assert d.tenant_name == "Jane Test"
    assert "Invoice: INV-9" in d.message
    assert "Amount: 150.250 KWD" in d.message
    assert d.whatsapp_link.startswith("https://wa.me/96551234567?text=Hello%20Jane%20Test")
    # listing drafts never logs anything
    assert db.query(WhatsAppReminder).count() == 0


def test_send_logs_and_returns_link(db):
    _, jane, _ = _setup(db)
    inv = _invoice(db, jane, "INV-2", 1)
    store = SqlAlertStore(db)
    at = datetime(2026, 10, 19, 8, 0)

    link = send_whatsapp_reminder(
        store, invoice_id=inv.id, tenant_id=jane.id, phone="+965 5123 4567", message="Pay please", now=at
    )
    assert link == "https://wa.me/96551234567?text=Pay%20please"

    row = db.query(WhatsAppReminder).one()
    assert (row.invoice_id, row.status, row.sent_at) == (inv.id, "sent", at)


def test_delete_reminder_makes_invoice_eligible_again(db):
    _, jane, _ = _setup(db)
    inv = _invoice(db, jane, "INV-3", 1)
    store = SqlAlertStore(db)
    row = log_whatsapp_reminder(store, invoice_id=inv.id, tenant_id=jane.id, phone=jane.phone, message="x")

    assert delete_whatsapp_reminder(store, row.id) is True
    assert delete_whatsapp_reminder(store, row.id) is False
    assert [e.invoice.id for e in find_upcoming_due_invoices(store)] == [inv.id]


def test_deleting_invoice_drops_its_reminders(db):
    _, jane, _ = _setup(db)
    inv = _invoice(db, jane, "INV-4", 1)
    store = SqlAlertStore(db)
    log_whatsapp_reminder(store, invoice_id=inv.id, tenant_id=jane.id, phone=jane.phone, message="x")

    db.delete(inv)
    db.commit()
    db.expire_all()
    assert db.query(WhatsAppReminder).count() == 0
