# backend/tests/test_dashboard_stats.py
from __future__ import annotations

from datetime import date

from edara.models import Invoice, MaintenanceRequest, Notification, Property, Tenant, Unit
from edara.services.dashboard_rollups import portfolio_stats


def _inv(number, status, issued, amount):
    return Invoice(
        invoice_number=number,
        issue_date=issued,
        due_date=issued,
        amount=amount,
        status=status,
    )


def test_portfolio_stats(db):
    p = Property(name="Gulf Plaza", address="1 Main", city="Kuwait City", state="Capital", zip="13001", units=2)
    db.add(p)
    db.commit()
    db.add_all(
        [
            Unit(property_id=p.id, name="A-1", status="vacant"),
            Unit(property_id=p.id, name="A-2", status="occupied"),
            Tenant(first_name="Jane", last_name="Doe", email="j@example.com", property_id=p.id),
            _inv("INV-1", "paid", date(2026, 10, 5), 100.0),
            _inv("INV-2", "paid", date(2026, 10, 31), 50.5),
            _inv("INV-3", "paid", date(2026, 9, 30), 999.0),
            _inv("INV-4", "pending", date(2026, 10, 1), 10.0),
            _inv("INV-5", "overdue", date(2026, 8, 1), 10.0),
            MaintenanceRequest(title="Tap", property_id=p.id, category="plumbing", description="x"),
            MaintenanceRequest(title="Door", property_id=p.id, category="general", description="y", status="completed"),
            Notification(type="system", title="Hi", message="m"),
            Notification(type="system", title="Read", message="m", is_read=True),
        ]
    )
    db.commit()

    s = portfolio_stats(db, as_of=date(2026, 10, 19))
    assert (s.properties, s.units, s.tenants) == (1, 2, 1)
    assert s.vacant_units == 1
    assert s.vacancy_rate_pct == 50.0
    assert s.monthly_revenue == 150.5
    assert s.paid_invoices_this_month == 2
    assert (s.pending_invoices, s.overdue_invoices) == (1, 1)
    assert s.open_maintenance == 1
    assert s.unread_notifications == 1
    assert s.month == "2026-10"


def test_empty_portfolio(client):
    r = client.get("/api/dashboard/stats", params={"as_of": "2026-12-15"})
    assert r.status_code == 200
    body = r.json()
    assert body["units"] == 0
    assert body["vacancy_rate_pct"] is None
    assert body["monthly_revenue"] == 0.0
    assert body["month"] == "2026-12"
