# backend/tests/test_alert_rules.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional

from edara.domain.alert_rules import evaluate_alerts

TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 12, 0, 0)


@dataclass
class T:
    first_name: str
    last_name: str


@dataclass
class P:
    name: str


@dataclass
class Inv:
    id: int
    invoice_number: str
    amount: float
    due_date: date
    status: str
    tenant: Optional[Any] = None
    property: Optional[Any] = None
    tenant_id: Optional[int] = None
    property_id: Optional[int] = None


@dataclass
class C:
    id: int
    contract_id: str
    end_date: date
    status: str = "active"
    tenant: Optional[Any] = None
    property: Optional[Any] = None
    tenant_id: Optional[int] = None
    property_id: Optional[int] = None


@dataclass
class M:
    id: int
    title: str
    status: str
    updated_at: datetime
    property: Optional[Any] = None
    property_id: Optional[int] = None


def _run(invoices=(), contracts=(), maintenance=(), existing=()):
    return evaluate_alerts(
        invoices=invoices,
        contracts=contracts,
        maintenance_requests=maintenance,
        existing_keys=existing,
        today=TODAY,
        now=NOW,
    )


def test_overdue_invoice_alert_ignores_due_date():
    inv = Inv(1, "INV-1", 125.5, TODAY - timedelta(days=90), "overdue", T("Jane", "Doe"), tenant_id=4, property_id=2)
    out = _run(invoices=[inv])
    assert len(out) == 1
    a = out[0]
    assert a.type == "payment_overdue"
    assert a.related_id == "overdue-1"
    assert a.title == "Overdue Payment: INV-1"
    assert a.message == "Jane Doe has an overdue invoice of 125.500 KWD (due 2026-07-21)"
    assert (a.tenant_id, a.property_id) == (4, 2)


def test_payment_reminder_window_is_inclusive():
    invoices = [
        Inv(1, "A", 10, TODAY, "pending"),
        Inv(2, "B", 10, TODAY + timedelta(days=3), "pending"),
        Inv(3, "C", 10, TODAY + timedelta(days=4), "pending"),
        Inv(4, "D", 10, TODAY - timedelta(days=1), "pending"),
        Inv(5, "E", 10, TODAY + timedelta(days=1), "paid"),
    ]
    out = _run(invoices=invoices)
    assert [a.related_id for a in out] == ["reminder-1", "reminder-2"]
    assert out[0].title == "Payment Due Soon: A"
    assert out[0].message == "Unknown's payment of 10.000 KWD is due on 2026-10-19"


def test_lease_expiring_window_boundaries():
    contracts = [
        C(1, "CT-1", TODAY + timedelta(days=30), tenant=T("Omar", "Saleh"), property=P("Demo Tower")),
        C(2, "CT-2", TODAY + timedelta(days=31)),
        C(3, "CT-3", TODAY),
        C(4, "CT-4", TODAY + timedelta(days=5), status="terminated"),
    ]
    out = _run(contracts=contracts)
    assert [a.related_id for a in out] == ["expiring-1", "expiring-3"]
    assert out[0].title == "Lease Expiring: CT-1"
    assert out[0].message == "Omar Saleh's contract at Demo Tower expires on 2026-11-18"


def test_lease_expired_is_never_also_expiring():
    c = C(9, "CT-9", TODAY - timedelta(days=1), tenant=T("Omar", "Saleh"))
    out = _run(contracts=[c])
    assert [a.type for a in out] == ["lease_expired"]
    assert out[0].related_id == "expired-9"
    assert out[0].message == "Omar Saleh's contract expired on 2026-10-18. Renewal required."


def test_maintenance_lookback():
    reqs = [
        M(1, "Leaking tap", "completed", NOW - timedelta(days=6), property=P("Demo Tower"), property_id=3),
        M(2, "Broken door", "completed", NOW - timedelta(days=8)),
        M(3, "AC service", "in_progress", NOW),
        M(4, "Paint", "completed", NOW - timedelta(days=1)),
    ]
    out = _run(maintenance=reqs)
    assert [a.related_id for a in out] == ["maint-1", "maint-4"]
    assert out[0].title == "Maintenance Completed"
    assert out[0].message == '"Leaking tap" at Demo Tower has been completed'
    assert out[0].tenant_id is None and out[0].property_id == 3
    assert out[1].message == '"Paint" at Property has been completed'


def test_existing_keys_are_skipped():
    inv = Inv(1, "INV-1", 10, TODAY, "overdue")
    assert _run(invoices=[inv], existing={"overdue-1"}) == []
    assert len(_run(invoices=[inv], existing={"overdue-2", None})) == 1


def test_same_key_only_once_per_batch():
    inv = Inv(1, "INV-1", 10, TODAY, "overdue")
    out = _run(invoices=[inv, inv])
    assert [a.related_id for a in out] == ["overdue-1"]


def test_rule_order():
    out = _run(
        invoices=[Inv(1, "A", 10, TODAY + timedelta(days=1), "pending"), Inv(2, "B", 10, TODAY, "overdue")],
        contracts=[C(3, "CT-3", TODAY - timedelta(days=2)), C(4, "CT-4", TODAY + timedelta(days=2))],
        maintenance=[M(5, "X", "completed", NOW)],
    )
    assert [a.type for a in out] == [
        "payment_overdue",
        "payment_reminder",
        "lease_expiring",
        "lease_expired",
        "maintenance_update",
    ]


def test_status_match_is_exact():
    out = _run(
        invoices=[Inv(1, "A", 10, TODAY + timedelta(days=1), "Pending"), Inv(2, "B", 10, TODAY, "OVERDUE")],
        contracts=[C(3, "CT-3", TODAY - timedelta(days=2), status="Active")],
        maintenance=[M(5, "X", " completed", NOW)],
    )
    assert out == []


def test_blank_tenant_name_falls_back():
    inv = Inv(1, "INV-1", 10, TODAY, "overdue", T(" ", ""))
    assert _run(invoices=[inv])[0].message.startswith("Unknown has an overdue invoice")
