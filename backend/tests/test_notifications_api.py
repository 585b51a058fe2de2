# backend/tests/test_notifications_api.py
from __future__ import annotations

from datetime import datetime, timedelta

from edara.domain.date_windows import today_utc
from edara.domain.notification_settings import NotificationSettings
from edara.models import Notification
from edara.services.notification_service import list_notifications


def _seed_overdue(client) -> dict:
    today = today_utc()
    p = client.post(
        "/api/properties",
        json={"name": "Gulf Plaza", "address": "1 Main", "city": "Kuwait City", "state": "Capital", "zip": "13001"},
    ).json()
    t = client.post(
        "/api/tenants",
        json={"first_name": "Jane", "last_name": "Doe", "email": "jane@example.com", "phone": "51234567",
              "property_id": p["id"]},
    ).json()
    inv = client.post(
        "/api/invoices",
        json={
            "invoice_number": "INV-100",
            "tenant_id": t["id"],
            "property_id": p["id"],
            "issue_date": (today - timedelta(days=30)).isoformat(),
            "due_date": (today - timedelta(days=2)).isoformat(),
            "amount": 300,
            "status": "overdue",
        },
    ).json()
    return {"property": p, "tenant": t, "invoice": inv}


def test_generate_is_idempotent(client):
    _seed_overdue(client)

    r = client.post("/api/notifications/generate")
    assert r.status_code == 200
    assert r.json() == {"inserted": 1}
    assert client.post("/api/notifications/generate").json() == {"inserted": 0}

    rows = client.get("/api/notifications").json()
    assert len(rows) == 1
    n = rows[0]
    assert n["type"] == "payment_overdue"
    assert n["title"] == "Overdue Payment: INV-100"
    assert n["tenant_name"] == "Jane Doe"
    assert n["property_name"] == "Gulf Plaza"
    assert n["is_read"] is False


def test_read_flow(client):
    _seed_overdue(client)
    client.post("/api/notifications/generate")
    assert client.get("/api/notifications/unread-count").json() == {"count": 1}

    nid = client.get("/api/notifications").json()[0]["id"]
    assert client.post(f"/api/notifications/{nid}/read").json() == {"ok": True}
    assert client.get("/api/notifications/unread-count").json() == {"count": 0}
    assert client.get("/api/notifications", params={"unread_only": True}).json() == []

    assert client.post("/api/notifications/999/read").status_code == 404


def test_read_all_and_clear(client):
    _seed_overdue(client)
    client.post("/api/notifications/generate")

    assert client.post("/api/notifications/read-all").json() == {"ok": True, "updated": 1}
    assert client.delete("/api/notifications").json() == {"ok": True, "deleted": 1}
    assert client.get("/api/notifications").json() == []


def test_delete_one(client):
    _seed_overdue(client)
    client.post("/api/notifications/generate")
    nid = client.get("/api/notifications").json()[0]["id"]

    assert client.delete(f"/api/notifications/{nid}").status_code == 200
    assert client.delete(f"/api/notifications/{nid}").status_code == 404


def test_settings_hide_types_from_inbox(client):
    _seed_overdue(client)
    client.post("/api/notifications/generate")

    s = client.post("/api/notifications/settings/payment_overdue/toggle").json()
    assert s["payment_overdue"] is False
    assert client.get("/api/notifications/settings").json()["payment_overdue"] is False

    assert client.get("/api/notifications").json() == []
    assert len(client.get("/api/notifications", params={"apply_settings": False}).json()) == 1

    # hidden types are still tracked, so a rescan adds nothing
    assert client.post("/api/notifications/generate").json() == {"inserted": 0}


def test_settings_put_and_unknown_toggle(client):
    body = {
        "payment_reminder": False,
        "payment_overdue": True,
        "maintenance_update": True,
        "lease_expiring": False,
        "lease_expired": True,
        "system": True,
    }
    assert client.put("/api/notifications/settings", json=body).json() == body
    assert client.get("/api/notifications/settings").json() == body
    assert client.post("/api/notifications/settings/bogus/toggle").status_code == 404


def test_request_id_is_echoed(client):
    r = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert r.status_code == 200
    assert r.headers["X-Request-ID"] == "abc-123"
    assert client.get("/api/health").headers["X-Request-ID"]


def test_hidden_types_do_not_use_up_the_limit(db):
    base = datetime(2026, 10, 1, 9, 0)
    db.add(Notification(type="lease_expired", title="Lease Expired: CT-1", message="m", related_id="expired-1",
                        created_at=base))
    for i in range(5):
        db.add(Notification(type="payment_reminder", title=f"Payment Due Soon: INV-{i}", message="m",
                            related_id=f"reminder-{i}", created_at=base + timedelta(hours=i + 1)))
    db.commit()

    rows = list_notifications(db, limit=5, display=NotificationSettings(payment_reminder=False))
    assert [r.type for r in rows] == ["lease_expired"]
