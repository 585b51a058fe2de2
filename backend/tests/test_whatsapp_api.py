# backend/tests/test_whatsapp_api.py
from __future__ import annotations

from datetime import timedelta

from edara.domain.date_windows import today_utc


def _seed(client, *, phone="5123 4567", due_in=2) -> dict:
    today = today_utc()
    p = client.post(
        "/api/properties",
        json={"name": "Sea View", "address": "2 Gulf Rd", "city": "Salmiya", "state": "Hawalli", "zip": "20001"},
    ).json()
    t = client.post(
        "/api/tenants",
        json={"first_name": "Omar", "last_name": "Saleh", "email": "omar@example.com", "phone": phone,
              "property_id": p["id"]},
    ).json()
    inv = client.post(
        "/api/invoices",
        json={
            "invoice_number": "INV-55",
            "tenant_id": t["id"],
            "property_id": p["id"],
            "issue_date": today.isoformat(),
            "due_date": (today + timedelta(days=due_in)).isoformat(),
            "amount": 275.5,
        },
    ).json()
    return {"tenant": t, "invoice": inv}


def test_upcoming_then_send_then_excluded(client):
    s = _seed(client)

    up = client.get("/api/whatsapp/upcoming").json()
    assert len(up) == 1
    d = up[0]
    assert d["invoice_id"] == s["invoice"]["id"]
    assert d["tenant_name"] == "Omar Saleh"
    assert d["whatsapp_link"].startswith("https://wa.me/96551234567?text=")
    assert "Amount: 275.500 KWD" in d["message"]

    r = client.post(
        "/api/whatsapp/send",
        json={"invoice_id": d["invoice_id"], "phone": d["phone"], "message": d["message"]},
    )
    assert r.status_code == 200
    assert r.json()["whatsapp_link"] == d["whatsapp_link"]

    assert client.get("/api/whatsapp/upcoming").json() == []

    log = client.get("/api/whatsapp/reminders").json()
    assert len(log) == 1
    assert log[0]["status"] == "sent"
    assert log[0]["sent_at"] is not None
    assert log[0]["invoice_number"] == "INV-55"
    assert log[0]["tenant_name"] == "Omar Saleh"
    # tenant falls back to the invoice's tenant
    assert log[0]["tenant_id"] == s["tenant"]["id"]


def test_days_ahead_window(client):
    _seed(client, due_in=7)
    assert client.get("/api/whatsapp/upcoming").json() == []
    assert len(client.get("/api/whatsapp/upcoming", params={"days_ahead": 7}).json()) == 1


def test_tenant_without_phone_is_skipped(client):
    _seed(client, phone="")
    assert client.get("/api/whatsapp/upcoming").json() == []


def test_send_unknown_invoice_is_404(client):
    r = client.post("/api/whatsapp/send", json={"invoice_id": 123, "phone": "51234567", "message": "hi"})
    assert r.status_code == 404


def test_delete_reminder(client):
    s = _seed(client)
    client.post(
        "/api/whatsapp/send",
        json={"invoice_id": s["invoice"]["id"], "phone": "51234567", "message": "hi"},
    )
    rid = client.get("/api/whatsapp/reminders").json()[0]["id"]

    assert client.delete(f"/api/whatsapp/reminders/{rid}").json() == {"ok": True}
    assert client.delete(f"/api/whatsapp/reminders/{rid}").status_code == 404
    assert len(client.get("/api/whatsapp/upcoming").json()) == 1


def test_link_endpoint(client):
    r = client.get("/api/whatsapp/link", params={"phone": "0512 3456", "message": "Hello there"})
    assert r.json() == {"whatsapp_link": "https://wa.me/9655123456?text=Hello%20there"}
