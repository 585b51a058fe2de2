# backend/tests/test_app_imports.py
from __future__ import annotations

from fastapi.testclient import TestClient


def test_app_module_imports_and_serves():
    from edara.main import app

    paths = {r.path for r in app.routes}
    assert "/api/health" in paths
    assert "/api/notifications/generate" in paths
    assert "/api/whatsapp/upcoming" in paths

    assert TestClient(app).get("/api/health").json()["ok"] is True


def test_tenant_full_name():
    from edara.models import Tenant

    assert Tenant(first_name="Jane", last_name="Doe", email="j@example.com").full_name == "Jane Doe"
