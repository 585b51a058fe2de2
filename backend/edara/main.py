# backend/edara/main.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .logging_config import configure_logging

from .middleware.request_context import RequestContextMiddleware

from .routers.health import router as health_router
from .routers.dashboard import router as dashboard_router

from .routers.properties import router as properties_router
from .routers.units import router as units_router
from .routers.tenants import router as tenants_router
from .routers.contracts import router as contracts_router
from .routers.invoices import router as invoices_router
from .routers.maintenance import router as maintenance_router

from .routers.notifications import router as notifications_router
from .routers.whatsapp import router as whatsapp_router

API_PREFIX = "/api"


def _cors_origins() -> list[str]:
    val = getattr(settings, "cors_allow_origins", ["*"])
    if isinstance(val, str):
        v = val.strip()
        return ["*"] if v == "*" else [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(val, list) and val:
        return val
    return ["*"]


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Edara Property Management",
        version=settings.app_version,
    )

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Core
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)

    # Portfolio + agreements + billing
    app.include_router(properties_router, prefix=API_PREFIX)
    app.include_router(units_router, prefix=API_PREFIX)
    app.include_router(tenants_router, prefix=API_PREFIX)
    app.include_router(contracts_router, prefix=API_PREFIX)
    app.include_router(invoices_router, prefix=API_PREFIX)
    app.include_router(maintenance_router, prefix=API_PREFIX)

    # Alerts + reminders
    app.include_router(notifications_router, prefix=API_PREFIX)
    app.include_router(whatsapp_router, prefix=API_PREFIX)

    return app


app = create_app()
