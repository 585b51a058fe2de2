# backend/edara/cli/__main__.py
from __future__ import annotations

import argparse
import json

from edara.cli.seed_demo import seed_demo
from edara.db import SessionLocal
from edara.logging_config import configure_logging
from edara.services.alert_store import SqlAlertStore
from edara.services.notification_service import generate_notifications
from edara.services.whatsapp_reminders import generate_whatsapp_reminders


def _cmd_seed(args: argparse.Namespace) -> dict:
    out = seed_demo(property_name=args.property_name)
    return {"ok": True, "property_id": out.property_id, "invoice_ids": out.invoice_ids}


def _cmd_scan(_args: argparse.Namespace) -> dict:
    db = SessionLocal()
    try:
        return {"ok": True, "inserted": generate_notifications(SqlAlertStore(db))}
    finally:
        db.close()


def _cmd_reminders(args: argparse.Namespace) -> dict:
    db = SessionLocal()
    try:
        drafts = generate_whatsapp_reminders(SqlAlertStore(db), days_ahead=args.days_ahead)
        return {
            "ok": True,
            "reminders": [
                {"invoice_number": d.invoice_number, "tenant": d.tenant_name, "link": d.whatsapp_link}
                for d in drafts
            ],
        }
    finally:
        db.close()


def main() -> None:
    configure_logging()

    p = argparse.ArgumentParser(prog="edara")
    sub = p.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed-demo", help="create a small demo portfolio")
    seed.add_argument("--property-name", default="Demo Tower")
    seed.set_defaults(func=_cmd_seed)

    scan = sub.add_parser("scan", help="run one notification scan")
    scan.set_defaults(func=_cmd_scan)

    rem = sub.add_parser("reminders", help="list WhatsApp reminder links (nothing is logged)")
    rem.add_argument("--days-ahead", type=int, default=None, help="defaults to WHATSAPP_DEFAULT_WINDOW_DAYS")
    rem.set_defaults(func=_cmd_reminders)

    args = p.parse_args()
    print(json.dumps(args.func(args), ensure_ascii=False))


if __name__ == "__main__":
    main()
