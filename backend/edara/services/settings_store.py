# backend/edara/services/settings_store.py
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import settings
from ..domain.notification_settings import KeyValueStore, NotificationSettings
from ..models import AppSetting

log = logging.getLogger("edara.settings")


class SqlKeyValueStore:
    """KeyValueStore over the app_settings table."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, key: str) -> Optional[str]:
        row = self._db.scalar(select(AppSetting).where(AppSetting.key == key))
        return row.value_json if row else None

    def set(self, key: str, value: str) -> None:
        row = self._db.get(AppSetting, key)
        if row is None:
            row = AppSetting(key=key, value_json=value)
        else:
            row.value_json = value
            row.updated_at = datetime.utcnow()
        self._db.add(row)
        self._db.commit()


def _loads(s: Optional[str]) -> Any:
    if not s:
        return None
    try:
        return json.loads(s)
    except ValueError:
        log.warning("ignoring unreadable notification settings payload")
        return None


def load_notification_settings(kv: KeyValueStore, *, key: Optional[str] = None) -> NotificationSettings:
    raw = _loads(kv.get(key or settings.notification_settings_key))
    return NotificationSettings.from_dict(raw if isinstance(raw, dict) else None)


def save_notification_settings(
    kv: KeyValueStore, value: NotificationSettings, *, key: Optional[str] = None
) -> NotificationSettings:
    kv.set(key or settings.notification_settings_key, json.dumps(value.to_dict(), sort_keys=True))
    return value


def toggle_notification_setting(kv: KeyValueStore, alert_type: str) -> NotificationSettings:
    updated = load_notification_settings(kv).toggled(alert_type)
    return save_notification_settings(kv, updated)
