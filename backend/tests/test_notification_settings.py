# backend/tests/test_notification_settings.py
from __future__ import annotations

import pytest

from edara.domain.notification_settings import NotificationSettings
from edara.services.settings_store import (
    SqlKeyValueStore,
    load_notification_settings,
    save_notification_settings,
    toggle_notification_setting,
)


class DictKeyValueStore:
    def __init__(self, initial=None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


def test_defaults_show_everything():
    s = load_notification_settings(DictKeyValueStore())
    assert s.to_dict() == {k: True for k in NotificationSettings.keys()}
    assert s.is_enabled("something_new")


def test_toggle_persists_and_flips_back():
    kv = DictKeyValueStore()
    assert toggle_notification_setting(kv, "payment_overdue").payment_overdue is False
    assert load_notification_settings(kv).payment_overdue is False
    assert toggle_notification_setting(kv, "payment_overdue").payment_overdue is True


def test_toggle_unknown_type_raises():
    with pytest.raises(ValueError):
        toggle_notification_setting(DictKeyValueStore(), "nope")


def test_unreadable_payload_falls_back_to_defaults():
    kv = DictKeyValueStore({"notification-settings": "{not json"})
    assert load_notification_settings(kv) == NotificationSettings()


def test_unknown_keys_are_ignored():
    s = NotificationSettings.from_dict({"system": False, "legacy_flag": False})
    assert s.system is False
    assert "legacy_flag" not in s.to_dict()


def test_sql_store_round_trip(db):
    kv = SqlKeyValueStore(db)
    save_notification_settings(kv, NotificationSettings(lease_expired=False))
    save_notification_settings(kv, NotificationSettings(lease_expired=False, system=False))

    loaded = load_notification_settings(SqlKeyValueStore(db))
    assert loaded.lease_expired is False
    assert loaded.system is False
    assert loaded.payment_reminder is True
