# backend/edara/domain/notification_settings.py
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Protocol


class KeyValueStore(Protocol):
    """Where display preferences are persisted (SQL table in prod, dict in tests)."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


@dataclass(frozen=True)
class NotificationSettings:
    """
    Which alert types the inbox shows. Generation is not affected:
    hidden types are still recorded, only filtered at render time.
    """

    payment_reminder: bool = True
    payment_overdue: bool = True
    maintenance_update: bool = True
    lease_expiring: bool = True
    lease_expired: bool = True
    system: bool = True

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "NotificationSettings":
        if not raw:
            return cls()
        known = {k: bool(v) for k, v in raw.items() if k in cls.keys()}
        return cls(**known)

    def to_dict(self) -> dict[str, bool]:
        return {k: bool(getattr(self, k)) for k in self.keys()}

    def is_enabled(self, alert_type: str) -> bool:
        # unknown types are always shown
        if alert_type not in self.keys():
            return True
        return bool(getattr(self, alert_type))

    def toggled(self, alert_type: str) -> "NotificationSettings":
        if alert_type not in self.keys():
            raise ValueError(f"unknown notification type: {alert_type}")
        return replace(self, **{alert_type: not getattr(self, alert_type)})
