from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.date_windows import WHATSAPP_DEFAULT_WINDOW_DAYS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    app_version: str = "2026-10-01.v1"
    database_url: str = "sqlite:///./edara.db"

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["*"]

    # ---- Money / locale ----
    currency_code: str = "KWD"

    # ---- WhatsApp reminders ----
    whatsapp_base_url: str = "https://wa.me"
    whatsapp_country_code: str = "965"  # Kuwait
    whatsapp_default_window_days: int = WHATSAPP_DEFAULT_WINDOW_DAYS
    reminder_signature: str = "Edara Property Management"

    # ---- Notification display settings ----
    notification_settings_key: str = "notification-settings"

    def model_post_init(self, __context) -> None:
        env = (self.app_env or "local").strip().lower()
        is_prod = env in ("prod", "production")

        # Hard fail: wildcard CORS in prod
        if is_prod:
            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")

        cc = (self.whatsapp_country_code or "").strip().lstrip("+")
        if not cc.isdigit():
            raise ValueError("whatsapp_country_code must be digits only")
        object.__setattr__(self, "whatsapp_country_code", cc)


settings = Settings()
