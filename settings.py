# settings.py
from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("payouts.settings")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # -----------------------
    # Runtime
    # -----------------------
    # dev | staging | prod
    ENV: str = "dev"
    PORT: int = Field(default=4242, ge=1, le=65535)
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # comma separated, "*" allows any origin
    CORS_ALLOW_ORIGINS: str = "*"

    # -----------------------
    # Stripe
    # -----------------------
    STRIPE_SECRET_KEY: str = ""
    STRIPE_WEBHOOK_SECRET: str = ""
    STRIPE_API_VERSION: str = ""

    def cors_origins(self) -> list[str]:
        return [o.strip() for o in (self.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]

    def webhook_secret(self) -> str | None:
        value = (self.STRIPE_WEBHOOK_SECRET or "").strip()
        return value or None


def _is_strict_env(env: str | None) -> bool:
    return (env or "").strip().lower() in ("staging", "prod")


def validate_env_settings(current: Settings | None = None) -> list[str]:
    """
    Report Stripe settings missing for staging/prod. Startup continues: payout routes
    surface Stripe auth errors and the webhook answers 400 until the secret is set.
    """
    s = current or settings
    if not _is_strict_env(s.ENV):
        return []

    missing: list[str] = []
    if not (s.STRIPE_SECRET_KEY or "").strip():
        missing.append("STRIPE_SECRET_KEY")
    if not s.webhook_secret():
        missing.append("STRIPE_WEBHOOK_SECRET")

    for name in missing:
        logger.warning("settings_missing name=%s env=%s", name, s.ENV)
    return missing


settings = Settings()
