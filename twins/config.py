"""Application settings."""

from __future__ import annotations

import json
from typing import Annotated, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_list(value: str | list[str] | None) -> list[str]:
    """Accept a JSON list or a comma separated string."""
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return []
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
                if isinstance(parsed, list):
                    return [str(item) for item in parsed]
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in raw.split(",") if item.strip()]
    return []


class Settings(BaseSettings):
    """Central configuration entrypoint for the site back end."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    # Server
    base_url: str = "http://127.0.0.1:8000"
    allowed_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Observability
    log_level: str = "INFO"

    # Metrics endpoint authentication
    metrics_username: str = "prometheus"
    metrics_password: str | None = None

    # Email configuration
    email_enabled: bool = True
    email_backend: Literal["resend", "smtp"] = "resend"
    resend_api_key: str | None = None
    resend_api_url: str = "https://api.resend.com/emails"
    email_timeout_seconds: float = 10.0
    email_from_name: str = "80k Twins Contact"
    email_from_addr: str = "no-reply@yourdomain.com"
    contact_recipients: Annotated[list[str], NoDecode] = [
        "info@80ktwins.com",
        "kamar@80ktwins.com",
        "kiyel@80ktwins.com",
    ]

    # SMTP fallback
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_starttls: bool = True
    smtp_ssl: bool = False

    # Contact endpoint
    contact_rate_limit: str = "10/minute"

    # Front end features composed on page load
    page_features: Annotated[list[str], NoDecode] = ["contact-form"]

    @field_validator(
        "allowed_origins", "contact_recipients", "page_features", mode="before"
    )
    @classmethod
    def parse_list_fields(cls, value: str | list[str] | None) -> list[str]:
        """Normalize list-valued env input."""
        return _parse_list(value)

    @property
    def is_production(self) -> bool:
        """Return True when running in production."""
        return self.environment == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Expose allowed CORS origins for middleware wiring."""
        return self.allowed_origins

    @property
    def email_sender(self) -> str:
        """Formatted ``From`` identity used for every outgoing message."""
        return f"{self.email_from_name} <{self.email_from_addr}>"


settings = Settings()
