"""Service status and credential presence snapshots."""

from __future__ import annotations

from datetime import UTC, datetime

from app.config import AppConfig

SERVICE_NAME = "Binance Webhook Bot"


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def service_status(config: AppConfig) -> dict[str, str]:
    return {
        "status": "running",
        "service": SERVICE_NAME,
        "timestamp": utc_timestamp(),
        "environment": config.environment,
    }


def credential_status(config: AppConfig) -> dict[str, bool | str]:
    """Presence of credentials only; values never leave the process."""
    return {
        "has_api_key": config.has_api_key,
        "has_secret_key": config.has_secret_key,
        "environment": config.environment,
    }
