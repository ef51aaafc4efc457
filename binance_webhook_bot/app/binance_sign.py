"""Helpers for signing Binance Futures API requests."""

from __future__ import annotations

import hashlib
import hmac
import time
from collections.abc import Iterable


class MissingSecretError(ValueError):
    """Raised when a request would be signed without an API secret."""


def build_query(pairs: Iterable[tuple[str, object]]) -> str:
    """Join pairs as key=value in the given order; the result is signed byte for byte."""
    return "&".join(f"{key}={value}" for key, value in pairs)


def sign_payload(secret: str, payload: str) -> str:
    """Return HMAC SHA256 hex digest for payload."""
    if not secret:
        raise MissingSecretError("Binance API secret is not configured")
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def signed_query(
    pairs: Iterable[tuple[str, object]],
    api_secret: str,
    timestamp: int | None = None,
) -> str:
    """Append timestamp, sign, then append signature as the last parameter."""
    ts = int(time.time() * 1000) if timestamp is None else int(timestamp)
    query = build_query([*pairs, ("timestamp", ts)])
    signature = sign_payload(api_secret, query)
    return f"{query}&signature={signature}"
