from __future__ import annotations

import os

from .client import AzAuthClient
from .domain.constants import DEFAULT_USER_AGENT
from .settings import AzAuthSettings


def settings_from_env() -> AzAuthSettings:
    def _bool(key: str, default: bool = True) -> bool:
        raw = os.getenv(key)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _float(key: str) -> float | None:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return None
        try:
            return float(raw)
        except ValueError as exc:
            raise RuntimeError(f"Invalid {key}: {raw!r} is not a number") from exc

    url = os.getenv("AZAUTH_URL")
    if not url or not url.strip():
        raise RuntimeError("Missing AzAuth settings: AZAUTH_URL")

    return AzAuthSettings(
        url=url,
        user_agent=os.getenv("AZAUTH_USER_AGENT") or DEFAULT_USER_AGENT,
        verify_ssl=_bool("AZAUTH_VERIFY_SSL", True),
        timeout=_float("AZAUTH_TIMEOUT"),
    )


def client_from_env() -> AzAuthClient:
    """Convenience wrapper using env-configured settings."""
    return AzAuthClient.from_settings(settings_from_env())
