"""

from azauth.integrations.fastapi import create_fastapi_auth
from app.config import settings  # your own settings

fastapi_auth = create_fastapi_auth(url=settings.AZAUTH_URL)

get_current_profile = fastapi_auth.get_current_profile
get_optional_profile = fastapi_auth.get_optional_profile
require_roles = fastapi_auth.require_roles
require_not_banned = fastapi_auth.require_not_banned


"""
from __future__ import annotations

from .deps import FastAPIAuthentication
from .security import bearer_scheme, extract_token_from_request, find_token
from ...client import AzAuthClient
from ...domain.constants import DEFAULT_USER_AGENT
from ...settings import AzAuthSettings


def create_fastapi_auth(
    *,
    url: str,
    user_agent: str = DEFAULT_USER_AGENT,
    verify_ssl: bool = True,
    timeout: float | None = None,
) -> FastAPIAuthentication:
    """
    High-level helper for FastAPI apps:

    - Creates an AzAuthClient for the given website url
    - Wraps it in FastAPIAuthentication, exposing dependencies like:

        fastapi_auth.get_current_profile
        fastapi_auth.get_optional_profile
        fastapi_auth.require_roles(...)
        fastapi_auth.require_not_banned()
    """
    settings = AzAuthSettings(url=url, user_agent=user_agent, verify_ssl=verify_ssl, timeout=timeout)
    return FastAPIAuthentication(client=AzAuthClient.from_settings(settings))


__all__ = [
    "FastAPIAuthentication",
    "bearer_scheme",
    "create_fastapi_auth",
    "extract_token_from_request",
    "find_token",
]
