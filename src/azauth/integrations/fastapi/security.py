from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# OpenAPI-visible scheme; auto_error off so cookies can be used instead
bearer_scheme = HTTPBearer(auto_error=False)

DEFAULT_COOKIE_NAME = "access_token"
_BEARER_PREFIX = "Bearer "


def find_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> Optional[str]:
    """
    Look up the AzAuth access token sent with `request`.

    Checked in order: the parsed bearer credentials, the raw Authorization
    header, then the `cookie_name` cookie.
    """
    candidates = [credentials.credentials if credentials else None]

    header = request.headers.get("Authorization") or ""
    if header.startswith(_BEARER_PREFIX):
        candidates.append(header[len(_BEARER_PREFIX):])

    candidates.append(request.cookies.get(cookie_name))

    for candidate in candidates:
        token = (candidate or "").strip()
        if token:
            return token
    return None


def extract_token_from_request(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> str:
    """Same as `find_token`, but a missing token is a 401."""
    token = find_token(request, credentials, cookie_name)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return token
