from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials
from starlette.concurrency import run_in_threadpool

from .security import DEFAULT_COOKIE_NAME, bearer_scheme, extract_token_from_request, find_token
from ...client import AzAuthClient
from ...domain.entities import PlayerProfile
from ...domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FastAPIAuthentication:
    """
    FastAPI dependencies backed by an AzAuthClient.

    Tokens are checked with `verify` on every request; nothing is cached.
    """

    client: AzAuthClient
    cookie_name: str = DEFAULT_COOKIE_NAME

    async def _verify(self, token: str) -> PlayerProfile:
        # the client is blocking
        return await run_in_threadpool(self.client.verify, token)

    # ------------------------------------------------------------------ #
    # Base dependencies
    # ------------------------------------------------------------------ #

    async def get_current_profile(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> PlayerProfile:
        """Dependency: Require a valid access token."""
        token = extract_token_from_request(request, credentials, self.cookie_name)
        try:
            return await self._verify(token)
        except AuthenticationError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=exc.message,
            ) from exc

    async def get_optional_profile(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> PlayerProfile | None:
        """Dependency: Optional authentication."""
        token = find_token(request, credentials, self.cookie_name)
        if token is None:
            return None

        try:
            return await self._verify(token)
        except AuthenticationError as exc:
            logger.debug("Rejected access token treated as anonymous: %s", exc.message)
            return None

    # ------------------------------------------------------------------ #
    # Authorization dependency factories
    # ------------------------------------------------------------------ #

    def require_roles(self, *roles: str) -> Callable:
        """
        Dependency factory: require the player's website role to be one of `roles`.
        """

        async def dependency(
                profile: PlayerProfile = Depends(self.get_current_profile),
        ) -> PlayerProfile:
            if profile.role_name not in roles:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Missing required role",
                )
            return profile

        return dependency

    def require_not_banned(self) -> Callable:
        """
        Dependency factory: reject banned players.
        """

        async def dependency(
                profile: PlayerProfile = Depends(self.get_current_profile),
        ) -> PlayerProfile:
            if profile.banned:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Player is banned",
                )
            return profile

        return dependency
