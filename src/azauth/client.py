from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union, overload

import httpx

from .adapters.json.mapper import JsonMapper
from .adapters.json.payloads import build_request, encode_body
from .adapters.json.shapes import Shape, shape_of
from .domain.constants import (
    DEFAULT_USER_AGENT,
    JSON_CONTENT_TYPE,
    UNPROCESSABLE_ENTITY,
    Endpoint,
)
from .domain.entities import AuthFailure, PlayerProfile
from .domain.exceptions import AuthenticationError
from .settings import AzAuthSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

ShapeLike = Union[Shape[T], Type[T]]
ClientFactory = Callable[[], httpx.Client]

PLAYER_PROFILE: Shape[PlayerProfile] = shape_of(PlayerProfile)
AUTH_FAILURE: Shape[AuthFailure] = shape_of(AuthFailure)


class AzAuthClient:
    """
    Client for the AzAuth API of an Azuriom website.

    - authenticate: email + password -> profile
    - verify:       access token -> profile
    - logout:       invalidates an access token

    Each call opens its own HTTP client, so one instance can be shared
    between threads.
    """

    __slots__ = ("_url", "_user_agent", "_mapper", "_client_factory")

    def __init__(
        self,
        url: str,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        mapper: Optional[JsonMapper] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        if url is None or not str(url).strip():
            raise ValueError("url must not be empty")

        url = str(url).strip()
        self._url = url
        self._user_agent = user_agent
        self._mapper = mapper or JsonMapper()
        self._client_factory = client_factory or _default_client

        if url.startswith("http://"):
            logger.warning("The url %s uses HTTP, this is not secure, please consider upgrading to HTTPS", url)

    @classmethod
    def from_settings(
        cls,
        settings: AzAuthSettings,
        *,
        mapper: Optional[JsonMapper] = None,
    ) -> AzAuthClient:
        client_kwargs: Dict[str, Any] = {"verify": settings.verify_ssl, "follow_redirects": True}
        if settings.timeout is not None:
            client_kwargs["timeout"] = settings.timeout

        def factory() -> httpx.Client:
            return httpx.Client(**client_kwargs)

        return cls(
            settings.base_url,
            user_agent=settings.user_agent,
            mapper=mapper,
            client_factory=factory,
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def mapper(self) -> JsonMapper:
        return self._mapper

    # ------------------------------------------------------------------ #
    # API
    # ------------------------------------------------------------------ #

    @overload
    def authenticate(self, email: str, password: str) -> PlayerProfile: ...

    @overload
    def authenticate(self, email: str, password: str, shape: ShapeLike[T]) -> T: ...

    def authenticate(self, email: str, password: str, shape: Any = PLAYER_PROFILE) -> Any:
        """
        Authenticate a player with their credentials and return their profile.

        Raises:
            AuthenticationError: the credentials were rejected
            ResponseFormatError: the response does not match `shape`
            httpx.HTTPError:     the request could not be completed
        """
        body = build_request(Endpoint.AUTHENTICATE, email=email, password=password)
        return self._post(Endpoint.AUTHENTICATE, body, _as_shape(shape))

    @overload
    def verify(self, access_token: str) -> PlayerProfile: ...

    @overload
    def verify(self, access_token: str, shape: ShapeLike[T]) -> T: ...

    def verify(self, access_token: str, shape: Any = PLAYER_PROFILE) -> Any:
        """
        Verify an access token and return the associated profile.

        Same errors as `authenticate`.
        """
        body = build_request(Endpoint.VERIFY, access_token=access_token)
        return self._post(Endpoint.VERIFY, body, _as_shape(shape))

    def logout(self, access_token: str) -> None:
        """
        Invalidate the given access token.

        A new token can only be obtained through `authenticate`.
        """
        body = build_request(Endpoint.LOGOUT, access_token=access_token)
        self._post(Endpoint.LOGOUT, body, None)

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def _endpoint_url(self, endpoint: Endpoint) -> str:
        return f"{self._url.removesuffix('/')}/api/auth/{endpoint.value}"

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._user_agent, "Content-Type": JSON_CONTENT_TYPE}

    def _post(
        self,
        endpoint: Endpoint,
        body: Dict[str, Any],
        shape: Optional[Shape[T]],
    ) -> Optional[T]:
        url = self._endpoint_url(endpoint)
        content = encode_body(body)

        with self._client_factory() as client:
            with client.stream("POST", url, content=content, headers=self._headers()) as resp:
                logger.debug("POST %s -> %s", url, resp.status_code)

                if resp.status_code == UNPROCESSABLE_ENTITY:
                    failure = self._mapper.decode(resp.read(), AUTH_FAILURE)
                    raise AuthenticationError(failure.message)

                resp.raise_for_status()

                if shape is None:
                    return None

                return self._mapper.decode(resp.read(), shape)


def _as_shape(shape: ShapeLike[T]) -> Shape[T]:
    if isinstance(shape, Shape):
        return shape
    return shape_of(shape)


def _default_client() -> httpx.Client:
    return httpx.Client(follow_redirects=True)
