# tests/conftest.py
from __future__ import annotations

from typing import Any, Callable, List

import httpx
import pytest

from azauth import AzAuthClient

BASE_URL = "https://example.com"


@pytest.fixture
def profile_payload() -> dict[str, Any]:
    return {
        "id": 1,
        "username": "Notch",
        "uuid": "069a79f4-44e9-4726-a5be-fca90e38aaf5",
        "email": "notch@example.com",
        "email_verified": True,
        "money": 12.5,
        "banned": False,
        "role": {"name": "Admin", "color": "#FF5555"},
        "created_at": "2021-05-04T12:30:00Z",
        "access_token": "token-1",
        "unknown_field": {"ignored": True},
    }


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(requests_seen: List[httpx.Request]) -> Callable[..., AzAuthClient]:
    """
    Build an AzAuthClient whose HTTP calls are answered by `handler`.

    Every request is recorded in `requests_seen`.
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response], url: str = BASE_URL) -> AzAuthClient:
        def recording(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording)
        return AzAuthClient(url, client_factory=lambda: httpx.Client(transport=transport))

    return _make
