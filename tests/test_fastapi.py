# tests/test_fastapi.py
import json

import httpx
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from azauth import AzAuthClient, PlayerProfile
from azauth.integrations.fastapi import FastAPIAuthentication, create_fastapi_auth

TOKENS = {"admin-token": "Admin", "member-token": "Member", "banned-token": "Member"}


@pytest.fixture
def app(profile_payload):
    def handler(request):
        token = json.loads(request.content)["access_token"]
        if token not in TOKENS:
            return httpx.Response(422, json={"message": "Invalid token"})
        role = {"name": TOKENS[token], "color": "#AAAAAA"}
        banned = token == "banned-token"
        return httpx.Response(200, json={**profile_payload, "access_token": token, "role": role, "banned": banned})

    transport = httpx.MockTransport(handler)
    auth = FastAPIAuthentication(
        client=AzAuthClient("https://example.com", client_factory=lambda: httpx.Client(transport=transport))
    )

    app = FastAPI()

    @app.get("/me")
    async def me(profile: PlayerProfile = Depends(auth.get_current_profile)):
        return {"username": profile.username, "role": profile.role_name}

    @app.get("/maybe")
    async def maybe(profile: PlayerProfile | None = Depends(auth.get_optional_profile)):
        return {"username": profile.username if profile else None}

    @app.get("/admin")
    async def admin(profile: PlayerProfile = Depends(auth.require_roles("Admin"))):
        return {"ok": True}

    @app.get("/play")
    async def play(profile: PlayerProfile = Depends(auth.require_not_banned())):
        return {"ok": True}

    return app


@pytest.fixture
def http(app):
    return TestClient(app)


def test_current_profile_from_bearer(http):
    resp = http.get("/me", headers={"Authorization": "Bearer member-token"})

    assert resp.status_code == 200
    assert resp.json() == {"username": "Notch", "role": "Member"}


def test_current_profile_from_cookie(http):
    http.cookies.set("access_token", "admin-token")
    resp = http.get("/me")

    assert resp.status_code == 200
    assert resp.json()["role"] == "Admin"


def test_missing_token_is_unauthorized(http):
    resp = http.get("/me")

    assert resp.status_code == 401
    assert resp.json() == {"detail": "Not authenticated"}


def test_rejected_token_is_unauthorized(http):
    resp = http.get("/me", headers={"Authorization": "Bearer nope"})

    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid token"}


def test_optional_profile(http):
    assert http.get("/maybe").json() == {"username": None}
    assert http.get("/maybe", headers={"Authorization": "Bearer nope"}).json() == {"username": None}
    assert http.get("/maybe", headers={"Authorization": "Bearer member-token"}).json() == {"username": "Notch"}


def test_require_roles(http):
    assert http.get("/admin", headers={"Authorization": "Bearer admin-token"}).status_code == 200
    assert http.get("/admin", headers={"Authorization": "Bearer member-token"}).status_code == 403


def test_create_fastapi_auth():
    auth = create_fastapi_auth(url="https://example.com", timeout=5.0)

    assert isinstance(auth, FastAPIAuthentication)
    assert auth.client.url == "https://example.com"


def test_create_fastapi_auth_user_agent():
    auth = create_fastapi_auth(url="https://example.com", user_agent="Launcher/3.1")

    assert auth.client._headers()["User-Agent"] == "Launcher/3.1"


def test_require_not_banned(http):
    assert http.get("/play", headers={"Authorization": "Bearer member-token"}).status_code == 200

    resp = http.get("/play", headers={"Authorization": "Bearer banned-token"})
    assert resp.status_code == 403
    assert resp.json() == {"detail": "Player is banned"}
