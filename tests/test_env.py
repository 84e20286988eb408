# tests/test_env.py
import pytest

from azauth.client import AzAuthClient
from azauth.domain.constants import DEFAULT_USER_AGENT, Endpoint
from azauth.env import client_from_env, settings_from_env
from azauth.settings import AzAuthSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("AZAUTH_URL", "AZAUTH_USER_AGENT", "AZAUTH_VERIFY_SSL", "AZAUTH_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)


def test_settings_from_env_defaults(monkeypatch):
    monkeypatch.setenv("AZAUTH_URL", "https://example.com")

    settings = settings_from_env()

    assert settings == AzAuthSettings(url="https://example.com")
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.verify_ssl is True
    assert settings.timeout is None


def test_settings_from_env_overrides(monkeypatch):
    monkeypatch.setenv("AZAUTH_URL", "https://example.com/ ")
    monkeypatch.setenv("AZAUTH_USER_AGENT", "Launcher/1.0")
    monkeypatch.setenv("AZAUTH_VERIFY_SSL", "no")
    monkeypatch.setenv("AZAUTH_TIMEOUT", "2.5")

    settings = settings_from_env()

    assert settings.user_agent == "Launcher/1.0"
    assert settings.verify_ssl is False
    assert settings.timeout == 2.5
    assert settings.base_url == "https://example.com"


def test_settings_from_env_missing_url():
    with pytest.raises(RuntimeError, match="AZAUTH_URL"):
        settings_from_env()


def test_settings_from_env_invalid_timeout(monkeypatch):
    monkeypatch.setenv("AZAUTH_URL", "https://example.com")
    monkeypatch.setenv("AZAUTH_TIMEOUT", "soon")

    with pytest.raises(RuntimeError, match="AZAUTH_TIMEOUT"):
        settings_from_env()


def test_client_from_env(monkeypatch):
    monkeypatch.setenv("AZAUTH_URL", "https://example.com")

    assert client_from_env().url == "https://example.com"


def test_client_from_env_settings_composes_endpoint_urls(monkeypatch):
    monkeypatch.setenv("AZAUTH_URL", "https://example.com/ ")

    client = AzAuthClient.from_settings(settings_from_env())

    assert client._endpoint_url(Endpoint.VERIFY) == "https://example.com/api/auth/verify"
    assert client_from_env()._endpoint_url(Endpoint.LOGOUT) == "https://example.com/api/auth/logout"
