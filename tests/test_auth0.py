import pytest
import requests

from conftest import FakeResponse
from insight_core.auth import Auth0Provider, AuthSession, Credentials
from insight_core.auth import auth0 as auth0_mod
from insight_core.config import Auth0Settings
from insight_core.errors import AuthError

SETTINGS = Auth0Settings(domain="tenant.auth0.com", client_id="cid", client_secret="csecret")


class Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def fake_post(monkeypatch):
    calls = []

    def install(payload, status_code=200):
        def _post(url, json=None, timeout=None):
            calls.append({"url": url, "json": json, "timeout": timeout})
            if isinstance(payload, Exception):
                raise payload
            return FakeResponse(payload, status_code)
        monkeypatch.setattr(auth0_mod.requests, "post", _post)
        return calls

    return install


def test_login_success(fake_post):
    calls = fake_post({"access_token": "tok", "expires_in": 3600, "token_type": "Bearer"})
    clock = Clock()
    provider = Auth0Provider(SETTINGS, clock=clock)
    session = provider.login(Credentials("alice", "pw"))

    assert session.access_token == "tok"
    assert session.user_id == "alice"
    assert session.expires_at == 4600.0
    assert provider.is_valid(session)

    call = calls[0]
    assert call["url"] == "https://tenant.auth0.com/oauth/token"
    assert call["json"] == {
        "client_id": "cid",
        "client_secret": "csecret",
        "username": "alice",
        "password": "pw",
        "grant_type": "password",
        "audience": "https://tenant.auth0.com/api/v2/",
        "scope": "openid profile email",
    }


def test_missing_expires_in_defaults_to_one_day(fake_post):
    fake_post({"access_token": "tok"})
    session = Auth0Provider(SETTINGS, clock=Clock()).login(Credentials("alice", "pw"))
    assert session.expires_at == 1000.0 + 86400


def test_error_payload_raises_auth_error(fake_post):
    fake_post({"error": "invalid_grant", "error_description": "Wrong email or password."}, status_code=403)
    with pytest.raises(AuthError, match="Wrong email or password"):
        Auth0Provider(SETTINGS, clock=Clock()).login(Credentials("alice", "bad"))


def test_network_failure_raises_auth_error(fake_post):
    fake_post(requests.ConnectionError("unreachable"))
    with pytest.raises(AuthError, match="request failed"):
        Auth0Provider(SETTINGS).login(Credentials("alice", "pw"))


def test_unconfigured_provider_refuses_login(fake_post):
    calls = fake_post({"access_token": "tok"})
    with pytest.raises(AuthError, match="not configured"):
        Auth0Provider(Auth0Settings()).login(Credentials("alice", "pw"))
    assert calls == []


def test_settings_pick_up_environment(monkeypatch):
    monkeypatch.setenv("AUTH0_DOMAIN", "env.auth0.com")
    monkeypatch.setenv("AUTH0_CLIENT_ID", "id")
    monkeypatch.setenv("AUTH0_CLIENT_SECRET", "secret")
    provider = Auth0Provider()
    assert provider.settings.configured
    assert provider.token_url == "https://env.auth0.com/oauth/token"


def test_session_expiry():
    clock = Clock()
    provider = Auth0Provider(SETTINGS, clock=clock)
    session = AuthSession("tok", "alice", expires_at=1500.0)
    assert provider.is_valid(session)
    clock.now = 1500.0
    assert not provider.is_valid(session)
    assert not provider.is_valid(None)


def test_clear_wipes_session():
    provider = Auth0Provider(SETTINGS, clock=Clock())
    session = AuthSession("tok", "alice", expires_at=5000.0)
    provider.logout(session)
    assert session.access_token == ""
    assert session.user_id == ""
    assert session.expires_at == 0.0
    assert not provider.is_valid(session)


def test_credentials_repr_hides_password():
    assert "pw" not in repr(Credentials("alice", "pw"))
