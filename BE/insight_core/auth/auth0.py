# BE/insight_core/auth/auth0.py
"""
Auth0 session provider
──────────────────────
Resource-owner password grant against `https://<domain>/oauth/token`.

• login(credentials)  → AuthSession, or AuthError with Auth0's error text
• is_valid(session)   → non-empty token and now < expires_at
• AuthSession.clear() → wipes token, user id and expiry

Env:
  AUTH0_DOMAIN, AUTH0_CLIENT_ID, AUTH0_CLIENT_SECRET
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from ..config import Auth0Settings, load_settings
from ..errors import AuthError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass
class AuthSession:
    access_token: str
    user_id: str
    expires_at: float  # epoch seconds

    def clear(self) -> None:
        self.access_token = ""
        self.user_id = ""
        self.expires_at = 0.0


class Auth0Provider:
    def __init__(
        self,
        settings: Optional[Auth0Settings] = None,
        *,
        clock: Callable[[], float] = time.time,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.settings = settings or load_settings().auth0
        self.clock = clock
        self.timeout = timeout

    @property
    def token_url(self) -> str:
        return f"https://{self.settings.domain}/oauth/token"

    def _payload(self, credentials: Credentials) -> Dict[str, Any]:
        s = self.settings
        return {
            "client_id": s.client_id,
            "client_secret": s.client_secret,
            "username": credentials.username,
            "password": credentials.password,
            "grant_type": "password",
            "audience": f"https://{s.domain}/api/v2/",
            "scope": s.scope,
        }

    def login(self, credentials: Credentials) -> AuthSession:
        if not self.settings.configured:
            raise AuthError("Auth0 is not configured (AUTH0_DOMAIN, AUTH0_CLIENT_ID, AUTH0_CLIENT_SECRET).")

        try:
            resp = requests.post(self.token_url, json=self._payload(credentials), timeout=self.timeout)
            data = resp.json()
        except requests.RequestException as e:
            raise AuthError(f"Auth0 request failed: {e}") from e
        except ValueError as e:
            raise AuthError(f"Auth0 returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise AuthError("Auth0 returned an unexpected payload")

        token = data.get("access_token")
        if not token:
            err = data.get("error") or f"HTTP {resp.status_code}"
            desc = data.get("error_description") or "no access token in response"
            logger.debug("Auth0 login rejected for %s: %s", credentials.username, err)
            raise AuthError(f"Auth0 Error: {err} - {desc}")

        try:
            expires_in = float(data.get("expires_in", self.settings.default_expiry_secs))
        except (TypeError, ValueError):
            expires_in = float(self.settings.default_expiry_secs)

        return AuthSession(
            access_token=str(token),
            user_id=credentials.username,
            expires_at=self.clock() + expires_in,
        )

    def is_valid(self, session: Optional[AuthSession]) -> bool:
        if session is None or not session.access_token:
            return False
        return self.clock() < session.expires_at

    def logout(self, session: Optional[AuthSession]) -> None:
        if session is not None:
            session.clear()
