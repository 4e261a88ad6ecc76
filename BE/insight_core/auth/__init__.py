"""Login sessions (Auth0 password grant)."""

from .auth0 import Auth0Provider, AuthSession, Credentials

__all__ = ["Auth0Provider", "AuthSession", "Credentials"]
