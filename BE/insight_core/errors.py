# BE/insight_core/errors.py
"""
Exception taxonomy shared by the core and its adapters.

InvalidInput  → rejected call (empty series, bad symbol, bad price)
FetchError    → a data provider could not deliver (network, API error, parse)
AuthError     → login failed or the identity provider answered with an error

Degenerate-but-valid data (flat series, zero opening price) never raises;
the statistics and chart layers have defined fallbacks for it.
"""

from __future__ import annotations


class InsightError(Exception):
    """Base class for every error raised on purpose by this package."""


class InvalidInput(InsightError, ValueError):
    pass


class FetchError(InsightError, RuntimeError):
    pass


class AuthError(InsightError, RuntimeError):
    pass


__all__ = ["InsightError", "InvalidInput", "FetchError", "AuthError"]
