# BE/insight_core/data_fetcher/base.py
"""
Data source contract + shared plumbing
──────────────────────────────────────
Every price provider implements the same three calls:

    fetch_recent(symbol, max_points)   -> TimeSeries          (raises FetchError)
    fetch_close_on(symbol, day)        -> float | None
    fetch_closes_on(symbol, days)      -> {day: float | None}  (optional, batched)

`FallbackSource` chains providers in order and keeps diagnostics about which
one answered (`last_source`) and which failed (`failed_sources`).

`get_json` is the one HTTP helper the REST adapters share: GET with timeout,
polite retry on 429/5xx, and every transport/parse failure raised as FetchError.
"""

from __future__ import annotations

import logging
import time
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

import requests

from ..errors import FetchError, InsightError
from ..series import TimeSeries

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20  # seconds
MAX_RETRIES = 3
BACKOFF_BASE = 0.8
_UA = {"User-Agent": "AlphaInsight/1.0"}


# ────────────────────────────────────────────────────────────
# Contract
# ────────────────────────────────────────────────────────────
@runtime_checkable
class DataSource(Protocol):
    def fetch_recent(self, symbol: str, max_points: int) -> TimeSeries: ...

    def fetch_close_on(self, symbol: str, day: date) -> Optional[float]: ...


# ────────────────────────────────────────────────────────────
# HTTP core with simple backoff (429/5xx)
# ────────────────────────────────────────────────────────────
def get_json(
    url: str,
    params: Dict[str, Any],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = MAX_RETRIES,
    provider: str = "provider",
) -> Any:
    """GET `url` and return parsed JSON or raise FetchError."""
    last_err: Optional[str] = None
    for attempt in range(1, retries + 1):
        try:
            resp = requests.get(url, params=params, headers=_UA, timeout=timeout)
            if resp.status_code == 429 or resp.status_code >= 500:
                last_err = f"HTTP {resp.status_code}"
                time.sleep(BACKOFF_BASE * attempt)
                continue
            if resp.status_code >= 400:
                raise FetchError(f"{provider} request failed: HTTP {resp.status_code} {resp.text[:200]}")
            return resp.json()
        except ValueError as e:
            # requests' JSONDecodeError is both a ValueError and a RequestException
            raise FetchError(f"{provider} returned invalid JSON: {e}") from e
        except requests.RequestException as e:
            last_err = str(e)
            time.sleep(BACKOFF_BASE * attempt)

    raise FetchError(f"{provider} request failed after retries: {last_err or 'unknown'}")


# ────────────────────────────────────────────────────────────
# Fallback chain
# ────────────────────────────────────────────────────────────
class FallbackSource:
    """Try each (name, source) in order; the first one that answers wins."""

    def __init__(self, sources: Sequence[Tuple[str, Any]]):
        if not sources:
            raise ValueError("FallbackSource needs at least one source")
        self.sources: List[Tuple[str, Any]] = list(sources)
        self.last_source: Optional[str] = None
        self.failed_sources: List[str] = []

    def diagnostics(self) -> Dict[str, Any]:
        return {"used": self.last_source, "failed": list(self.failed_sources)}

    def fetch_recent(self, symbol: str, max_points: int) -> TimeSeries:
        self.last_source = None
        self.failed_sources = []
        for name, src in self.sources:
            try:
                series = src.fetch_recent(symbol, max_points)
            except InsightError as e:
                logger.warning("%s failed for %s: %s", name, symbol, e)
                self.failed_sources.append(f"{name}: {e}")
                continue
            self.last_source = name
            return series
        raise FetchError(f"all sources failed for {symbol}: " + "; ".join(self.failed_sources))

    def _ordered(self) -> List[Tuple[str, Any]]:
        # prefer whichever source produced the current series
        if self.last_source is None:
            return self.sources
        first = [s for s in self.sources if s[0] == self.last_source]
        rest = [s for s in self.sources if s[0] != self.last_source]
        return first + rest

    def fetch_close_on(self, symbol: str, day: date) -> Optional[float]:
        errors = []
        for name, src in self._ordered():
            try:
                price = src.fetch_close_on(symbol, day)
            except InsightError as e:
                logger.debug("%s close lookup failed for %s on %s: %s", name, symbol, day, e)
                errors.append(f"{name}: {e}")
                continue
            if price is not None:
                return price
        if errors and len(errors) == len(self.sources):
            raise FetchError("; ".join(errors))
        return None

    def fetch_closes_on(self, symbol: str, days: Iterable[date]) -> Dict[date, Optional[float]]:
        days = list(days)
        errors = []
        for name, src in self._ordered():
            fetch_many = getattr(src, "fetch_closes_on", None)
            if fetch_many is None:
                continue
            try:
                return fetch_many(symbol, days)
            except InsightError as e:
                logger.debug("%s batch close lookup failed for %s: %s", name, symbol, e)
                errors.append(f"{name}: {e}")
        raise FetchError("no batch lookup available: " + ("; ".join(errors) or "unsupported"))
