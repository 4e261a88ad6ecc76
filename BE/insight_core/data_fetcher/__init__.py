"""
insight_core.data_fetcher
─────────────────────────
Price and fundamentals providers behind one small contract:

- DataSource.fetch_recent(symbol, max_points) -> TimeSeries   (FetchError on failure)
- DataSource.fetch_close_on(symbol, day)      -> float | None
- DataSource.fetch_closes_on(symbol, days)    -> {day: float | None}   (optional)

`default_source()` builds the chain used by the CLI:
MarketStack (when MARKETSTACK_API_KEY is set) → Yahoo.

Adapters live in insight_core.data_fetcher.adapters.*
"""

from __future__ import annotations

from typing import Any, List, Tuple

from ..config import get_api_key
from .base import DataSource, FallbackSource, get_json
from .adapters import MarketStackSource, YahooSource, fetch_statement


def default_source() -> FallbackSource:
    sources: List[Tuple[str, Any]] = []
    if get_api_key("marketstack"):
        sources.append(("MarketStack", MarketStackSource()))
    sources.append(("Yahoo", YahooSource()))
    return FallbackSource(sources)


def diagnostics_for(source: Any) -> dict:
    """
    Which provider answered and which failed, for a FallbackSource.
    Plain sources report themselves as used with no failures.
    """
    if isinstance(source, FallbackSource):
        return source.diagnostics()
    return {"used": type(source).__name__, "failed": []}


__all__ = [
    "DataSource", "FallbackSource", "get_json",
    "MarketStackSource", "YahooSource", "fetch_statement",
    "default_source", "diagnostics_for",
]
