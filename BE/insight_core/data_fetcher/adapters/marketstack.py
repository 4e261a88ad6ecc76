"""
marketstack.py — adapter for the MarketStack end-of-day REST API
────────────────────────────────────────────────────────────────
Primary price source.

Env:
  MARKETSTACK_API_KEY=...   # required

Calls (all on /eod):
  - fetch_recent(symbol, max_points)  → last `history_days` days, sort=desc, limit=100,
                                        newest `max_points` rows, oldest-first TimeSeries
  - fetch_close_on(symbol, day)       → date_from = date_to = day, limit=1
  - fetch_closes_on(symbol, days)     → one date_from=min / date_to=max request

Notes:
  • labels are the trading date formatted "%m-%d"
  • days without a trading session (weekends, holidays) come back as None
  • MarketStack reports API errors as {"error": {"code": ..., "message": ...}} → FetchError
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ...config import get_api_key, load_settings
from ...errors import FetchError
from ...series import TimeSeries
from ...utils.timezones import now_local
from ..base import get_json

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 100
PROVIDER = "MarketStack"


def _row_day(row: Dict[str, Any]) -> Optional[date]:
    raw = row.get("date")
    if not isinstance(raw, str) or len(raw) < 10:
        return None
    try:
        return datetime.strptime(raw[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def _row_close(row: Dict[str, Any]) -> Optional[float]:
    close = row.get("close")
    if close is None or isinstance(close, bool):
        return None
    try:
        value = float(close)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


class MarketStackSource:
    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        history_days: Optional[int] = None,
        timeout: Optional[float] = None,
        clock=now_local,
    ):
        providers = load_settings().providers
        self.api_key = api_key if api_key is not None else get_api_key("marketstack")
        self.base_url = (base_url or providers.marketstack_url).rstrip("/")
        self.history_days = history_days or providers.history_days
        self.timeout = timeout or providers.request_timeout
        self.clock = clock

    # ------------------------------------------------------------------
    def _eod(self, symbol: str, **params: Any) -> List[Dict[str, Any]]:
        if not self.api_key:
            raise FetchError("MARKETSTACK_API_KEY is not set in the environment.")
        query = {"access_key": self.api_key, "symbols": symbol}
        query.update(params)
        data = get_json(f"{self.base_url}/eod", query, timeout=self.timeout, provider=PROVIDER)

        if not isinstance(data, dict):
            raise FetchError(f"{PROVIDER}: unexpected payload type {type(data).__name__}")
        if "error" in data:
            err = data["error"]
            msg = err.get("message") if isinstance(err, dict) else err
            raise FetchError(f"{PROVIDER} API error: {msg}")
        rows = data.get("data")
        if not isinstance(rows, list):
            raise FetchError(f"{PROVIDER}: no valid data found in response")
        return [r for r in rows if isinstance(r, dict)]

    def fetch_recent(self, symbol: str, max_points: int) -> TimeSeries:
        symbol = symbol.strip().upper()
        end = self.clock()
        start = end - timedelta(days=self.history_days)
        rows = self._eod(
            symbol,
            date_from=start.strftime("%Y-%m-%d"),
            date_to=end.strftime("%Y-%m-%d"),
            limit=HISTORY_LIMIT,
            sort="desc",
        )

        pairs: List[Tuple[float, str]] = []
        for row in rows:
            close, day = _row_close(row), _row_day(row)
            if close is None or day is None:
                continue
            pairs.append((close, day.strftime("%m-%d")))
        if not pairs:
            raise FetchError(f"No data points available for {symbol}")

        logger.debug("%s: %d rows for %s, keeping %d", PROVIDER, len(pairs), symbol, min(len(pairs), max_points))
        return TimeSeries.from_newest_first(symbol, pairs, max_points=max_points)

    def fetch_close_on(self, symbol: str, day: date) -> Optional[float]:
        iso = day.strftime("%Y-%m-%d")
        rows = self._eod(symbol.strip().upper(), date_from=iso, date_to=iso, limit=1)
        if not rows:
            return None
        return _row_close(rows[0])

    def fetch_closes_on(self, symbol: str, days: Iterable[date]) -> Dict[date, Optional[float]]:
        wanted = sorted(set(days))
        if not wanted:
            return {}
        rows = self._eod(
            symbol.strip().upper(),
            date_from=wanted[0].strftime("%Y-%m-%d"),
            date_to=wanted[-1].strftime("%Y-%m-%d"),
            limit=1000,
        )
        by_day: Dict[date, float] = {}
        for row in rows:
            day, close = _row_day(row), _row_close(row)
            if day is not None and close is not None:
                by_day.setdefault(day, close)
        return {d: by_day.get(d) for d in wanted}
