# BE/insight_core/data_fetcher/adapters/yahoo.py
"""
Yahoo adapter
─────────────
Fallback price source built on yfinance.Ticker.history:
• fetch_recent     → daily closes over the last `history_days` days
• fetch_close_on   → close for one calendar day (None when not a trading day)
• fetch_closes_on  → one history call spanning every requested day

`fetch_history` never raises outward (returns an empty DataFrame on failure);
the `YahooSource` methods turn an empty frame into FetchError where a series
is required.

Dependencies: yfinance, pandas
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd
import yfinance as yf

from ...config import load_settings
from ...errors import FetchError
from ...series import TimeSeries

_DEFAULT_INTERVAL = "1d"

logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────
# Helpers: yfinance history
# ────────────────────────────────────────────────────────────

def fetch_history(
    symbol: str,
    *,
    period: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    interval: str = _DEFAULT_INTERVAL,
) -> pd.DataFrame:
    """
    Get daily history via yfinance for one symbol, either by `period` ("30d")
    or by [start, end). Returns empty DataFrame on failure (never raises outward).
    """
    try:
        kwargs = {"interval": interval, "auto_adjust": True}
        if start is not None:
            kwargs.update(start=start.isoformat(), end=(end or start + timedelta(days=1)).isoformat())
        else:
            kwargs["period"] = period or "30d"
        df = yf.Ticker(symbol).history(**kwargs)
        if not isinstance(df, pd.DataFrame) or df.empty:
            return pd.DataFrame()
        cols = {c: c.capitalize() for c in df.columns}
        df = df.rename(columns=cols)
        if "Close" not in df.columns:
            return pd.DataFrame()
        return df[["Close"]].dropna()
    except Exception as e:
        logger.debug("yfinance history failed for %s: %s", symbol, e)
        return pd.DataFrame()


def _closes_by_day(df: pd.DataFrame) -> Dict[date, float]:
    out: Dict[date, float] = {}
    for ts, close in df["Close"].items():
        value = float(close)
        if value > 0:
            out[pd.Timestamp(ts).date()] = value
    return out


# ────────────────────────────────────────────────────────────
# Source
# ────────────────────────────────────────────────────────────

class YahooSource:
    def __init__(self, *, history_days: Optional[int] = None):
        self.history_days = history_days or load_settings().providers.history_days

    def fetch_recent(self, symbol: str, max_points: int) -> TimeSeries:
        symbol = symbol.strip().upper()
        df = fetch_history(symbol, period=f"{self.history_days}d")
        if df.empty:
            raise FetchError(f"Yahoo returned no history for {symbol}")
        pairs: List[Tuple[float, str]] = [
            (float(close), pd.Timestamp(ts).strftime("%m-%d"))
            for ts, close in df["Close"].items()
            if float(close) > 0
        ]
        if not pairs:
            raise FetchError(f"Yahoo returned no usable closes for {symbol}")
        pairs.reverse()  # yfinance is oldest-first
        return TimeSeries.from_newest_first(symbol, pairs, max_points=max_points)

    def fetch_close_on(self, symbol: str, day: date) -> Optional[float]:
        df = fetch_history(symbol.strip().upper(), start=day)
        if df.empty:
            return None
        return _closes_by_day(df).get(day)

    def fetch_closes_on(self, symbol: str, days: Iterable[date]) -> Dict[date, Optional[float]]:
        wanted = sorted(set(days))
        if not wanted:
            return {}
        df = fetch_history(symbol.strip().upper(), start=wanted[0], end=wanted[-1] + timedelta(days=1))
        if df.empty:
            raise FetchError(f"Yahoo returned no history for {symbol} between {wanted[0]} and {wanted[-1]}")
        closes = _closes_by_day(df)
        return {d: closes.get(d) for d in wanted}
