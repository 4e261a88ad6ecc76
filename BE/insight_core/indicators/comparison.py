# BE/insight_core/indicators/comparison.py
"""
Historical price comparison
───────────────────────────
Compares the current price against point-in-time closes for a fixed list of
lookback windows ("1 hour", "4 hours", ... "3 months").

Each window maps to a calendar date in the user's local timezone:
    date = (now - hours_ago).date()

Rows are independent: a lookup that raises or returns nothing produces a row
with `percent_change=None` and the remaining windows are still attempted.
When the source offers `fetch_closes_on(symbol, dates)` all dates are resolved
in one call; if that batch call fails the comparator falls back to per-date
`fetch_close_on` calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from ..config import LookbackWindow, load_settings
from ..series import TimeSeries
from ..utils.timezones import now_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonRow:
    label: str
    hours_ago: int
    percent_change: Optional[float]   # None → unavailable
    past_price: Optional[float] = None
    date: Optional[date] = None

    @property
    def available(self) -> bool:
        return self.percent_change is not None


def percentage_change(current: float, past: float) -> float:
    """(current - past) / past * 100; 0.0 when the past price is not positive."""
    if past <= 0:
        return 0.0
    return (current - past) / past * 100.0


def window_date(window: LookbackWindow, now: datetime) -> date:
    return (now - timedelta(hours=window.hours_ago)).date()


class HistoricalComparator:
    """
    `source` needs `fetch_close_on(symbol, date) -> float | None`; an optional
    `fetch_closes_on(symbol, dates) -> {date: float | None}` enables batching.
    """

    def __init__(self, source, windows: Optional[Sequence[LookbackWindow]] = None):
        self.source = source
        self.windows = tuple(windows) if windows is not None else None

    def _windows(self, windows: Optional[Iterable[LookbackWindow]]) -> List[LookbackWindow]:
        if windows is not None:
            return list(windows)
        if self.windows is not None:
            return list(self.windows)
        return list(load_settings().windows)

    def _batch(self, symbol: str, dates: List[date]) -> Optional[Dict[date, Optional[float]]]:
        fetch_many = getattr(self.source, "fetch_closes_on", None)
        if fetch_many is None:
            return None
        try:
            return dict(fetch_many(symbol, sorted(set(dates))))
        except Exception as e:
            logger.debug("batch close lookup failed for %s, falling back to per-date: %s", symbol, e)
            return None

    def _single(self, symbol: str, day: date) -> Optional[float]:
        try:
            return self.source.fetch_close_on(symbol, day)
        except Exception as e:
            logger.debug("close lookup failed for %s on %s: %s", symbol, day, e)
            return None

    def compare_iter(
        self,
        series: TimeSeries,
        windows: Optional[Iterable[LookbackWindow]] = None,
        now: Optional[datetime] = None,
    ) -> Iterator[ComparisonRow]:
        """Yield one row per window, in window order."""
        now = now or now_local()
        wins = self._windows(windows)
        dates = [window_date(w, now) for w in wins]
        batch = self._batch(series.symbol, dates)
        current = series.current

        for w, day in zip(wins, dates):
            if batch is not None:
                past = batch.get(day)
            else:
                past = self._single(series.symbol, day)
            if past is None:
                yield ComparisonRow(w.label, w.hours_ago, None, None, day)
                continue
            try:
                past_f = float(past)
            except (TypeError, ValueError):
                yield ComparisonRow(w.label, w.hours_ago, None, None, day)
                continue
            yield ComparisonRow(w.label, w.hours_ago, percentage_change(current, past_f), past_f, day)

    def compare(
        self,
        series: TimeSeries,
        windows: Optional[Iterable[LookbackWindow]] = None,
        now: Optional[datetime] = None,
    ) -> List[ComparisonRow]:
        return list(self.compare_iter(series, windows, now))
