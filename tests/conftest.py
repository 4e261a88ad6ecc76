from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

import pytest

from insight_core.config import load_settings
from insight_core.errors import FetchError
from insight_core.series import TimeSeries

_ENV_VARS = (
    "MARKETSTACK_API_KEY", "FMP_API_KEY", "OPENAI_API_KEY", "GROQ_API_KEY", "OPENAI_MODEL",
    "AUTH0_DOMAIN", "AUTH0_CLIENT_ID", "AUTH0_CLIENT_SECRET",
    "INSIGHT_SETTINGS", "INSIGHT_LOG_VERBOSE", "INSIGHT_LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


class FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSource:
    """In-memory data source; records every lookup."""

    def __init__(
        self,
        series: Optional[TimeSeries] = None,
        closes: Optional[Dict[date, float]] = None,
        failing_days: tuple = (),
    ):
        self.series = series
        self.closes = closes or {}
        self.failing_days = set(failing_days)
        self.single_calls: List[date] = []

    def fetch_recent(self, symbol: str, max_points: int) -> TimeSeries:
        if self.series is None:
            raise FetchError(f"no data for {symbol}")
        return self.series

    def fetch_close_on(self, symbol: str, day: date) -> Optional[float]:
        self.single_calls.append(day)
        if day in self.failing_days:
            raise FetchError(f"lookup failed for {day}")
        return self.closes.get(day)


@pytest.fixture
def sample_series() -> TimeSeries:
    return TimeSeries.from_pairs("aapl", [100, 102, 101, 105], ["09:00", "10:00", "11:00", "12:00"])
