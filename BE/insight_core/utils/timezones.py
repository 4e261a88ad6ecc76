# BE/insight_core/utils/timezones.py
"""
Local clock + market status utilities with **no dependency** on the app's config module.

The terminal shows a coarse market status computed in the user's local
timezone: weekends are closed, weekdays are open from 09:00 to 16:00.
Functions accept an optional reference datetime so tests can pin the clock.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

import tzlocal

# Detect USER's local timezone (fallback to UTC)
try:
    LOCAL_TZ = ZoneInfo(tzlocal.get_localzone_name())
except Exception:  # pragma: no cover - depends on host configuration
    LOCAL_TZ = ZoneInfo("UTC")

MARKET_OPEN = time(9, 0)
MARKET_CLOSE = time(16, 0)


def now_local() -> datetime:
    """Timezone-aware 'now' in the user's local timezone."""
    return datetime.now(LOCAL_TZ)


def is_weekend(dt: datetime) -> bool:
    # 5=Sat, 6=Sun
    return dt.weekday() >= 5


def market_status(reference_dt: Optional[datetime] = None) -> str:
    """
    Return "Open", "Closed" or "Closed (Weekend)" for the given moment
    (default: now in the local timezone).
    """
    now = reference_dt or now_local()
    if is_weekend(now):
        return "Closed (Weekend)"
    if MARKET_OPEN <= now.time() < MARKET_CLOSE:
        return "Open"
    return "Closed"
