# BE/insight_core/utils/__init__.py
"""
Small cross-cutting helpers shared across the backend.
This module re-exports the most commonly used utilities so callers can do:

    from insight_core.utils import get_logger, read_yaml, market_status

Nothing here should import heavy libs or create circular deps with
domain modules (data_fetcher, indicators, charting...). Keep it lean.
"""

from .logging import get_logger
from .io import read_yaml
from .timezones import LOCAL_TZ, now_local, market_status

__all__ = [
    # logging
    "get_logger",
    # io
    "read_yaml",
    # time/tz
    "LOCAL_TZ",
    "now_local",
    "market_status",
]
