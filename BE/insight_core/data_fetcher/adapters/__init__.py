"""
Provider adapters:
  - marketstack.MarketStackSource  (primary end-of-day prices)
  - yahoo.YahooSource              (fallback prices via yfinance)
  - fmp.fetch_statement            (annual fundamentals)
"""

from .marketstack import MarketStackSource
from .yahoo import YahooSource
from .fmp import fetch_statement

__all__ = ["MarketStackSource", "YahooSource", "fetch_statement"]
