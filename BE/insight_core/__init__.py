"""
insight_core
────────────
Stock analytics behind the Alpha Insight terminal:

- series        → TimeSeries / PricePoint
- indicators    → statistics, historical comparison, fundamentals tables
- charting      → fixed-size ASCII price chart
- orchestrator  → fetch → stats → chart → comparison
- data_fetcher  → MarketStack / Yahoo / FMP adapters
- auth          → Auth0 login sessions
- strategy      → LLM narrative analysis
"""

from .errors import AuthError, FetchError, InsightError, InvalidInput
from .series import PricePoint, TimeSeries

__version__ = "1.0.0"

__all__ = [
    "InsightError", "InvalidInput", "FetchError", "AuthError",
    "PricePoint", "TimeSeries",
    "__version__",
]
