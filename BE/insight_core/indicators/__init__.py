"""
insight_core.indicators
=======================

Price-series analytics used by the terminal overview and menu:

- statistics   → describe / derive_signals / StatisticsEngine
- comparison   → percentage_change / HistoricalComparator
- fundamentals → statement registry, format_number, statement tables

Public API (re-exported)
------------------------
    describe, derive_signals, StatisticsEngine, StatisticsSnapshot, TradingSignals,
    percentage_change, HistoricalComparator, ComparisonRow,
    STATEMENTS, format_number, statement_table
"""

from __future__ import annotations

from .statistics import (
    StatisticsEngine,
    StatisticsSnapshot,
    TradingSignals,
    derive_signals,
    describe,
)
from .comparison import ComparisonRow, HistoricalComparator, percentage_change
from .fundamentals import STATEMENTS, StatementSpec, format_number, statement_table

__all__ = [
    # statistics
    "describe", "derive_signals", "StatisticsEngine", "StatisticsSnapshot", "TradingSignals",
    # comparison
    "percentage_change", "HistoricalComparator", "ComparisonRow",
    # fundamentals
    "STATEMENTS", "StatementSpec", "format_number", "statement_table",
]
