"""
fundamentals.py
────────────────
Annual financial statements shown by the terminal menu (options 1-7).

Key exports
===========
- STATEMENTS: menu option → StatementSpec(endpoint, columns, title)
- format_number(x) -> str            # 1.5e9 → "1.50 B"
- format_cell(value) -> str          # numbers via format_number, strings as-is, else "N/A"
- statement_table(records, spec) -> pandas.DataFrame of display strings

Records are the raw dicts returned by the FMP adapter; a field missing from a
record (or holding null/bool/nested data) renders as "N/A".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import math

import pandas as pd


# ────────────────────────────────────────────────────────────
# Registry
# ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class StatementSpec:
    title: str
    endpoint: str
    columns: Tuple[str, ...]


STATEMENTS: Dict[str, StatementSpec] = {
    "1": StatementSpec("Income Statement", "income-statement",
                       ("date", "revenue", "netIncome", "grossProfit")),
    "2": StatementSpec("Balance Sheet", "balance-sheet-statement",
                       ("date", "totalAssets", "totalLiabilities", "totalStockholdersEquity")),
    "3": StatementSpec("Cash Flow", "cash-flow-statement",
                       ("date", "netIncome", "dividendsPaid", "freeCashFlow")),
    "4": StatementSpec("Key Metrics", "key-metrics",
                       ("date", "revenuePerShare", "peRatio", "debtToEquity")),
    "5": StatementSpec("Financial Ratios", "ratios",
                       ("date", "cashRatio", "currentRatio", "quickRatio")),
    "6": StatementSpec("Growth Metrics", "financial-growth",
                       ("date", "revenueGrowth", "grossProfitGrowth", "ebitgrowth", "epsgrowth")),
    "7": StatementSpec("Enterprise Values", "enterprise-values",
                       ("date", "enterpriseValue", "marketCapitalization", "debtToEnterpriseValue")),
}


# ────────────────────────────────────────────────────────────
# Formatting
# ────────────────────────────────────────────────────────────

def format_number(num: float) -> str:
    """Compact human form with B/M/K suffixes; the sign is kept for negatives."""
    sign = "-" if num < 0 else ""
    mag = abs(num)
    if mag >= 1e9:
        return f"{sign}{mag / 1e9:.2f} B"
    if mag >= 1e6:
        return f"{sign}{mag / 1e6:.2f} M"
    if mag >= 1e3:
        return f"{sign}{mag / 1e3:.2f} K"
    return f"{num:.2f}"


def format_cell(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return "N/A"
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return "N/A"
        return format_number(float(value))
    if isinstance(value, str):
        return value
    return "N/A"


def statement_table(records: Iterable[Mapping[str, Any]], spec: StatementSpec) -> pd.DataFrame:
    """One row per record, one column per statement column, every cell a display string."""
    rows: List[Dict[str, str]] = []
    for rec in records:
        if not isinstance(rec, Mapping):
            continue
        rows.append({col: format_cell(rec.get(col)) for col in spec.columns})
    df = pd.DataFrame(rows)
    return df.reindex(columns=list(spec.columns)).fillna("N/A")
