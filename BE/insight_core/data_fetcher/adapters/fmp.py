"""
fmp.py — Financial Modeling Prep statements
───────────────────────────────────────────
Env:
  FMP_API_KEY=...   # required

Main helper:
  - fetch_statement(symbol, endpoint) → list of annual records (raw dicts, newest first)

Endpoints used by the menu: income-statement, balance-sheet-statement,
cash-flow-statement, key-metrics, ratios, financial-growth, enterprise-values.
FMP reports failures as {"Error Message": "..."}; that, a non-list payload or a
missing key raises FetchError.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ...config import get_api_key, load_settings
from ...errors import FetchError
from ..base import get_json

PROVIDER = "FMP"


def fetch_statement(
    symbol: str,
    endpoint: str,
    *,
    api_key: Optional[str] = None,
    period: str = "annual",
) -> List[Dict[str, Any]]:
    key = api_key or get_api_key("fmp")
    if not key:
        raise FetchError("FMP_API_KEY is not set in the environment.")

    providers = load_settings().providers
    url = f"{providers.fmp_url.rstrip('/')}/{endpoint.strip('/')}/{symbol.strip().upper()}"
    data = get_json(
        url,
        {"period": period, "apikey": key},
        timeout=providers.request_timeout,
        provider=PROVIDER,
    )

    if isinstance(data, dict):
        msg = data.get("Error Message") or data.get("error") or "unexpected object payload"
        raise FetchError(f"{PROVIDER} {endpoint}: {msg}")
    if not isinstance(data, list):
        raise FetchError(f"{PROVIDER} {endpoint}: unexpected payload type {type(data).__name__}")
    return [row for row in data if isinstance(row, dict)]
