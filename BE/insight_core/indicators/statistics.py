# BE/insight_core/indicators/statistics.py
"""
insight_core.indicators.statistics
==================================

Descriptive statistics and qualitative signals over a price series.

- describe(prices)          → StatisticsSnapshot
- derive_signals(snapshot)  → TradingSignals
- StatisticsEngine          → thin class wrapper taking a TimeSeries

Conventions
-----------
- Volatility is the *population* standard deviation (divide by n).
- Momentum is the % change of the current price against the opening price.
- Trend strength is (up − down) / (up + down) * 100 over consecutive moves;
  equal consecutive prices count as neither.
- Signal thresholds are exclusive: momentum of exactly ±5 is NEUTRAL,
  volatility of exactly 2 % is MODERATE.

Degenerate inputs never raise: a zero opening gives momentum 0, a series
without moves gives trend strength 0 and direction NEUTRAL.

Example:
    >>> snap = describe([100, 102, 101, 105])
    >>> snap.mean, snap.momentum, snap.up_movements, snap.down_movements
    (102.0, 5.0, 2, 1)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..errors import InvalidInput
from ..series import TimeSeries

# Thresholds (percent)
MOMENTUM_THRESHOLD = 5.0
HIGH_VOLATILITY = 2.0
MODERATE_VOLATILITY = 1.0

_EPS = 1e-12


# ──────────────────────────────────────────────────────────────────────────────
# Models
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class StatisticsSnapshot:
    count: int
    current: float
    opening: float
    high: float
    low: float
    mean: float
    volatility: float
    momentum: float
    up_movements: int
    down_movements: int
    trend_strength: float

    @property
    def price_change(self) -> float:
        return self.current - self.opening

    @property
    def volatility_pct(self) -> float:
        if self.mean == 0:
            return 0.0
        return self.volatility * 100.0 / self.mean


@dataclass(frozen=True)
class TradingSignals:
    position: str            # "ABOVE" | "BELOW"
    distance_pct: float      # absolute distance from mean, percent
    momentum_signal: str     # "UPWARD" | "DOWNWARD" | "NEUTRAL"
    volatility_tier: str     # "HIGH" | "MODERATE" | "LOW"
    volatility_pct: float
    trend_direction: str     # "UP" | "DOWN" | "NEUTRAL"


# ──────────────────────────────────────────────────────────────────────────────
# Pure functions
# ──────────────────────────────────────────────────────────────────────────────

def describe(prices: Sequence[float]) -> StatisticsSnapshot:
    """Compute the snapshot for an oldest-first price sequence."""
    if prices is None or len(prices) == 0:
        raise InvalidInput("no data")

    arr = np.asarray(prices, dtype=float)
    current = float(arr[-1])
    opening = float(arr[0])

    if abs(opening) <= _EPS:
        momentum = 0.0
    else:
        momentum = (current - opening) * 100.0 / opening

    moves = np.diff(arr)
    up = int((moves > 0).sum())
    down = int((moves < 0).sum())
    total = up + down
    trend_strength = (up - down) * 100.0 / total if total else 0.0

    high = float(arr.max())
    low = float(arr.min())
    if high == low:
        # float summation drifts on values like 0.1; a constant series is exact
        mean, volatility = high, 0.0
    else:
        mean = min(max(float(arr.mean()), low), high)
        volatility = float(arr.std())

    return StatisticsSnapshot(
        count=int(arr.size),
        current=current,
        opening=opening,
        high=high,
        low=low,
        mean=mean,
        volatility=volatility,
        momentum=float(momentum),
        up_movements=up,
        down_movements=down,
        trend_strength=float(trend_strength),
    )


def derive_signals(snapshot: StatisticsSnapshot) -> TradingSignals:
    """Map a snapshot to qualitative signals."""
    position = "ABOVE" if snapshot.current > snapshot.mean else "BELOW"
    if snapshot.mean == 0:
        distance = 0.0
    else:
        distance = abs(snapshot.current - snapshot.mean) / snapshot.mean * 100.0

    if snapshot.momentum > MOMENTUM_THRESHOLD:
        momentum_signal = "UPWARD"
    elif snapshot.momentum < -MOMENTUM_THRESHOLD:
        momentum_signal = "DOWNWARD"
    else:
        momentum_signal = "NEUTRAL"

    vol_pct = snapshot.volatility_pct
    if vol_pct > HIGH_VOLATILITY:
        tier = "HIGH"
    elif vol_pct > MODERATE_VOLATILITY:
        tier = "MODERATE"
    else:
        tier = "LOW"

    if snapshot.trend_strength > 0:
        direction = "UP"
    elif snapshot.trend_strength < 0:
        direction = "DOWN"
    else:
        direction = "NEUTRAL"

    return TradingSignals(
        position=position,
        distance_pct=distance,
        momentum_signal=momentum_signal,
        volatility_tier=tier,
        volatility_pct=vol_pct,
        trend_direction=direction,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Engine
# ──────────────────────────────────────────────────────────────────────────────

class StatisticsEngine:
    """Stateless; kept as a class so the orchestrator can take it as a collaborator."""

    def analyze(self, series: TimeSeries) -> StatisticsSnapshot:
        return describe(series.prices)

    def signals(self, snapshot: StatisticsSnapshot) -> TradingSignals:
        return derive_signals(snapshot)
