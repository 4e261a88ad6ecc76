# BE/insight_core/series.py
"""
Price series model
──────────────────
`TimeSeries` is the one value every analytics stage consumes:

• ordered oldest → newest (index 0 is the opening price, the last index the
  current price)
• 1..max_points points, each a positive finite price plus a display label
• immutable; invalid input raises `InvalidInput`

Providers usually return rows newest-first; use `TimeSeries.from_newest_first`
for those so the reversal and truncation live in one place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

from .errors import InvalidInput

DEFAULT_MAX_POINTS = 24


@dataclass(frozen=True)
class PricePoint:
    price: float
    label: str


@dataclass(frozen=True)
class TimeSeries:
    symbol: str
    points: Tuple[PricePoint, ...]
    max_points: int = DEFAULT_MAX_POINTS

    def __post_init__(self) -> None:
        symbol = (self.symbol or "").strip().upper()
        if not symbol:
            raise InvalidInput("symbol must be a non-empty ticker")
        object.__setattr__(self, "symbol", symbol)

        points = tuple(self.points)
        if not points:
            raise InvalidInput("no data")
        if len(points) > self.max_points:
            raise InvalidInput(f"series holds {len(points)} points, max is {self.max_points}")
        for p in points:
            if not isinstance(p.price, (int, float)) or isinstance(p.price, bool):
                raise InvalidInput(f"price must be numeric, got {p.price!r}")
            if not math.isfinite(p.price) or p.price <= 0:
                raise InvalidInput(f"price must be positive and finite, got {p.price!r}")
        object.__setattr__(self, "points", points)

    # ────────────────────────────────────────────────────────────
    # Factories
    # ────────────────────────────────────────────────────────────
    @classmethod
    def from_pairs(
        cls,
        symbol: str,
        prices: Sequence[float],
        labels: Sequence[str],
        *,
        max_points: int = DEFAULT_MAX_POINTS,
    ) -> "TimeSeries":
        """Build from parallel oldest-first sequences."""
        if len(prices) != len(labels):
            raise InvalidInput(f"{len(prices)} prices but {len(labels)} labels")
        pts = tuple(PricePoint(_as_price(p), str(l)) for p, l in zip(prices, labels))
        return cls(symbol, pts, max_points)

    @classmethod
    def from_newest_first(
        cls,
        symbol: str,
        rows: Iterable[Tuple[float, str]],
        *,
        max_points: int = DEFAULT_MAX_POINTS,
    ) -> "TimeSeries":
        """Keep the `max_points` most recent (price, label) rows and reverse them."""
        recent = list(rows)[:max_points]
        recent.reverse()
        pts = tuple(PricePoint(_as_price(p), str(l)) for p, l in recent)
        return cls(symbol, pts, max_points)

    # ────────────────────────────────────────────────────────────
    # Accessors
    # ────────────────────────────────────────────────────────────
    @property
    def prices(self) -> Tuple[float, ...]:
        return tuple(p.price for p in self.points)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(p.label for p in self.points)

    @property
    def current(self) -> float:
        return self.points[-1].price

    @property
    def opening(self) -> float:
        return self.points[0].price

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PricePoint]:
        return iter(self.points)


def _as_price(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"price must be numeric, got {value!r}") from exc
