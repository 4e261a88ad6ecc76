# BE/insight_core/charting/ascii_chart.py
"""
ASCII price chart
─────────────────
Renders a `TimeSeries` onto a fixed-size character grid:

• price axis: floor(min) .. ceil(max); one label per plot row
• background grid: '-' every `h_grid_every` plot rows, '|' every
  `v_grid_every` columns starting at the left margin
• price polyline: linear interpolation between consecutive points in steps
  of `interpolation_step` columns; glyph follows the price direction
  ('/' rising, '\\' falling, '-' flat within `flat_slope_threshold`)
• time labels: every `n // label_count` points (at least every point)

The grid is colour-free; `ChartGrid.trend` ("up"/"down") and
`ChartGrid.line_cells` let the terminal layer colour the line.
Cells that fall outside the plotting region are dropped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Tuple

from ..config import ChartConfig
from ..series import TimeSeries

GLYPH_UP = "/"
GLYPH_DOWN = "\\"
GLYPH_FLAT = "-"


def _round_half_away(v: float) -> int:
    if v >= 0:
        return int(math.floor(v + 0.5))
    return -int(math.floor(-v + 0.5))


# ────────────────────────────────────────────────────────────
# Grid model
# ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ChartGrid:
    cells: Tuple[str, ...]                 # `height` rows of `width` characters
    price_labels: Tuple[float, ...]        # one per plot row, top to bottom
    time_labels: Tuple[str, ...]
    line_cells: FrozenSet[Tuple[int, int]]  # (row, col) occupied by the price line
    trend: str                             # "up" | "down"
    config: ChartConfig = field(default_factory=ChartConfig)

    def plot_rows(self) -> List[str]:
        """Plot-region slice of every plot row (left margin stripped)."""
        cfg = self.config
        return [row[cfg.price_margin:] for row in self.cells[: cfg.plot_height]]

    def price_label_text(self, row: int) -> str:
        return "$%-7.2f" % self.price_labels[row]

    def time_axis_text(self) -> str:
        return " " * (self.config.price_margin - 2) + "".join("%-10s " % t for t in self.time_labels)

    def to_text(self) -> str:
        """Plain rendering: price label, plot row, then the time axis."""
        lines = [
            f"{self.price_label_text(i)} {row}"
            for i, row in enumerate(self.plot_rows())
        ]
        lines.append(self.time_axis_text().rstrip())
        return "\n".join(lines)


# ────────────────────────────────────────────────────────────
# Renderer
# ────────────────────────────────────────────────────────────
class ChartRenderer:
    def __init__(self, config: Optional[ChartConfig] = None):
        self.config = config or ChartConfig()

    def render(self, series: TimeSeries) -> ChartGrid:
        cfg = self.config
        prices = list(series.prices[-cfg.max_points:])
        labels = list(series.labels[-cfg.max_points:])
        n = len(prices)
        plot_h = cfg.plot_height

        min_price = math.floor(min(prices))
        max_price = math.ceil(max(prices))
        price_range = max_price - min_price
        flat = max(prices) == min(prices)

        grid = self._background()
        line: set = set()

        if flat:
            ys = [plot_h // 2] * n
        else:
            ys = [(max_price - p) * plot_h / price_range for p in prices]

        if n == 1:
            self._put(grid, line, ys[0], 0.0, GLYPH_FLAT)
        else:
            for i in range(n - 1):
                self._segment(grid, line, i, n, ys[i], ys[i + 1])

        step = max(1, n // cfg.label_count)
        time_labels = tuple(labels[i] for i in range(0, n, step))
        if plot_h > 1:
            price_labels = tuple(max_price - i * price_range / (plot_h - 1) for i in range(plot_h))
        else:
            price_labels = (float(max_price),)

        return ChartGrid(
            cells=tuple("".join(row) for row in grid),
            price_labels=tuple(float(p) for p in price_labels),
            time_labels=time_labels,
            line_cells=frozenset(line),
            trend="up" if series.current > series.opening else "down",
            config=cfg,
        )

    # ------------------------------------------------------------------
    def _background(self) -> List[List[str]]:
        cfg = self.config
        grid = [[" "] * cfg.width for _ in range(cfg.height)]
        for r in range(cfg.plot_height):
            if r % cfg.h_grid_every == 0:
                for c in range(cfg.price_margin, cfg.width):
                    grid[r][c] = "-"
        for c in range(cfg.price_margin, cfg.width, cfg.v_grid_every):
            for r in range(cfg.plot_height):
                grid[r][c] = "|"
        return grid

    def _segment(self, grid: List[List[str]], line: set, i: int, n: int, y1: float, y2: float) -> None:
        cfg = self.config
        x1 = i * cfg.plot_width / (n - 1)
        x2 = (i + 1) * cfg.plot_width / (n - 1)
        slope = (y2 - y1) / (x2 - x1)
        # rows grow downward, so a rising price has a negative row slope
        if slope < -cfg.flat_slope_threshold:
            glyph = GLYPH_UP
        elif slope > cfg.flat_slope_threshold:
            glyph = GLYPH_DOWN
        else:
            glyph = GLYPH_FLAT

        k = 0
        x = x1
        while x < x2:
            self._put(grid, line, y1 + slope * (x - x1), x, glyph)
            k += 1
            x = x1 + k * cfg.interpolation_step

    def _put(self, grid: List[List[str]], line: set, y: float, x: float, glyph: str) -> None:
        cfg = self.config
        row = _round_half_away(y)
        col = _round_half_away(x) + cfg.price_margin
        if 0 <= row < cfg.plot_height and cfg.price_margin <= col < cfg.width:
            grid[row][col] = glyph
            line.add((row, col))


def render_chart(series: TimeSeries, config: Optional[ChartConfig] = None) -> ChartGrid:
    """Convenience wrapper: `ChartRenderer(config).render(series)`."""
    return ChartRenderer(config).render(series)


def colorize_rows(grid: ChartGrid, up_color: str, down_color: str, reset: str) -> Sequence[str]:
    """Plot rows with line cells wrapped in the trend colour; grid cells stay plain."""
    cfg = grid.config
    color = up_color if grid.trend == "up" else down_color
    out = []
    for r, row in enumerate(grid.cells[: cfg.plot_height]):
        parts = []
        for c in range(cfg.price_margin, cfg.width):
            ch = row[c]
            if (r, c) in grid.line_cells:
                parts.append(f"{color}{ch}{reset}")
            else:
                parts.append(ch)
        out.append("".join(parts))
    return out
