# BE/insight_core/orchestrator.py
"""
Analysis pipeline
─────────────────
    source.fetch_recent → TimeSeries
        → StatisticsEngine (snapshot + signals)
        → ChartRenderer    (ChartGrid)
        → HistoricalComparator (one row per lookback window)
    = AnalysisReport

The orchestrator only wires collaborators together; every computation lives
in the component that owns it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional, Sequence

from .charting.ascii_chart import ChartGrid, ChartRenderer
from .config import AppSettings, LookbackWindow, load_settings
from .errors import FetchError, InvalidInput
from .indicators.comparison import ComparisonRow, HistoricalComparator
from .indicators.statistics import StatisticsEngine, StatisticsSnapshot, TradingSignals
from .series import TimeSeries


@dataclass(frozen=True)
class AnalysisReport:
    series: TimeSeries
    snapshot: StatisticsSnapshot
    signals: TradingSignals
    chart: ChartGrid
    comparison: List[ComparisonRow]


class AnalysisOrchestrator:
    def __init__(
        self,
        source: Any,
        *,
        settings: Optional[AppSettings] = None,
        engine: Optional[StatisticsEngine] = None,
        renderer: Optional[ChartRenderer] = None,
        comparator: Optional[HistoricalComparator] = None,
    ):
        self.settings = settings or load_settings()
        self.source = source
        self.engine = engine or StatisticsEngine()
        self.renderer = renderer or ChartRenderer(self.settings.chart)
        self.comparator = comparator or HistoricalComparator(source, self.settings.windows)

    @property
    def windows(self) -> Sequence[LookbackWindow]:
        return self.settings.windows

    def load(self, symbol: str) -> TimeSeries:
        """Fetch the recent series; InvalidInput from the provider's rows surfaces as FetchError."""
        try:
            return self.source.fetch_recent(symbol, self.settings.chart.max_points)
        except InvalidInput as e:
            raise FetchError(f"unusable data for {symbol}: {e}") from e

    def analyze(
        self,
        series: TimeSeries,
        *,
        now: Optional[datetime] = None,
        progress: Optional[Callable[[Iterable[ComparisonRow]], Iterable[ComparisonRow]]] = None,
    ) -> AnalysisReport:
        """`progress` may wrap the lazy comparison rows (e.g. a tqdm bar)."""
        snapshot = self.engine.analyze(series)
        rows: Iterable[ComparisonRow] = self.comparator.compare_iter(series, now=now)
        if progress is not None:
            rows = progress(rows)
        return AnalysisReport(
            series=series,
            snapshot=snapshot,
            signals=self.engine.signals(snapshot),
            chart=self.renderer.render(series),
            comparison=list(rows),
        )

    def run(self, symbol: str, *, now: Optional[datetime] = None, progress=None) -> AnalysisReport:
        return self.analyze(self.load(symbol), now=now, progress=progress)
