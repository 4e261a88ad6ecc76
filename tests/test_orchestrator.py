from datetime import date, datetime, timezone

import pytest

from conftest import FakeSource
from insight_core.errors import FetchError, InvalidInput
from insight_core.orchestrator import AnalysisOrchestrator

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def test_run_builds_full_report(sample_series):
    source = FakeSource(series=sample_series, closes={date(2024, 3, 15): 100.0})
    report = AnalysisOrchestrator(source).run("aapl", now=NOW)

    assert report.series is sample_series
    assert report.snapshot.mean == pytest.approx(102.0)
    assert report.signals.position == "ABOVE"
    assert report.chart.trend == "up"
    assert len(report.comparison) == 7
    assert report.comparison[0].percent_change == pytest.approx(5.0)


def test_progress_hook_sees_every_row(sample_series):
    seen = []

    def progress(rows):
        for row in rows:
            seen.append(row.label)
            yield row

    orchestrator = AnalysisOrchestrator(FakeSource(series=sample_series))
    report = orchestrator.analyze(sample_series, now=NOW, progress=progress)
    assert seen == [r.label for r in report.comparison]
    assert len(seen) == len(orchestrator.windows)


def test_load_propagates_fetch_error():
    with pytest.raises(FetchError):
        AnalysisOrchestrator(FakeSource()).load("NOPE")


def test_load_wraps_invalid_provider_rows():
    class BadSource(FakeSource):
        def fetch_recent(self, symbol, max_points):
            raise InvalidInput("price must be positive and finite, got -1.0")

    with pytest.raises(FetchError, match="unusable data"):
        AnalysisOrchestrator(BadSource()).load("X")


def test_load_requests_configured_max_points(sample_series):
    asked = []

    class Recording(FakeSource):
        def fetch_recent(self, symbol, max_points):
            asked.append((symbol, max_points))
            return sample_series

    AnalysisOrchestrator(Recording()).load("AAPL")
    assert asked == [("AAPL", 24)]
