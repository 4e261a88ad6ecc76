from datetime import date

import pytest

from conftest import FakeSource
from insight_core.data_fetcher import FallbackSource, diagnostics_for
from insight_core.errors import FetchError


def test_first_working_source_wins(sample_series):
    chain = FallbackSource([("Broken", FakeSource()), ("Good", FakeSource(series=sample_series))])
    assert chain.fetch_recent("AAPL", 24) is sample_series
    assert chain.last_source == "Good"
    assert len(chain.failed_sources) == 1
    assert chain.failed_sources[0].startswith("Broken:")
    assert diagnostics_for(chain) == {"used": "Good", "failed": chain.failed_sources}


def test_all_sources_failing_raises():
    chain = FallbackSource([("A", FakeSource()), ("B", FakeSource())])
    with pytest.raises(FetchError, match="all sources failed"):
        chain.fetch_recent("AAPL", 24)
    assert chain.last_source is None
    assert len(chain.failed_sources) == 2


def test_close_lookup_prefers_the_source_that_served_the_series(sample_series):
    day = date(2024, 3, 14)
    first = FakeSource(closes={day: 1.0})
    second = FakeSource(series=sample_series, closes={day: 2.0})
    chain = FallbackSource([("First", first), ("Second", second)])
    chain.fetch_recent("AAPL", 24)
    assert chain.fetch_close_on("AAPL", day) == 2.0
    assert first.single_calls == []


def test_close_lookup_falls_through_to_next_source():
    day = date(2024, 3, 14)
    chain = FallbackSource([("A", FakeSource(failing_days=(day,))), ("B", FakeSource(closes={day: 7.5}))])
    assert chain.fetch_close_on("AAPL", day) == 7.5


def test_close_lookup_raises_only_when_every_source_errors():
    day = date(2024, 3, 14)
    chain = FallbackSource([("A", FakeSource(failing_days=(day,))), ("B", FakeSource())])
    assert chain.fetch_close_on("AAPL", day) is None

    failing = FallbackSource([("A", FakeSource(failing_days=(day,)))])
    with pytest.raises(FetchError):
        failing.fetch_close_on("AAPL", day)


def test_batch_lookup_without_support_raises():
    chain = FallbackSource([("A", FakeSource())])
    with pytest.raises(FetchError):
        chain.fetch_closes_on("AAPL", [date(2024, 3, 14)])


def test_empty_chain_rejected():
    with pytest.raises(ValueError):
        FallbackSource([])
