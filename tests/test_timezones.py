from datetime import datetime

import pytest

from insight_core.utils.timezones import LOCAL_TZ, market_status, now_local


@pytest.mark.parametrize(
    "moment,expected",
    [
        (datetime(2024, 3, 16, 10, 0), "Closed (Weekend)"),  # Saturday
        (datetime(2024, 3, 17, 12, 0), "Closed (Weekend)"),  # Sunday
        (datetime(2024, 3, 15, 9, 0), "Open"),
        (datetime(2024, 3, 15, 15, 59), "Open"),
        (datetime(2024, 3, 15, 16, 0), "Closed"),
        (datetime(2024, 3, 15, 8, 59), "Closed"),
    ],
)
def test_market_status(moment, expected):
    assert market_status(moment) == expected


def test_now_local_is_aware():
    now = now_local()
    assert now.tzinfo is LOCAL_TZ
    assert market_status() in {"Open", "Closed", "Closed (Weekend)"}
