"""
Tests for inclusive date range filtering.
"""

import pytest
from datetime import date, datetime, timedelta

from analysis.calculations.date_range import (
    filter_by_date_range,
    parse_date_bound,
    DateRangeError
)
from storage.models import DatedRecord


@pytest.fixture
def ten_days():
    """Daily series 2024-01-01 .. 2024-01-10."""
    start = date(2024, 1, 1)
    return [
        DatedRecord(date=start + timedelta(days=i), values={'level': float(i)})
        for i in range(10)
    ]


class TestFilterByDateRange:
    """Tests for filter_by_date_range."""

    def test_inclusive_bounds(self, ten_days):
        """from/to are both inclusive."""
        result = filter_by_date_range(ten_days, '2024-01-03', '2024-01-05')

        assert [r.date for r in result] == [
            date(2024, 1, 3), date(2024, 1, 4), date(2024, 1, 5)
        ]

    def test_no_bounds_returns_everything(self, ten_days):
        result = filter_by_date_range(ten_days)

        assert result == ten_days

    def test_only_start(self, ten_days):
        result = filter_by_date_range(ten_days, start=date(2024, 1, 8))

        assert len(result) == 3
        assert result[0].date == date(2024, 1, 8)

    def test_only_end(self, ten_days):
        result = filter_by_date_range(ten_days, end='2024-01-02')

        assert [r.values['level'] for r in result] == [0.0, 1.0]

    def test_empty_string_is_no_bound(self, ten_days):
        assert len(filter_by_date_range(ten_days, '', '')) == 10

    def test_inverted_range_is_empty(self, ten_days):
        assert filter_by_date_range(ten_days, '2024-01-06', '2024-01-02') == []

    def test_range_outside_data(self, ten_days):
        assert filter_by_date_range(ten_days, '2023-01-01', '2023-12-31') == []

    def test_order_preserved(self, ten_days):
        result = filter_by_date_range(ten_days, '2024-01-02', '2024-01-09')
        dates = [r.date for r in result]

        assert dates == sorted(dates)

    def test_invalid_bound(self, ten_days):
        with pytest.raises(DateRangeError, match="Invalid date bound"):
            filter_by_date_range(ten_days, 'not-a-date')


class TestParseDateBound:
    """Tests for bound normalization."""

    def test_none(self):
        assert parse_date_bound(None) is None

    def test_date_passthrough(self):
        assert parse_date_bound(date(2024, 2, 29)) == date(2024, 2, 29)

    def test_datetime_truncated(self):
        assert parse_date_bound(datetime(2024, 3, 1, 18, 30)) == date(2024, 3, 1)

    def test_iso_string(self):
        assert parse_date_bound('2024-01-03') == date(2024, 1, 3)

    def test_iso_string_with_time(self):
        assert parse_date_bound('2024-01-03T00:00:00Z') == date(2024, 1, 3)

    def test_invalid_calendar_day(self):
        with pytest.raises(DateRangeError):
            parse_date_bound('2024-02-30')

    def test_unsupported_type(self):
        with pytest.raises(DateRangeError, match="Unsupported"):
            parse_date_bound(20240103)
