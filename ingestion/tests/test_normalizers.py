"""
Tests for raw row normalization.
"""

import math
import pytest
from datetime import date, datetime

from ingestion.transforms.normalizers import (
    normalize_date,
    normalize_value,
    normalize_records,
    NormalizationError
)


class TestNormalizeDate:
    """Tests for normalize_date."""

    def test_iso_string(self):
        assert normalize_date('2024-07-04') == date(2024, 7, 4)

    def test_datetime_string_truncated(self):
        assert normalize_date('2024-07-04T23:59:00Z') == date(2024, 7, 4)

    def test_date_and_datetime(self):
        assert normalize_date(date(2024, 7, 4)) == date(2024, 7, 4)
        assert normalize_date(datetime(2024, 7, 4, 6)) == date(2024, 7, 4)

    @pytest.mark.parametrize("raw", ['', None, 'tomorrow', 20240704])
    def test_invalid(self, raw):
        with pytest.raises(NormalizationError):
            normalize_date(raw)


class TestNormalizeValue:
    """Tests for normalize_value."""

    def test_numbers(self):
        assert normalize_value(3, 'p') == 3.0
        assert normalize_value(2.5, 'p') == 2.5
        assert normalize_value('8.1', 'p') == 8.1

    def test_absent(self):
        assert normalize_value(None, 'p') is None
        assert normalize_value(float('nan'), 'p') is None

    def test_infinite_rejected(self):
        with pytest.raises(NormalizationError, match="finite"):
            normalize_value(math.inf, 'p')

    def test_oversized_integer_rejected(self):
        """JSON integers beyond float range are rejected, not overflowed."""
        with pytest.raises(NormalizationError, match="out of range"):
            normalize_value(10 ** 400, 'p')

    def test_bool_rejected(self):
        with pytest.raises(NormalizationError, match="got bool"):
            normalize_value(True, 'p')

    def test_non_numeric_rejected(self):
        with pytest.raises(NormalizationError, match="p must be numeric"):
            normalize_value([1], 'p')


class TestNormalizeRecords:
    """Tests for normalize_records."""

    def test_declared_parameters_only(self):
        rows = [{'date': '2024-01-01', 'a': 1, 'extra': 9}]

        records = normalize_records(rows, ['a', 'b'])

        assert dict(records[0].values) == {'a': 1.0, 'b': None}

    def test_preserves_order(self):
        rows = [{'date': '2024-01-02', 'a': 1}, {'date': '2024-01-01', 'a': 2}]

        records = normalize_records(rows, ['a'])

        assert [r.date.day for r in records] == [2, 1]

    def test_missing_date(self):
        with pytest.raises(NormalizationError, match="Row 0 is missing 'date'"):
            normalize_records([{'a': 1}], ['a'])

    def test_row_not_object(self):
        with pytest.raises(NormalizationError, match="must be an object"):
            normalize_records(['2024-01-01'], ['a'])
