"""
Tests for parameter extraction and absent-value handling.
"""

import pytest
from datetime import date

from analysis.calculations.extraction import (
    extract_parameter,
    present_values,
    align_pairs
)
from storage.models import DatedRecord


@pytest.fixture
def records():
    return [
        DatedRecord(date=date(2024, 5, 1), values={'temp': 20.5, 'wind': 3.0}),
        DatedRecord(date=date(2024, 5, 2), values={'temp': None, 'wind': 4.0}),
        DatedRecord(date=date(2024, 5, 3), values={'wind': 5.0}),
        DatedRecord(date=date(2024, 5, 4), values={'temp': 22.0, 'wind': None}),
    ]


class TestExtractParameter:
    """Tests for extract_parameter."""

    def test_preserves_length_and_order(self, records):
        assert extract_parameter(records, 'temp') == [20.5, None, None, 22.0]

    def test_missing_field_is_absent(self, records):
        """A record without the field yields None, not an error."""
        assert extract_parameter(records, 'wind')[3] is None
        assert extract_parameter(records, 'salinity') == [None] * 4

    def test_empty(self):
        assert extract_parameter([], 'temp') == []


class TestPresentValues:
    """Tests for dropping absent values."""

    def test_drops_none_and_nan(self):
        assert present_values([1.0, None, float('nan'), 2.5]) == [1.0, 2.5]

    def test_keeps_zero(self):
        assert present_values([0.0, None]) == [0.0]


class TestAlignPairs:
    """Tests for pairwise deletion."""

    def test_drops_positions_with_either_absent(self, records):
        x, y = align_pairs(
            extract_parameter(records, 'temp'),
            extract_parameter(records, 'wind')
        )

        assert x == [20.5]
        assert y == [3.0]

    def test_lengths_match(self):
        x, y = align_pairs([1.0, 2.0, None], [None, 5.0, 6.0])

        assert len(x) == len(y) == 1

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="aligned"):
            align_pairs([1.0], [1.0, 2.0])
