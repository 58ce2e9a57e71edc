"""
Date range filtering for dated records.
Pure functions - inclusive optional bounds, calendar-day comparison.
"""

from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from dateutil import parser as date_parser

from storage.models import DatedRecord

DateBound = Union[date, datetime, str, None]


class DateRangeError(ValueError):
    """Raised when a date bound cannot be parsed."""
    pass


def parse_date_bound(bound: DateBound) -> Optional[date]:
    """
    Normalize a date bound to a calendar day.

    Args:
        bound: date, datetime, ISO-8601 string, or None/"" for no bound

    Returns:
        Calendar date, or None when no bound applies

    Raises:
        DateRangeError: If a string bound is not ISO-8601
    """
    if bound is None:
        return None

    # datetime is a subclass of date - check it first
    if isinstance(bound, datetime):
        return bound.date()

    if isinstance(bound, date):
        return bound

    if isinstance(bound, str):
        text = bound.strip()
        if not text:
            return None
        try:
            return date_parser.isoparse(text).date()
        except (ValueError, OverflowError) as e:
            raise DateRangeError(f"Invalid date bound '{bound}': expected YYYY-MM-DD") from e

    raise DateRangeError(f"Unsupported date bound type: {type(bound).__name__}")


def filter_by_date_range(
    records: Sequence[DatedRecord],
    start: DateBound = None,
    end: DateBound = None
) -> List[DatedRecord]:
    """
    Select records whose date lies within [start, end], both inclusive.

    Missing bounds are permissive. Input order is preserved; records are
    assumed to be chronologically ordered already.

    Args:
        records: Records in chronological order
        start: Optional lower bound
        end: Optional upper bound

    Returns:
        List of matching records

    Raises:
        DateRangeError: If either bound is unparseable
    """
    start_date = parse_date_bound(start)
    end_date = parse_date_bound(end)

    if start_date is None and end_date is None:
        return list(records)

    selected = []
    for record in records:
        if start_date is not None and record.date < start_date:
            continue
        if end_date is not None and record.date > end_date:
            continue
        selected.append(record)

    return selected
