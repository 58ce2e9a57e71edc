"""
Normalizers for transforming raw dataset rows to canonical records.
Pure functions - no IO, network, or side effects.
Minimal normalization - only when necessary.
"""

import math
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from dateutil import parser as date_parser

from storage.models import DatedRecord


class NormalizationError(ValueError):
    """Raised when a raw row cannot be converted to a record."""
    pass


def normalize_date(raw_date: Any) -> date:
    """
    Convert a raw date field to a calendar day.

    Accepts date, datetime or ISO-8601 string. Times are dropped.
    """
    if isinstance(raw_date, datetime):
        return raw_date.date()

    if isinstance(raw_date, date):
        return raw_date

    if isinstance(raw_date, str) and raw_date.strip():
        try:
            return date_parser.isoparse(raw_date.strip()).date()
        except (ValueError, OverflowError) as e:
            raise NormalizationError(f"Invalid date: {raw_date!r}") from e

    raise NormalizationError(f"Missing or invalid date: {raw_date!r}")


def normalize_value(raw_value: Any, parameter: str) -> Optional[float]:
    """
    Convert a raw parameter value to float.

    None and NaN become None (absent). Numeric strings are accepted.

    Raises:
        NormalizationError: For booleans, non-numeric or infinite values
    """
    if raw_value is None:
        return None

    if isinstance(raw_value, bool):
        raise NormalizationError(f"{parameter} must be numeric, got bool")

    if isinstance(raw_value, (int, float, str)):
        try:
            value = float(raw_value)
        except OverflowError as e:
            raise NormalizationError(f"{parameter} is out of range for a float") from e
        except ValueError as e:
            raise NormalizationError(f"{parameter} must be numeric, got {raw_value!r}") from e
    else:
        raise NormalizationError(f"{parameter} must be numeric, got {type(raw_value).__name__}")

    if math.isnan(value):
        return None

    if math.isinf(value):
        raise NormalizationError(f"{parameter} must be finite, got {raw_value!r}")

    return value


def normalize_records(
    raw_rows: Sequence[Dict[str, Any]],
    parameters: Sequence[str]
) -> List[DatedRecord]:
    """
    Transform raw {date, param: value, ...} rows to DatedRecords.

    Only declared parameters are kept; a parameter missing from a row is
    recorded as None so every record carries the full declared shape.

    Args:
        raw_rows: Rows as decoded from JSON
        parameters: Declared parameter names

    Returns:
        Records in input order
    """
    records = []
    for index, raw in enumerate(raw_rows):
        if not isinstance(raw, dict):
            raise NormalizationError(f"Row {index} must be an object, got {type(raw).__name__}")

        if 'date' not in raw:
            raise NormalizationError(f"Row {index} is missing 'date'")

        row_date = normalize_date(raw['date'])
        values = {p: normalize_value(raw.get(p), p) for p in parameters}
        records.append(DatedRecord(date=row_date, values=values))

    return records
