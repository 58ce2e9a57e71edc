"""
Parameter extraction from dated records.
Projects one named field into an ordered numeric series.
"""

import math
from typing import List, Optional, Sequence, Tuple

from storage.models import DatedRecord


def extract_parameter(records: Sequence[DatedRecord], parameter: str) -> List[Optional[float]]:
    """
    Project a parameter out of records, one element per record.

    Args:
        records: Records in chronological order
        parameter: Field name (validated against the dataset by the caller)

    Returns:
        List the same length as records; None where the record lacks the field
    """
    return [record.get(parameter) for record in records]


def is_present(value: Optional[float]) -> bool:
    return value is not None and not math.isnan(value)


def present_values(series: Sequence[Optional[float]]) -> List[float]:
    """Drop absent (None or NaN) values, keeping order."""
    return [float(v) for v in series if is_present(v)]


def align_pairs(
    x: Sequence[Optional[float]],
    y: Sequence[Optional[float]]
) -> Tuple[List[float], List[float]]:
    """
    Pairwise deletion: keep only positions where both series have a value.

    Args:
        x: First series
        y: Second series, positionally aligned with x

    Returns:
        Tuple of equal-length value lists

    Raises:
        ValueError: If the series lengths differ
    """
    if len(x) != len(y):
        raise ValueError(f"Series must be aligned: got lengths {len(x)} and {len(y)}")

    xs, ys = [], []
    for a, b in zip(x, y):
        if is_present(a) and is_present(b):
            xs.append(float(a))
            ys.append(float(b))

    return xs, ys
