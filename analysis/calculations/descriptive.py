"""
Descriptive statistics and anomaly counting.
Pure functions over numeric series with absent values already removed.
"""

import math
import numpy as np
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Sequence

# Values farther than this many population standard deviations from the mean
ANOMALY_SIGMA = 2.0


class StatisticsError(Exception):
    """Raised when statistics are requested for unusable input."""
    pass


@dataclass(frozen=True)
class SummaryStats:
    mean: float
    median: float
    stddev: float
    min: float
    max: float
    count: int
    anomalies: int

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def binary_scale(*magnitudes: float) -> float:
    """
    Power of two at or just below the largest magnitude, or 1.0 for zeros.

    Dividing by a power of two is exact, so statistics computed on the
    scaled values match the unscaled ones while intermediate sums and
    squares stay far from float overflow.
    """
    largest = max((abs(float(m)) for m in magnitudes), default=0.0)
    if largest == 0.0 or not math.isfinite(largest):
        return 1.0

    _, exponent = math.frexp(largest)
    return math.ldexp(1.0, exponent - 1)


def bounded_mean(arr: np.ndarray) -> float:
    """
    Arithmetic mean of finite values, kept within [min, max].

    Floating-point summation can land the mean one ulp outside the
    observed range for nearly constant input; the result is clamped.
    """
    lo = float(arr.min())
    hi = float(arr.max())
    scale = binary_scale(lo, hi)

    mean = float(np.mean(arr / scale)) * scale
    return min(hi, max(lo, mean))


def descriptive_stats(values: Sequence[float]) -> Dict[str, float]:
    """
    Calculate mean, median, population standard deviation, min and max.

    Formula: stddev = sqrt(sum((x - mean)^2) / N)

    Args:
        values: Non-empty numeric sequence

    Returns:
        Dictionary with mean, median, stddev, min, max

    Raises:
        StatisticsError: If values is empty or contains NaN/infinite entries
    """
    if len(values) == 0:
        raise StatisticsError("Insufficient data: need at least 1 value")

    arr = np.asarray(values, dtype=np.float64)

    if not np.all(np.isfinite(arr)):
        raise StatisticsError("NaN or infinite values not allowed")

    lo = float(arr.min())
    hi = float(arr.max())

    # Constant series: exact zero spread, no rounding drift in the mean
    if lo == hi:
        return {'mean': lo, 'median': lo, 'stddev': 0.0, 'min': lo, 'max': hi}

    # Population std never exceeds (max - min) / 2, so the rescaled result is finite
    scale = binary_scale(lo, hi)
    scaled = arr / scale

    return {
        'mean': bounded_mean(arr),
        'median': min(hi, max(lo, float(np.median(scaled)) * scale)),
        'stddev': float(np.std(scaled, ddof=0)) * scale,
        'min': lo,
        'max': hi
    }


def count_anomalies(values: Sequence[float], mean: float, stddev: float) -> int:
    """
    Count values with |value - mean| > 2 * stddev.

    A constant series has stddev 0 and every value equal to the mean,
    so it never reports anomalies.
    """
    if len(values) == 0:
        return 0

    arr = np.asarray(values, dtype=np.float64)
    scale = binary_scale(arr.min(), arr.max(), mean, stddev)

    deviations = np.abs(arr / scale - mean / scale)
    return int(np.count_nonzero(deviations > ANOMALY_SIGMA * (stddev / scale)))


def summarize(values: List[float]) -> Optional[SummaryStats]:
    """
    Full summary of a series, or None when there is nothing to summarize.

    Args:
        values: Numeric values with absent entries removed

    Returns:
        SummaryStats, or None for an empty series
    """
    if not values:
        return None

    stats = descriptive_stats(values)
    anomalies = count_anomalies(values, stats['mean'], stats['stddev'])

    return SummaryStats(
        mean=stats['mean'],
        median=stats['median'],
        stddev=stats['stddev'],
        min=stats['min'],
        max=stats['max'],
        count=len(values),
        anomalies=anomalies
    )
