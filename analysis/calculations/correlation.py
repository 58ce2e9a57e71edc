"""
Pearson correlation with a fixed qualitative interpretation.
"""

import math
import numpy as np
from typing import Sequence, Tuple

from analysis.calculations.descriptive import binary_scale


class CorrelationError(Exception):
    """Raised when correlation input is malformed."""
    pass


# Evaluated in order; first match wins
STRONG_POSITIVE = "Strong positive correlation"
MODERATE_POSITIVE = "Moderate positive correlation"
STRONG_NEGATIVE = "Strong negative correlation"
MODERATE_NEGATIVE = "Moderate negative correlation"
WEAK_OR_NONE = "Weak or no correlation"


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Calculate Pearson's product-moment correlation coefficient.

    Formula: r = sum((x - x̄)(y - ȳ)) / sqrt(sum((x - x̄)^2) * sum((y - ȳ)^2))

    A zero denominator (either series constant) gives r = 0.

    Args:
        x: Numeric series, no absent values
        y: Numeric series, same length as x

    Returns:
        r in [-1, 1]

    Raises:
        CorrelationError: If lengths differ, input is empty or not finite
    """
    if len(x) != len(y):
        raise CorrelationError(f"Series lengths differ: {len(x)} vs {len(y)}")

    if len(x) == 0:
        raise CorrelationError("Insufficient data: need at least 1 pair")

    xa = np.asarray(x, dtype=np.float64)
    ya = np.asarray(y, dtype=np.float64)

    if not (np.all(np.isfinite(xa)) and np.all(np.isfinite(ya))):
        raise CorrelationError("NaN or infinite values not allowed")

    # Zero variance on either side
    if xa.min() == xa.max() or ya.min() == ya.max():
        return 0.0

    # r is scale invariant; rescaling keeps products of deviations finite
    xa = xa / binary_scale(xa.min(), xa.max())
    ya = ya / binary_scale(ya.min(), ya.max())

    dx = xa - xa.mean()
    dy = ya - ya.mean()

    numerator = float(np.sum(dx * dy))
    denominator = math.sqrt(float(np.sum(dx * dx)) * float(np.sum(dy * dy)))

    if denominator == 0:
        return 0.0

    r = numerator / denominator
    if math.isnan(r):
        raise CorrelationError("Correlation is undefined for this input")

    return float(min(1.0, max(-1.0, r)))


def interpret_correlation(r: float) -> str:
    """
    Map a signed r to a qualitative label.

    r >= 0.7          -> strong positive
    0.4 <= r < 0.7    -> moderate positive
    r <= -0.7         -> strong negative
    -0.7 < r <= -0.4  -> moderate negative
    otherwise         -> weak or none
    """
    if r >= 0.7:
        return STRONG_POSITIVE
    elif r >= 0.4:
        return MODERATE_POSITIVE
    elif r <= -0.7:
        return STRONG_NEGATIVE
    elif r <= -0.4:
        return MODERATE_NEGATIVE
    else:
        return WEAK_OR_NONE


def correlate(x: Sequence[float], y: Sequence[float]) -> Tuple[float, str]:
    """Pearson r and its interpretation."""
    r = pearson(x, y)
    return r, interpret_correlation(r)
