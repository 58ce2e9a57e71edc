"""
Trailing (causal) simple moving average.
Expanding window for the first W-1 points, fixed W-point window after.
"""

import numpy as np
from typing import List, Optional, Sequence

from analysis.calculations.descriptive import bounded_mean
from analysis.calculations.extraction import is_present

DEFAULT_WINDOW = 7


class MovingAverageError(ValueError):
    """Raised when the moving average window is invalid."""
    pass


def validate_window(window) -> int:
    """
    Check that window is a positive integer.

    Raises:
        MovingAverageError: If window is not a positive integer
    """
    # bool is an int subclass; reject it explicitly
    if isinstance(window, bool) or not isinstance(window, (int, np.integer)):
        raise MovingAverageError(f"Window must be an integer, got {type(window).__name__}")

    if window <= 0:
        raise MovingAverageError(f"Window must be positive, got {window}")

    return int(window)


def moving_average(
    values: Sequence[Optional[float]],
    window: int = DEFAULT_WINDOW
) -> List[Optional[float]]:
    """
    Calculate the trailing moving average at every position.

    Element i is the mean of values[max(0, i - window + 1) : i + 1].
    Never looks ahead and never pads.

    Absent values (None/NaN) are skipped inside each window. When a
    window holds no present value, the previous average is repeated;
    positions before the first present value get None.

    Args:
        values: Series in chronological order, may contain absent values
        window: Window size in points

    Returns:
        List with the same length as values

    Raises:
        MovingAverageError: If window is not a positive integer

    Example:
        moving_average([1, 2, 3, 4, 5, 6, 7], window=3)
        -> [1.0, 1.5, 2.0, 3.0, 4.0, 5.0, 6.0]
    """
    window = validate_window(window)

    averages: List[Optional[float]] = []
    previous: Optional[float] = None

    for i in range(len(values)):
        start = max(0, i - window + 1)
        window_values = [float(v) for v in values[start:i + 1] if is_present(v)]

        if window_values:
            previous = bounded_mean(np.asarray(window_values, dtype=np.float64))

        averages.append(previous)

    return averages
