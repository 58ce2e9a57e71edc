"""
Output formatters for analysis results.
Deterministic rounding and one-line insight text.
"""

import math
from typing import Any, Dict, Optional, Union

# Rounding depth shared by summary, trend and correlation outputs
RESULT_DECIMALS = 6
INSIGHT_DECIMALS = 3


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


def round_metric(value: Optional[Union[int, float]], decimal_places: int = RESULT_DECIMALS) -> Optional[float]:
    """
    Round a computed value for output.

    Args:
        value: Numeric value or None
        decimal_places: Digits after the decimal point (default: 6)

    Returns:
        Rounded float, or None if value is None
    """
    if value is None:
        return None

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Metric value must be numeric, got {type(value)}")

    if not math.isfinite(value):
        raise FormatterError(f"Metric value must be finite, got {value}")

    rounded = round(float(value), decimal_places)
    # Avoid "-0.0" in output
    return rounded + 0.0


def format_fixed(value: float, decimal_places: int = INSIGHT_DECIMALS) -> str:
    """Fixed-point display string, e.g. 3.14159 -> "3.142"."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Value must be numeric, got {type(value)}")
    return f"{value:.{decimal_places}f}"


def round_summary(summary: Dict[str, Any]) -> Dict[str, Any]:
    """Round the float statistics of a summary; counts pass through."""
    rounded = {}
    for key, value in summary.items():
        if key in ('count', 'anomalies'):
            rounded[key] = int(value)
        else:
            rounded[key] = round_metric(value)
    return rounded


def format_summary_insight(parameter: str, summary: Dict[str, Any]) -> str:
    """
    One-line textual insight for a summary.

    Example:
        "Parameter temperature: mean=24.102, median=24.050, std=2.118, anomalies=3"
    """
    return (
        f"Parameter {parameter}: "
        f"mean={format_fixed(summary['mean'])}, "
        f"median={format_fixed(summary['median'])}, "
        f"std={format_fixed(summary['stddev'])}, "
        f"anomalies={summary['anomalies']}"
    )
