"""
CSV export of a single dataset parameter.
Header row "date,<param>" followed by one row per record.
"""

import pandas as pd
from typing import Sequence

from storage.models import DatedRecord


def export_filename(dataset_id: str, parameter: str) -> str:
    return f"{dataset_id}_{parameter}.csv"


def parameter_frame(records: Sequence[DatedRecord], parameter: str) -> pd.DataFrame:
    """
    Two-column frame of record dates and one parameter.

    Args:
        records: Records in chronological order
        parameter: Parameter to project

    Returns:
        DataFrame with columns ['date', parameter]; absent values are NaN
    """
    return pd.DataFrame(
        {
            'date': [r.date.isoformat() for r in records],
            parameter: pd.Series([r.get(parameter) for r in records], dtype='float64'),
        },
        columns=['date', parameter]
    )


def render_parameter_csv(records: Sequence[DatedRecord], parameter: str) -> str:
    """
    Render records as CSV text.

    Absent values become empty cells. No trailing newline after the last row.
    """
    frame = parameter_frame(records, parameter)
    csv_text = frame.to_csv(index=False, lineterminator='\n', na_rep='')
    return csv_text.rstrip('\n')
