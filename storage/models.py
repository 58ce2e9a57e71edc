"""
Typed records for time-indexed datasets.
Immutable snapshots handed from the registry to the analysis engine.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class DatedRecord:
    """One calendar day of observations; a missing parameter maps to None."""
    date: date
    values: Mapping[str, Optional[float]] = field(default_factory=dict)

    def get(self, parameter: str) -> Optional[float]:
        return self.values.get(parameter)

    def to_dict(self) -> Dict[str, object]:
        row: Dict[str, object] = {'date': self.date.isoformat()}
        row.update(self.values)
        return row


@dataclass(frozen=True)
class Dataset:
    """
    Named dataset with its declared parameters.

    Records are ordered by date ascending with unique dates. Nothing
    downstream re-sorts them.
    """
    id: str
    name: str
    description: str
    parameters: Tuple[str, ...]
    records: Tuple[DatedRecord, ...]

    def has_parameter(self, parameter: str) -> bool:
        return parameter in self.parameters

    @property
    def date_range(self) -> Optional[Dict[str, str]]:
        """First and last record dates, or None for an empty dataset."""
        if not self.records:
            return None
        return {
            'start': self.records[0].date.isoformat(),
            'end': self.records[-1].date.isoformat()
        }

    def describe(self) -> Dict[str, object]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'parameters': list(self.parameters),
            'range': self.date_range
        }
