"""
Validators for dataset registration payloads.
Pure functions - no IO, network, or side effects.
"""

from datetime import date
from typing import Any, Dict, List, Sequence, Tuple

from ingestion.transforms.normalizers import NormalizationError, normalize_records
from storage.models import Dataset, DatedRecord


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def validate_dataset_payload(payload: Any) -> None:
    """
    Validate the shape of a dataset payload.

    Expected: {id, name?, description?, parameters: [str, ...], data: [row, ...]}

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(payload, dict):
        raise ValidationError(f"Payload must be an object, got {type(payload).__name__}")

    # Required keys; empty parameters/data lists are allowed
    for key in ('id', 'parameters', 'data'):
        if payload.get(key) is None:
            raise ValidationError(f"Missing required key: {key}")

    if not isinstance(payload['id'], str) or not payload['id'].strip():
        raise ValidationError("id must be a non-empty string")

    for key in ('name', 'description'):
        if payload.get(key) is not None and not isinstance(payload[key], str):
            raise ValidationError(f"{key} must be string, got {type(payload[key])}")

    parameters = payload['parameters']
    if not isinstance(parameters, list) or not all(isinstance(p, str) and p for p in parameters):
        raise ValidationError("parameters must be a list of non-empty strings")

    if len(parameters) != len(set(parameters)):
        raise ValidationError("parameters must be unique")

    if 'date' in parameters:
        raise ValidationError("'date' is reserved and cannot be a parameter")

    if not isinstance(payload['data'], list):
        raise ValidationError(f"data must be a list, got {type(payload['data'])}")


def check_date_monotonicity(dates: Sequence[date]) -> None:
    """
    Check that dates are strictly increasing.

    Raises:
        ValidationError: If dates are not monotonic or have duplicates
    """
    if len(dates) != len(set(dates)):
        raise ValidationError("Duplicate date found in dataset")

    for i in range(1, len(dates)):
        if dates[i] <= dates[i - 1]:
            raise ValidationError(f"Dates not monotonic: {dates[i - 1]} >= {dates[i]}")


def build_dataset(payload: Dict[str, Any]) -> Dataset:
    """
    Validate a payload and build the Dataset it describes.

    name defaults to id, description to "".

    Raises:
        ValidationError: If any part of the payload is invalid
    """
    validate_dataset_payload(payload)

    parameters: Tuple[str, ...] = tuple(payload['parameters'])

    try:
        records: List[DatedRecord] = normalize_records(payload['data'], parameters)
    except NormalizationError as e:
        raise ValidationError(str(e)) from e

    check_date_monotonicity([r.date for r in records])

    return Dataset(
        id=payload['id'],
        name=payload.get('name') or payload['id'],
        description=payload.get('description') or "",
        parameters=parameters,
        records=tuple(records)
    )
