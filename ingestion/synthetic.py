"""
Synthetic time-series datasets for demos and tests.
Catalog-driven: each parameter is a seasonal wave plus uniform noise.
"""

import logging
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import yaml

from storage.models import Dataset, DatedRecord

logger = logging.getLogger(__name__)

WAVES = {
    'sin': np.sin,
    'cos': np.cos,
    'abs_sin': lambda t: np.abs(np.sin(t)),
}

NOISE_KINDS = ('centered', 'positive')
VALUE_DECIMALS = 3


class CatalogError(Exception):
    """Raised when the dataset catalog cannot be loaded or is malformed."""
    pass


def load_catalog(catalog_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load the synthetic dataset catalog from YAML.

    Args:
        catalog_path: Path to catalog file

    Returns:
        Mapping of dataset id -> catalog entry

    Raises:
        CatalogError: If the file is missing, unreadable or malformed
    """
    catalog_file = Path(catalog_path)
    if not catalog_file.exists():
        raise CatalogError(f"Dataset catalog not found: {catalog_path}")

    try:
        with open(catalog_file, 'r', encoding='utf-8') as f:
            catalog = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Failed to load dataset catalog: {e}") from e

    if not isinstance(catalog, dict) or not isinstance(catalog.get('datasets'), dict):
        raise CatalogError("Dataset catalog missing 'datasets' section")

    for dataset_id, entry in catalog['datasets'].items():
        _validate_entry(dataset_id, entry)

    return catalog['datasets']


def _validate_entry(dataset_id: str, entry: Any) -> None:
    if not isinstance(entry, dict) or not isinstance(entry.get('parameters'), dict):
        raise CatalogError(f"Dataset {dataset_id} must declare a 'parameters' mapping")

    for name, spec in entry['parameters'].items():
        if not isinstance(spec, dict):
            raise CatalogError(f"{dataset_id}.{name}: parameter spec must be a mapping")

        for key in ('base', 'amplitude', 'period'):
            if not isinstance(spec.get(key), (int, float)):
                raise CatalogError(f"{dataset_id}.{name}: '{key}' must be numeric")

        if spec['period'] == 0:
            raise CatalogError(f"{dataset_id}.{name}: 'period' must be non-zero")

        if spec.get('wave', 'sin') not in WAVES:
            raise CatalogError(f"{dataset_id}.{name}: unknown wave {spec.get('wave')!r}")

        noise = spec.get('noise') or {}
        if not isinstance(noise, dict):
            raise CatalogError(f"{dataset_id}.{name}: 'noise' must be a mapping")
        if noise.get('kind', 'centered') not in NOISE_KINDS:
            raise CatalogError(f"{dataset_id}.{name}: unknown noise kind {noise.get('kind')!r}")


def generate_series(spec: Dict[str, Any], days: int, rng: np.random.Generator) -> np.ndarray:
    """
    Generate one parameter's values.

    Formula: v_i = base + amplitude * wave(i / period) + noise_i

    Args:
        spec: Parameter spec from the catalog
        days: Number of points
        rng: Random generator

    Returns:
        Array of length days, rounded to 3 decimals
    """
    t = np.arange(days) / spec['period']
    wave = WAVES[spec.get('wave', 'sin')]
    values = spec['base'] + spec['amplitude'] * wave(t)

    noise = spec.get('noise') or {}
    scale = noise.get('scale', 0.0)
    if noise.get('kind', 'centered') == 'positive':
        values = values + rng.random(days) * scale
    else:
        values = values + (rng.random(days) - 0.5) * scale

    return np.round(values, spec.get('decimals', VALUE_DECIMALS))


def generate_dataset(
    dataset_id: str,
    entry: Dict[str, Any],
    days: int = 90,
    end_date: Optional[date] = None,
    rng: Optional[np.random.Generator] = None
) -> Dataset:
    """
    Build a daily dataset ending at end_date (default: today).

    Args:
        dataset_id: Dataset identifier
        entry: Catalog entry with name, description, parameters
        days: Number of consecutive days
        end_date: Last date in the series
        rng: Random generator (default: fresh unseeded generator)
    """
    if days <= 0:
        raise ValueError(f"days must be positive, got {days}")

    if end_date is None:
        end_date = date.today()
    if rng is None:
        rng = np.random.default_rng()

    start = end_date - timedelta(days=days - 1)
    parameters = tuple(entry['parameters'].keys())

    columns = {
        name: generate_series(spec, days, rng)
        for name, spec in entry['parameters'].items()
    }

    records = tuple(
        DatedRecord(
            date=start + timedelta(days=i),
            values={name: float(columns[name][i]) for name in parameters}
        )
        for i in range(days)
    )

    return Dataset(
        id=dataset_id,
        name=entry.get('name', dataset_id),
        description=entry.get('description', ''),
        parameters=parameters,
        records=records
    )


def load_synthetic_datasets(
    catalog_path: Union[str, Path],
    days: int = 90,
    seed: Optional[int] = None,
    end_date: Optional[date] = None
) -> List[Dataset]:
    """
    Generate every dataset in the catalog.

    One generator is shared across datasets, so a fixed seed reproduces
    the whole collection.
    """
    catalog = load_catalog(catalog_path)
    rng = np.random.default_rng(seed)

    datasets = [
        generate_dataset(dataset_id, entry, days=days, end_date=end_date, rng=rng)
        for dataset_id, entry in catalog.items()
    ]

    logger.info(f"Generated {len(datasets)} synthetic datasets ({days} days each) from {catalog_path}")
    return datasets
