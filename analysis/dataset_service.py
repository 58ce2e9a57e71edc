"""
Dataset analysis service - boundary between callers and the engine.
Validates dataset and parameter names, runs filter -> extract -> calculate,
and returns plain dictionaries ready to serialize.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from analysis.calculations.correlation import correlate
from analysis.calculations.date_range import DateBound, DateRangeError, filter_by_date_range
from analysis.calculations.descriptive import summarize
from analysis.calculations.extraction import align_pairs, extract_parameter, present_values
from analysis.calculations.moving_average import DEFAULT_WINDOW, MovingAverageError, moving_average, validate_window
from analysis.errors import (
    DatasetNotFound,
    InvalidDateRange,
    InvalidPayload,
    InvalidWindow,
    MissingParameter,
    NoDataInRange,
    UnknownParameter,
)
from ingestion.synthetic import load_synthetic_datasets
from ingestion.transforms.validators import ValidationError, build_dataset
from reports.csv_export import export_filename, render_parameter_csv
from reports.formatters import format_summary_insight, round_metric, round_summary
from storage.dataset_registry import DatasetRepository, InMemoryDatasetRepository
from storage.models import Dataset, DatedRecord
from utils.config import ServiceConfig, load_config

logger = logging.getLogger(__name__)


class DatasetAnalysisService:
    """
    Query operations over registered datasets.

    Stateless apart from the injected repository; every call works on the
    dataset snapshot it reads at call time.
    """

    def __init__(self, repository: DatasetRepository, default_window: int = DEFAULT_WINDOW):
        self.repository = repository
        self.default_window = validate_window(default_window)

    def list_datasets(self) -> Dict[str, Any]:
        return {'datasets': [ds.describe() for ds in self.repository.list()]}

    def get_data(
        self,
        dataset_id: str,
        param: Optional[str] = None,
        start: DateBound = None,
        end: DateBound = None
    ) -> Dict[str, Any]:
        """
        Raw records in range; projected to {date, value} when param is given.
        """
        dataset = self._get_dataset(dataset_id)
        if param:
            self._check_parameter(dataset, param)

        records = self._filter(dataset, start, end)

        if param:
            data = [{'date': r.date.isoformat(), 'value': r.get(param)} for r in records]
        else:
            data = [r.to_dict() for r in records]

        return {'id': dataset.id, 'name': dataset.name, 'param': param or None, 'data': data}

    def summary(
        self,
        dataset_id: str,
        param: Optional[str],
        start: DateBound = None,
        end: DateBound = None
    ) -> Dict[str, Any]:
        """
        Descriptive statistics and anomaly count for one parameter.

        Raises:
            NoDataInRange: If no valid values remain after filtering
        """
        dataset = self._get_dataset(dataset_id)
        self._require_parameter(dataset, param)

        records = self._filter(dataset, start, end)
        values = present_values(extract_parameter(records, param))

        stats = summarize(values)
        if stats is None:
            logger.warning(f"No data in range for {dataset.id}.{param} ({start} to {end})")
            raise NoDataInRange()

        summary = round_summary(stats.to_dict())
        logger.debug(f"Summary for {dataset.id}.{param}: {summary}")

        return {
            'id': dataset.id,
            'param': param,
            'summary': summary,
            'insight': format_summary_insight(param, stats.to_dict())
        }

    def trends(
        self,
        dataset_id: str,
        param: Optional[str],
        window: Union[int, str, None] = None,
        start: DateBound = None,
        end: DateBound = None
    ) -> Dict[str, Any]:
        """
        Series with its trailing moving average, one point per record.
        """
        dataset = self._get_dataset(dataset_id)
        self._require_parameter(dataset, param)
        window_size = self._parse_window(window)

        records = self._filter(dataset, start, end)
        values = extract_parameter(records, param)

        if not present_values(values):
            logger.warning(f"No data in range for {dataset.id}.{param} trends ({start} to {end})")
            raise NoDataInRange()

        averages = moving_average(values, window_size)

        data = [
            {
                'date': record.date.isoformat(),
                'value': value,
                'moving_average': round_metric(avg)
            }
            for record, value, avg in zip(records, values, averages)
        ]

        return {'id': dataset.id, 'param': param, 'window': window_size, 'data': data}

    def correlation(
        self,
        dataset_id: str,
        param1: Optional[str],
        param2: Optional[str],
        start: DateBound = None,
        end: DateBound = None
    ) -> Dict[str, Any]:
        """
        Pearson r between two parameters over the dates where both are present.
        """
        dataset = self._get_dataset(dataset_id)

        if not param1 or not param2:
            raise MissingParameter("param1 and param2 required")

        if not dataset.has_parameter(param1) or not dataset.has_parameter(param2):
            raise UnknownParameter(f"Parameters must be in: {', '.join(dataset.parameters)}")

        records = self._filter(dataset, start, end)
        x, y = align_pairs(extract_parameter(records, param1), extract_parameter(records, param2))

        if not x:
            logger.warning(f"No paired data in range for {dataset.id}.{param1}/{param2}")
            raise NoDataInRange()

        r, interpretation = correlate(x, y)
        if min(x) == max(x) or min(y) == max(y):
            logger.warning(f"Zero variance in {dataset.id}.{param1}/{param2} over {len(x)} pairs; r reported as 0")

        return {
            'id': dataset.id,
            'param1': param1,
            'param2': param2,
            'r': round_metric(r),
            'interpretation': interpretation
        }

    def export_csv(
        self,
        dataset_id: str,
        param: Optional[str],
        start: DateBound = None,
        end: DateBound = None
    ) -> Tuple[str, str]:
        """
        CSV export of one parameter.

        Returns:
            Tuple of (filename, csv_text)
        """
        dataset = self._get_dataset(dataset_id)
        self._require_parameter(dataset, param)

        records = self._filter(dataset, start, end)
        return export_filename(dataset.id, param), render_parameter_csv(records, param)

    def upload(self, payload: Any) -> Dict[str, Any]:
        """
        Register (or replace) a dataset from a JSON-style payload.

        Raises:
            InvalidPayload: If the payload is malformed
        """
        try:
            dataset = build_dataset(payload)
        except ValidationError as e:
            raise InvalidPayload(f"Invalid payload: {e}") from e

        self.repository.save(dataset)
        return {'ok': True, 'id': dataset.id}

    def _get_dataset(self, dataset_id: str) -> Dataset:
        dataset = self.repository.get(dataset_id)
        if dataset is None:
            raise DatasetNotFound(dataset_id)
        return dataset

    def _require_parameter(self, dataset: Dataset, param: Optional[str]) -> None:
        if not param:
            raise MissingParameter("param is required (e.g., param=temperature)")
        self._check_parameter(dataset, param)

    @staticmethod
    def _check_parameter(dataset: Dataset, param: str) -> None:
        if not dataset.has_parameter(param):
            raise UnknownParameter(
                f"Parameter {param} not available. Use: {', '.join(dataset.parameters)}"
            )

    @staticmethod
    def _filter(dataset: Dataset, start: DateBound, end: DateBound) -> List[DatedRecord]:
        try:
            return filter_by_date_range(dataset.records, start, end)
        except DateRangeError as e:
            raise InvalidDateRange(str(e)) from e

    def _parse_window(self, window: Union[int, str, None]) -> int:
        if window is None or window == '':
            return self.default_window

        if isinstance(window, str):
            try:
                window = int(window.strip())
            except ValueError:
                raise InvalidWindow(f"Window must be a positive integer, got {window!r}")

        try:
            return validate_window(window)
        except MovingAverageError as e:
            raise InvalidWindow(str(e)) from e


def create_default_service(config: Optional[ServiceConfig] = None) -> DatasetAnalysisService:
    """
    Service seeded with the synthetic catalog datasets.

    Args:
        config: Service configuration (default: from environment)
    """
    if config is None:
        config = load_config()

    datasets = load_synthetic_datasets(
        config.catalog_path,
        days=config.synthetic_days,
        seed=config.synthetic_seed
    )
    repository = InMemoryDatasetRepository(datasets)
    return DatasetAnalysisService(repository, default_window=config.default_window)
