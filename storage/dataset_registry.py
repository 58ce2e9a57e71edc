"""
Dataset registry - repository interface and in-memory implementation.
Thin storage layer; the analysis service receives it by injection.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from storage.models import Dataset

logger = logging.getLogger(__name__)


class DatasetRepository(ABC):
    """Read/write access to named datasets."""

    @abstractmethod
    def get(self, dataset_id: str) -> Optional[Dataset]:
        """Dataset by id, or None when unknown."""

    @abstractmethod
    def list(self) -> List[Dataset]:
        """All datasets in registration order."""

    @abstractmethod
    def save(self, dataset: Dataset) -> bool:
        """
        Register a dataset, replacing any with the same id.

        Returns:
            True if an existing dataset was replaced
        """


class InMemoryDatasetRepository(DatasetRepository):
    """Process-local registry backed by a dict."""

    def __init__(self, datasets: Optional[Iterable[Dataset]] = None):
        self._datasets: Dict[str, Dataset] = {}
        for dataset in datasets or []:
            self.save(dataset)

    def get(self, dataset_id: str) -> Optional[Dataset]:
        return self._datasets.get(dataset_id)

    def list(self) -> List[Dataset]:
        return list(self._datasets.values())

    def save(self, dataset: Dataset) -> bool:
        replaced = dataset.id in self._datasets
        self._datasets[dataset.id] = dataset

        if replaced:
            logger.info(f"Replaced dataset {dataset.id} ({len(dataset.records)} records)")
        else:
            logger.info(f"Registered dataset {dataset.id} ({len(dataset.records)} records)")

        return replaced

    def __contains__(self, dataset_id: str) -> bool:
        return dataset_id in self._datasets

    def __len__(self) -> int:
        return len(self._datasets)
