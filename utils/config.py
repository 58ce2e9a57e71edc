"""
Service configuration from environment variables.
Reads a local .env file when present.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CATALOG_PATH = PROJECT_ROOT / 'config' / 'datasets.yml'


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""
    pass


@dataclass
class ServiceConfig:
    """Runtime settings for the dataset analysis service."""
    catalog_path: Path = DEFAULT_CATALOG_PATH
    default_window: int = 7
    synthetic_days: int = 90
    synthetic_seed: Optional[int] = None
    log_level: str = 'INFO'

    def __post_init__(self):
        """Validate settings."""
        self.catalog_path = Path(self.catalog_path)

        if self.default_window <= 0:
            raise ConfigError(f"default_window must be positive, got {self.default_window}")

        if self.synthetic_days <= 0:
            raise ConfigError(f"synthetic_days must be positive, got {self.synthetic_days}")

        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Unknown log level: {self.log_level}")


def _int_env(name: str, default: Optional[str]) -> Optional[int]:
    raw = os.getenv(name, default)
    if raw is None or raw == '':
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def load_config() -> ServiceConfig:
    """
    Build configuration from the environment.

    Variables:
        DATASETS_CATALOG: YAML catalog path (default: config/datasets.yml)
        DATASETS_DEFAULT_WINDOW: moving average window (default: 7)
        SYNTHETIC_DAYS: points per synthetic dataset (default: 90)
        SYNTHETIC_SEED: random seed, unset for fresh data each run
        LOG_LEVEL: logging level (default: INFO)
    """
    return ServiceConfig(
        catalog_path=Path(os.getenv('DATASETS_CATALOG', str(DEFAULT_CATALOG_PATH))),
        default_window=_int_env('DATASETS_DEFAULT_WINDOW', '7'),
        synthetic_days=_int_env('SYNTHETIC_DAYS', '90'),
        synthetic_seed=_int_env('SYNTHETIC_SEED', None),
        log_level=os.getenv('LOG_LEVEL', 'INFO')
    )
