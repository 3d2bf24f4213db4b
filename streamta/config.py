"""
Configuration and logging helpers.

Indicator sets can be declared in YAML and built through the factory:

    logging:
      version: 1
      ...
    indicators:
      fast_trend: {type: ema, period: 12}
      bands: {type: bollinger_bands, period: 20, k: 2.0}
"""

import logging
import logging.config
from typing import Any, Dict, Mapping

import yaml

from .base import BaseIndicator
from .exceptions import InvalidParameterError
from .factory import create

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and manages configuration from a YAML file."""

    def __init__(self, config_path: str):
        """Initialize with path to config file."""
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Raises:
            FileNotFoundError: If the configuration file cannot be found.
            yaml.YAMLError: If the configuration file is malformed.
        """
        try:
            with open(self.config_path, 'r') as f:
                return yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.error(f"Configuration file not found at '{self.config_path}'")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Malformed YAML in configuration file: {e}")
            raise

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key with optional default."""
        return self.config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to config."""
        return self.config[key]

    def get_all(self) -> Dict[str, Any]:
        """Return entire configuration dictionary."""
        return self.config


def setup_logging(config: Dict[str, Any]) -> None:
    """Configure application logging with fallback to basic config."""
    try:
        logging.config.dictConfig(config)
        logging.info("Logging configured successfully from config file.")
    except (ValueError, TypeError, AttributeError) as e:
        # Fallback to a basic configuration if the one in the file is malformed
        logging.basicConfig(level=logging.INFO,
                            format="%(asctime)s - %(levelname)s - %(message)s")
        logging.warning(f"Could not configure logging from dict: {e}. Using basic config.")


def build_indicators(indicator_specs: Mapping[str, Mapping[str, Any]]) -> Dict[str, BaseIndicator]:
    """
    Build fresh indicator instances from a label -> parameters mapping.

    Each entry names the indicator under ``type`` and passes the remaining
    keys to its constructor.

    Args:
        indicator_specs: e.g. ``{'trend': {'type': 'ema', 'period': 12}}``

    Returns:
        Dict[str, BaseIndicator]: One independent instance per label, in order.

    Raises:
        InvalidParameterError: If an entry is not a mapping or lacks ``type``.
        IndicatorNotFoundError: If ``type`` names an unknown indicator.
    """
    indicators: Dict[str, BaseIndicator] = {}

    for label, spec in indicator_specs.items():
        if not isinstance(spec, Mapping) or 'type' not in spec:
            raise InvalidParameterError(label, spec, "mapping with a 'type' key")

        params = {key: value for key, value in spec.items() if key != 'type'}
        indicators[label] = create(spec['type'], **params)
        logger.debug(f"Built indicator '{label}': {indicators[label]}")

    logger.info(f"Built {len(indicators)} indicator(s) from configuration")
    return indicators


def load_indicators(config_path: str) -> Dict[str, BaseIndicator]:
    """Load a YAML file and build the indicators under its ``indicators`` key."""
    config_loader = ConfigLoader(config_path)
    return build_indicators(config_loader.get('indicators', {}))
