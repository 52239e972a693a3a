"""
Story configuration loader.
YAML file with environment overrides; built-in defaults when no file exists.
"""

import os
import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from hedge_analytics.derivations import DEFAULT_PALETTE
from hedge_analytics.calculations.rolling import DEFAULT_WINDOW
from hedge_analytics.calculations.statistics import TRADING_DAYS_PER_YEAR

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = './config/story.yml'

DEFAULT_CONFIG = {
    'palette': list(DEFAULT_PALETTE),
    'rolling_window': DEFAULT_WINDOW,
    'periods_per_year': TRADING_DAYS_PER_YEAR,
    'stress_suffixes': ['A', 'B'],
    'output_dir': './data/processed/story',
}


class ConfigError(Exception):
    """Raised when story configuration cannot be loaded."""
    pass


def load_story_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load story configuration.

    Resolution: explicit path, then HEDGE_STORY_CONFIG, then
    ./config/story.yml. An explicit or env-provided path must exist; the
    default path silently falls back to DEFAULT_CONFIG.
    HEDGE_STORY_OUTPUT_DIR overrides output_dir.

    Args:
        config_path: Path to YAML config file

    Returns:
        Dictionary with every DEFAULT_CONFIG key

    Raises:
        ConfigError: If the file is missing, malformed or has bad values
    """
    explicit = config_path or os.getenv('HEDGE_STORY_CONFIG')
    config_file = Path(explicit or DEFAULT_CONFIG_PATH)

    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to load story config: {e}")

        if not isinstance(loaded, dict):
            raise ConfigError(f"Story config must be a mapping, got {type(loaded).__name__}")

        unknown = set(loaded) - set(DEFAULT_CONFIG)
        if unknown:
            logger.warning(f"Ignoring unknown story config keys: {sorted(unknown)}")

        config.update({k: v for k, v in loaded.items() if k in DEFAULT_CONFIG})
        logger.info(f"Loaded story config from {config_file}")
    elif explicit:
        raise ConfigError(f"Story config file not found: {explicit}")

    output_dir = os.getenv('HEDGE_STORY_OUTPUT_DIR')
    if output_dir:
        config['output_dir'] = output_dir

    _validate(config)
    return config


def _validate(config: Dict[str, Any]) -> None:
    palette = config['palette']
    if not isinstance(palette, list) or not palette:
        raise ConfigError("palette must be a non-empty list of colors")

    for key in ('rolling_window', 'periods_per_year'):
        value = config[key]
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ConfigError(f"{key} must be a positive integer, got {value!r}")

    suffixes = config['stress_suffixes']
    if not isinstance(suffixes, list):
        raise ConfigError("stress_suffixes must be a list")
    config['stress_suffixes'] = [str(s) for s in suffixes]
