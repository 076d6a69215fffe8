"""Configuration management for FamFinance.

This module centralizes paths, environment variable overrides, logging setup
and the JSON settings files shipped in ``famfinance/settings``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from .models import BudgetRule

# Base project root - assumes this file is in famfinance/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# JSON settings shipped with the package
SETTINGS_DIR = Path(__file__).parent / "settings"

# Data directories
DATA_DIR = Path(os.getenv("FAMFINANCE_DATA_DIR", _PROJECT_ROOT / "data"))

# Dashboard input cache
CACHE_PATH = Path(os.getenv("FAMFINANCE_CACHE_PATH", DATA_DIR / "dashboard_cache.json"))

LOG_LEVEL = os.getenv("FAMFINANCE_LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for scripts and the dashboard."""
    name = (level or LOG_LEVEL).upper()
    numeric_level = getattr(logging, name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def load_config(config_name: str) -> Dict[str, Any]:
    """Load a settings file by name.

    Args:
        config_name: Name of the settings file (without .json extension)

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the configuration file is invalid JSON

    Example:
        >>> load_config('budget_rule')['essentials']['target_percent']
        50
    """
    config_path = SETTINGS_DIR / f"{config_name}.json"

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def get_config_value(config_name: str, *keys: str, default: Any = None) -> Any:
    """Get a nested configuration value by key path.

    Example:
        >>> get_config_value('dashboard', 'projection', 'months')
        120
    """
    try:
        value = load_config(config_name)
        for key in keys:
            value = value[key]
        return value
    except (KeyError, TypeError, FileNotFoundError):
        return default


def load_budget_rule() -> BudgetRule:
    """Targets and penalty weights from ``settings/budget_rule.json``."""
    return BudgetRule.from_dict(load_config('budget_rule'))


def budget_group_labels() -> Dict[str, str]:
    """Display label per budget group."""
    config = load_config('budget_rule')
    return {name: entry.get('label', name) for name, entry in config.items()}
