"""Lightweight persistent cache for the dashboard's last-used inputs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from . import config

logger = logging.getLogger(__name__)

DEFAULT_CACHE: Dict[str, Any] = {
    # None and missing keys mean "never saved"; the dashboard uses its defaults.
    'income': None,
    'spending': {},
    'goals': [],
    'projection': {},
}


def _defaults() -> Dict[str, Any]:
    return json.loads(json.dumps(DEFAULT_CACHE))


def load_cache(path: Path | None = None) -> Dict[str, Any]:
    target = path or config.CACHE_PATH
    if not target.exists():
        return _defaults()
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable cache %s: %s", target, exc)
        return _defaults()
    if not isinstance(data, dict):
        logger.warning("Ignoring cache %s: expected a JSON object", target)
        return _defaults()
    merged = _defaults()
    merged.update({k: v for k, v in data.items() if k in DEFAULT_CACHE})
    return merged


def save_cache(cache: Dict[str, Any], path: Path | None = None) -> None:
    target = path or config.CACHE_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {k: v for k, v in cache.items() if k in DEFAULT_CACHE}
    with target.open('w', encoding='utf-8') as handle:
        json.dump(payload, handle, indent=2, sort_keys=True, default=str)
