"""
hyperplanes — Settings.

Defaults live in ``DEFAULT_SETTINGS``. They can be overridden by a JSON file
(passed explicitly or named by ``HYPERPLANES_SETTINGS``) and then by the
``HYPERPLANES_*`` environment variables.
"""

import json
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

SETTINGS_FILE_ENV = "HYPERPLANES_SETTINGS"

# ── Default settings ─────────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    "tolerance": 1e-10,        # absolute threshold for zero / equality tests
    "display_precision": 3,    # decimals used when rounding for display
    "graph_theme": "dark",     # "dark" or "light"
    "log_level": "WARNING",
}

_ENV_OVERRIDES = {
    "HYPERPLANES_TOLERANCE": "tolerance",
    "HYPERPLANES_DISPLAY_PRECISION": "display_precision",
    "HYPERPLANES_GRAPH_THEME": "graph_theme",
    "HYPERPLANES_LOG_LEVEL": "log_level",
}

_THEMES = {"dark", "light"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

_cached: Optional[dict] = None


def _load_file(path: str) -> dict:
    """Read a JSON object from *path*; unreadable or invalid files yield ``{}``."""
    if not os.path.exists(path):
        logger.warning("Settings file not found: %s", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring settings file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return {}
    return data


def _validate(settings: dict) -> dict:
    """Coerce every known key to its type and check its range."""
    try:
        tolerance = float(settings["tolerance"])
        precision = int(settings["display_precision"])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid numeric setting: {e}")
    if tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")
    if precision < 0:
        raise ValueError(f"display_precision must be >= 0, got {precision}")

    theme = str(settings["graph_theme"]).lower()
    if theme not in _THEMES:
        raise ValueError(
            f"graph_theme must be one of {sorted(_THEMES)}, got '{theme}'")

    level = str(settings["log_level"]).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"log_level must be one of {sorted(_LOG_LEVELS)}, got '{level}'")

    settings.update(
        tolerance=tolerance,
        display_precision=precision,
        graph_theme=theme,
        log_level=level,
    )
    return settings


def load_settings(path: Optional[str] = None) -> dict:
    """Build a fresh settings dict: defaults, then *path*, then environment.

    When *path* is None the file named by ``HYPERPLANES_SETTINGS`` (if set)
    is read instead. Unknown keys in the file are ignored.
    """
    settings = dict(DEFAULT_SETTINGS)

    path = path or os.environ.get(SETTINGS_FILE_ENV)
    if path:
        for key, value in _load_file(path).items():
            if key in DEFAULT_SETTINGS:
                settings[key] = value
            else:
                logger.debug("Unknown setting '%s' ignored", key)

    for env_name, key in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is not None and value.strip():
            settings[key] = value.strip()

    return _validate(settings)


def get_settings() -> dict:
    """Return the process-wide settings, loading them on first use."""
    global _cached
    if _cached is None:
        _cached = load_settings()
    return _cached


def reset_settings() -> None:
    """Forget the cached settings so the next ``get_settings`` reloads them."""
    global _cached
    _cached = None
