"""Persistent JSON config and credential lookup.

Stores the selected theme, playback speed, and an optional GitHub token.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path

from platformdirs import user_config_dir

from .ui_theme import THEMES, normalize_theme_name

logger = logging.getLogger(__name__)

APP_NAME = "lazyreel"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
TOKEN_ENV_VARS = ("LAZYREEL_GITHUB_TOKEN", "GITHUB_TOKEN")
SPEED_OPTIONS: tuple[float, ...] = (0.25, 0.5, 1.0, 1.5, 2.0, 3.0)
DEFAULT_SPEED = 1.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored; losing a preference must
    not interrupt playback.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_theme_name() -> str | None:
    """Load persisted theme name, returning ``None`` when unset/unknown."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    candidate = value.strip().lower()
    return candidate if candidate in THEMES else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected theme (normalized into the supported set)."""
    config = load_config()
    config["theme"] = normalize_theme_name(theme_name)
    save_config(config)


def coerce_speed(value: object) -> float | None:
    """Return ``value`` as a positive finite multiplier, or ``None``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    speed = float(value)
    if not math.isfinite(speed) or speed <= 0:
        return None
    return speed


def load_speed() -> float:
    """Load persisted playback speed; unknown values fall back to ``1.0``."""
    speed = coerce_speed(load_config().get("speed"))
    if speed is None or speed not in SPEED_OPTIONS:
        return DEFAULT_SPEED
    return speed


def save_speed(speed: float) -> None:
    """Persist playback speed when it is one of ``SPEED_OPTIONS``."""
    normalized = coerce_speed(speed)
    if normalized is None or normalized not in SPEED_OPTIONS:
        return
    config = load_config()
    config["speed"] = normalized
    save_config(config)


def next_speed_option(speed: float) -> float:
    """Return the next faster speed option (saturating at the fastest)."""
    for option in SPEED_OPTIONS:
        if option > speed:
            return option
    return SPEED_OPTIONS[-1]


def previous_speed_option(speed: float) -> float:
    """Return the next slower speed option (saturating at the slowest)."""
    for option in reversed(SPEED_OPTIONS):
        if option < speed:
            return option
    return SPEED_OPTIONS[0]


def load_access_token() -> str | None:
    """Resolve the GitHub token from env vars, then the config file."""
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    value = load_config().get("github_token")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def credentials_present() -> bool:
    """Return whether an access token is available."""
    return load_access_token() is not None


__all__ = [
    "CONFIG_PATH",
    "SPEED_OPTIONS",
    "DEFAULT_SPEED",
    "load_config",
    "save_config",
    "load_theme_name",
    "save_theme_name",
    "coerce_speed",
    "load_speed",
    "save_speed",
    "next_speed_option",
    "previous_speed_option",
    "load_access_token",
    "credentials_present",
]
