"""Persistent JSON config helpers.

Stores the history limit, parent-fallback budget, default search filters and
the last visited directory. All access is defensive: malformed or missing
config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .history import MAX_HISTORY
from .navigation import DEFAULT_FALLBACK_ATTEMPTS

logger = logging.getLogger(__name__)

APP_NAME = "lazybrowse"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class SearchDefaults:
    files: bool = True
    folders: bool = True
    links: bool = True


@dataclass(frozen=True)
class BrowserSettings:
    """Validated view of the config file."""

    history_limit: int = MAX_HISTORY
    fallback_attempts: int = DEFAULT_FALLBACK_ATTEMPTS
    search_defaults: SearchDefaults = field(default_factory=SearchDefaults)
    start_path: Path | None = None


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored so a read-only config
    directory never breaks browsing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def _coerce_int(value: object, default: int, minimum: int) -> int:
    """Booleans and non-integers are invalid and yield ``default``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return max(minimum, value)


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _load_search_defaults(value: object) -> SearchDefaults:
    if not isinstance(value, dict):
        return SearchDefaults()
    return SearchDefaults(
        files=_coerce_bool(value.get("files"), True),
        folders=_coerce_bool(value.get("folders"), True),
        links=_coerce_bool(value.get("links"), True),
    )


def load_settings() -> BrowserSettings:
    data = load_config()
    raw_start = data.get("start_path")
    return BrowserSettings(
        history_limit=_coerce_int(data.get("history_limit"), MAX_HISTORY, 1),
        fallback_attempts=_coerce_int(data.get("fallback_attempts"), DEFAULT_FALLBACK_ATTEMPTS, 0),
        search_defaults=_load_search_defaults(data.get("search_defaults")),
        start_path=Path(raw_start) if isinstance(raw_start, str) and raw_start else None,
    )


def save_start_path(path: Path) -> None:
    """Remember ``path`` as the directory to open next time."""
    config = load_config()
    config["start_path"] = str(path)
    save_config(config)


__all__ = [
    "BrowserSettings",
    "CONFIG_PATH",
    "SearchDefaults",
    "load_config",
    "load_settings",
    "save_config",
    "save_start_path",
]
