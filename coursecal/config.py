"""Configuration file loading and calendar settings parsing."""

import dataclasses
import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .categories import Vocabulary, get_vocabulary
from .constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_FILES,
    DEFAULT_MAX_EVENTS_PER_DAY,
    DEFAULT_VOCABULARY,
    DEFAULT_WEEK_START,
    HOME_CONFIG_FILE,
)
from .errors import ValidationError

WEEKDAYS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]


@dataclass
class CalendarConfig:
    """
    Settings for one calendar instance.

    Attributes:
        vocabulary: Category vocabulary, with the configured default category
        week_start: First weekday of a week, Monday=0 ... Sunday=6
        max_events_per_day: Events shown per day cell, None for no limit
        events_path: Optional JSON file with seed events
    """

    vocabulary: Vocabulary = dataclasses.field(
        default_factory=lambda: get_vocabulary(DEFAULT_VOCABULARY)
    )
    week_start: int = DEFAULT_WEEK_START
    max_events_per_day: Optional[int] = DEFAULT_MAX_EVENTS_PER_DAY
    events_path: Optional[str] = None


def find_default_config() -> Optional[str]:
    """
    Find a default configuration file in multiple locations.

    Searches for configuration files in priority order:
    1. Current directory: ./coursecal.json, ./calendar.json
    2. User home directory: ~/.coursecal.json
    3. User config directory:
       - Linux/macOS: ~/.config/coursecal/config.json
       - macOS: ~/Library/Application Support/coursecal/config.json
       - Windows: %APPDATA%/coursecal/config.json

    Returns:
        Path to the first found config file, or None if none found
    """
    for name in DEFAULT_CONFIG_FILES:
        if os.path.isfile(name):
            return name

    home_config = Path.home() / HOME_CONFIG_FILE
    if home_config.is_file():
        return str(home_config)

    config_dir = _get_config_directory()
    if config_dir:
        config_file = config_dir / "config.json"
        if config_file.is_file():
            return str(config_file)

    return None


def _get_config_directory() -> Optional[Path]:
    """
    Get the platform-specific configuration directory for coursecal.

    Returns:
        Path to config directory, or None if it cannot be determined
    """
    home = Path.home()

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / CONFIG_DIR_NAME

    if sys.platform == "darwin":
        xdg_default = home / ".config" / CONFIG_DIR_NAME
        if xdg_default.exists():
            return xdg_default
        return home / "Library" / "Application Support" / CONFIG_DIR_NAME
    elif sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / CONFIG_DIR_NAME
        return home / "AppData" / "Roaming" / CONFIG_DIR_NAME
    else:
        return home / ".config" / CONFIG_DIR_NAME


def parse_week_start(value: Any) -> int:
    """
    Parse a week start setting.

    Supports weekday names ("sunday", "Mon") and numbers 0-6 with
    Monday=0, matching ``datetime.weekday()``.

    Raises:
        ValueError: If the value is not a weekday
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid week start {value!r}")
    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise ValueError(f"Week start must be between 0 and 6, got {value}")
    if isinstance(value, str):
        s = value.strip().lower()
        if s.isdigit():
            return parse_week_start(int(s))
        for index, name in enumerate(WEEKDAYS):
            if len(s) >= 3 and name.startswith(s):
                return index
    raise ValueError(f"Invalid week start '{value}'")


def _parse_limit(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("'max_events_per_day' must be an integer or null")
    limit = int(value)
    if limit < 0:
        raise ValueError("'max_events_per_day' must be non-negative")
    return limit


def load_config(path: str) -> CalendarConfig:
    """
    Load calendar configuration from a JSON file.

    Expected JSON structure (every field optional):
    {
        "vocabulary": "student",
        "week_start": "sunday",
        "default_category": "assignment",
        "max_events_per_day": 2,
        "events": "events.json"
    }

    A relative "events" path is resolved against the config file's directory.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Parsed calendar configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        PermissionError: If config file can't be read
        ValueError: If config format is invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            cfg = json.load(f)
    except FileNotFoundError:
        raise
    except PermissionError:
        raise
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format: {e}")
    except Exception as e:
        raise ValueError(f"Failed to read config file: {e}")

    if not isinstance(cfg, dict):
        raise ValueError("Config file must contain a JSON object")

    try:
        vocabulary = get_vocabulary(str(cfg.get("vocabulary", DEFAULT_VOCABULARY)))
        if cfg.get("default_category") is not None:
            default = vocabulary.parse(cfg["default_category"])
            vocabulary = dataclasses.replace(vocabulary, default=default)
    except ValidationError as e:
        raise ValueError(str(e))

    try:
        week_start = parse_week_start(cfg.get("week_start", DEFAULT_WEEK_START))
    except ValueError as e:
        raise ValueError(f"Invalid 'week_start' value: {e}")

    try:
        max_events = _parse_limit(
            cfg.get("max_events_per_day", DEFAULT_MAX_EVENTS_PER_DAY)
        )
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid 'max_events_per_day' value: {e}")

    events_path: Optional[str] = cfg.get("events")
    if events_path is not None:
        if not isinstance(events_path, str):
            raise ValueError("'events' must be a file path")
        if not os.path.isabs(events_path):
            events_path = str(Path(path).parent / events_path)

    return CalendarConfig(
        vocabulary=vocabulary,
        week_start=week_start,
        max_events_per_day=max_events,
        events_path=events_path,
    )
