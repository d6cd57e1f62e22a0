"""Shared paths and settings loading for the yamlsax tools."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

# Centralized path configuration
HOME = Path.home()
STATE = Path(os.environ.get("XDG_STATE_HOME", HOME / ".local/state")) / "yamlsax"
CONFIG = Path(os.environ.get("XDG_CONFIG_HOME", HOME / ".config")) / "yamlsax"
LOGS = STATE / "logs"
EVENTS = STATE / "events"

# Default values
DEFAULT_FIXTURE_DIR = "tests/fixtures"
DEFAULT_EXTENSION = ".yaml"
DEFAULT_QUIT_SENTINEL = "QuitQuitQuit"


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    for path in (STATE, CONFIG, LOGS, EVENTS):
        path.mkdir(parents=True, exist_ok=True)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a settings file with PyYAML.

    Settings files are not limited to the subset the streaming parser
    accepts, so they go through the full loader.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML content as dictionary
    """
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def get_settings_path() -> Path:
    """Get the path to the active settings file.

    Returns:
        Path to settings.yml (user config or repo default)
    """
    user_settings = CONFIG / "settings.yml"
    if user_settings.exists():
        return user_settings

    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "config" / "settings.yml").exists():
            return parent / "config" / "settings.yml"

    return Path(__file__).resolve().parents[1] / "config" / "settings.yml"


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Load the active settings.

    Args:
        path: Explicit settings file; defaults to :func:`get_settings_path`

    Returns:
        Settings dictionary, empty when no file exists
    """
    settings_path = path or get_settings_path()
    if not settings_path.exists():
        return {}
    return load_yaml(settings_path)
