"""User settings for the editor.

Settings are read once at startup from a JSON file in the user's config
directory. A missing file means defaults; a broken file is logged and
ignored so the editor always starts.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    """Values the editor reads at session start."""
    default_filename: str = EditorConstants.DEFAULT_FILENAME
    log_level: str = EditorConstants.DEFAULT_LOG_LEVEL
    app_name: str = EditorConstants.APP_NAME

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        """Build settings from a dict, keeping defaults for bad or missing keys."""
        settings = cls()
        for field in fields(cls):
            if field.name not in data:
                continue
            value = data[field.name]
            if not isinstance(value, str) or not value:
                logger.warning("Ignoring invalid value for setting %r: %r", field.name, value)
                continue
            setattr(settings, field.name, value)
        return settings


def get_config_dir() -> Path:
    """Platform-appropriate config directory."""
    return Path(platformdirs.user_config_dir(EditorConstants.APP_NAME))


def get_log_dir() -> Path:
    """Platform-appropriate log directory."""
    return Path(platformdirs.user_log_dir(EditorConstants.APP_NAME))


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from ``path`` (default: settings.json in the config dir)."""
    settings_file = path or get_config_dir() / "settings.json"
    if not settings_file.exists():
        return EditorSettings()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Could not load settings from %s: %s", settings_file, e)
        return EditorSettings()

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return EditorSettings()

    return EditorSettings.from_dict(data)
