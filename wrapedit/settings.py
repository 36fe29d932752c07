"""Persistent user settings for the wrapedit editor.

Settings are stored as JSON in an OS-appropriate config location and
survive application restarts. Invalid or unreadable settings are logged
and replaced by defaults; they never stop the editor from starting.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    """User preferences for the text area.

    Attributes:
        width: Available line width, in cells for the terminal host
        pref_rows: Preferred number of visible rows (0 = fill the screen)
        font_name: "cell" or a reportlab font name used for measuring
        font_size: Point size for reportlab fonts
        write_enters: Whether Enter inserts a line break
    """
    width: int = EditorConstants.DEFAULT_WIDTH
    pref_rows: int = EditorConstants.DEFAULT_PREF_ROWS
    font_name: str = EditorConstants.DEFAULT_FONT_NAME
    font_size: float = EditorConstants.DEFAULT_FONT_SIZE
    write_enters: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        """Build settings from a dict, skipping unknown or invalid entries."""
        settings = cls()
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                continue
            if validate_setting(key, value):
                setattr(settings, key, value)
            else:
                logger.warning(f"Ignoring invalid value for setting {key}: {value!r}")
        return settings


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if setting is valid, False otherwise.
    """
    if key == 'font_name':
        return isinstance(value, str) and bool(value)

    if key == 'write_enters':
        return isinstance(value, bool)

    # bool is an int subclass; reject it for numeric settings
    if key == 'width':
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        return EditorConstants.MIN_WIDTH <= value <= EditorConstants.MAX_WIDTH

    if key == 'pref_rows':
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        return value >= 0

    if key == 'font_size':
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return False
        return value > 0

    # Unknown settings are considered valid (forward compatibility)
    return True


class SettingsStore:
    """Loads and saves EditorSettings as JSON."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir("wrapedit"))
        self._settings_file = self._config_dir / "settings.json"
        self._cache: Optional[EditorSettings] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def load(self) -> EditorSettings:
        """Load settings from disk.

        Returns:
            The stored settings, or defaults if the file doesn't exist or
            can't be read.
        """
        if self._cache is not None:
            return self._cache

        if not self._settings_file.exists():
            self._cache = EditorSettings()
            return self._cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._cache = EditorSettings()
            return self._cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            self._cache = EditorSettings()
            return self._cache

        self._cache = EditorSettings.from_dict(data)
        return self._cache

    def save(self, settings: EditorSettings) -> bool:
        """Save settings to disk atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")
            return False

        # Write to a temp file, then rename over the old settings
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

        self._cache = settings
        return True

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._cache = None
