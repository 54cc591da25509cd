"""Persistent user preferences.

Preferences are stored as JSON in an OS-appropriate config directory and
survive application restarts. Documents themselves are never persisted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """User preferences with their defaults."""

    coalesce_segments: bool = False  # Merge same-style neighbours after edits
    auto_copy: bool = False          # Copy the output after every apply
    show_preview: bool = True        # Render the preview after mutating commands

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Build settings from stored data, ignoring invalid or unknown keys."""
        values = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if SettingsPersistence.validate_setting(f.name, value):
                values[f.name] = value
            else:
                logger.warning(f"Ignoring invalid value for {f.name}: {value!r}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SettingsPersistence:
    """Manages persistent storage of user preferences."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir("ansimark"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Any]] = None

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_raw(self) -> Dict[str, Any]:
        """Load the stored dict from disk.

        Returns:
            The stored preferences, or an empty dict if the file doesn't exist
            or can't be read.
        """
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def load(self) -> Settings:
        return Settings.from_dict(self._load_raw())

    def save(self, settings: Settings) -> bool:
        """Save preferences to disk atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_config_dir()
        data = settings.to_dict()
        temp_file = self._settings_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

        self._settings_cache = data
        return True

    def update(self, key: str, value: Any) -> bool:
        """Validate and persist a single preference."""
        if key not in {f.name for f in fields(Settings)}:
            logger.warning(f"Unknown setting: {key}")
            return False
        if not self.validate_setting(key, value):
            return False
        settings = self.load()
        setattr(settings, key, value)
        return self.save(settings)

    @staticmethod
    def validate_setting(key: str, value: Any) -> bool:
        """Return True if ``value`` is acceptable for ``key``."""
        if key in ('coalesce_segments', 'auto_copy', 'show_preview'):
            return isinstance(value, bool)
        # Unknown settings are considered valid (forward compatibility)
        return True


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
