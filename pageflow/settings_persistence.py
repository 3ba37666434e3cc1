"""Persistent default layout settings.

Margins, spacing and text size can be saved once and picked up by every
later run of the command line tool. Settings are stored as JSON in an
OS-appropriate config directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .layout_config import NUMERIC_FIELDS, LayoutConfig

logger = logging.getLogger(__name__)


class SettingsPersistence:
    """Loads and saves default layout settings.

    Problems reading or writing the file are logged and never raised, so a
    broken settings file only means the built-in defaults are used.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir("pageflow"))
        self._config_dir = Path(config_dir)
        self._settings_file = self._config_dir / "layout.json"
        self._settings_cache: Optional[Dict[str, Any]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def load_settings(self) -> Dict[str, Any]:
        """Return the stored settings.

        Only known numeric layout fields are returned. Missing or invalid
        files give an empty dict.
        """
        if self._settings_cache is not None:
            return dict(self._settings_cache)

        settings: Dict[str, Any] = {}
        if self._settings_file.exists():
            try:
                with open(self._settings_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    settings = {
                        key: value for key, value in data.items()
                        if key in NUMERIC_FIELDS
                        and isinstance(value, (int, float)) and not isinstance(value, bool)
                    }
                else:
                    logger.warning("Settings file has invalid format (not a dict), ignoring")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Could not load settings from {self._settings_file}: {e}")

        self._settings_cache = settings
        return dict(settings)

    def save_settings(self, settings: Dict[str, Any]) -> bool:
        """Store settings atomically.

        Returns:
            True if the file was written, False otherwise.
        """
        unknown = set(settings) - set(NUMERIC_FIELDS)
        if unknown:
            raise ValueError(f"Unknown layout settings: {', '.join(sorted(unknown))}")

        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")
            return False

        # Write to a temp file, then rename over the real one
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

        self._settings_cache = dict(settings)
        return True

    def save_config(self, config: LayoutConfig) -> bool:
        """Store the numeric fields of a LayoutConfig."""
        return self.save_settings(config.to_dict())

    def load_config(self, **overrides: Any) -> LayoutConfig:
        """Build a LayoutConfig from stored settings and overrides.

        Stored values that LayoutConfig rejects are logged and dropped.
        """
        settings = self.load_settings()
        try:
            LayoutConfig.from_dict(settings)
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring stored layout settings: {e}")
            settings = {}
        return LayoutConfig.from_dict(settings, **overrides)
