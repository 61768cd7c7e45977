"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

from ledit.core.models import Language


@dataclass
class EditorSettings:
    """Editor appearance and behavior settings."""
    theme: str = "Dark"
    font_family: str = "Menlo"
    font_size: int = 14
    show_line_numbers: bool = True
    default_language: Language = Language.PLAIN
    recent_files_limit: int = 10


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    editor: EditorSettings = field(default_factory=EditorSettings)

    recent_files: list[str] = field(default_factory=list)
    last_directory: str = ""


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None
        self._observers: list[Callable[[ApplicationSettings], None]] = []

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'Ledit' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'ledit' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError("top-level value is not an object")

            return self._from_dict(data)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logging.warning(f"SettingsManager - Could not read {self.settings_path}, using defaults: {e}")
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            data = self._to_dict(settings)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)

        except OSError as e:
            logging.error(f"SettingsManager - Failed to save settings to {self.settings_path}: {e}")
            return False

        self._settings = settings
        self._notify_observers()
        return True

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def add_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Add a callback to be notified of settings changes."""
        self._observers.append(callback)

    def remove_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Remove a settings change observer."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        """Notify all observers of settings change."""
        for callback in self._observers:
            try:
                callback(self._settings)
            except Exception as e:
                logging.error(f"SettingsManager - Settings observer failed: {e}", exc_info=True)

    def add_recent_file(self, path: str) -> None:
        """Add a path to the front of the recent files list."""
        settings = self.settings
        recent = settings.recent_files

        # Remove if already exists
        if path in recent:
            recent.remove(path)

        # Add to front
        recent.insert(0, path)

        # Trim to limit
        settings.recent_files = recent[:max(settings.editor.recent_files_limit, 0)]

        directory = os.path.dirname(path)
        if directory:
            settings.last_directory = directory

        self.save()

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        def convert(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.name
            elif isinstance(obj, list):
                return [convert(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            else:
                return obj

        return convert(asdict(settings))

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        def get_value(section: dict, key: str, default: Any) -> Any:
            value = section.get(key, default)
            # Exact type match, so true/false are not read as sizes
            if type(value) is not type(default):
                logging.warning(f"SettingsManager - Ignoring invalid {key} {value!r}, using {default!r}")
                return default
            return value

        def get_language(value: Any) -> Language:
            if isinstance(value, str):
                try:
                    return Language[value]
                except KeyError:
                    return Language.from_string(value)
            return Language.PLAIN

        defaults = EditorSettings()
        editor_data = data.get('editor', {})
        if not isinstance(editor_data, dict):
            editor_data = {}

        editor = EditorSettings(
            theme=get_value(editor_data, 'theme', defaults.theme),
            font_family=get_value(editor_data, 'font_family', defaults.font_family),
            font_size=get_value(editor_data, 'font_size', defaults.font_size),
            show_line_numbers=get_value(editor_data, 'show_line_numbers', defaults.show_line_numbers),
            default_language=get_language(editor_data.get('default_language', defaults.default_language.name)),
            recent_files_limit=get_value(editor_data, 'recent_files_limit', defaults.recent_files_limit),
        )

        recent_files = get_value(data, 'recent_files', [])

        return ApplicationSettings(
            editor=editor,
            recent_files=[str(path) for path in recent_files],
            last_directory=get_value(data, 'last_directory', ''),
        )
