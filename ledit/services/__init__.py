"""
Application services.
"""

from ledit.services.settings import (
    ApplicationSettings,
    EditorSettings,
    SettingsManager,
)

__all__ = [
    'ApplicationSettings',
    'EditorSettings',
    'SettingsManager',
]
