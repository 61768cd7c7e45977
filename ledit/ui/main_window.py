"""
Main application window.

Provides the primary UI container with:
- Menu bar (file, view, language)
- Central code editor
- Status bar with cursor position and language
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtGui import QAction, QActionGroup, QCloseEvent, QKeySequence
from PyQt6.QtWidgets import (
    QFileDialog, QLabel, QMainWindow, QMessageBox, QStatusBar, QWidget
)

from ledit import APP_NAME
from ledit.core.models import Language
from ledit.services.settings import SettingsManager
from ledit.ui.widgets.code_editor import CodeEditor
from ledit.ui.widgets.syntax_highlighter import get_available_themes, get_theme_by_name


MIN_FONT_SIZE = 6
MAX_FONT_SIZE = 72


class MainWindow(QMainWindow):
    """
    Main application window.

    Hosts a single code editor and keeps the editor settings in sync
    with the settings file.
    """

    def __init__(
        self,
        settings_manager: Optional[SettingsManager] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)

        self._settings_manager = settings_manager or SettingsManager()
        self._settings = self._settings_manager.settings
        self._current_path: Optional[Path] = None
        self._font_size = self._settings.editor.font_size

        editor_settings = self._settings.editor
        self.editor = CodeEditor(
            theme=get_theme_by_name(editor_settings.theme),
            language=editor_settings.default_language,
            font_size=editor_settings.font_size,
            font_family=editor_settings.font_family,
            show_line_numbers=editor_settings.show_line_numbers,
        )

        self._setup_ui()
        self._setup_menus()
        self._setup_statusbar()
        self._setup_connections()

    def _setup_ui(self) -> None:
        """Set up the main UI layout."""
        self.setWindowTitle(APP_NAME)
        self.setMinimumSize(600, 400)
        self.resize(1000, 700)
        self.setCentralWidget(self.editor)

    def _setup_menus(self) -> None:
        """Set up the menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("&File")

        self._action_open = QAction("&Open...", self)
        self._action_open.setShortcut(QKeySequence.StandardKey.Open)
        self._action_open.triggered.connect(self._on_open)
        file_menu.addAction(self._action_open)

        # Recent files submenu
        self._recent_menu = file_menu.addMenu("&Recent")
        self._update_recent_menu()

        file_menu.addSeparator()

        self._action_exit = QAction("E&xit", self)
        self._action_exit.setShortcut(QKeySequence.StandardKey.Quit)
        self._action_exit.triggered.connect(self.close)
        file_menu.addAction(self._action_exit)

        # View menu
        view_menu = menubar.addMenu("&View")

        theme_menu = view_menu.addMenu("&Theme")
        self._theme_group = QActionGroup(self)
        for name in get_available_themes():
            action = QAction(name, self, checkable=True)
            action.setChecked(name == self.editor.theme.name)
            action.triggered.connect(lambda checked, n=name: self.set_theme(n))
            self._theme_group.addAction(action)
            theme_menu.addAction(action)

        view_menu.addSeparator()

        self._action_zoom_in = QAction("Zoom &In", self)
        self._action_zoom_in.setShortcut(QKeySequence.StandardKey.ZoomIn)
        self._action_zoom_in.triggered.connect(lambda: self._change_font_size(1))
        view_menu.addAction(self._action_zoom_in)

        self._action_zoom_out = QAction("Zoom &Out", self)
        self._action_zoom_out.setShortcut(QKeySequence.StandardKey.ZoomOut)
        self._action_zoom_out.triggered.connect(lambda: self._change_font_size(-1))
        view_menu.addAction(self._action_zoom_out)

        # Language menu
        language_menu = menubar.addMenu("&Language")
        self._language_group = QActionGroup(self)
        self._language_actions: dict[Language, QAction] = {}
        for language in Language:
            action = QAction(language.display_name, self, checkable=True)
            action.triggered.connect(lambda checked, lang=language: self.set_language(lang))
            self._language_group.addAction(action)
            language_menu.addAction(action)
            self._language_actions[language] = action
        self._language_actions[self.editor.language].setChecked(True)

    def _setup_statusbar(self) -> None:
        """Set up the status bar."""
        self._statusbar = QStatusBar()
        self.setStatusBar(self._statusbar)

        # Status message
        self._status_label = QLabel("Ready")
        self._statusbar.addWidget(self._status_label, 1)

        # Cursor position label
        self._position_label = QLabel("Ln 1, Col 1")
        self._statusbar.addPermanentWidget(self._position_label)

        # Language label
        self._language_label = QLabel(self.editor.highlighter.get_language_name())
        self._statusbar.addPermanentWidget(self._language_label)

    def _setup_connections(self) -> None:
        """Set up signal connections."""
        self.editor.cursorPositionChanged.connect(self._update_position)

    def _update_position(self) -> None:
        cursor = self.editor.textCursor()
        self._position_label.setText(f"Ln {cursor.blockNumber() + 1}, Col {cursor.positionInBlock() + 1}")

    def _update_recent_menu(self) -> None:
        """Update the recent files menu."""
        self._recent_menu.clear()

        recent_files = list(self._settings.recent_files)
        if not recent_files:
            empty_action = QAction("No recent files", self)
            empty_action.setEnabled(False)
            self._recent_menu.addAction(empty_action)
            return

        for path in recent_files:
            action = QAction(Path(path).name, self)
            action.setToolTip(path)
            action.triggered.connect(lambda checked, p=path: self.open_file(p))
            self._recent_menu.addAction(action)

        self._recent_menu.addSeparator()
        clear_action = QAction("Clear Recent", self)
        clear_action.triggered.connect(self._clear_recent)
        self._recent_menu.addAction(clear_action)

    def _clear_recent(self) -> None:
        """Clear recent files list."""
        self._settings.recent_files.clear()
        self._settings_manager.save()
        self._update_recent_menu()

    # === Public API ===

    def open_file(self, path: str, language: Optional[Language] = None) -> bool:
        """
        Load a file into the editor.

        Args:
            path: File to open
            language: Language override, detected from the name if None

        Returns:
            True if the file was loaded
        """
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding='utf-8', errors='replace')
        except OSError as e:
            logging.error(f"MainWindow - Failed to open {file_path}: {e}")
            QMessageBox.critical(self, "Open Failed", f"Could not open {file_path}:\n\n{e}")
            return False

        self.editor.setPlainText(text)
        if language is None:
            language = Language.detect(file_path.name)
        self.set_language(language)

        self._current_path = file_path
        self.setWindowTitle(f"{file_path.name} - {APP_NAME}")
        self._status_label.setText(str(file_path))

        self._settings_manager.add_recent_file(str(file_path))
        self._update_recent_menu()

        logging.info(f"MainWindow - Opened {file_path} as {language.display_name}")
        return True

    def set_language(self, language: Language) -> None:
        """Set the editor language and update the UI."""
        self.editor.set_language(language)
        self._language_actions[language].setChecked(True)
        self._language_label.setText(language.display_name)

    def set_theme(self, name: str, save: bool = True) -> None:
        """
        Set the editor theme by name.

        Args:
            name: Theme name, case-insensitive
            save: Store the theme in the settings file
        """
        theme = get_theme_by_name(name)
        self.editor.set_theme(theme)
        for action in self._theme_group.actions():
            action.setChecked(action.text() == theme.name)

        if save:
            self._settings.editor.theme = theme.name
            self._settings_manager.save()

    def set_font_size(self, size: int, save: bool = True) -> None:
        """
        Set the editor font size, the base for zooming.

        Args:
            size: Font size in points
            save: Store the size in the settings file
        """
        self._font_size = size
        self.editor.set_font_size(size)

        if save:
            self._settings.editor.font_size = size
            self._settings_manager.save()

    def _change_font_size(self, delta: int) -> None:
        size = min(max(self._font_size + delta, MIN_FONT_SIZE), MAX_FONT_SIZE)
        if size != self._font_size:
            self.set_font_size(size)

    def _on_open(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Open File",
            self._settings.last_directory or str(Path.home()),
        )
        if path:
            self.open_file(path)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Handle window close."""
        self._settings_manager.save()
        event.accept()
