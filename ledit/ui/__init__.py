"""
PyQt6 User Interface module.

Provides the editor window and the widgets it is built from:
- Main window (menus, status bar, recent files)
- Code editor with line numbers
- Syntax highlighting bound to a QTextDocument
"""

from ledit.ui.main_window import MainWindow

__all__ = [
    'MainWindow',
]
