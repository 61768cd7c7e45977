"""
Reusable UI widgets for the editor.

Provides specialized widgets for:
- Code editing with line numbers
- Syntax highlighting and themes
"""

from ledit.ui.widgets.code_editor import (
    CodeEditor,
    LineNumberArea,
)
from ledit.ui.widgets.syntax_highlighter import (
    EditorTheme,
    EditorThemes,
    Highlighter,
    StyledRun,
    StyledText,
    SyntaxHighlighter,
    create_highlighter_for_file,
    get_available_themes,
    get_theme_by_name,
)

__all__ = [
    # Editor
    'CodeEditor',
    'LineNumberArea',
    # Highlighting
    'EditorTheme',
    'EditorThemes',
    'Highlighter',
    'StyledRun',
    'StyledText',
    'SyntaxHighlighter',
    'create_highlighter_for_file',
    'get_available_themes',
    'get_theme_by_name',
]
