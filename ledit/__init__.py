"""
ledit - a regex-driven syntax highlighter for small editable buffers.

Provides:
- A pure classification engine (text + language -> role spans)
- Theme application producing Qt character formats
- A QSyntaxHighlighter binding for editing surfaces
"""

APP_NAME = "ledit"
APP_VERSION = "1.0.0"

__all__ = [
    'APP_NAME',
    'APP_VERSION',
]
