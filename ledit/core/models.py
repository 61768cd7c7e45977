"""
Core data models for the syntax highlighting engine.

This module defines the data structures shared by the engine and the UI:
- Lexical roles assigned to spans of text
- Supported languages and file-extension detection
- Token spans and claimed ranges produced by classification passes

All models are designed to be:
- UI-agnostic (no Qt imports)
- Immutable (safe to share between calls)
- Type-hinted for IDE support
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Enumerations
# =============================================================================

class Role(Enum):
    """Lexical category assigned to a span of text."""
    PLAIN = "plain"
    KEYWORD = "keyword"
    TYPE = "type"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    FUNCTION = "function"
    PROPERTY = "property"
    PREPROCESSOR = "preprocessor"


class Language(Enum):
    """Languages with a dedicated pass set."""
    SWIFT = "swift"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    JSON = "json"
    MARKDOWN = "markdown"
    HTML = "html"
    CSS = "css"
    PLAIN = "plain"

    @property
    def display_name(self) -> str:
        """Human-readable language name."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_string(cls, value: Optional[str]) -> 'Language':
        """
        Create from a value, name or display name.

        Unknown input falls back to PLAIN instead of raising.
        """
        if not value:
            return cls.PLAIN

        key = value.strip().lower()
        for language in cls:
            if key in (language.value, language.name.lower(), language.display_name.lower()):
                return language

        logging.debug(f"Language - Unknown language {value!r}, using plain text")
        return cls.PLAIN

    @classmethod
    def detect(cls, filename: str) -> 'Language':
        """Detect the language from a file name's extension."""
        _, ext = os.path.splitext(filename)
        return _EXTENSIONS.get(ext.lower().lstrip('.'), cls.PLAIN)


_DISPLAY_NAMES = {
    Language.SWIFT: "Swift",
    Language.PYTHON: "Python",
    Language.JAVASCRIPT: "JavaScript",
    Language.JSON: "JSON",
    Language.MARKDOWN: "Markdown",
    Language.HTML: "HTML",
    Language.CSS: "CSS",
    Language.PLAIN: "Plain Text",
}

_EXTENSIONS = {
    'swift': Language.SWIFT,
    'py': Language.PYTHON,
    'js': Language.JAVASCRIPT,
    'jsx': Language.JAVASCRIPT,
    'ts': Language.JAVASCRIPT,
    'tsx': Language.JAVASCRIPT,
    'json': Language.JSON,
    'md': Language.MARKDOWN,
    'markdown': Language.MARKDOWN,
    'html': Language.HTML,
    'htm': Language.HTML,
    'css': Language.CSS,
}


# =============================================================================
# Span Models
# =============================================================================

@dataclass(frozen=True)
class ClaimedRange:
    """
    Range already classified by a comment or string pass.

    Later passes must not recolor anything fully inside it.
    """
    start: int          # Start character index (inclusive)
    length: int

    @property
    def end(self) -> int:
        """End character index (exclusive)."""
        return self.start + self.length

    def contains(self, start: int, end: int) -> bool:
        """Check if [start, end) lies entirely within this range."""
        return self.start <= start and end <= self.end

    def overlaps(self, start: int, end: int) -> bool:
        """Check if [start, end) shares at least one character with this range."""
        return start < self.end and self.start < end


@dataclass(frozen=True)
class TokenSpan:
    """A classified range of the source text."""
    start: int          # Zero-based character offset
    length: int
    role: Role

    @property
    def end(self) -> int:
        """End character index (exclusive)."""
        return self.start + self.length

    def text_in(self, source: str) -> str:
        """Get the substring of source covered by this span."""
        return source[self.start:self.end]
