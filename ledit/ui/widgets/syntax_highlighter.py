"""
Syntax highlighter for the code editor.

Provides:
- Editor themes (role -> color palettes)
- Theme application turning classified spans into styled runs
- A QSyntaxHighlighter binding that re-classifies the whole document
- Helpers to look up themes and attach highlighters to files
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from PyQt6.QtGui import (
    QColor, QFont, QSyntaxHighlighter, QTextBlock, QTextCharFormat, QTextDocument
)

from ledit.core.models import Language, Role
from ledit.core.syntax import classify


DEFAULT_FONT_FAMILY = "Menlo"
DEFAULT_FONT_SIZE = 14


def _rgb(red: float, green: float, blue: float) -> QColor:
    return QColor.fromRgbF(red, green, blue)


@dataclass
class EditorTheme:
    """Color palette for the editor chrome and each lexical role."""
    name: str
    background: QColor
    line_number_background: QColor
    line_number_text: QColor
    text: QColor
    cursor: QColor
    selection: QColor
    keyword: QColor
    type: QColor
    string: QColor
    number: QColor
    comment: QColor
    function: QColor
    property: QColor
    preprocessor: QColor

    def color_for(self, role: Role) -> QColor:
        """Get the foreground color for a role (plain uses the text color)."""
        if role is Role.PLAIN:
            return QColor(self.text)
        return QColor(getattr(self, role.value))

    def get_format(self, role: Role, font: Optional[QFont] = None) -> QTextCharFormat:
        """Get QTextCharFormat for a role."""
        fmt = QTextCharFormat()
        fmt.setForeground(self.color_for(role))
        if font is not None:
            fmt.setFont(font)
        return fmt


class EditorThemes:
    """Predefined editor themes."""

    @staticmethod
    def dark() -> EditorTheme:
        """Dark theme."""
        return EditorTheme(
            name="Dark",
            background=_rgb(0.11, 0.11, 0.12),
            line_number_background=_rgb(0.13, 0.13, 0.14),
            line_number_text=_rgb(0.45, 0.45, 0.47),
            text=_rgb(0.92, 0.92, 0.93),
            cursor=QColor(255, 255, 255),
            selection=_rgb(0.25, 0.35, 0.55),
            keyword=_rgb(0.99, 0.37, 0.53),
            type=_rgb(0.67, 0.85, 0.60),
            string=_rgb(0.99, 0.56, 0.37),
            number=_rgb(0.85, 0.75, 0.50),
            comment=_rgb(0.45, 0.50, 0.45),
            function=_rgb(0.40, 0.72, 0.87),
            property=_rgb(0.67, 0.85, 0.60),
            preprocessor=_rgb(0.99, 0.56, 0.37),
        )

    @staticmethod
    def light() -> EditorTheme:
        """Light theme."""
        return EditorTheme(
            name="Light",
            background=_rgb(1.0, 1.0, 1.0),
            line_number_background=_rgb(0.97, 0.97, 0.97),
            line_number_text=_rgb(0.55, 0.55, 0.57),
            text=_rgb(0.1, 0.1, 0.1),
            cursor=QColor(0, 0, 0),
            selection=_rgb(0.70, 0.84, 1.0),
            keyword=_rgb(0.67, 0.05, 0.57),
            type=_rgb(0.11, 0.43, 0.35),
            string=_rgb(0.77, 0.10, 0.09),
            number=_rgb(0.11, 0.00, 0.81),
            comment=_rgb(0.35, 0.45, 0.35),
            function=_rgb(0.20, 0.40, 0.64),
            property=_rgb(0.11, 0.43, 0.35),
            preprocessor=_rgb(0.39, 0.22, 0.13),
        )

    @staticmethod
    def monokai() -> EditorTheme:
        """Monokai theme."""
        return EditorTheme(
            name="Monokai",
            background=_rgb(0.15, 0.16, 0.13),
            line_number_background=_rgb(0.17, 0.18, 0.15),
            line_number_text=_rgb(0.55, 0.55, 0.47),
            text=_rgb(0.97, 0.97, 0.95),
            cursor=QColor(255, 255, 255),
            selection=_rgb(0.29, 0.33, 0.24),
            keyword=_rgb(0.98, 0.15, 0.45),
            type=_rgb(0.40, 0.85, 0.94),
            string=_rgb(0.90, 0.86, 0.45),
            number=_rgb(0.68, 0.51, 1.0),
            comment=_rgb(0.46, 0.44, 0.36),
            function=_rgb(0.65, 0.89, 0.18),
            property=_rgb(0.40, 0.85, 0.94),
            preprocessor=_rgb(0.98, 0.15, 0.45),
        )


def build_font(family: str = DEFAULT_FONT_FAMILY, size: float = DEFAULT_FONT_SIZE) -> QFont:
    """Build the monospace editor font."""
    if size <= 0:
        logging.warning(f"SyntaxHighlighter - Invalid font size {size}, using {DEFAULT_FONT_SIZE}")
        size = DEFAULT_FONT_SIZE

    font = QFont(family)
    font.setStyleHint(QFont.StyleHint.Monospace)
    font.setFixedPitch(True)
    font.setPointSizeF(float(size))
    return font


# =============================================================================
# Styled Output
# =============================================================================

@dataclass(frozen=True)
class StyledRun:
    """A run of characters sharing one role, with its resolved style."""
    start: int
    length: int
    role: Role
    color: QColor
    font: QFont

    @property
    def end(self) -> int:
        return self.start + self.length

    def to_format(self) -> QTextCharFormat:
        """Get the QTextCharFormat for this run."""
        fmt = QTextCharFormat()
        fmt.setForeground(self.color)
        fmt.setFont(self.font)
        return fmt


@dataclass
class StyledText:
    """
    Highlighted text ready for a rendering surface.

    ``runs`` covers the whole text in order, plain gaps included.
    """
    text: str
    font: QFont
    foreground: QColor
    runs: List[StyledRun] = field(default_factory=list)

    _starts: List[int] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._starts = [run.start for run in self.runs]

    @property
    def spans(self) -> List[StyledRun]:
        """Runs with a role other than plain."""
        return [run for run in self.runs if run.role is not Role.PLAIN]

    def base_format(self) -> QTextCharFormat:
        """Format applied to the whole text before any role."""
        fmt = QTextCharFormat()
        fmt.setForeground(self.foreground)
        fmt.setFont(self.font)
        return fmt

    def runs_between(self, start: int, end: int) -> Iterator[StyledRun]:
        """Iterate over runs intersecting [start, end)."""
        index = max(bisect.bisect_right(self._starts, start) - 1, 0)
        for run in self.runs[index:]:
            if run.start >= end:
                break
            if run.end > start:
                yield run

    def role_at(self, offset: int) -> Role:
        """Get the role of the character at offset."""
        for run in self.runs_between(offset, offset + 1):
            return run.role
        return Role.PLAIN

    def in_utf16(self) -> StyledText:
        """
        Get a copy with run offsets counted in UTF-16 code units.

        Qt document positions count a character outside the Basic
        Multilingual Plane as two units. Returns self when the text has
        no such characters.
        """
        if all(ord(char) <= 0xFFFF for char in self.text):
            return self

        units = [0]
        for char in self.text:
            units.append(units[-1] + (2 if ord(char) > 0xFFFF else 1))

        runs = [
            StyledRun(units[run.start], units[run.end] - units[run.start], run.role, run.color, run.font)
            for run in self.runs
        ]
        return StyledText(text=self.text, font=self.font, foreground=self.foreground, runs=runs)


class Highlighter:
    """
    Applies a theme to classified text.

    Stateless between calls: every call re-classifies the full text.
    """

    def __init__(
        self,
        theme: Optional[EditorTheme] = None,
        font_size: float = DEFAULT_FONT_SIZE,
        font_family: str = DEFAULT_FONT_FAMILY
    ):
        self.theme = theme or EditorThemes.dark()
        self.font_size = font_size
        self.font_family = font_family
        self.font = build_font(font_family, font_size)

    def highlight(self, text: str, language: Union[Language, str, None]) -> StyledText:
        """
        Highlight text for a language.

        Args:
            text: Source text, possibly syntactically invalid
            language: Language, or a language name

        Returns:
            Styled text whose runs cover the whole input
        """
        styled_runs: List[StyledRun] = []

        if text:
            position = 0
            for span in classify(text, language):
                if span.start > position:
                    styled_runs.append(self._run(position, span.start - position, Role.PLAIN))
                styled_runs.append(self._run(span.start, span.length, span.role))
                position = span.end

            if position < len(text):
                styled_runs.append(self._run(position, len(text) - position, Role.PLAIN))

        return StyledText(
            text=text,
            font=self.font,
            foreground=self.theme.color_for(Role.PLAIN),
            runs=styled_runs,
        )

    def _run(self, start: int, length: int, role: Role) -> StyledRun:
        return StyledRun(start, length, role, self.theme.color_for(role), self.font)


# =============================================================================
# Qt Binding
# =============================================================================

class SyntaxHighlighter(QSyntaxHighlighter):
    """
    Syntax highlighter for a QTextDocument.

    Classifies the whole document and formats each block from that
    snapshot. Each block's state is a signature of its runs, so changes
    that spill into later blocks keep Qt highlighting downstream.
    """

    def __init__(
        self,
        document: QTextDocument,
        language: Union[Language, str, None] = None,
        theme: Optional[EditorTheme] = None,
        font_size: float = DEFAULT_FONT_SIZE,
        font_family: str = DEFAULT_FONT_FAMILY
    ):
        super().__init__(document)

        self._language = Language.PLAIN
        self._highlighter = Highlighter(theme, font_size, font_family)
        self._snapshot: Optional[StyledText] = None
        self._document_runs: Optional[StyledText] = None
        self._enabled = True
        self._refreshing = False

        document.contentsChanged.connect(self._refresh_stale_blocks)

        if language:
            self.set_language(language)

    @property
    def language(self) -> Language:
        return self._language

    @property
    def theme(self) -> EditorTheme:
        return self._highlighter.theme

    def set_language(self, language: Union[Language, str]) -> None:
        """Set the language for highlighting."""
        if not isinstance(language, Language):
            language = Language.from_string(language)

        self._language = language
        self._invalidate()

    def set_language_for_file(self, filename: str) -> bool:
        """Set language based on file extension."""
        language = Language.detect(filename)
        self.set_language(language)
        return language is not Language.PLAIN

    def set_theme(self, theme: EditorTheme) -> None:
        """Set the color theme."""
        highlighter = self._highlighter
        self._highlighter = Highlighter(theme, highlighter.font_size, highlighter.font_family)
        self._invalidate()

    def set_font_size(self, font_size: float) -> None:
        """Set the base font size."""
        highlighter = self._highlighter
        self._highlighter = Highlighter(highlighter.theme, font_size, highlighter.font_family)
        self._invalidate()

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable highlighting."""
        self._enabled = enabled
        self._invalidate()

    def get_language_name(self) -> str:
        """Get the current language name."""
        return self._language.display_name

    def styled_text(self) -> Optional[StyledText]:
        """Get the styled snapshot of the current document text."""
        document = self.document()
        if document is None:
            return None

        text = document.toPlainText()
        if self._snapshot is None or self._snapshot.text != text:
            self._snapshot = self._highlighter.highlight(text, self._language)
            self._document_runs = self._snapshot.in_utf16()
        return self._snapshot

    def highlightBlock(self, text: str) -> None:
        """Highlight a block of text."""
        if not self._enabled:
            return

        if self.styled_text() is None:
            return

        pieces = self._block_pieces(self.currentBlock())
        for offset, length, run in pieces:
            self.setFormat(offset, length, run.to_format())

        self.setCurrentBlockState(self._signature(pieces))

    def _block_pieces(self, block: QTextBlock) -> List[Tuple[int, int, StyledRun]]:
        """Clip document runs to a block, as (offset in block, length, run)."""
        # Qt positions and lengths count UTF-16 units
        block_start = block.position()
        block_end = block_start + block.length() - 1

        pieces = []
        for run in self._document_runs.runs_between(block_start, block_end):
            start = max(run.start, block_start)
            end = min(run.end, block_end)
            if end > start:
                pieces.append((start - block_start, end - start, run))
        return pieces

    @staticmethod
    def _signature(pieces: List[Tuple[int, int, StyledRun]]) -> int:
        return hash(tuple((offset, length, run.role.value) for offset, length, run in pieces)) & 0x7FFFFFFF

    def _refresh_stale_blocks(self) -> None:
        """Re-highlight blocks whose classification changed outside the edit."""
        if not self._enabled or self._refreshing:
            return

        if self.styled_text() is None:
            return

        self._refreshing = True
        try:
            block: QTextBlock = self.document().begin()
            while block.isValid():
                if block.userState() != self._signature(self._block_pieces(block)):
                    self.rehighlightBlock(block)
                block = block.next()
        finally:
            self._refreshing = False

    def _invalidate(self) -> None:
        self._snapshot = None
        self._document_runs = None
        self.rehighlight()


def create_highlighter_for_file(
    document: QTextDocument,
    filename: str,
    theme: Optional[EditorTheme] = None,
    font_size: float = DEFAULT_FONT_SIZE
) -> SyntaxHighlighter:
    """
    Create a syntax highlighter for a file.

    Automatically detects language from filename.
    """
    highlighter = SyntaxHighlighter(document, theme=theme, font_size=font_size)
    highlighter.set_language_for_file(filename)
    return highlighter


def get_available_themes() -> List[str]:
    """Get list of available theme names."""
    return ["Dark", "Light", "Monokai"]


def get_theme_by_name(name: Optional[str]) -> EditorTheme:
    """Get a theme by name (case-insensitive), falling back to Dark."""
    themes = {
        "dark": EditorThemes.dark,
        "light": EditorThemes.light,
        "monokai": EditorThemes.monokai,
    }

    factory = themes.get((name or "").strip().lower())
    if factory is None:
        logging.debug(f"SyntaxHighlighter - Unknown theme {name!r}, using Dark")
        factory = EditorThemes.dark
    return factory()
