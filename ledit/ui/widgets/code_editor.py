"""
Code editor widget.

Provides a plain-text editor with:
- Syntax highlighting driven by the classification engine
- Theme colors for text, cursor line, selection and gutter
- Line number display
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from PyQt6.QtCore import Qt, QRect, QSize
from PyQt6.QtGui import (
    QColor, QPainter, QPalette, QPaintEvent, QResizeEvent, QTextFormat
)
from PyQt6.QtWidgets import QPlainTextEdit, QTextEdit, QWidget

from ledit.core.models import Language
from ledit.ui.widgets.syntax_highlighter import (
    DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, EditorTheme, EditorThemes,
    SyntaxHighlighter, build_font
)


class LineNumberArea(QWidget):
    """Gutter showing line numbers alongside a code editor."""

    def __init__(self, editor: 'CodeEditor'):
        super().__init__(editor)
        self.editor = editor
        self._width = 40

    def sizeHint(self) -> QSize:
        return QSize(self._width, 0)

    def update_width(self) -> None:
        """Calculate and update width based on line count."""
        digits = max(len(str(max(1, self.editor.blockCount()))), 2)
        self._width = 10 + self.fontMetrics().horizontalAdvance('9') * digits + 6
        self.setFixedWidth(self._width)

    def paintEvent(self, event: QPaintEvent) -> None:
        """Paint line numbers."""
        theme = self.editor.theme
        painter = QPainter(self)
        painter.fillRect(event.rect(), theme.line_number_background)

        block = self.editor.firstVisibleBlock()
        block_number = block.blockNumber()
        top = int(self.editor.blockBoundingGeometry(block).translated(
            self.editor.contentOffset()).top())
        bottom = top + int(self.editor.blockBoundingRect(block).height())

        current_block = self.editor.textCursor().blockNumber()
        height = self.fontMetrics().height()

        while block.isValid() and top <= event.rect().bottom():
            if block.isVisible() and bottom >= event.rect().top():
                color = theme.text if block_number == current_block else theme.line_number_text
                painter.setPen(color)
                painter.drawText(
                    0, top,
                    self._width - 6, height,
                    Qt.AlignmentFlag.AlignRight,
                    str(block_number + 1)
                )

            block = block.next()
            top = bottom
            bottom = top + int(self.editor.blockBoundingRect(block).height())
            block_number += 1

        painter.end()


class CodeEditor(QPlainTextEdit):
    """
    Editable text surface with syntax highlighting.

    Every edit re-classifies the whole buffer through the attached
    SyntaxHighlighter.
    """

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        theme: Optional[EditorTheme] = None,
        language: Union[Language, str, None] = None,
        font_size: float = DEFAULT_FONT_SIZE,
        font_family: str = DEFAULT_FONT_FAMILY,
        show_line_numbers: bool = True
    ):
        super().__init__(parent)

        self.theme = theme or EditorThemes.dark()
        self._font_size = font_size
        self._font_family = font_family

        self.highlighter = SyntaxHighlighter(
            self.document(),
            language=language,
            theme=self.theme,
            font_size=font_size,
            font_family=font_family,
        )

        self._setup_editor()
        self._setup_line_numbers(show_line_numbers)
        self._connect_signals()
        self._apply_theme()

    def _setup_editor(self) -> None:
        """Configure editor settings."""
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setFont(build_font(self._font_family, self._font_size))
        self.setTabStopDistance(
            self.fontMetrics().horizontalAdvance(' ') * 4
        )

    def _setup_line_numbers(self, show: bool) -> None:
        """Setup line number widget."""
        if show:
            self.line_number_area: Optional[LineNumberArea] = LineNumberArea(self)
            self._update_line_number_width()
        else:
            self.line_number_area = None

    def _connect_signals(self) -> None:
        """Connect internal signals."""
        self.blockCountChanged.connect(self._update_line_number_width)
        self.updateRequest.connect(self._update_line_number_area)
        self.cursorPositionChanged.connect(self._highlight_current_line)

    @property
    def language(self) -> Language:
        return self.highlighter.language

    def set_language(self, language: Union[Language, str]) -> None:
        """Set the highlighting language."""
        self.highlighter.set_language(language)

    def set_language_for_file(self, filename: str) -> bool:
        """Set the highlighting language from a file name."""
        return self.highlighter.set_language_for_file(filename)

    def set_theme(self, theme: EditorTheme) -> None:
        """Set the color theme."""
        self.theme = theme
        self.highlighter.set_theme(theme)
        self._apply_theme()

    def set_font_size(self, font_size: float) -> None:
        """Set the editor font size."""
        self._font_size = font_size
        self.setFont(build_font(self._font_family, font_size))
        self.highlighter.set_font_size(font_size)
        self._update_line_number_width()

    def _apply_theme(self) -> None:
        """Apply theme colors to the editor chrome."""
        palette = self.palette()
        palette.setColor(QPalette.ColorRole.Base, self.theme.background)
        palette.setColor(QPalette.ColorRole.Text, self.theme.text)
        palette.setColor(QPalette.ColorRole.Highlight, self.theme.selection)
        palette.setColor(QPalette.ColorRole.HighlightedText, self.theme.text)
        self.setPalette(palette)

        self.setStyleSheet(
            f"QPlainTextEdit {{ background-color: {self.theme.background.name()}; "
            f"color: {self.theme.text.name()}; "
            f"selection-background-color: {self.theme.selection.name()}; }}"
        )

        logging.debug(f"CodeEditor - Applied theme {self.theme.name}")
        self._highlight_current_line()
        if self.line_number_area:
            self.line_number_area.update()

    def _highlight_current_line(self) -> None:
        """Highlight the current line."""
        selections = []

        if not self.isReadOnly():
            selection = QTextEdit.ExtraSelection()
            line_color = QColor(self.theme.line_number_background)
            selection.format.setBackground(line_color)
            selection.format.setProperty(
                QTextFormat.Property.FullWidthSelection, True
            )
            selection.cursor = self.textCursor()
            selection.cursor.clearSelection()
            selections.append(selection)

        self.setExtraSelections(selections)

        if self.line_number_area:
            self.line_number_area.update()

    def _update_line_number_width(self) -> None:
        """Update line number area width."""
        if self.line_number_area:
            self.line_number_area.update_width()
            self.setViewportMargins(
                self.line_number_area.width(), 0, 0, 0
            )

    def _update_line_number_area(self, rect: QRect, dy: int) -> None:
        """Update line number area on scroll."""
        if not self.line_number_area:
            return

        if dy:
            self.line_number_area.scroll(0, dy)
        else:
            self.line_number_area.update(
                0, rect.y(),
                self.line_number_area.width(), rect.height()
            )

    def resizeEvent(self, event: QResizeEvent) -> None:
        """Handle resize."""
        super().resizeEvent(event)

        if self.line_number_area:
            cr = self.contentsRect()
            self.line_number_area.setGeometry(
                QRect(
                    cr.left(), cr.top(),
                    self.line_number_area.width(), cr.height()
                )
            )
