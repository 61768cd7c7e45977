"""Test themes, styled output and the QSyntaxHighlighter binding."""

import pytest
from PyQt6.QtGui import QColor, QTextCursor, QTextDocument

from ledit.core.models import Language, Role
from ledit.ui.widgets.syntax_highlighter import (
    EditorThemes,
    Highlighter,
    SyntaxHighlighter,
    create_highlighter_for_file,
    get_available_themes,
    get_theme_by_name,
)


def color_at(document: QTextDocument, position: int):
    """Return the foreground color name applied at a document position."""
    block = document.findBlock(position)
    offset = position - block.position()
    for format_range in block.layout().formats():
        if format_range.start <= offset < format_range.start + format_range.length:
            return format_range.format.foreground().color().name()
    return None


class TestThemes:
    def test_available_themes(self):
        assert get_available_themes() == ["Dark", "Light", "Monokai"]

    @pytest.mark.parametrize("name", ["Dark", "light", "MONOKAI"])
    def test_lookup_is_case_insensitive(self, name):
        assert get_theme_by_name(name).name.lower() == name.lower()

    def test_unknown_theme_falls_back_to_dark(self):
        assert get_theme_by_name("solarized").name == "Dark"
        assert get_theme_by_name(None).name == "Dark"

    def test_role_colors(self):
        theme = EditorThemes.light()
        assert theme.color_for(Role.KEYWORD) == theme.keyword
        assert theme.color_for(Role.PROPERTY) == theme.property
        assert theme.color_for(Role.PLAIN) == theme.text

    def test_every_role_has_a_color(self):
        for factory in (EditorThemes.dark, EditorThemes.light, EditorThemes.monokai):
            theme = factory()
            for role in Role:
                assert theme.color_for(role).isValid()

    def test_dark_palette_values(self):
        theme = EditorThemes.dark()
        assert theme.keyword == QColor.fromRgbF(0.99, 0.37, 0.53)
        assert theme.cursor == QColor(255, 255, 255)

    def test_get_format(self, qapp):
        theme = EditorThemes.monokai()
        fmt = theme.get_format(Role.STRING)
        assert fmt.foreground().color() == theme.string


class TestHighlighter:
    def test_runs_cover_the_text(self, qapp):
        text = "let x = 5 // five"
        styled = Highlighter(EditorThemes.dark()).highlight(text, Language.SWIFT)

        assert styled.text == text
        assert styled.runs[0].start == 0
        assert styled.runs[-1].end == len(text)
        for previous, current in zip(styled.runs, styled.runs[1:]):
            assert previous.end == current.start

    def test_spans_are_the_styled_roles(self, qapp):
        text = "let x = 5"
        styled = Highlighter(EditorThemes.dark()).highlight(text, Language.SWIFT)
        assert [(run.start, run.length, run.role) for run in styled.spans] == [
            (0, 3, Role.KEYWORD),
            (8, 1, Role.NUMBER),
        ]

    def test_run_colors_follow_the_theme(self, qapp):
        theme = EditorThemes.monokai()
        styled = Highlighter(theme).highlight('"s" 1', Language.PYTHON)
        for run in styled.runs:
            assert run.color == theme.color_for(run.role)
            assert run.to_format().foreground().color() == run.color
        assert styled.foreground == theme.text

    def test_role_at(self, qapp):
        styled = Highlighter().highlight("# note\nx", Language.PYTHON)
        assert styled.role_at(0) is Role.COMMENT
        assert styled.role_at(7) is Role.PLAIN
        assert styled.role_at(100) is Role.PLAIN

    def test_runs_between(self, qapp):
        styled = Highlighter().highlight("let a = 1", Language.SWIFT)
        assert [run.role for run in styled.runs_between(2, 9)] == [Role.KEYWORD, Role.PLAIN, Role.NUMBER]

    def test_utf16_offsets(self, qapp):
        styled = Highlighter().highlight("'\U0001F600' 1", Language.PYTHON)
        assert [(run.start, run.length) for run in styled.runs] == [(0, 3), (3, 1), (4, 1)]

        wide = styled.in_utf16()
        assert [(run.start, run.length, run.role) for run in wide.runs] == [
            (0, 4, Role.STRING),
            (4, 1, Role.PLAIN),
            (5, 1, Role.NUMBER),
        ]
        assert wide.text == styled.text

    def test_utf16_copy_skipped_for_bmp_text(self, qapp):
        styled = Highlighter().highlight("let é = 1", Language.SWIFT)
        assert styled.in_utf16() is styled

    def test_empty_text(self, qapp):
        styled = Highlighter().highlight("", Language.SWIFT)
        assert styled.runs == []
        assert styled.spans == []

    def test_plain_text_is_one_run(self, qapp):
        styled = Highlighter().highlight("let x", Language.PLAIN)
        assert [(run.start, run.length, run.role) for run in styled.runs] == [(0, 5, Role.PLAIN)]

    def test_font(self, qapp):
        highlighter = Highlighter(font_size=18)
        assert highlighter.font.pointSizeF() == 18.0
        assert highlighter.font.fixedPitch()

    def test_invalid_font_size_uses_default(self, qapp):
        assert Highlighter(font_size=0).font.pointSizeF() == 14.0


@pytest.fixture
def document(qapp):
    document = QTextDocument()
    yield document
    qapp.processEvents()


class TestSyntaxHighlighter:
    def test_highlights_document(self, qapp, document):
        theme = EditorThemes.dark()
        document.setPlainText("// hi\nlet x = 5")
        highlighter = SyntaxHighlighter(document, Language.SWIFT, theme)
        qapp.processEvents()

        assert color_at(document, 0) == theme.comment.name()
        assert color_at(document, 6) == theme.keyword.name()
        assert color_at(document, 10) == theme.text.name()
        assert color_at(document, 14) == theme.number.name()
        assert highlighter.get_language_name() == "Swift"

    def test_edit_is_rehighlighted(self, qapp, document):
        theme = EditorThemes.dark()
        highlighter = SyntaxHighlighter(document, Language.PYTHON, theme)
        qapp.processEvents()

        cursor = QTextCursor(document)
        cursor.insertText("return 1")
        assert color_at(document, 0) == theme.keyword.name()
        assert highlighter.styled_text().text == "return 1"

    def test_closing_comment_updates_earlier_blocks(self, qapp, document):
        theme = EditorThemes.dark()
        document.setPlainText("/* start\nlet x\nend")
        highlighter = SyntaxHighlighter(document, Language.JAVASCRIPT, theme)
        qapp.processEvents()
        assert color_at(document, 9) == theme.keyword.name()

        cursor = QTextCursor(document)
        cursor.movePosition(QTextCursor.MoveOperation.End)
        cursor.insertText(" */")

        assert color_at(document, 9) == theme.comment.name()
        assert highlighter.styled_text().role_at(9) is Role.COMMENT

    def test_language_change(self, qapp, document):
        theme = EditorThemes.dark()
        document.setPlainText("def f")
        highlighter = SyntaxHighlighter(document, Language.SWIFT, theme)
        qapp.processEvents()
        assert color_at(document, 0) == theme.text.name()

        highlighter.set_language("python")
        assert highlighter.language is Language.PYTHON
        assert color_at(document, 0) == theme.keyword.name()

    def test_theme_change(self, qapp, document):
        document.setPlainText("let")
        highlighter = SyntaxHighlighter(document, Language.SWIFT, EditorThemes.dark())
        qapp.processEvents()

        light = EditorThemes.light()
        highlighter.set_theme(light)
        assert highlighter.theme is light
        assert color_at(document, 0) == light.keyword.name()

    def test_disable(self, qapp, document):
        document.setPlainText("let")
        highlighter = SyntaxHighlighter(document, Language.SWIFT)
        qapp.processEvents()

        highlighter.set_enabled(False)
        assert color_at(document, 0) is None

    def test_font_size_change(self, qapp, document):
        document.setPlainText("let")
        highlighter = SyntaxHighlighter(document, Language.SWIFT)
        highlighter.set_font_size(20)
        block = document.firstBlock()
        assert block.layout().formats()[0].format.font().pointSizeF() == 20.0

    def test_language_for_file(self, qapp, document):
        highlighter = SyntaxHighlighter(document)
        assert highlighter.set_language_for_file("data.json")
        assert highlighter.language is Language.JSON
        assert not highlighter.set_language_for_file("notes.txt")
        assert highlighter.get_language_name() == "Plain Text"

    def test_create_for_file(self, qapp, document):
        highlighter = create_highlighter_for_file(document, "page.html", EditorThemes.monokai())
        assert highlighter.language is Language.HTML
        assert highlighter.theme.name == "Monokai"

    def test_emoji_before_a_block(self, qapp, document):
        theme = EditorThemes.dark()
        document.setPlainText("// \U0001F600\nlet x = 1")
        highlighter = SyntaxHighlighter(document, Language.SWIFT, theme)
        qapp.processEvents()

        second = document.findBlockByNumber(1)
        assert second.text() == "let x = 1"
        assert color_at(document, second.position()) == theme.keyword.name()
        assert color_at(document, second.position() + 8) == theme.number.name()
        assert color_at(document, 0) == theme.comment.name()
        assert highlighter.styled_text().role_at(5) is Role.KEYWORD

    def test_emoji_in_plain_text(self, qapp, document):
        theme = EditorThemes.dark()
        SyntaxHighlighter(document, Language.PLAIN, theme)
        document.setPlainText("hello \U0001F600\nworld")
        qapp.processEvents()

        second = document.findBlockByNumber(1)
        assert color_at(document, second.position()) == theme.text.name()

    def test_typing_after_emoji(self, qapp, document):
        theme = EditorThemes.dark()
        document.setPlainText("x = \"\U0001F600\"\n")
        SyntaxHighlighter(document, Language.PYTHON, theme)
        qapp.processEvents()

        cursor = QTextCursor(document)
        cursor.movePosition(QTextCursor.MoveOperation.End)
        cursor.insertText("return 1")

        last = document.lastBlock()
        assert color_at(document, last.position()) == theme.keyword.name()
