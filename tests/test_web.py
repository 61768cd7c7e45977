"""Test HTML and CSS highlighting."""

from ledit.core.models import Language, Role, TokenSpan
from ledit.core.syntax import classify

from .conftest import role_of, spans_as_text

HTML = Language.HTML
CSS = Language.CSS


class TestHtml:
    def test_element_with_attribute(self):
        text = '<div class="a">hi</div>'
        assert classify(text, HTML) == [
            TokenSpan(1, 3, Role.KEYWORD),
            TokenSpan(5, 5, Role.PROPERTY),
            TokenSpan(11, 3, Role.STRING),
            TokenSpan(19, 3, Role.KEYWORD),
        ]

    def test_comment_hides_markup(self):
        text = '<!-- <b x="y"> -->'
        assert spans_as_text(text, HTML) == [(text, Role.COMMENT)]

    def test_doctype(self):
        assert spans_as_text("<!DOCTYPE html>", HTML) == [("<!DOCTYPE html>", Role.PREPROCESSOR)]

    def test_entity(self):
        assert role_of("a &amp; b", HTML, "&amp;") is Role.NUMBER

    def test_angle_bracket_in_attribute_value(self):
        text = "<a title='x > y'>"
        assert role_of(text, HTML, "'x > y'") is Role.STRING
        assert role_of(text, HTML, "title") is Role.PROPERTY


class TestCss:
    def test_rule(self):
        text = ".btn { color: #fff; margin: 10px; }"
        assert spans_as_text(text, CSS) == [
            (".btn", Role.TYPE),
            ("color", Role.PROPERTY),
            ("#fff", Role.NUMBER),
            ("margin", Role.PROPERTY),
            ("10px", Role.NUMBER),
        ]

    def test_function_and_important(self):
        text = "a { color: rgb(1, 2, 3) !important; }"
        assert spans_as_text(text, CSS) == [
            ("color", Role.PROPERTY),
            ("rgb", Role.FUNCTION),
            ("1", Role.NUMBER),
            ("2", Role.NUMBER),
            ("3", Role.NUMBER),
            ("!important", Role.KEYWORD),
        ]

    def test_at_rule(self):
        text = "@media (max-width: 600px) {"
        assert role_of(text, CSS, "@media") is Role.PREPROCESSOR
        assert role_of(text, CSS, "600px") is Role.NUMBER

    def test_comment(self):
        text = "/* color: red; */ p {}"
        assert spans_as_text(text, CSS) == [("/* color: red; */", Role.COMMENT)]

    def test_string(self):
        text = 'q { content: "a;b"; }'
        assert role_of(text, CSS, '"a;b"') is Role.STRING
        assert role_of(text, CSS, "content") is Role.PROPERTY

    def test_id_selector_beats_hex_color(self):
        assert spans_as_text("#add { }", CSS) == [("#add", Role.TYPE)]
