"""
Per-language keyword tables and pass sequences.

Every language maps to an ordered tuple of passes; order is priority.
Comments come first, then string literals (both claim their ranges),
then numbers, attributes, identifiers and function calls.
JSON and Markdown use independent overlay passes instead.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ledit.core.models import Language, Role
from ledit.core.syntax.passes import HighlightPass


# =============================================================================
# Keyword Tables
# =============================================================================

SWIFT_KEYWORDS = frozenset({
    "import", "class", "struct", "enum", "protocol", "extension", "func", "var", "let",
    "if", "else", "guard", "switch", "case", "default", "for", "while", "repeat",
    "return", "break", "continue", "throw", "throws", "rethrows", "try", "catch",
    "async", "await", "actor", "nonisolated", "isolated", "some", "any",
    "public", "private", "internal", "fileprivate", "open", "final", "static",
    "override", "mutating", "nonmutating", "lazy", "weak", "unowned",
    "init", "deinit", "subscript", "typealias", "associatedtype",
    "where", "in", "is", "as", "self", "Self", "super", "nil", "true", "false",
    "get", "set", "willSet", "didSet", "inout", "defer", "fallthrough",
})

SWIFT_TYPES = frozenset({
    "String", "Int", "Double", "Float", "Bool", "Array", "Dictionary", "Set",
    "Optional", "Result", "Error", "Void", "Any", "AnyObject", "Never",
    "Character", "Data", "Date", "URL", "UUID", "CGFloat", "CGPoint", "CGSize", "CGRect",
    "View", "Text", "Image", "Button", "VStack", "HStack", "ZStack", "List", "ForEach",
    "NavigationView", "NavigationStack", "NavigationLink", "ScrollView", "Form", "Section",
    "Color", "Font", "Binding", "State", "Published", "ObservableObject",
    "App", "Scene", "WindowGroup", "ContentView",
})

PYTHON_KEYWORDS = frozenset({
    "and", "as", "assert", "async", "await", "break", "class", "continue",
    "def", "del", "elif", "else", "except", "finally", "for", "from",
    "global", "if", "import", "in", "is", "lambda", "nonlocal", "not",
    "or", "pass", "raise", "return", "try", "while", "with", "yield",
    "True", "False", "None", "self",
})

JAVASCRIPT_KEYWORDS = frozenset({
    "async", "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "export", "extends",
    "finally", "for", "function", "if", "import", "in", "instanceof",
    "let", "new", "return", "static", "super", "switch", "this", "throw",
    "try", "typeof", "var", "void", "while", "with", "yield",
    "true", "false", "null", "undefined",
})

JSON_KEYWORDS = frozenset({"true", "false", "null"})

KEYWORDS: Mapping[Language, frozenset[str]] = MappingProxyType({
    Language.SWIFT: SWIFT_KEYWORDS,
    Language.PYTHON: PYTHON_KEYWORDS,
    Language.JAVASCRIPT: JAVASCRIPT_KEYWORDS,
    Language.JSON: JSON_KEYWORDS,
})


# =============================================================================
# Word Resolvers
# =============================================================================

def keyword_or_type(
    keywords: frozenset[str],
    types: frozenset[str] = frozenset(),
    capitalized_types: bool = False
) -> Callable[[str], Optional[Role]]:
    """
    Build a resolver for the identifier pass.

    Exact keyword membership wins; then the type table; then, if enabled,
    any capitalized word longer than one character counts as a type.
    """
    def resolve(word: str) -> Optional[Role]:
        if word in keywords:
            return Role.KEYWORD
        if word in types:
            return Role.TYPE
        if capitalized_types and len(word) > 1 and word[0].isupper():
            return Role.TYPE
        return None

    return resolve


def call_unless_keyword(keywords: frozenset[str]) -> Callable[[str], Optional[Role]]:
    """Build a resolver that marks function calls except reserved words."""
    def resolve(word: str) -> Optional[Role]:
        return None if word in keywords else Role.FUNCTION

    return resolve


# =============================================================================
# Shared Patterns
# =============================================================================

IDENTIFIER = r'\b[a-zA-Z_][a-zA-Z0-9_]*\b'
NUMBER = r'\b\d+\.?\d*\b'

# Literals a comment marker must not be found inside. Only the capture
# group after these alternatives is colored.
_DQ_LINE = r'"(?:[^"\\\n]|\\.)*"'
_SQ_LINE = r"'(?:[^'\\\n]|\\.)*'"
_BT_LINE = r'`(?:[^`\\\n]|\\.)*`'
_DQ_TRIPLE = r'"""[\s\S]*?"""'
_SQ_TRIPLE = r"'''[\s\S]*?'''"
_BLOCK_COMMENT = r'/\*[\s\S]*?\*/'

_DQ = r'"(?:[^"\\]|\\.)*"'
_SQ = r"'(?:[^'\\]|\\.)*'"
_BT = r'`(?:[^`\\]|\\.)*`'


def _skipping(*skipped: str, target: str) -> str:
    """Join skip alternatives with a capturing target alternative."""
    return '|'.join(skipped + (f'({target})',))


def number_pass() -> HighlightPass:
    return HighlightPass('number', NUMBER, Role.NUMBER)


# =============================================================================
# Swift
# =============================================================================

SWIFT_PASSES = (
    HighlightPass(
        'line comment',
        _skipping(_DQ_TRIPLE, _DQ_LINE, _BLOCK_COMMENT, target=r'//.*$'),
        Role.COMMENT, flags=re.MULTILINE, group=1, claims=True,
    ),
    HighlightPass(
        'block comment',
        _skipping(_DQ_TRIPLE, _DQ_LINE, target=_BLOCK_COMMENT),
        Role.COMMENT, group=1, claims=True,
    ),
    HighlightPass('string', f'{_DQ_TRIPLE}|{_DQ}', Role.STRING, claims=True),
    number_pass(),
    HighlightPass('attribute', r'@\w+', Role.PREPROCESSOR),
    HighlightPass(
        'identifier', IDENTIFIER,
        resolve=keyword_or_type(SWIFT_KEYWORDS, SWIFT_TYPES, capitalized_types=True),
    ),
    HighlightPass(
        'function call', r'\b([a-z_][a-zA-Z0-9_]*)\s*(?=\()',
        group=1, resolve=call_unless_keyword(SWIFT_KEYWORDS),
    ),
)


# =============================================================================
# Generic (Python, JavaScript)
# =============================================================================

def generic_passes(
    keywords: frozenset[str],
    comments: tuple[HighlightPass, ...],
    strings: str,
    extra: tuple[HighlightPass, ...] = ()
) -> tuple[HighlightPass, ...]:
    """
    Build the shared pass sequence for languages without a dedicated one.

    Args:
        keywords: Reserved words for the keyword lookup
        comments: Comment passes, in priority order (must claim)
        strings: String literal pattern
        extra: Language-specific passes run after numbers
    """
    return (
        *comments,
        HighlightPass('string', strings, Role.STRING, claims=True),
        number_pass(),
        *extra,
        HighlightPass('keyword', IDENTIFIER, resolve=keyword_or_type(keywords)),
    )


PYTHON_PASSES = generic_passes(
    PYTHON_KEYWORDS,
    (
        HighlightPass(
            'comment',
            _skipping(_DQ_TRIPLE, _SQ_TRIPLE, _DQ_LINE, _SQ_LINE, target=r'#.*$'),
            Role.COMMENT, flags=re.MULTILINE, group=1, claims=True,
        ),
    ),
    '|'.join((_DQ_TRIPLE, _SQ_TRIPLE, _DQ, _SQ)),
    extra=(
        HighlightPass('decorator', r'^[ \t]*(@[\w.]+)', Role.PREPROCESSOR, flags=re.MULTILINE, group=1),
    ),
)

JAVASCRIPT_PASSES = generic_passes(
    JAVASCRIPT_KEYWORDS,
    (
        HighlightPass(
            'line comment',
            _skipping(_DQ_LINE, _SQ_LINE, _BT_LINE, _BLOCK_COMMENT, target=r'//.*$'),
            Role.COMMENT, flags=re.MULTILINE, group=1, claims=True,
        ),
        HighlightPass(
            'block comment',
            _skipping(_DQ_LINE, _SQ_LINE, _BT_LINE, target=_BLOCK_COMMENT),
            Role.COMMENT, group=1, claims=True,
        ),
    ),
    '|'.join((_DQ, _SQ, _BT)),
)


# =============================================================================
# JSON
# =============================================================================

_JSON_STRING = r'"(?:[^"\\\n]|\\.)*"'

JSON_PASSES = (
    HighlightPass('key', rf'({_JSON_STRING})\s*:', Role.PROPERTY, group=1),
    HighlightPass('string value', rf':\s*({_JSON_STRING})', Role.STRING, group=1),
    HighlightPass('number value', r':\s*(\d+\.?\d*)', Role.NUMBER, group=1),
    HighlightPass('literal', r'\b(?:true|false|null)\b', Role.KEYWORD),
)


# =============================================================================
# Markdown
# =============================================================================

MARKDOWN_PASSES = (
    HighlightPass('header', r'^#{1,6}(?:[ \t]+.*)?$', Role.KEYWORD, flags=re.MULTILINE),
    HighlightPass('blockquote', r'^[ \t]*>.*$', Role.COMMENT, flags=re.MULTILINE),
    HighlightPass('bold', r'\*\*[^*]+\*\*|__[^_]+__', Role.TYPE),
    HighlightPass('inline code', r'`[^`]+`', Role.STRING),
    HighlightPass('link', r'\[([^\]]+)\]\([^)]+\)', Role.FUNCTION),
    # Fenced blocks last so nothing inside them keeps another role
    HighlightPass('fenced code', r'^[ \t]*```[\s\S]*?^[ \t]*```.*$', Role.STRING, flags=re.MULTILINE),
)


# =============================================================================
# HTML / CSS
# =============================================================================

HTML_PASSES = (
    HighlightPass('comment', r'<!--[\s\S]*?-->', Role.COMMENT, claims=True),
    HighlightPass('attribute value', r'''=\s*("[^"]*"|'[^']*')''', Role.STRING, group=1, claims=True),
    HighlightPass('doctype', r'<!DOCTYPE[^>]*>', Role.PREPROCESSOR, flags=re.IGNORECASE),
    HighlightPass('tag', r'</?\s*([A-Za-z][\w:-]*)', Role.KEYWORD, group=1),
    HighlightPass('attribute', r'''(?<=\s)([A-Za-z_:@][\w:.-]*)(?=\s*=\s*["'])''', Role.PROPERTY, group=1),
    HighlightPass('entity', r'&(?:#\d+|#[xX][0-9a-fA-F]+|\w+);', Role.NUMBER),
)

_CSS_UNITS = r'px|em|rem|vh|vw|vmin|vmax|ch|ex|pt|pc|cm|mm|in|deg|rad|turn|ms|s|fr'

CSS_PASSES = (
    HighlightPass(
        'comment', _skipping(_DQ_LINE, _SQ_LINE, target=_BLOCK_COMMENT),
        Role.COMMENT, group=1, claims=True,
    ),
    HighlightPass('string', f'{_DQ_LINE}|{_SQ_LINE}', Role.STRING, claims=True),
    HighlightPass('at-rule', r'@[\w-]+', Role.PREPROCESSOR),
    HighlightPass('hex color', r'#[0-9a-fA-F]{3,8}\b', Role.NUMBER),
    HighlightPass('number', rf'(?<![\w#.])\d+(?:\.\d+)?(?:%|(?:{_CSS_UNITS})\b)?', Role.NUMBER),
    HighlightPass('selector', r'(?<![\w-])[.#][A-Za-z_-][\w-]*(?=[^;{}]*\{)', Role.TYPE),
    HighlightPass(
        'property', r'(?:^|[{;])\s*([a-zA-Z-][\w-]*)\s*:(?![^;{}\n]*\{)',
        Role.PROPERTY, flags=re.MULTILINE, group=1,
    ),
    HighlightPass('function', r'(?<![\w-])([a-zA-Z][\w-]*)(?=\()', Role.FUNCTION, group=1),
    HighlightPass('important', r'!important\b', Role.KEYWORD),
)


# =============================================================================
# Dispatch
# =============================================================================

LANGUAGE_PASSES: Mapping[Language, tuple[HighlightPass, ...]] = MappingProxyType({
    Language.SWIFT: SWIFT_PASSES,
    Language.PYTHON: PYTHON_PASSES,
    Language.JAVASCRIPT: JAVASCRIPT_PASSES,
    Language.JSON: JSON_PASSES,
    Language.MARKDOWN: MARKDOWN_PASSES,
    Language.HTML: HTML_PASSES,
    Language.CSS: CSS_PASSES,
    Language.PLAIN: (),
})


def passes_for(language: Language) -> tuple[HighlightPass, ...]:
    """Get the ordered passes for a language (none for plain text)."""
    return LANGUAGE_PASSES.get(language, ())
