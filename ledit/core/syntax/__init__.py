"""
Syntax classification engine.

Provides:
- Classification passes with claimed-range tracking
- Per-language keyword tables and pass sequences
- The pass pipeline and overlap resolution
"""

from ledit.core.syntax.passes import (
    HighlightPass,
    PassResult,
    is_claimed,
)
from ledit.core.syntax.languages import (
    KEYWORDS,
    LANGUAGE_PASSES,
    passes_for,
)
from ledit.core.syntax.engine import (
    HighlightResult,
    classify,
    resolve_spans,
    run_passes,
)

__all__ = [
    # Passes
    'HighlightPass',
    'PassResult',
    'is_claimed',
    # Languages
    'KEYWORDS',
    'LANGUAGE_PASSES',
    'passes_for',
    # Engine
    'HighlightResult',
    'classify',
    'resolve_spans',
    'run_passes',
]
