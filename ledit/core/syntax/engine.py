"""
Syntax classification engine.

Folds a language's passes left to right over one text snapshot, then
resolves their spans into a sorted, non-overlapping list. Claimed
characters (comments, strings) keep their role; elsewhere a later pass
overrides an earlier one where they overlap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from ledit.core.models import ClaimedRange, Language, Role, TokenSpan
from ledit.core.syntax.languages import passes_for


@dataclass(frozen=True)
class HighlightResult:
    """Raw output of all passes for one call, before overlap resolution."""
    claimed_spans: tuple[TokenSpan, ...] = ()
    overlay_spans: tuple[TokenSpan, ...] = ()
    claimed: tuple[ClaimedRange, ...] = ()

    @property
    def spans(self) -> tuple[TokenSpan, ...]:
        """All spans, claimed ones first."""
        return self.claimed_spans + self.overlay_spans


def _coerce_language(language: Union[Language, str, None]) -> Language:
    if isinstance(language, Language):
        return language
    return Language.from_string(language)


def run_passes(text: str, language: Union[Language, str, None]) -> HighlightResult:
    """
    Run every pass for a language over text.

    Each pass sees the claimed ranges accumulated so far and returns its
    own spans and claims; nothing is shared between calls.
    """
    if not text:
        return HighlightResult()

    claimed: tuple[ClaimedRange, ...] = ()
    claimed_spans: list[TokenSpan] = []
    overlay_spans: list[TokenSpan] = []

    for highlight_pass in passes_for(_coerce_language(language)):
        result = highlight_pass.apply(text, claimed)
        if highlight_pass.claims:
            claimed_spans.extend(result.spans)
            claimed = claimed + result.claimed
        else:
            overlay_spans.extend(result.spans)

    return HighlightResult(
        claimed_spans=tuple(claimed_spans),
        overlay_spans=tuple(overlay_spans),
        claimed=claimed,
    )


def resolve_spans(
    length: int,
    claimed_spans: Sequence[TokenSpan] = (),
    overlay_spans: Sequence[TokenSpan] = ()
) -> list[TokenSpan]:
    """
    Flatten possibly overlapping spans into sorted, non-overlapping ones.

    Args:
        length: Length of the classified text
        claimed_spans: Spans from claiming passes (never overwritten)
        overlay_spans: Spans from other passes, in pass order

    Returns:
        Spans with adjacent equal roles merged; plain text is omitted
    """
    roles: list[Optional[Role]] = [None] * length
    locked = [False] * length

    for span in claimed_spans:
        for index in range(max(span.start, 0), min(span.end, length)):
            roles[index] = span.role
            locked[index] = True

    for span in overlay_spans:
        for index in range(max(span.start, 0), min(span.end, length)):
            if not locked[index]:
                roles[index] = span.role

    spans: list[TokenSpan] = []
    run_start = 0
    for index in range(1, length + 1):
        if index == length or roles[index] is not roles[run_start]:
            role = roles[run_start]
            if role is not None and role is not Role.PLAIN:
                spans.append(TokenSpan(run_start, index - run_start, role))
            run_start = index

    return spans


def classify(text: str, language: Union[Language, str, None]) -> list[TokenSpan]:
    """
    Classify text into role spans.

    Never raises for any input; unknown languages yield no spans.
    """
    if not text:
        return []

    result = run_passes(text, language)
    return resolve_spans(len(text), result.claimed_spans, result.overlay_spans)
