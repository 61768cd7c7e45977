"""
Classification passes for the syntax highlighting engine.

A pass is one regular expression applied once over the full text. It
contributes token spans for the ranges it matches and, for comment and
string passes, claims those ranges so later passes leave them alone.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Pattern

from ledit.core.models import ClaimedRange, Role, TokenSpan


@dataclass(frozen=True)
class PassResult:
    """Spans produced by one pass plus the ranges it newly claimed."""
    spans: tuple[TokenSpan, ...] = ()
    claimed: tuple[ClaimedRange, ...] = ()


def is_claimed(start: int, end: int, claimed: Iterable[ClaimedRange]) -> bool:
    """Check if [start, end) lies entirely within any claimed range."""
    return any(claim.contains(start, end) for claim in claimed)


def first_overlap(
    start: int,
    end: int,
    claimed: Iterable[ClaimedRange]
) -> Optional[ClaimedRange]:
    """Return the first claimed range sharing a character with [start, end)."""
    for claim in claimed:
        if claim.overlaps(start, end):
            return claim
    return None


@dataclass(frozen=True)
class HighlightPass:
    """
    A single classification rule.

    The role comes either from ``role`` or, when ``resolve`` is set, from
    calling it with the matched text (returning None leaves the match
    unclassified). Only capture ``group`` is colored; a match in which the
    group did not participate produces nothing, which lets a pattern skip
    over constructs it must not look inside.
    """
    name: str
    pattern: str
    role: Optional[Role] = None
    flags: int = 0
    group: int = 0
    claims: bool = False
    resolve: Optional[Callable[[str], Optional[Role]]] = field(default=None, compare=False)

    def compile(self) -> Optional[Pattern[str]]:
        """Compile the pattern, or None if it is invalid."""
        try:
            return re.compile(self.pattern, self.flags)
        except re.error as e:
            logging.warning(f"HighlightPass - Skipping pass {self.name!r}, pattern failed to compile: {e}")
            return None

    def role_for(self, word: str) -> Optional[Role]:
        """Get the role for a matched piece of text."""
        if self.resolve is not None:
            return self.resolve(word)
        return self.role

    def apply(self, text: str, claimed: tuple[ClaimedRange, ...] = ()) -> PassResult:
        """
        Run the pass over text.

        Args:
            text: Full source text
            claimed: Ranges claimed by earlier passes

        Returns:
            Spans for this pass and the ranges it claimed
        """
        regex = self.compile()
        if regex is None:
            return PassResult()

        if self.claims:
            return self._apply_claiming(regex, text, claimed)
        return self._apply_overlay(regex, text, claimed)

    def _bounds(self, match: re.Match) -> Optional[tuple[int, int]]:
        """Get the colored [start, end) of a match, if any."""
        if 0 < self.group <= len(match.groups()):
            start, end = match.span(self.group)
        else:
            start, end = match.span()

        # Group did not participate, or matched nothing
        if start < 0 or end <= start:
            return None
        return start, end

    def _span(self, text: str, start: int, end: int) -> Optional[TokenSpan]:
        role = self.role_for(text[start:end])
        if role is None or role is Role.PLAIN:
            return None
        return TokenSpan(start, end - start, role)

    def _apply_overlay(
        self,
        regex: Pattern[str],
        text: str,
        claimed: tuple[ClaimedRange, ...]
    ) -> PassResult:
        """Color every match not fully inside a claimed range."""
        spans: list[TokenSpan] = []

        for match in regex.finditer(text):
            bounds = self._bounds(match)
            if bounds is None:
                continue

            start, end = bounds
            if is_claimed(start, end, claimed):
                continue

            span = self._span(text, start, end)
            if span is not None:
                spans.append(span)

        return PassResult(spans=tuple(spans))

    def _apply_claiming(
        self,
        regex: Pattern[str],
        text: str,
        claimed: tuple[ClaimedRange, ...]
    ) -> PassResult:
        """
        Color and claim matches without touching earlier claims.

        A candidate starting inside a claimed range resumes the scan at the
        end of that range; one that only runs into a claimed range resumes
        one character past its own start.
        """
        spans: list[TokenSpan] = []
        new_claims: list[ClaimedRange] = []
        pos = 0

        while pos <= len(text):
            match = regex.search(text, pos)
            if match is None:
                break

            next_pos = match.end() if match.end() > match.start() else match.start() + 1

            bounds = self._bounds(match)
            if bounds is None:
                pos = next_pos
                continue

            start, end = bounds
            blocker = first_overlap(start, end, claimed)
            if blocker is not None:
                pos = blocker.end if blocker.start <= start else start + 1
                continue

            span = self._span(text, start, end)
            if span is not None:
                spans.append(span)
                new_claims.append(ClaimedRange(start, end - start))
            pos = next_pos

        return PassResult(spans=tuple(spans), claimed=tuple(new_claims))
