"""Shared test fixtures and helpers."""

from __future__ import annotations

import os

# Qt needs a platform plugin even when nothing is shown
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from ledit.core import Language, Role, TokenSpan, classify


@pytest.fixture(scope="session")
def qapp():
    """Return the process-wide QApplication."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def settings_path(tmp_path):
    """Return a settings file path inside a temporary directory."""
    return tmp_path / "config" / "settings.json"


def spans_as_text(text: str, language: Language) -> list[tuple[str, Role]]:
    """Classify text and return (fragment, role) pairs in order."""
    return [(span.text_in(text), span.role) for span in classify(text, language)]


def role_at(spans: list[TokenSpan], index: int) -> Role:
    """Return the role covering a character index (plain if none)."""
    for span in spans:
        if span.start <= index < span.end:
            return span.role
    return Role.PLAIN


def role_of(text: str, language: Language, fragment: str, occurrence: int = 0) -> Role:
    """
    Return the single role of a fragment of text.

    Fails if the characters of the fragment do not share one role.
    """
    index = -1
    for _ in range(occurrence + 1):
        index = text.index(fragment, index + 1)

    spans = classify(text, language)
    roles = {role_at(spans, i) for i in range(index, index + len(fragment))}
    assert len(roles) == 1, f"{fragment!r} has mixed roles {roles}"
    return roles.pop()
