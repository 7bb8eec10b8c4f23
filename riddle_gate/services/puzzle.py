"""The riddle and its answer check."""

from __future__ import annotations

from typing import Any

RIDDLE_LINES: tuple[str, ...] = (
    "I speak without a mouth and hear without ears.",
    "I have nobody, but I come alive with the wind.",
    "What am I?",
)

CORRECT_ANSWER = "echo"


def normalize_answer(raw: Any) -> str:
    """Trim and case-fold a submitted answer.

    Anything that is not a string (absent field, list of values) normalizes
    to the empty string so it simply fails the comparison.

    Examples:
        >>> normalize_answer("  EcHo ")
        'echo'
        >>> normalize_answer(None)
        ''
    """
    if not isinstance(raw, str):
        return ""
    return raw.strip().casefold()


def check_answer(raw: Any) -> bool:
    """Return True when ``raw`` normalizes to the correct answer."""
    return normalize_answer(raw) == CORRECT_ANSWER
