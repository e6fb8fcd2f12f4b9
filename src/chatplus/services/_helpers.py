"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_utc() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def first_occurrence_removed(text: str, token: str) -> str:
    """Remove only the first occurrence of *token* from *text*.

    Later occurrences are left in place and nothing is re-split, so the
    remaining whitespace survives verbatim.

    Examples:
        >>> first_occurrence_removed("bob hello bob", "bob")
        ' hello bob'
        >>> first_occurrence_removed("hello", "bob")
        'hello'
    """
    index = text.find(token)
    if index < 0 or not token:
        return text
    return text[:index] + text[index + len(token) :]
