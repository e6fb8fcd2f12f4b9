"""TargetResolver — free-text query to zero-or-one participant.

Matching tiers, first hit wins:

1. ``#<number>`` looks up session id or account id; an authenticated hit
   is authoritative.
2. Case-insensitive substring over display names, first in enumeration
   order. Ambiguous fragments are not rejected.

Private messaging is low stakes, so the simple first-match rule is kept.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chatplus.domain.participant import Participant
    from chatplus.services.directory import Directory

logger = logging.getLogger(__name__)

DEFAULT_SIGIL = "#"


def parse_sigil_number(query: str, sigil: str = DEFAULT_SIGIL) -> int | None:
    """Return the unsigned integer after *sigil*, or None if *query* is not one.

    Examples:
        >>> parse_sigil_number("#42")
        42
        >>> parse_sigil_number("#-1") is None
        True
        >>> parse_sigil_number("42") is None
        True
    """
    if not query.startswith(sigil):
        return None
    rest = query[len(sigil) :]
    if not rest.isascii() or not rest.isdigit():
        return None
    return int(rest)


class TargetResolver:
    """Resolve a target query against a :class:`Directory` snapshot."""

    def __init__(self, directory: Directory, *, sigil: str = DEFAULT_SIGIL) -> None:
        self._directory = directory
        self._sigil = sigil

    def resolve(self, query: str) -> Participant | None:
        """Return the participant *query* refers to, or None.

        The name tier may return an unauthenticated participant; callers
        must treat that the same as no match. Never raises.
        """
        normalized = query.strip()
        if not normalized:
            return None

        participants = self._directory.snapshot()

        number = parse_sigil_number(normalized, self._sigil)
        if number is not None:
            match = self._directory.find_by_number(participants, number)
            if match is not None and match.is_authenticated:
                return match

        match = self._directory.find_by_name(participants, normalized)
        if match is None:
            logger.debug("No participant matches %r", normalized)
        return match

    def resolve_authenticated(self, query: str) -> Participant | None:
        """Like :meth:`resolve`, but unauthenticated matches count as no match."""
        match = self.resolve(query)
        if match is None or not match.is_authenticated:
            return None
        return match
