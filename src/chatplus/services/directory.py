"""Directory — read-only view over the host's connected participants."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chatplus.domain.participant import Participant


class DirectoryProvider(Protocol):
    """Session provider contract supplied by the host."""

    def list_addressable_participants(
        self,
        include_unauthenticated: bool,
        include_bots: bool,
    ) -> Sequence[Participant]:
        """Return a snapshot of the currently addressable participants."""
        ...


class Directory:
    """Snapshot-based lookups over the host's participant list.

    Each call takes a fresh snapshot; callers that need several lookups
    to agree should take one :meth:`snapshot` and search it themselves.
    """

    def __init__(self, provider: DirectoryProvider) -> None:
        self._provider = provider

    def snapshot(
        self,
        *,
        include_unauthenticated: bool = True,
        include_bots: bool = True,
    ) -> tuple[Participant, ...]:
        return tuple(
            self._provider.list_addressable_participants(include_unauthenticated, include_bots)
        )

    @staticmethod
    def find_by_number(
        participants: Sequence[Participant], number: int
    ) -> Participant | None:
        """First participant whose session id or account id equals *number*."""
        for participant in participants:
            if participant.session_id == number or participant.account_id == number:
                return participant
        return None

    @staticmethod
    def find_by_name(participants: Sequence[Participant], fragment: str) -> Participant | None:
        """First participant whose display name contains *fragment*, ignoring case."""
        needle = fragment.casefold()
        for participant in participants:
            if needle in participant.display_name.casefold():
                return participant
        return None
