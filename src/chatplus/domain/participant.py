"""Participant identity and presentation channel contract.

Participants are owned by the host. The core only keeps references for
the duration of one command, so every delivery must tolerate a channel
that vanished in the meantime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from chatplus.domain.types import HudChannel

logger = logging.getLogger(__name__)

UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1


class ChannelUnavailableError(RuntimeError):
    """Raised by a presentation channel whose participant has disconnected."""


@runtime_checkable
class PresentationChannel(Protocol):
    """Anything that can show text to a connected participant."""

    def print(self, channel: HudChannel, text: str) -> None:
        """Show *text* on the given HUD channel."""
        ...


@dataclass(eq=False)
class Participant:
    """A connected, addressable identity (a player on the server).

    Equality and hashing are by identity: two participants with the same
    name are still different people, and block relations key on the
    object the host handed out.

    Attributes:
        display_name: Name shown to other participants.
        session_id: Per-connection numeric id (uint32).
        account_id: Stable account id across connections (uint64).
        is_authenticated: Whether the host verified the account.
        is_bot: Whether the host marked this participant as a bot.
        locale: Preferred locale for localized messages, if known.
        channel: Presentation channel, or None once disconnected.
    """

    display_name: str
    session_id: int
    account_id: int
    is_authenticated: bool = True
    is_bot: bool = False
    locale: str | None = None
    channel: PresentationChannel | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.session_id <= UINT32_MAX:
            msg = f"session_id out of uint32 range: {self.session_id}"
            raise ValueError(msg)
        if not 0 <= self.account_id <= UINT64_MAX:
            msg = f"account_id out of uint64 range: {self.account_id}"
            raise ValueError(msg)

    @property
    def is_connected(self) -> bool:
        return self.channel is not None

    def present(self, text: str, channel: HudChannel = HudChannel.CHAT) -> bool:
        """Show *text* to this participant.

        Returns False when the presentation channel is gone, either
        because the participant already left or because the channel
        closed while the command was running. Never raises for that case.
        """
        target = self.channel
        if target is None:
            logger.debug("No presentation channel for %s, skipping", self.display_name)
            return False
        try:
            target.print(channel, text)
        except ChannelUnavailableError:
            logger.debug("Channel for %s closed mid-delivery, skipping", self.display_name)
            return False
        return True

    def describe(self) -> dict[str, object]:
        """Plain-dict summary for command results and CLI output."""
        return {
            "name": self.display_name,
            "session_id": self.session_id,
            "account_id": self.account_id,
            "authenticated": self.is_authenticated,
            "bot": self.is_bot,
            "connected": self.is_connected,
        }
