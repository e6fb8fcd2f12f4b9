"""SessionHost — an in-process stand-in for the game server.

Provides the three things the core consumes from a real host: the
participant directory, per-participant presentation channels, and a
command dispatcher that chat and console commands are installed on.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING

from chatplus.domain.command import CommandLine
from chatplus.domain.participant import ChannelUnavailableError, Participant
from chatplus.domain.types import HudChannel

if TYPE_CHECKING:
    from chatplus.config.models import RosterEntry
    from chatplus.services.result import CommandResult

logger = logging.getLogger(__name__)

ChatCommandCallback = Callable[[Participant, CommandLine], "CommandResult"]
ConsoleCommandCallback = Callable[[CommandLine], "CommandResult"]


class BufferedChannel:
    """Presentation channel that records everything printed to it."""

    def __init__(self) -> None:
        self.lines: list[tuple[HudChannel, str]] = []
        self.closed = False

    def print(self, channel: HudChannel, text: str) -> None:
        if self.closed:
            raise ChannelUnavailableError("channel closed")
        self.lines.append((channel, text))

    def close(self) -> None:
        self.closed = True

    def reopen(self) -> None:
        self.closed = False

    def texts(self) -> list[str]:
        return [text for _, text in self.lines]


class SessionHost:
    """Connected participants plus chat and console command tables.

    Participants are kept in connection order, which is the enumeration
    order the name matcher sees. Display names need not be unique; each
    participant owns its own channel for as long as the host lives.
    """

    def __init__(self) -> None:
        self._participants: list[Participant] = []
        self._departed: list[Participant] = []
        self._channels: dict[Participant, BufferedChannel] = {}
        self._commands: dict[str, ChatCommandCallback] = {}
        self._console_commands: dict[str, ConsoleCommandCallback] = {}

    @classmethod
    def from_roster(cls, roster: Iterable[RosterEntry]) -> SessionHost:
        host = cls()
        for entry in roster:
            participant = host.connect(
                entry.name,
                session_id=entry.session_id,
                account_id=entry.account_id,
                authenticated=entry.authenticated,
                bot=entry.bot,
                locale=entry.locale,
            )
            if not entry.connected:
                host.disconnect(participant.display_name)
        return host

    # ------------------------------------------------------------------
    # Presence
    # ------------------------------------------------------------------

    def connect(
        self,
        name: str,
        *,
        session_id: int,
        account_id: int,
        authenticated: bool = True,
        bot: bool = False,
        locale: str | None = None,
    ) -> Participant:
        """Add a participant with a fresh buffered channel."""
        channel = BufferedChannel()
        participant = Participant(
            display_name=name,
            session_id=session_id,
            account_id=account_id,
            is_authenticated=authenticated,
            is_bot=bot,
            locale=locale,
            channel=channel,
        )
        self._participants.append(participant)
        self._channels[participant] = channel
        logger.debug("Participant connected: %s", name)
        return participant

    def disconnect(self, name: str) -> Participant | None:
        """Remove *name* from the directory and close its channel.

        The participant object stays valid for anyone still holding it;
        deliveries to it simply become no-ops.
        """
        participant = self.find(name)
        if participant is None:
            return None
        self._participants.remove(participant)
        self._departed.append(participant)
        self._channels[participant].close()
        participant.channel = None
        logger.debug("Participant disconnected: %s", name)
        return participant

    def reconnect(self, name: str) -> Participant | None:
        """Bring a disconnected participant back on its old channel, ids intact."""
        for participant in self._departed:
            if participant.display_name.casefold() == name.casefold():
                self._departed.remove(participant)
                channel = self._channels[participant]
                channel.reopen()
                participant.channel = channel
                self._participants.append(participant)
                return participant
        return None

    def find(self, name: str) -> Participant | None:
        """Exact (case-insensitive) lookup of a connected participant."""
        folded = name.casefold()
        for participant in self._participants:
            if participant.display_name.casefold() == folded:
                return participant
        return None

    def inbox(self, name: str) -> list[str]:
        """Everything printed to *name* so far, across reconnects.

        Connected participants are searched before departed ones; with
        duplicate names the first in connection order wins.
        """
        folded = name.casefold()
        for participant in [*self._participants, *self._departed]:
            if participant.display_name.casefold() == folded:
                return self._channels[participant].texts()
        return []

    def inboxes(self) -> dict[str, list[str]]:
        """All inboxes, keyed by name, or ``name #session_id`` where names collide."""
        counts = Counter(p.display_name for p in self._channels)
        result: dict[str, list[str]] = {}
        for participant, channel in self._channels.items():
            label = participant.display_name
            if counts[label] > 1:
                label = f"{label} #{participant.session_id}"
            result[label] = channel.texts()
        return result

    def list_addressable_participants(
        self,
        include_unauthenticated: bool,
        include_bots: bool,
    ) -> Sequence[Participant]:
        return [
            p
            for p in self._participants
            if (include_unauthenticated or p.is_authenticated) and (include_bots or not p.is_bot)
        ]

    # ------------------------------------------------------------------
    # Command dispatch
    # ------------------------------------------------------------------

    def install_command(self, name: str, callback: ChatCommandCallback) -> None:
        self._commands[name.lower()] = callback

    def remove_command(self, name: str) -> None:
        self._commands.pop(name.lower(), None)

    def install_console_command(self, name: str, callback: ConsoleCommandCallback) -> None:
        self._console_commands[name.lower()] = callback

    def remove_console_command(self, name: str) -> None:
        self._console_commands.pop(name.lower(), None)

    @property
    def command_names(self) -> list[str]:
        return sorted(self._commands)

    @property
    def console_command_names(self) -> list[str]:
        return sorted(self._console_commands)

    def execute(self, caller: Participant, line: str) -> CommandResult | None:
        """Run a chat command typed by *caller*. None if no handler is installed."""
        command = CommandLine.parse(line)
        callback = self._commands.get(command.name)
        if callback is None:
            return None
        return callback(caller, command)

    def execute_console(self, line: str) -> CommandResult | None:
        """Run a server console command. None if no handler is installed."""
        command = CommandLine.parse(line)
        callback = self._console_commands.get(command.name)
        if callback is None:
            return None
        return callback(command)
