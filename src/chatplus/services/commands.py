"""Chat command handlers installed on the host's command dispatcher.

``pm`` and ``pmblock`` are participant commands, ``ms_pm`` is a server
console command, and ``test`` echoes its arguments back for debugging.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chatplus.services.base import BaseService
from chatplus.services.blocking import BlockService
from chatplus.services.relay import RelayEngine
from chatplus.services.result import CommandResult

if TYPE_CHECKING:
    from chatplus.domain.command import CommandLine
    from chatplus.domain.participant import Participant
    from chatplus.infrastructure.runtime import ChatRuntime


class ChatCommands(BaseService):
    """Adapters from parsed command lines to the relay and block services."""

    def __init__(self, runtime: ChatRuntime) -> None:
        super().__init__(runtime)
        self._relay = RelayEngine(runtime)
        self._blocks = BlockService(runtime)

    def on_pm(self, caller: Participant, command: CommandLine) -> CommandResult:
        return self._relay.relay(caller, command.arg_string)

    def on_pmblock(self, caller: Participant, command: CommandLine) -> CommandResult:
        return self._blocks.toggle_block(caller, command.arg_string)

    def on_console_pm(self, command: CommandLine) -> CommandResult:
        return self._relay.relay_from_console(command.arg_string)

    def on_test(self, caller: Participant, command: CommandLine) -> CommandResult:
        self._notify(caller, "test.echo", args=command.arg_string)
        self._notify(caller, "test.arg_count", count=command.arg_count)
        return CommandResult.success(
            "test",
            {"args": command.arg_string, "arg_count": command.arg_count},
        )
