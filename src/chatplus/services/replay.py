"""ReplayService — drive a session host from a chat transcript.

Transcript format, one entry per line::

    # comment
    Alice: pm Bob hi there
    Bob: pmblock Alice
    console: ms_pm Bob server restarting
    !disconnect Bob
    !connect Bob

Every line runs against the same runtime, so block state carries over
from one line to the next exactly as it would on a live server.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from chatplus.domain.types import CommandAction, ErrorCode
from chatplus.services.base import BaseService
from chatplus.services.result import CommandResult

if TYPE_CHECKING:
    from chatplus.infrastructure.runtime import ChatRuntime
    from chatplus.infrastructure.session import SessionHost

logger = logging.getLogger(__name__)

CONSOLE_SENDER = "console"


class ReplayService(BaseService):
    """Feed transcript lines through a :class:`SessionHost`."""

    def __init__(self, runtime: ChatRuntime, host: SessionHost) -> None:
        super().__init__(runtime)
        self._host = host

    def run(self, lines: Iterable[str]) -> CommandResult:
        entries: list[dict[str, Any]] = []
        warnings: list[str] = []

        for lineno, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            if line.startswith("!"):
                warning = self._presence(line)
                if warning:
                    warnings.append(f"line {lineno}: {warning}")
                continue

            sender, sep, command = line.partition(":")
            if not sep:
                warnings.append(f"line {lineno}: expected '<sender>: <command>'")
                continue
            sender = sender.strip()
            entries.append(self._run_command(lineno, sender, command.strip()))

        handled = sum(1 for e in entries if e["action"] == CommandAction.HANDLED)
        return CommandResult.success(
            "replay",
            {
                "commands": entries,
                "handled": handled,
                "stopped": len(entries) - handled,
                "inboxes": self._host.inboxes(),
            },
            warnings=warnings,
        )

    def _run_command(self, lineno: int, sender: str, command: str) -> dict[str, Any]:
        entry: dict[str, Any] = {"line": lineno, "sender": sender, "command": command}

        if sender.casefold() == CONSOLE_SENDER:
            result = self._host.execute_console(command)
        else:
            caller = self._host.find(sender)
            if caller is None:
                entry.update(action=CommandAction.STOPPED, op="", error=ErrorCode.UNKNOWN_SENDER)
                return entry
            result = self._host.execute(caller, command)

        if result is None:
            entry.update(action=CommandAction.STOPPED, op="", error=ErrorCode.UNKNOWN_COMMAND)
            return entry

        entry.update(
            action=result.action,
            op=result.op,
            error=result.error.code if result.error else None,
        )
        logger.debug("Replayed line %d: %s -> %s", lineno, command, result.action)
        return entry

    def _presence(self, line: str) -> str | None:
        verb, _, name = line[1:].partition(" ")
        name = name.strip()
        if verb == "disconnect":
            if self._host.disconnect(name) is None:
                return f"cannot disconnect unknown participant {name!r}"
        elif verb == "connect":
            if self._host.reconnect(name) is None:
                return f"cannot reconnect {name!r}: not a departed participant"
        else:
            return f"unknown directive !{verb}"
        return None
