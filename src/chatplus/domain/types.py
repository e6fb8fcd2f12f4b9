"""Command outcomes, error codes, and presentation enums.

The host only ever sees :class:`CommandAction`; the richer
:class:`ErrorCode` values travel inside the command result for callers
that want to know why a command stopped.
"""

from __future__ import annotations

from enum import StrEnum


class CommandAction(StrEnum):
    """What the host should do with the raw input after a handler ran."""

    HANDLED = "handled"
    STOPPED = "stopped"


class ErrorCode(StrEnum):
    """Failure taxonomy for private-message commands."""

    USAGE_ERROR = "usage_error"
    TARGET_NOT_FOUND = "target_not_found"
    BLOCKED = "blocked"
    UNKNOWN_SENDER = "unknown_sender"
    UNKNOWN_COMMAND = "unknown_command"


class BlockResult(StrEnum):
    """Outcome of a block toggle."""

    BLOCKED = "blocked"
    UNBLOCKED = "unblocked"


class HudChannel(StrEnum):
    """Presentation channels a participant can be printed to."""

    CHAT = "chat"
