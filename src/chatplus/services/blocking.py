"""BlockRegistry and the ``pmblock`` toggle command.

The block relation is directional: A blocking B says nothing about B
blocking A. State lives for the process lifetime only.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from chatplus.domain.types import BlockResult, ErrorCode
from chatplus.services.base import BaseService
from chatplus.services.result import CommandResult

if TYPE_CHECKING:
    from chatplus.domain.participant import Participant

logger = logging.getLogger(__name__)


class BlockRegistry:
    """Mapping of blocker -> set of participants whose messages it refuses.

    Entries are created on the first block and dropped once an unblock
    empties them. A lock guards every read and write so the registry
    stays consistent when the host or plugins call in from other threads.
    """

    def __init__(self) -> None:
        self._blocked: dict[Participant, set[Participant]] = {}
        self._lock = threading.Lock()

    def is_blocked(self, blocker: Participant, sender: Participant) -> bool:
        """True iff *blocker* has blocked *sender*."""
        with self._lock:
            blocked = self._blocked.get(blocker)
            return blocked is not None and sender in blocked

    def toggle(self, blocker: Participant, target: Participant) -> BlockResult:
        """Unblock *target* if blocked by *blocker*, otherwise block it."""
        with self._lock:
            blocked = self._blocked.get(blocker)
            if blocked is not None and target in blocked:
                blocked.discard(target)
                if not blocked:
                    del self._blocked[blocker]
                return BlockResult.UNBLOCKED
            self._blocked.setdefault(blocker, set()).add(target)
            return BlockResult.BLOCKED


class BlockService(BaseService):
    """Handles ``pmblock <target>``: resolve, toggle, notify on unblock only."""

    def toggle_block(self, caller: Participant, raw_args: str) -> CommandResult:
        op = "pmblock"
        tokens = raw_args.split()
        if not tokens:
            self._notify(caller, "pmblock.usage")
            return CommandResult.failure(op, ErrorCode.USAGE_ERROR, "Missing target")

        target_token = tokens[0]
        target = self._runtime.resolver.resolve_authenticated(target_token)
        if target is None:
            self._notify(caller, "pmblock.target_not_found", target=target_token)
            return CommandResult.failure(
                op,
                ErrorCode.TARGET_NOT_FOUND,
                f"No authenticated participant matches {target_token!r}",
                target=target_token,
            )

        outcome = self._runtime.blocks.toggle(caller, target)
        logger.info(
            "%s %s private messages from %s",
            caller.display_name,
            outcome.value,
            target.display_name,
        )
        if outcome is BlockResult.BLOCKED:
            self._notify(caller, "pmblock.blocked", target=target.display_name)
        else:
            self._notify(caller, "pmblock.unblocked", target=target.display_name)
            self._notify(target, "pmblock.unblocked_notice", sender=caller.display_name)

        return CommandResult.success(
            op,
            {
                "blocker": caller.display_name,
                "target": target.display_name,
                "result": outcome.value,
            },
        )
