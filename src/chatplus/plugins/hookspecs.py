"""Pluggy hook specifications for chatplus message events.

Hooks run on the event bus worker threads, never on the command path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from chatplus.domain.messages import MessageEvent

hookspec = pluggy.HookspecMarker("chatplus")
hookimpl = pluggy.HookimplMarker("chatplus")


class ChatplusHookSpec:
    """Hook specifications for the chatplus plugin system."""

    @hookspec
    def post_private_message(self, event: MessageEvent) -> None:
        """Called after a private message was relayed to its recipient."""
