"""Message events and the user-facing message catalog.

Every string the core shows to a participant is listed once in
:data:`FALLBACK_TEMPLATES`. A localization provider may override any
key per participant; when it is absent, does not know the key, or
returns nothing, the built-in template is used instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from chatplus.services._helpers import now_utc

if TYPE_CHECKING:
    from chatplus.domain.participant import Participant

logger = logging.getLogger(__name__)

CONSOLE_NAME = "*CONSOLE*"

# --- Message catalog (key -> built-in template) ---

FALLBACK_TEMPLATES: dict[str, str] = {
    "pm.usage": "[PM] Usage: pm <player_name|#steam_id|#userid> <message>",
    "pm.target_not_found": "[PM] Couldn't find target called {target}",
    "pm.blocked": "[PM] The user {target} has blocked you from sending them PMs.",
    "pm.from": "(from ->) {sender}: {message}",
    "pm.to": "(to ->) {target}: {message}",
    "pm.console_from": "[PM From] {sender}: {message}",
    "pm.console_to": "[PM To] {target}: {message}",
    "pm.console_usage": "[PM] Usage: ms_pm <player_name|#steam_id|#userid> <message>",
    "pmblock.usage": "[PM] Usage: pmblock <player_name|#steam_id|#userid>",
    "pmblock.target_not_found": "[PM] Couldn't find target {target}",
    "pmblock.blocked": "[PM] Private messages from {target} blocked.",
    "pmblock.unblocked": "[PM] Private messages from {target} unblocked.",
    "pmblock.unblocked_notice": "[PM] {sender} has unblocked you from receiving PMs.",
    "test.echo": "{args}",
    "test.arg_count": "Called cmd with arg count: {count}...",
}


class Localizer(Protocol):
    """Optional localization capability supplied by the host."""

    def format(self, participant: Participant | None, key: str, **kwargs: object) -> str | None:
        """Return the localized text for *key*, or None if unavailable."""
        ...


class MessageCatalog:
    """Render catalog keys for a participant, with literal fallbacks.

    Args:
        localizer: Optional localization provider; None means always
            use :data:`FALLBACK_TEMPLATES`.
    """

    def __init__(self, localizer: Localizer | None = None) -> None:
        self._localizer = localizer

    def render(self, participant: Participant | None, key: str, **kwargs: object) -> str:
        if self._localizer is not None:
            try:
                text = self._localizer.format(participant, key, **kwargs)
            except Exception:
                logger.warning("Localizer failed for %s, using fallback", key, exc_info=True)
                text = None
            if text:
                return text
        return FALLBACK_TEMPLATES[key].format(**kwargs)


@dataclass(frozen=True)
class MessageEvent:
    """One relayed private message, built only to feed the audit sink.

    ``sender`` is None for console-originated messages.
    """

    recipient: Participant
    body: str
    sender: Participant | None = None
    timestamp: datetime = field(default_factory=now_utc)
