"""Built-in webhook plugin — posts private message audit embeds.

Registered by the audit sink only when ``[audit] webhook_url`` is set.
Every failure is logged and dropped: no retry, no queue.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

from chatplus.domain.webhook import build_audit_payload
from chatplus.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from chatplus.config.models import AuditConfig
    from chatplus.domain.messages import MessageEvent

logger = logging.getLogger(__name__)


class DiscordWebhookPlugin:
    """Post one embed per relayed message to a Discord-compatible webhook."""

    def __init__(self, config: AuditConfig) -> None:
        self._config = config

    @hookimpl
    def post_private_message(self, event: MessageEvent) -> None:
        payload = build_audit_payload(event, title=self._config.title, color=self._config.color)
        try:
            response = requests.post(
                self._config.webhook_url,
                json=payload.to_wire(),
                timeout=self._config.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning(
                "Audit webhook post failed for message to %s: %s",
                event.recipient.display_name,
                exc,
            )
            return
        logger.debug("Audit webhook accepted message to %s", event.recipient.display_name)
