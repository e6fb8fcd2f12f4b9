"""AuditSink — fire-and-forget audit of relayed private messages.

With no webhook configured the sink is disabled and ``dispatch`` does
nothing at all. Otherwise each event is handed to the plugin event bus,
whose worker threads run the webhook plugin; the caller never waits.

INVARIANT: Audit failures are logged, never raised, never retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chatplus.config.models import AuditConfig
    from chatplus.domain.messages import MessageEvent
    from chatplus.plugins.event_bus import EventBus
    from chatplus.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

AUDIT_HOOK = "post_private_message"


class AuditSink:
    """Schedules one audit dispatch per message event.

    Parameters:
        event_bus: Bus to dispatch on, or None to disable auditing.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        self._bus = event_bus

    @classmethod
    def from_config(
        cls,
        config: AuditConfig,
        *,
        sync: bool = False,
        plugin_manager: PluginManager | None = None,
    ) -> AuditSink:
        """Build the sink from the ``[audit]`` section.

        An empty webhook URL disables auditing; this is logged here,
        once, rather than on every message.
        """
        if not config.webhook_url:
            logger.info("Audit webhook not configured; private message audit disabled")
            return cls(None)

        from chatplus.plugins.builtins.webhook import DiscordWebhookPlugin
        from chatplus.plugins.event_bus import EventBus
        from chatplus.plugins.manager import PluginManager

        pm = plugin_manager or PluginManager()
        if not pm.is_loaded:
            pm.discover_and_load()
        pm.register_plugin(DiscordWebhookPlugin(config), name="webhook-builtin")
        bus = EventBus(pm, sync=sync, max_workers=config.max_workers)
        return cls(bus)

    @property
    def enabled(self) -> bool:
        return self._bus is not None

    @property
    def event_bus(self) -> EventBus | None:
        return self._bus

    def dispatch(self, event: MessageEvent) -> None:
        """Schedule *event* for audit and return immediately."""
        if self._bus is None:
            return
        try:
            self._bus.dispatch(AUDIT_HOOK, {"event": event})
        except Exception:
            logger.warning(
                "Audit dispatch failed for message to %s",
                event.recipient.display_name,
                exc_info=True,
            )

    def shutdown(self) -> None:
        """Stop accepting dispatches. In-flight dispatches may be abandoned."""
        if self._bus is not None:
            self._bus.shutdown(wait=False)
