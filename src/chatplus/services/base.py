"""BaseService — abstract foundation for all chatplus services.

Every service receives a :class:`ChatRuntime` at construction time. The
runtime owns the directory, resolver, block registry, message catalog,
and audit sink; services hold no state of their own.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chatplus.domain.messages import MessageEvent
    from chatplus.domain.participant import Participant
    from chatplus.infrastructure.runtime import ChatRuntime

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class RelayEngine(BaseService):
            def relay(self, sender, raw_args) -> CommandResult:
                target = self._runtime.resolver.resolve_authenticated(...)
                ...
    """

    def __init__(self, runtime: ChatRuntime) -> None:
        self._runtime = runtime

    def _render(self, participant: Participant | None, key: str, **kwargs: object) -> str:
        return self._runtime.messages.render(participant, key, **kwargs)

    def _notify(self, participant: Participant, key: str, **kwargs: object) -> bool:
        """Render *key* for *participant* and show it. False if undeliverable."""
        return participant.present(self._render(participant, key, **kwargs))

    def _dispatch_audit(self, event: MessageEvent, warnings: list[str]) -> None:
        """Schedule an audit dispatch. Never raises into the caller.

        INVARIANT: Audit failures are logged, never surfaced as errors.
        """
        try:
            self._runtime.audit.dispatch(event)
        except Exception:
            logger.warning("Audit dispatch could not be scheduled", exc_info=True)
            warnings.append("Audit dispatch could not be scheduled")
