"""Discord-style webhook payload models for private message audit.

Field names serialize as lower camel case; unset optional fields are
omitted from the wire body.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chatplus.services._helpers import now_utc

if TYPE_CHECKING:
    from chatplus.domain.messages import MessageEvent

UNKNOWN_SENDER = "Unknown"
UNKNOWN_ACCOUNT = "unknown"


class WebhookModel(BaseModel):
    """Base for wire models: frozen, camelCase aliases."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Embed(WebhookModel):
    """A single rich notification."""

    title: str | None = None
    description: str | None = None
    color: int | None = None
    timestamp: datetime | None = None


class WebhookPayload(WebhookModel):
    """Top-level webhook body: a list of embeds."""

    embeds: list[Embed] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and no null fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def describe_event(event: MessageEvent) -> str:
    """Multi-line embed description naming both parties and the literal body."""
    if event.sender is None:
        sender_line = f"**From:** {UNKNOWN_SENDER} ({UNKNOWN_ACCOUNT})"
    else:
        sender_line = f"**From:** {event.sender.display_name} ({event.sender.account_id})"
    recipient = event.recipient
    return "\n".join(
        [
            sender_line,
            f"**To:** {recipient.display_name} ({recipient.account_id})",
            f"**Message:** {event.body}",
        ]
    )


def build_audit_payload(
    event: MessageEvent,
    *,
    title: str,
    color: int,
    dispatched_at: datetime | None = None,
) -> WebhookPayload:
    """Build the audit payload for *event*, stamped with the dispatch time."""
    embed = Embed(
        title=title,
        description=describe_event(event),
        color=color,
        timestamp=dispatched_at or now_utc(),
    )
    return WebhookPayload(embeds=[embed])
