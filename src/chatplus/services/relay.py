"""RelayEngine — one private message exchange from command to delivery.

Steps: validate arguments, resolve the target, check the target's block
list, cut the target token out of the raw input, deliver to both sides,
then hand the event to the audit sink without waiting on it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chatplus.domain.messages import CONSOLE_NAME, MessageEvent
from chatplus.domain.types import ErrorCode
from chatplus.services._helpers import first_occurrence_removed
from chatplus.services.base import BaseService
from chatplus.services.result import CommandResult

if TYPE_CHECKING:
    from chatplus.domain.participant import Participant

logger = logging.getLogger(__name__)

MIN_ARGS = 2


def extract_body(raw_args: str, target_token: str) -> str:
    """Message body: *raw_args* with the first *target_token* occurrence cut out.

    Only the first occurrence goes, so a target name that reappears in
    the message survives there. The remaining text is not re-split.

    Examples:
        >>> extract_body("bob hello bob", "bob")
        ' hello bob'
    """
    return first_occurrence_removed(raw_args, target_token)


class RelayEngine(BaseService):
    """Relays ``pm <target> <message...>`` between participants."""

    def relay(self, sender: Participant, raw_args: str) -> CommandResult:
        """Relay one private message from *sender*.

        Usage errors, unresolvable targets, and blocks stop the command
        with a notice to the sender only. A completed relay schedules
        exactly one audit dispatch.
        """
        op = "pm"
        tokens = raw_args.split()
        if len(tokens) < MIN_ARGS:
            self._notify(sender, "pm.usage")
            return CommandResult.failure(
                op, ErrorCode.USAGE_ERROR, "Expected a target and a message"
            )

        target_token = tokens[0]
        target = self._runtime.resolver.resolve_authenticated(target_token)
        if target is None:
            self._notify(sender, "pm.target_not_found", target=target_token)
            return CommandResult.failure(
                op,
                ErrorCode.TARGET_NOT_FOUND,
                f"No authenticated participant matches {target_token!r}",
                target=target_token,
            )

        if self._runtime.blocks.is_blocked(target, sender):
            self._notify(sender, "pm.blocked", target=target.display_name)
            return CommandResult.failure(
                op,
                ErrorCode.BLOCKED,
                f"{target.display_name} has blocked {sender.display_name}",
                target=target.display_name,
            )

        body = extract_body(raw_args, target_token).strip()
        delivered = self._notify(
            target, "pm.from", sender=sender.display_name, message=body
        )
        confirmed = self._notify(
            sender, "pm.to", target=target.display_name, message=body
        )

        warnings: list[str] = []
        self._dispatch_audit(MessageEvent(recipient=target, body=body, sender=sender), warnings)

        return CommandResult.success(
            op,
            {
                "sender": sender.display_name,
                "recipient": target.display_name,
                "body": body,
                "delivered": delivered,
                "confirmed": confirmed,
            },
            warnings=warnings,
        )

    def relay_from_console(self, raw_args: str) -> CommandResult:
        """Relay ``ms_pm <target> <message...>`` typed at the server console.

        There is no sending participant: block lists do not apply, the
        recipient sees the console name, feedback goes to the operator
        log, and the audit event carries no sender.
        """
        op = "ms_pm"
        tokens = raw_args.split()
        if len(tokens) < MIN_ARGS:
            logger.info(self._render(None, "pm.console_usage"))
            return CommandResult.failure(
                op, ErrorCode.USAGE_ERROR, "Expected a target and a message"
            )

        target_token = tokens[0]
        target = self._runtime.resolver.resolve_authenticated(target_token)
        if target is None:
            logger.info(self._render(None, "pm.target_not_found", target=target_token))
            return CommandResult.failure(
                op,
                ErrorCode.TARGET_NOT_FOUND,
                f"No authenticated participant matches {target_token!r}",
                target=target_token,
            )

        body = extract_body(raw_args, target_token).strip()
        delivered = self._notify(target, "pm.console_from", sender=CONSOLE_NAME, message=body)
        if delivered:
            logger.info(
                self._render(None, "pm.console_to", target=target.display_name, message=body)
            )
        else:
            logger.info("Recipient %s is no longer connected", target.display_name)

        warnings: list[str] = []
        self._dispatch_audit(MessageEvent(recipient=target, body=body), warnings)

        return CommandResult.success(
            op,
            {
                "sender": CONSOLE_NAME,
                "recipient": target.display_name,
                "body": body,
                "delivered": delivered,
            },
            warnings=warnings,
        )
