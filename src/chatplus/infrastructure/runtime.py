"""ChatRuntime — owns the private messaging state for one host process.

Wires the directory, resolver, block registry, message catalog, and
audit sink together, and installs the chat and console commands on the
host. Block state lives exactly as long as the runtime.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from chatplus.domain.messages import Localizer, MessageCatalog
from chatplus.services.audit import AuditSink
from chatplus.services.blocking import BlockRegistry
from chatplus.services.directory import Directory, DirectoryProvider
from chatplus.services.targeting import DEFAULT_SIGIL, TargetResolver

if TYPE_CHECKING:
    from chatplus.config.settings import ChatSettings
    from chatplus.infrastructure.session import (
        ChatCommandCallback,
        ConsoleCommandCallback,
        SessionHost,
    )
    from chatplus.services.commands import ChatCommands

logger = logging.getLogger(__name__)


class CommandHost(DirectoryProvider, Protocol):
    """Host contract: participant directory plus command registration."""

    def install_command(self, name: str, callback: ChatCommandCallback) -> None: ...

    def remove_command(self, name: str) -> None: ...

    def install_console_command(self, name: str, callback: ConsoleCommandCallback) -> None: ...

    def remove_console_command(self, name: str) -> None: ...


class ChatRuntime:
    """Process-lifetime container for private messaging.

    Call :meth:`init` once the host is ready to accept command
    registrations and :meth:`shutdown` before the host goes away.
    Commands are expected one at a time; the block registry still
    locks internally.
    """

    def __init__(
        self,
        host: CommandHost,
        *,
        audit: AuditSink | None = None,
        localizer: Localizer | None = None,
        sigil: str = DEFAULT_SIGIL,
    ) -> None:
        self.host = host
        self.directory = Directory(host)
        self.resolver = TargetResolver(self.directory, sigil=sigil)
        self.blocks = BlockRegistry()
        self.messages = MessageCatalog(localizer)
        self.audit = audit if audit is not None else AuditSink()
        self._commands: ChatCommands | None = None

    @classmethod
    def from_settings(
        cls,
        settings: ChatSettings,
        host: SessionHost | None = None,
    ) -> ChatRuntime:
        """Build a runtime (and, if not given, a roster-backed host) from settings."""
        from chatplus.infrastructure.session import SessionHost

        if host is None:
            host = SessionHost.from_roster(settings.roster)

        localizer: Localizer | None = None
        if settings.localization.path:
            from chatplus.infrastructure.localization import TomlLocalizer

            localizer = TomlLocalizer.from_file(
                settings.resolve_path(settings.localization.path),
                default_locale=settings.localization.default_locale,
            )

        audit = AuditSink.from_config(settings.audit, sync=settings.sync)
        return cls(host, audit=audit, localizer=localizer, sigil=settings.commands.sigil)

    @property
    def is_initialized(self) -> bool:
        return self._commands is not None

    def init(self) -> bool:
        """Install the chat and console commands on the host."""
        from chatplus.services.commands import ChatCommands

        if self._commands is not None:
            return True
        commands = ChatCommands(self)
        self.host.install_command("pm", commands.on_pm)
        self.host.install_command("pmblock", commands.on_pmblock)
        self.host.install_command("test", commands.on_test)
        self.host.install_console_command("ms_pm", commands.on_console_pm)
        self._commands = commands
        logger.info("chatplus init (audit %s)", "enabled" if self.audit.enabled else "disabled")
        return True

    def shutdown(self) -> None:
        """Remove commands and stop the audit sink. In-flight audits may be lost."""
        if self._commands is not None:
            self.host.remove_command("pm")
            self.host.remove_command("pmblock")
            self.host.remove_command("test")
            self.host.remove_console_command("ms_pm")
            self._commands = None
        self.audit.shutdown()
        logger.info("chatplus shutdown")
