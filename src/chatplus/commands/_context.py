"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy runtime initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chatplus.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from chatplus.config.settings import ChatSettings
    from chatplus.infrastructure.runtime import ChatRuntime
    from chatplus.infrastructure.session import SessionHost
    from chatplus.services.result import CommandResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The runtime is lazily
    built on first use so ``--help`` and ``--version`` never load the
    roster, localization files, or plugins.
    """

    def __init__(self, settings: ChatSettings) -> None:
        self.settings = settings
        self._runtime: ChatRuntime | None = None
        self._host: SessionHost | None = None

        # Configure structured logging
        from chatplus.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def host(self) -> SessionHost:
        """The roster-backed session host (created with the runtime)."""
        if self._host is None:
            from chatplus.infrastructure.session import SessionHost

            self._host = SessionHost.from_roster(self.settings.roster)
        return self._host

    @property
    def runtime(self) -> ChatRuntime:
        """The chat runtime, initialized on first access."""
        if self._runtime is None:
            from chatplus.infrastructure.runtime import ChatRuntime

            self._runtime = ChatRuntime.from_settings(self.settings, host=self.host)
            self._runtime.init()
        return self._runtime

    def close(self) -> None:
        """Let in-flight audit posts finish, then shut the runtime down."""
        if self._runtime is None:
            return
        bus = self._runtime.audit.event_bus
        if bus is not None:
            bus.wait()
        self._runtime.shutdown()
        self._runtime = None

    def emit(self, result: CommandResult) -> None:
        """Format and output a CommandResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
