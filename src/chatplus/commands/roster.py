"""Command: list the participants in the configured roster."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chatplus.commands._base import ChatCommand

if TYPE_CHECKING:
    from chatplus.commands._context import AppContext


@click.command(
    cls=ChatCommand,
    examples="""\
  chatplus roster
  chatplus --json roster
  chatplus -c server.toml roster""",
)
@click.pass_obj
def roster(app: AppContext) -> None:
    """List the connected participants from the [[roster]] config."""
    from chatplus.services.lookup import LookupService

    app.emit(LookupService(app.runtime).roster())
