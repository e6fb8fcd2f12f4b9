"""Command: show which participant a pm target would reach."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chatplus.commands._base import ChatCommand

if TYPE_CHECKING:
    from chatplus.commands._context import AppContext


@click.command(
    cls=ChatCommand,
    examples="""\
  chatplus resolve bob
  chatplus resolve '#76561198000000001'
  chatplus --json resolve '#12'""",
)
@click.argument("query")
@click.pass_obj
def resolve(app: AppContext, query: str) -> None:
    """Resolve QUERY (name fragment, #session id, or #account id)."""
    from chatplus.services.lookup import LookupService

    app.emit(LookupService(app.runtime).resolve(query))
