"""Command: replay a chat transcript through a local session host."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from chatplus.commands._base import ChatCommand

if TYPE_CHECKING:
    from chatplus.commands._context import AppContext


@click.command(
    cls=ChatCommand,
    examples="""\
  chatplus replay session.txt
  chatplus --sync replay session.txt      # post audit webhooks inline
  chatplus --json replay session.txt
  cat session.txt | chatplus replay -""",
)
@click.argument("transcript", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def replay(app: AppContext, transcript: TextIO) -> None:
    """Run every command in TRANSCRIPT against one session.

    Lines look like ``Alice: pm Bob hi`` or ``console: ms_pm Bob hi``.
    ``!disconnect NAME`` and ``!connect NAME`` change presence; ``#``
    starts a comment.
    """
    from chatplus.services.replay import ReplayService

    try:
        result = ReplayService(app.runtime, app.host).run(transcript)
    finally:
        app.close()
    app.emit(result)
