"""Subcommand modules for chatplus.

Provides register_commands() which uses deferred imports to keep
``chatplus --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from chatplus.commands.replay import replay
    from chatplus.commands.resolve import resolve
    from chatplus.commands.roster import roster

    cli.add_command(roster)
    cli.add_command(resolve)
    cli.add_command(replay)
