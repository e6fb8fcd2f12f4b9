"""Rich/JSON output helpers.

The CLI renders CommandResult for humans (Rich text and tables) or
machines (--json). Replay results get a transcript table and one block
per participant inbox; everything else is shown as key/value pairs.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from chatplus.output.console import create_console, get_output, style_for_action

if TYPE_CHECKING:
    from rich.console import Console

    from chatplus.services.result import CommandResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _render_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _render_data(console: Console, data: dict[str, Any]) -> None:
    for key, value in data.items():
        console.print(f"  [chat.key]{escape(key)}:[/] {escape(_render_value(value))}")


def _render_replay(console: Console, data: dict[str, Any]) -> None:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right", style="chat.key")
    table.add_column("Sender", style="chat.name")
    table.add_column("Command")
    table.add_column("Result")
    for entry in data.get("commands", []):
        action = entry.get("action", "")
        outcome = entry.get("error") or action
        table.add_row(
            str(entry.get("line", "")),
            escape(str(entry.get("sender", ""))),
            escape(str(entry.get("command", ""))),
            f"[{style_for_action(action)}]{escape(str(outcome))}[/]"
            if style_for_action(action)
            else escape(str(outcome)),
        )
    console.print(table)

    for name, lines in data.get("inboxes", {}).items():
        console.print(f"\n[chat.name]{escape(name)}[/] received {len(lines)} line(s)")
        for line in lines:
            console.print(f"  {escape(line)}")


def format_result(
    result: CommandResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a CommandResult for display.

    Args:
        result: The command result to format.
        settings: Output mode; takes priority over *json_output*.
        json_output: Shorthand for ``OutputSettings(json_output=True)``.
    """
    settings = settings or OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)

    if settings.quiet:
        if result.ok:
            return ""
        return result.error.message if result.error else "Unknown error"

    console = create_console(no_color=True)
    if result.ok:
        console.print(f"[chat.ok]OK:[/] [chat.op]{escape(result.op)}[/]")
        if result.op == "replay":
            _render_replay(console, result.data)
        elif result.data:
            _render_data(console, result.data)
    else:
        message = result.error.message if result.error else "Unknown error"
        console.print(f"[chat.error]ERROR:[/] [chat.op]{escape(result.op)}[/] - {escape(message)}")
        if settings.verbose and result.error and result.error.detail:
            _render_data(console, result.error.detail)
    return get_output(console).rstrip("\n")
