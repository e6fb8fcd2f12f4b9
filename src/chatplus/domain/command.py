"""Command line tokenization for chat and console commands.

Mirrors how the game host hands commands to plugins: argument 0 is the
command name, ``arg_string`` is everything after it with the separating
whitespace removed, and the remaining text is kept verbatim.

Examples:
    >>> cmd = CommandLine.parse("pm bob  hello bob")
    >>> cmd.name, cmd.arg_count, cmd.arg(1)
    ('pm', 3, 'bob')
    >>> cmd.arg_string
    'bob  hello bob'
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandLine:
    """A parsed command invocation."""

    name: str
    arg_string: str
    args: tuple[str, ...]

    @classmethod
    def parse(cls, line: str) -> CommandLine:
        """Split *line* into the command name and its raw argument string."""
        stripped = line.lstrip()
        parts = stripped.split(None, 1)
        if not parts:
            return cls(name="", arg_string="", args=())
        name = parts[0].lower()
        arg_string = parts[1] if len(parts) > 1 else ""
        return cls(name=name, arg_string=arg_string, args=tuple(arg_string.split()))

    @property
    def arg_count(self) -> int:
        """Number of arguments, not counting the command name."""
        return len(self.args)

    def arg(self, index: int) -> str:
        """Return argument *index* (0 is the command name, 1 the first argument).

        Out-of-range indexes return an empty string.
        """
        if index == 0:
            return self.name
        if 1 <= index <= len(self.args):
            return self.args[index - 1]
        return ""
