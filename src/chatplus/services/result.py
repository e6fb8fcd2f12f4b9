"""CommandResult and CommandError — the universal command contract.

INVARIANT: All command handlers return CommandResult.
The host dispatcher, the CLI, and plugins consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, computed_field

from chatplus.domain.types import CommandAction, ErrorCode


class CommandError(BaseModel):
    """Structured error payload within a CommandResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class CommandResult(BaseModel):
    """Universal return type for command handlers.

    Attributes:
        ok: Whether the command completed.
        op: Name of the operation (e.g. ``"pm"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered along the way.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: CommandError | None = None
    meta: dict[str, Any] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def action(self) -> CommandAction:
        """Host-facing action: completed commands are handled, the rest stopped."""
        return CommandAction.HANDLED if self.ok else CommandAction.STOPPED

    @classmethod
    def success(cls, op: str, data: dict[str, Any] | None = None, **kwargs: Any) -> CommandResult:
        return cls(ok=True, op=op, data=data or {}, **kwargs)

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode | str,
        message: str,
        **detail: Any,
    ) -> CommandResult:
        return cls(
            ok=False,
            op=op,
            error=CommandError(code=str(code), message=message, detail=detail),
        )
