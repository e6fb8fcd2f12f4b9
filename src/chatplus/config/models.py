"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, chatplus.toml only contains
overrides. A server with no config file runs with auditing disabled.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from chatplus.domain.participant import UINT32_MAX, UINT64_MAX

# --- chatplus.toml sections ---


class AuditConfig(BaseModel):
    """[audit] section."""

    model_config = {"frozen": True}

    webhook_url: str = ""
    title: str = "Private Message"
    color: int = 5793266
    timeout: float | None = None
    max_workers: int = Field(default=2, ge=1)

    @field_validator("webhook_url")
    @classmethod
    def _strip_url(cls, value: str) -> str:
        return value.strip()


class LocalizationConfig(BaseModel):
    """[localization] section."""

    model_config = {"frozen": True}

    path: str | None = None
    default_locale: str = "en"


class CommandsConfig(BaseModel):
    """[commands] section."""

    model_config = {"frozen": True}

    sigil: str = Field(default="#", min_length=1)


class RosterEntry(BaseModel):
    """One ``[[roster]]`` participant for the local session host."""

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    session_id: int = Field(ge=0, le=UINT32_MAX)
    account_id: int = Field(ge=0, le=UINT64_MAX)
    authenticated: bool = True
    bot: bool = False
    connected: bool = True
    locale: str | None = None
