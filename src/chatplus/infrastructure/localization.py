"""TOML-backed localization provider.

A locale file holds one table per locale. Keys may be written dotted
and quoted or as nested tables; both flatten to the same catalog keys::

    [en]
    "pm.usage" = "Usage: pm <name> <message>"

    [de.pm]
    from = "(von) {sender}: {message}"

Missing locales, missing keys, and templates that fail to format all
yield None, so the caller falls back to the built-in text.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

if TYPE_CHECKING:
    from chatplus.domain.participant import Participant

logger = logging.getLogger(__name__)


def _flatten(table: dict[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in table.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten(value, full_key))
        elif isinstance(value, str):
            flat[full_key] = value
        else:
            logger.warning("Ignoring non-string localization entry %s", full_key)
    return flat


class TomlLocalizer:
    """Localization provider reading per-locale message tables.

    Args:
        catalogs: Mapping of locale -> flat key/template mapping.
        default_locale: Locale used for participants without one, and
            for console output.
    """

    def __init__(self, catalogs: dict[str, dict[str, str]], *, default_locale: str = "en") -> None:
        self._catalogs = catalogs
        self._default_locale = default_locale

    @classmethod
    def from_file(cls, path: Path, *, default_locale: str = "en") -> TomlLocalizer:
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            msg = f"Cannot read localization file {path}: {exc}"
            raise click.ClickException(msg) from exc
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise click.ClickException(msg) from exc

        catalogs = {
            locale: _flatten(table) for locale, table in data.items() if isinstance(table, dict)
        }
        logger.debug("Loaded %d locale(s) from %s", len(catalogs), path)
        return cls(catalogs, default_locale=default_locale)

    @property
    def locales(self) -> list[str]:
        return sorted(self._catalogs)

    def format(self, participant: Participant | None, key: str, **kwargs: object) -> str | None:
        locale = (participant.locale if participant else None) or self._default_locale
        template = self._catalogs.get(locale, {}).get(key)
        if template is None:
            return None
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            logger.warning("Bad localized template %s for locale %s", key, locale)
            return None
