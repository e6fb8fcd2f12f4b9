"""Tests for the message catalog and its localization fallback."""

from datetime import UTC

from chatplus.domain.messages import FALLBACK_TEMPLATES, MessageCatalog, MessageEvent
from chatplus.domain.participant import Participant


class _StaticLocalizer:
    def __init__(self, table: dict[str, str]) -> None:
        self._table = table

    def format(self, participant, key, **kwargs):
        template = self._table.get(key)
        return template.format(**kwargs) if template else None


class _BrokenLocalizer:
    def format(self, participant, key, **kwargs):
        raise RuntimeError("locale backend down")


class TestMessageCatalog:
    def test_fallback_without_localizer(self) -> None:
        catalog = MessageCatalog()
        text = catalog.render(None, "pm.blocked", target="Bob")
        assert text == "[PM] The user Bob has blocked you from sending them PMs."

    def test_localizer_overrides(self) -> None:
        catalog = MessageCatalog(_StaticLocalizer({"pm.to": "an {target}: {message}"}))
        assert catalog.render(None, "pm.to", target="Bob", message="hi") == "an Bob: hi"

    def test_localizer_miss_falls_back(self) -> None:
        catalog = MessageCatalog(_StaticLocalizer({}))
        text = catalog.render(None, "pmblock.blocked", target="Bob")
        assert text == "[PM] Private messages from Bob blocked."

    def test_localizer_error_falls_back(self) -> None:
        catalog = MessageCatalog(_BrokenLocalizer())
        assert catalog.render(None, "pm.usage").startswith("[PM] Usage:")

    def test_every_fallback_formats(self) -> None:
        kwargs = {
            "target": "T",
            "sender": "S",
            "message": "M",
            "args": "A",
            "count": 1,
        }
        for key, template in FALLBACK_TEMPLATES.items():
            assert template.format(**kwargs), key


class TestMessageEvent:
    def test_timestamp_defaults_to_utc_now(self) -> None:
        bob = Participant("Bob", session_id=2, account_id=20)
        event = MessageEvent(recipient=bob, body="hi")
        assert event.sender is None
        assert event.timestamp.tzinfo is UTC
