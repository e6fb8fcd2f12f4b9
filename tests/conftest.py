"""Shared pytest fixtures for chatplus tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pluggy
import pytest
from click.testing import CliRunner

from chatplus.domain.messages import MessageEvent
from chatplus.infrastructure.runtime import ChatRuntime
from chatplus.infrastructure.session import SessionHost
from chatplus.plugins.event_bus import EventBus
from chatplus.plugins.manager import PluginManager
from chatplus.services.audit import AuditSink

hookimpl = pluggy.HookimplMarker("chatplus")

ALICE_ACCOUNT = 76561198000000001
BOB_ACCOUNT = 76561198000000002
CAROL_ACCOUNT = 76561198000000003
BOT_ACCOUNT = 76561198000000004


class RecordingPlugin:
    """Plugin that records every audited message event."""

    def __init__(self) -> None:
        self.events: list[MessageEvent] = []

    @hookimpl
    def post_private_message(self, event: MessageEvent) -> None:
        self.events.append(event)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def host() -> SessionHost:
    """Session with Alice, Bob, an unauthenticated Carol, and a bot.

    Connection order (the name matcher's enumeration order) is
    Alice, Bob, Carol, HelperBot.
    """
    h = SessionHost()
    h.connect("Alice", session_id=1, account_id=ALICE_ACCOUNT)
    h.connect("Bob", session_id=2, account_id=BOB_ACCOUNT)
    h.connect("Carol", session_id=3, account_id=CAROL_ACCOUNT, authenticated=False)
    h.connect("HelperBot", session_id=4, account_id=BOT_ACCOUNT, bot=True)
    return h


@pytest.fixture
def recorder() -> RecordingPlugin:
    return RecordingPlugin()


@pytest.fixture
def audit(recorder: RecordingPlugin) -> Iterator[AuditSink]:
    """Enabled audit sink on a synchronous bus with a recording plugin."""
    pm = PluginManager()
    pm.register_plugin(recorder, name="recorder")
    sink = AuditSink(EventBus(pm, sync=True))
    try:
        yield sink
    finally:
        sink.shutdown()


@pytest.fixture
def runtime(host: SessionHost, audit: AuditSink) -> Iterator[ChatRuntime]:
    """Initialized runtime with commands installed on *host*."""
    rt = ChatRuntime(host, audit=audit)
    rt.init()
    try:
        yield rt
    finally:
        rt.shutdown()


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temp directory made CWD, isolated from any CHATPLUS_* environment."""
    monkeypatch.chdir(tmp_path)
    for var in ("CHATPLUS_CONFIG", "CHATPLUS_AUDIT__WEBHOOK_URL"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


ROSTER_TOML = """\
[[roster]]
name = "Alice"
session_id = 1
account_id = 76561198000000001

[[roster]]
name = "Bob"
session_id = 2
account_id = 76561198000000002

[[roster]]
name = "Carol"
session_id = 3
account_id = 76561198000000003
authenticated = false
"""


@pytest.fixture
def write_config(config_dir: Path) -> Callable[[str], Path]:
    """Factory writing chatplus.toml (standard roster plus extra TOML) into *config_dir*."""

    def _write(extra: str = "") -> Path:
        path = config_dir / "chatplus.toml"
        path.write_text(ROSTER_TOML + extra, encoding="utf-8")
        return path

    return _write
