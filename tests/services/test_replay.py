"""Tests for ReplayService transcript execution."""

from chatplus.domain.types import CommandAction, ErrorCode
from chatplus.services.replay import ReplayService

TRANSCRIPT = """\
# Bob is tired of Alice
Alice: pm Bob hi there
Bob: pmblock Alice
Alice: pm Bob are you there?

console: ms_pm Alice server restarting
"""


class TestReplay:
    def test_runs_transcript(self, runtime, host, recorder) -> None:
        result = ReplayService(runtime, host).run(TRANSCRIPT.splitlines())

        assert result.ok
        assert result.data["handled"] == 3
        assert result.data["stopped"] == 1
        entries = result.data["commands"]
        assert [e["line"] for e in entries] == [2, 3, 4, 6]
        assert entries[2]["error"] == ErrorCode.BLOCKED
        assert entries[3]["op"] == "ms_pm"
        assert len(recorder.events) == 2

    def test_collects_inboxes(self, runtime, host) -> None:
        result = ReplayService(runtime, host).run(TRANSCRIPT.splitlines())
        inboxes = result.data["inboxes"]
        assert inboxes["Bob"] == [
            "(from ->) Alice: hi there",
            "[PM] Private messages from Alice blocked.",
        ]
        assert inboxes["Alice"][-1] == "[PM From] *CONSOLE*: server restarting"

    def test_unknown_sender(self, runtime, host) -> None:
        result = ReplayService(runtime, host).run(["Zed: pm Bob hi"])
        entry = result.data["commands"][0]
        assert entry["action"] == CommandAction.STOPPED
        assert entry["error"] == ErrorCode.UNKNOWN_SENDER

    def test_unknown_command(self, runtime, host) -> None:
        result = ReplayService(runtime, host).run(["Alice: dance"])
        assert result.data["commands"][0]["error"] == ErrorCode.UNKNOWN_COMMAND

    def test_malformed_line_warns(self, runtime, host) -> None:
        result = ReplayService(runtime, host).run(["just text"])
        assert result.data["commands"] == []
        assert result.warnings == ["line 1: expected '<sender>: <command>'"]

    def test_presence_directives(self, runtime, host) -> None:
        lines = [
            "!disconnect Bob",
            "Alice: pm Bob hi",
            "!connect Bob",
            "Alice: pm Bob welcome back",
        ]
        result = ReplayService(runtime, host).run(lines)

        entries = result.data["commands"]
        assert entries[0]["error"] == ErrorCode.TARGET_NOT_FOUND
        assert entries[1]["action"] == CommandAction.HANDLED
        assert result.data["inboxes"]["Bob"] == ["(from ->) Alice: welcome back"]

    def test_block_survives_reconnect(self, runtime, host) -> None:
        lines = [
            "Bob: pmblock Alice",
            "!disconnect Bob",
            "!connect Bob",
            "Alice: pm Bob hi",
        ]
        result = ReplayService(runtime, host).run(lines)
        assert result.data["commands"][-1]["error"] == ErrorCode.BLOCKED

    def test_bad_directives_warn(self, runtime, host) -> None:
        result = ReplayService(runtime, host).run(["!disconnect Zed", "!connect Alice", "!wave"])
        assert result.warnings == [
            "line 1: cannot disconnect unknown participant 'Zed'",
            "line 2: cannot reconnect 'Alice': not a departed participant",
            "line 3: unknown directive !wave",
        ]
