"""Tests for RelayEngine: pm and ms_pm end to end through the session host."""

from unittest.mock import MagicMock, patch

import pytest

from chatplus.domain.types import CommandAction, ErrorCode
from chatplus.infrastructure.runtime import ChatRuntime
from chatplus.services.audit import AuditSink
from chatplus.services.relay import RelayEngine, extract_body


class TestExtractBody:
    def test_removes_first_occurrence_only(self) -> None:
        assert extract_body("bob hello bob", "bob") == " hello bob"

    def test_preserves_internal_whitespace(self) -> None:
        assert extract_body("Bob  hi   there", "Bob") == "  hi   there"

    def test_token_inside_earlier_word(self) -> None:
        # The first substring hit wins even when it is not the argument boundary.
        assert extract_body("ann hi annie", "ann") == " hi annie"


class TestRelay:
    def test_delivers_both_sides(self, runtime, host, recorder) -> None:
        alice = host.find("Alice")
        result = host.execute(alice, "pm Bob hi there")

        assert result.ok
        assert result.action == CommandAction.HANDLED
        assert host.inbox("Bob") == ["(from ->) Alice: hi there"]
        assert host.inbox("Alice") == ["(to ->) Bob: hi there"]

        assert len(recorder.events) == 1
        event = recorder.events[0]
        assert event.sender is alice
        assert event.recipient is host.find("Bob")
        assert event.body == "hi there"

    def test_result_data(self, runtime, host) -> None:
        result = host.execute(host.find("Alice"), "pm Bob hi there")
        assert result.data == {
            "sender": "Alice",
            "recipient": "Bob",
            "body": "hi there",
            "delivered": True,
            "confirmed": True,
        }

    def test_target_name_repeated_in_body(self, runtime, host, recorder) -> None:
        host.execute(host.find("Alice"), "pm bob hello bob")
        assert host.inbox("Bob") == ["(from ->) Alice: hello bob"]
        assert recorder.events[0].body == "hello bob"

    def test_name_fragment_case_insensitive(self, runtime, host) -> None:
        result = host.execute(host.find("Alice"), "pm BO hi")
        assert result.data["recipient"] == "Bob"

    def test_by_session_id(self, runtime, host) -> None:
        result = host.execute(host.find("Alice"), "pm #2 hi")
        assert result.ok
        assert host.inbox("Bob") == ["(from ->) Alice: hi"]

    def test_by_account_id(self, runtime, host) -> None:
        bob = host.find("Bob")
        result = host.execute(host.find("Alice"), f"pm #{bob.account_id} hi")
        assert result.data["recipient"] == "Bob"

    def test_bots_are_addressable(self, runtime, host) -> None:
        result = host.execute(host.find("Alice"), "pm HelperBot ping")
        assert result.ok
        assert host.inbox("HelperBot") == ["(from ->) Alice: ping"]

    @pytest.mark.parametrize("line", ["pm", "pm Bob", "pm   Bob   "])
    def test_usage_error(self, runtime, host, recorder, line) -> None:
        result = host.execute(host.find("Alice"), line)

        assert result.action == CommandAction.STOPPED
        assert result.error.code == ErrorCode.USAGE_ERROR
        assert host.inbox("Alice") == [
            "[PM] Usage: pm <player_name|#steam_id|#userid> <message>"
        ]
        assert host.inbox("Bob") == []
        assert recorder.events == []

    def test_unknown_target(self, runtime, host, recorder) -> None:
        result = host.execute(host.find("Alice"), "pm Zed hi")

        assert result.error.code == ErrorCode.TARGET_NOT_FOUND
        assert host.inbox("Alice") == ["[PM] Couldn't find target called Zed"]
        assert recorder.events == []

    def test_unauthenticated_target_is_not_found(self, runtime, host, recorder) -> None:
        result = host.execute(host.find("Alice"), "pm Carol hi")

        assert result.error.code == ErrorCode.TARGET_NOT_FOUND
        assert host.inbox("Carol") == []
        assert recorder.events == []

    def test_disconnected_target_is_not_found(self, runtime, host) -> None:
        host.disconnect("Bob")
        result = host.execute(host.find("Alice"), "pm Bob hi")
        assert result.error.code == ErrorCode.TARGET_NOT_FOUND

    def test_recipient_channel_closed_mid_flow(self, runtime, host, recorder) -> None:
        host.find("Bob").channel.close()
        result = host.execute(host.find("Alice"), "pm Bob hi")

        assert result.ok
        assert result.data["delivered"] is False
        assert result.data["confirmed"] is True
        assert host.inbox("Alice") == ["(to ->) Bob: hi"]
        assert len(recorder.events) == 1

    def test_sender_channel_gone(self, runtime, host) -> None:
        alice = host.find("Alice")
        alice.channel = None
        result = host.execute(alice, "pm Bob hi")

        assert result.ok
        assert result.data["confirmed"] is False
        assert host.inbox("Bob") == ["(from ->) Alice: hi"]


class TestRelayBlocked:
    def test_blocked_sender_is_stopped_silently(self, runtime, host, recorder) -> None:
        alice, bob = host.find("Alice"), host.find("Bob")
        host.execute(bob, "pmblock Alice")
        bob_before = list(host.inbox("Bob"))

        result = host.execute(alice, "pm Bob hi")

        assert result.action == CommandAction.STOPPED
        assert result.error.code == ErrorCode.BLOCKED
        assert host.inbox("Alice") == [
            "[PM] The user Bob has blocked you from sending them PMs."
        ]
        assert host.inbox("Bob") == bob_before
        assert recorder.events == []

    def test_block_is_directional(self, runtime, host) -> None:
        bob = host.find("Bob")
        host.execute(bob, "pmblock Alice")

        result = host.execute(bob, "pm Alice still here")
        assert result.ok
        assert "(from ->) Bob: still here" in host.inbox("Alice")

    def test_unblock_restores_relay(self, runtime, host) -> None:
        alice, bob = host.find("Alice"), host.find("Bob")
        host.execute(bob, "pmblock Alice")
        assert host.execute(alice, "pm Bob hi").error.code == ErrorCode.BLOCKED

        host.execute(bob, "pmblock Alice")
        assert host.execute(alice, "pm Bob hi").action == CommandAction.HANDLED


class TestRelayAudit:
    def test_no_webhook_makes_no_network_calls(self, host) -> None:
        rt = ChatRuntime(host)
        rt.init()
        try:
            with patch("chatplus.plugins.builtins.webhook.requests.post") as post:
                result = host.execute(host.find("Alice"), "pm Bob hi")
            assert result.ok
            assert result.warnings == []
            post.assert_not_called()
        finally:
            rt.shutdown()

    def test_failing_bus_does_not_affect_relay(self, host) -> None:
        bus = MagicMock()
        bus.dispatch.side_effect = RuntimeError("bus exploded")
        rt = ChatRuntime(host, audit=AuditSink(bus))

        result = RelayEngine(rt).relay(host.find("Alice"), "Bob hi")

        assert result.ok
        assert host.inbox("Bob") == ["(from ->) Alice: hi"]
        bus.dispatch.assert_called_once()

    def test_sink_error_becomes_warning(self, host) -> None:
        sink = MagicMock()
        sink.dispatch.side_effect = RuntimeError("boom")
        rt = ChatRuntime(host, audit=sink)

        result = RelayEngine(rt).relay(host.find("Alice"), "Bob hi")

        assert result.ok
        assert result.warnings == ["Audit dispatch could not be scheduled"]


class TestConsoleRelay:
    def test_console_message(self, runtime, host, recorder) -> None:
        result = host.execute_console("ms_pm Bob server restarting")

        assert result.ok
        assert result.op == "ms_pm"
        assert host.inbox("Bob") == ["[PM From] *CONSOLE*: server restarting"]
        assert recorder.events[0].sender is None
        assert recorder.events[0].body == "server restarting"

    def test_console_ignores_blocks(self, runtime, host) -> None:
        bob = host.find("Bob")
        host.execute(bob, "pmblock Alice")
        assert host.execute_console("ms_pm Bob hello").ok

    def test_console_usage(self, runtime, host, recorder) -> None:
        result = host.execute_console("ms_pm Bob")
        assert result.error.code == ErrorCode.USAGE_ERROR
        assert recorder.events == []

    def test_console_unknown_target(self, runtime, host) -> None:
        result = host.execute_console("ms_pm Carol hi")
        assert result.error.code == ErrorCode.TARGET_NOT_FOUND
        assert host.inbox("Carol") == []
