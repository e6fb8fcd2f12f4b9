"""Tests for PluginManager discovery and registration."""

from __future__ import annotations

from unittest.mock import patch

import pluggy

from chatplus.domain.messages import MessageEvent
from chatplus.plugins.manager import ENTRY_POINT_GROUP, PluginManager

hookimpl = pluggy.HookimplMarker("chatplus")


class AuditPlugin:
    @hookimpl
    def post_private_message(self, event: MessageEvent) -> None:
        pass


class BrokenPlugin:
    def __init__(self) -> None:
        raise RuntimeError("cannot build")

    @hookimpl
    def post_private_message(self, event: MessageEvent) -> None:
        pass


class TestRegistration:
    def test_register_uses_class_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(AuditPlugin())
        assert "AuditPlugin" in pm.list_plugin_names()

    def test_register_with_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(AuditPlugin(), name="audit")
        assert pm.list_plugin_names() == ["audit"]

    def test_unregister(self) -> None:
        pm = PluginManager()
        plugin = AuditPlugin()
        pm.register_plugin(plugin)
        pm.unregister(plugin)
        assert pm.has_implementations("post_private_message") is False

    def test_has_implementations(self) -> None:
        pm = PluginManager()
        assert pm.has_implementations("post_private_message") is False
        pm.register_plugin(AuditPlugin())
        assert pm.has_implementations("post_private_message") is True
        assert pm.has_implementations("no_such_hook") is False


class TestDiscovery:
    def test_loads_entry_point_group(self) -> None:
        pm = PluginManager()
        assert pm.is_loaded is False
        with patch.object(pm._pm, "load_setuptools_entrypoints", return_value=0) as load:
            pm.discover_and_load()
        load.assert_called_once_with(ENTRY_POINT_GROUP)
        assert pm.is_loaded is True

    def test_entry_point_classes_are_instantiated(self) -> None:
        pm = PluginManager()

        def fake_load(group: str) -> int:
            pm._pm.register(AuditPlugin, name="audit-ep")
            return 1

        with patch.object(pm._pm, "load_setuptools_entrypoints", side_effect=fake_load):
            names = pm.discover_and_load()

        assert names == ["audit-ep"]
        plugin = pm._pm.get_plugin("audit-ep")
        assert isinstance(plugin, AuditPlugin)

    def test_broken_entry_point_is_dropped(self) -> None:
        pm = PluginManager()

        def fake_load(group: str) -> int:
            pm._pm.register(BrokenPlugin, name="broken")
            return 1

        with patch.object(pm._pm, "load_setuptools_entrypoints", side_effect=fake_load):
            names = pm.discover_and_load()

        assert names == []
