# tests/unit/plugins/test_plugin_manager.py
"""Tests for pluggy-based migration block discovery."""

import pytest

from igor.contracts.errors import RegistryError
from igor.engine.registry import MigrationBlock
from igor.plugins.hookspecs import hookimpl
from igor.plugins.manager import MigrationPluginManager
from tests.fixtures.factories import make_block


class _ExtraMigrations:
    @hookimpl
    def igor_get_migrations(self) -> list[MigrationBlock]:
        return [make_block("addon_rename_sockets", (402, 10))]


class _ClashingMigrations:
    @hookimpl
    def igor_get_migrations(self) -> list[MigrationBlock]:
        return [make_block("sort_interface_sockets", (402, 10))]


class TestMigrationPluginManager:
    def test_builtin_blocks_registered(self) -> None:
        manager = MigrationPluginManager()
        manager.register_builtin_migrations()

        names = {m.name for m in manager.get_blocks()}

        assert {"convert_interface_socket_lists", "grease_pencil_radii_scaling", "eevee_next_engine"} <= names

    def test_third_party_plugin_blocks_join_registry(self) -> None:
        manager = MigrationPluginManager()
        manager.register_builtin_migrations()
        manager.register(_ExtraMigrations())

        registry = manager.build_registry()

        assert "addon_rename_sockets" in registry
        assert manager.get_block_by_name("addon_rename_sockets") is registry.get("addon_rename_sockets")

    def test_duplicate_block_names_rejected(self) -> None:
        manager = MigrationPluginManager()
        manager.register_builtin_migrations()

        with pytest.raises(RegistryError, match="sort_interface_sockets"):
            manager.register(_ClashingMigrations())

    def test_builtin_blocks_keep_module_order(self) -> None:
        manager = MigrationPluginManager()
        manager.register_builtin_migrations()

        names = [m.name for m in manager.get_blocks()]

        assert names.index("replace_legacy_glossy_node") < names.index("grease_pencil_radii_scaling")
        assert names.index("grease_pencil_radii_scaling") < names.index("eevee_next_engine")

    def test_empty_manager(self) -> None:
        manager = MigrationPluginManager()
        assert manager.get_blocks() == []
        assert len(manager.build_registry()) == 0
