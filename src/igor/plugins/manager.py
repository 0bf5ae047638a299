# src/igor/plugins/manager.py
"""Plugin manager for migration block discovery and registration.

Uses pluggy for hook-based registration. The built-in versioning modules
register through the same hook third-party plugins use.
"""

from typing import Any

import pluggy

from igor.contracts.errors import RegistryError
from igor.engine.registry import MigrationBlock, MigrationRegistry
from igor.plugins.hookspecs import PROJECT_NAME, IgorMigrationSpec


class MigrationPluginManager:
    """Collects migration blocks from registered plugins.

    Usage:
        manager = MigrationPluginManager()
        manager.register_builtin_migrations()
        manager.register(MyMigrations())
        registry = manager.build_registry()
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(IgorMigrationSpec)
        self._blocks: dict[str, MigrationBlock] = {}

    def register_builtin_migrations(self) -> None:
        """Register the versioning modules shipped with igor."""
        from igor.versioning import BUILTIN_PLUGINS

        for plugin in BUILTIN_PLUGINS:
            self.register(plugin)

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods
        """
        self._pm.register(plugin)
        self._refresh_cache()

    def _refresh_cache(self) -> None:
        """Refresh the block cache from hooks.

        Raises:
            RegistryError: If two plugins provide blocks with the same name
        """
        new_blocks: dict[str, MigrationBlock] = {}
        # pluggy calls implementations last-registered first
        for blocks in reversed(self._pm.hook.igor_get_migrations()):
            for migration in blocks:
                if migration.name in new_blocks:
                    raise RegistryError(f"Duplicate migration block name: '{migration.name}'")
                new_blocks[migration.name] = migration
        self._blocks = new_blocks

    def get_blocks(self) -> list[MigrationBlock]:
        """All registered blocks in registration order."""
        return list(self._blocks.values())

    def get_block_by_name(self, name: str) -> MigrationBlock | None:
        return self._blocks.get(name)

    def build_registry(self) -> MigrationRegistry:
        return MigrationRegistry(self._blocks.values())
