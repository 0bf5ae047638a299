# src/igor/plugins/hookspecs.py
"""pluggy hook specifications for igor migration plugins.

Hosts that add their own record types ship their versioning as a plugin:

    from igor.plugins.hookspecs import hookimpl

    class MyMigrations:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def igor_get_migrations(self):
            return [block("my_block", my_block, (402, 10))]

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from igor.engine.registry import MigrationBlock

# Project name for pluggy
PROJECT_NAME = "igor"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class IgorMigrationSpec:
    """Hook specifications for migration block providers."""

    @hookspec
    def igor_get_migrations(self) -> list["MigrationBlock"]:  # type: ignore[empty-body]
        """Return migration blocks.

        Returns:
            List of MigrationBlock instances
        """
