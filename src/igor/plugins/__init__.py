# src/igor/plugins/__init__.py
"""Plugin system: pluggy hooks through which migration blocks are registered."""

from igor.plugins.hookspecs import PROJECT_NAME, hookimpl, hookspec
from igor.plugins.manager import MigrationPluginManager

__all__ = [
    "PROJECT_NAME",
    "MigrationPluginManager",
    "hookimpl",
    "hookspec",
]
