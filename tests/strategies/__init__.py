# tests/strategies/__init__.py
"""Hypothesis strategies for property-based tests.

Re-exports commonly used strategies for convenience:
    from tests.strategies import closure_exprs, build_shader_tree, version_tags
"""

from tests.strategies.ids import item_names, legacy_identifiers, series_version_tags, version_tags
from tests.strategies.interfaces import build_interface, interface_layouts, legacy_socket_lists
from tests.strategies.nodes import build_shader_tree, closure_exprs

__all__ = [
    "build_interface",
    "build_shader_tree",
    "closure_exprs",
    "interface_layouts",
    "item_names",
    "legacy_identifiers",
    "legacy_socket_lists",
    "series_version_tags",
    "version_tags",
]
