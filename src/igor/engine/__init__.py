# src/igor/engine/__init__.py
"""Migration engine: interface migrator, alpha analyzer, registry and runner."""

from igor.engine.alpha import AlphaSource, BlendConversion, analyze_alpha_source, convert_blend_mode
from igor.engine.context import MigrationContext
from igor.engine.interface_migrator import (
    convert_legacy_socket_lists,
    fix_socket_subtype_idnames,
    sort_interface_items,
    split_dual_role_sockets,
)
from igor.engine.registry import MigrationBlock, MigrationRegistry, block
from igor.engine.rescale import parallel_apply
from igor.engine.runner import MigrationResult, MigrationRunner, migrate_documents

__all__ = [
    "AlphaSource",
    "BlendConversion",
    "MigrationBlock",
    "MigrationContext",
    "MigrationRegistry",
    "MigrationResult",
    "MigrationRunner",
    "analyze_alpha_source",
    "block",
    "convert_blend_mode",
    "convert_legacy_socket_lists",
    "fix_socket_subtype_idnames",
    "migrate_documents",
    "parallel_apply",
    "sort_interface_items",
    "split_dual_role_sockets",
]
