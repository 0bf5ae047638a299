"""Shared contracts for cross-boundary data types.

Enums, version tags, reports, events, the stored schema snapshot and the
exception hierarchy live here. This package is a LEAF MODULE with no
outbound dependencies to core/engine.

Import patterns:
    from igor.contracts import VersionTag, ReportList, EntityKind
"""

from igor.contracts.enums import (
    AlphaState,
    BlendMethod,
    BlendShadow,
    EntityKind,
    InterfaceItemType,
    InterfacePanelFlag,
    InterfaceSocketFlag,
    MigrationPhase,
    NodeTreeType,
    RenderEngine,
    ReportLevel,
    SocketDirection,
    SocketType,
)
from igor.contracts.errors import (
    GraphIntegrityError,
    InterfaceError,
    MigrationError,
    RegistryError,
    SchemaSnapshotError,
    UnknownNodeTypeError,
)
from igor.contracts.events import BlockApplied, BlockFailed, DocumentMigrated, EntitySkipped
from igor.contracts.reports import Report, ReportList
from igor.contracts.schema import FieldSchema, SchemaSnapshot, StructSchema
from igor.contracts.types import BlockName, LinkID, NodeID, SocketID
from igor.contracts.version import VersionTag

__all__ = [
    "AlphaState",
    "BlendMethod",
    "BlendShadow",
    "BlockApplied",
    "BlockFailed",
    "BlockName",
    "DocumentMigrated",
    "EntityKind",
    "EntitySkipped",
    "FieldSchema",
    "GraphIntegrityError",
    "InterfaceError",
    "InterfaceItemType",
    "InterfacePanelFlag",
    "InterfaceSocketFlag",
    "LinkID",
    "MigrationError",
    "MigrationPhase",
    "NodeID",
    "NodeTreeType",
    "RegistryError",
    "RenderEngine",
    "Report",
    "ReportLevel",
    "ReportList",
    "SchemaSnapshot",
    "SchemaSnapshotError",
    "SocketDirection",
    "SocketID",
    "SocketType",
    "StructSchema",
    "UnknownNodeTypeError",
    "VersionTag",
]
