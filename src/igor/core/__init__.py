# src/igor/core/__init__.py
"""Core infrastructure: documents, node trees, version gate, oracle, walker, configuration, logging."""

from igor.core.config import (
    AnalyzerSettings,
    ConcurrencySettings,
    LoggingSettings,
    MigrationSettings,
    load_settings,
)
from igor.core.document import Document, Entity
from igor.core.events import (
    EventBus,
    EventBusProtocol,
    NullEventBus,
)
from igor.core.logging import (
    configure_logging,
    get_logger,
)
from igor.core.nodes import NodeTree, TreeInterface
from igor.core.oracle import StructMembershipOracle
from igor.core.version_gate import VersionGate
from igor.core.walker import DocumentWalker, EntityWalk, NodeTreeWalk

__all__ = [
    "AnalyzerSettings",
    "ConcurrencySettings",
    "Document",
    "DocumentWalker",
    "Entity",
    "EntityWalk",
    "EventBus",
    "EventBusProtocol",
    "LoggingSettings",
    "MigrationSettings",
    "NodeTree",
    "NodeTreeWalk",
    "NullEventBus",
    "StructMembershipOracle",
    "TreeInterface",
    "VersionGate",
    "configure_logging",
    "get_logger",
    "load_settings",
]
