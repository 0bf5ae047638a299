# src/igor/engine/context.py
"""Per-document state handed to every migration block."""

from __future__ import annotations

from dataclasses import dataclass, field

from igor.contracts.enums import EntityKind
from igor.contracts.events import EntitySkipped
from igor.contracts.reports import Report, ReportList
from igor.core.config import MigrationSettings
from igor.core.document import Document, Entity
from igor.core.events import EventBusProtocol, NullEventBus
from igor.core.oracle import StructMembershipOracle
from igor.core.version_gate import VersionGate
from igor.core.walker import DocumentWalker, EntityWalk, NodeTreeWalk


@dataclass
class MigrationContext:
    """Everything a block needs to migrate one document.

    Attributes:
        document: Document being migrated (mutated in place)
        gate: Version gate built from the stored version
        oracle: Membership table of the stored schema
        reports: Shared report sink of the whole migration
        settings: Migration settings
        event_bus: Observability sink
        block_name: Name of the block currently running
    """

    document: Document
    gate: VersionGate
    oracle: StructMembershipOracle
    reports: ReportList
    settings: MigrationSettings = field(default_factory=MigrationSettings)
    event_bus: EventBusProtocol = field(default_factory=NullEventBus)
    block_name: str = ""

    @classmethod
    def for_document(
        cls,
        document: Document,
        reports: ReportList,
        *,
        settings: MigrationSettings | None = None,
        event_bus: EventBusProtocol | None = None,
    ) -> MigrationContext:
        return cls(
            document=document,
            gate=VersionGate(document.version),
            oracle=StructMembershipOracle.from_snapshot(document.schema),
            reports=reports,
            settings=settings if settings is not None else MigrationSettings(),
            event_bus=event_bus if event_bus is not None else NullEventBus(),
        )

    @property
    def walker(self) -> DocumentWalker:
        return DocumentWalker(self.document)

    def entities(self, kind: EntityKind) -> EntityWalk:
        return self.walker.entities(kind)

    def node_trees(self) -> NodeTreeWalk:
        return self.walker.node_trees()

    def info(self, message: str, entity: Entity | None = None) -> Report:
        return self.reports.info(
            message,
            entity_name=None if entity is None else entity.name,
            document=self.document.name,
            library=None if entity is None else entity.library,
        )

    def warning(self, message: str, entity: Entity | None = None) -> Report:
        return self.reports.warning(
            message,
            entity_name=None if entity is None else entity.name,
            document=self.document.name,
            library=None if entity is None else entity.library,
        )

    def skip(self, entity: Entity, message: str) -> Report:
        """Report an entity left unconverted and announce it on the event bus."""
        report = self.warning(message, entity)
        self.event_bus.emit(
            EntitySkipped(
                document=self.document.name,
                block=self.block_name,
                entity_name=entity.name,
                reason=message,
            )
        )
        return report
