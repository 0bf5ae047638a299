# src/igor/engine/runner.py
"""Migration entry point.

Runs every registered block once, in order, against each document whose
stored version predates the block. Documents are passed in explicitly: the
runner keeps no process-wide state between calls.

Phases are run phase-major: every document completes its READ blocks before
any AFTER_LINKING block runs, mirroring the library linking step the loader
performs in between.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from igor.contracts.enums import MigrationPhase
from igor.contracts.errors import MigrationError
from igor.contracts.events import BlockApplied, BlockFailed, DocumentMigrated
from igor.contracts.reports import ReportList
from igor.contracts.version import VersionTag
from igor.core.config import MigrationSettings
from igor.core.document import Document
from igor.core.events import EventBusProtocol, NullEventBus
from igor.core.logging import get_logger, migration_log_context
from igor.engine.context import MigrationContext
from igor.engine.registry import MigrationBlock, MigrationRegistry

logger = get_logger(__name__)


@dataclass
class MigrationResult:
    """What a migration hands back to the loader.

    Attributes:
        documents: The migrated documents (mutated in place)
        reports: Ordered report entries plus summary counters
        applied: Names of the blocks that ran, per document name
    """

    documents: list[Document]
    reports: ReportList = field(default_factory=ReportList)
    applied: dict[str, list[str]] = field(default_factory=dict)

    @property
    def counters(self) -> Counter[str]:
        return self.reports.counters

    @property
    def warnings(self) -> list[str]:
        return [entry.message for entry in self.reports.warnings]


class MigrationRunner:
    """Applies a registry's blocks to a set of documents.

    Example:
        runner = MigrationRunner(registry, settings=settings)
        result = runner.run([main_document, *library_documents])
        for report in result.reports:
            print(report)
    """

    def __init__(
        self,
        registry: MigrationRegistry,
        *,
        settings: MigrationSettings | None = None,
        event_bus: EventBusProtocol | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings if settings is not None else MigrationSettings()
        self._event_bus: EventBusProtocol = event_bus if event_bus is not None else NullEventBus()

    @property
    def target_version(self) -> VersionTag | None:
        """Version stamped onto documents after migration."""
        return self._settings.target_tag or self._registry.highest_version()

    def run(self, documents: Sequence[Document]) -> MigrationResult:
        """Migrate ``documents`` in place.

        Domain failures (MigrationError) raised by a block are reported as a
        warning and the next block proceeds; changes already made are kept.
        Any other exception propagates.

        Raises:
            ValueError: If two documents share a name
        """
        duplicates = sorted(name for name, count in Counter(doc.name for doc in documents).items() if count > 1)
        if duplicates:
            raise ValueError(f"documents must have unique names, got duplicates: {', '.join(duplicates)}")
        result = MigrationResult(documents=list(documents))
        contexts = [
            MigrationContext.for_document(doc, result.reports, settings=self._settings, event_bus=self._event_bus)
            for doc in result.documents
        ]
        stored = {id(ctx.document): ctx.gate.stored for ctx in contexts}

        for ctx in contexts:
            result.applied[ctx.document.name] = []
            logger.info(
                "migration_started",
                document=ctx.document.name,
                stored_version=str(ctx.gate.stored),
            )

        for phase in MigrationPhase:
            blocks = self._registry.blocks(phase)
            for ctx in contexts:
                for migration in blocks:
                    if ctx.gate.allows(migration):
                        self._run_block(ctx, migration, result)

        target = self.target_version
        for ctx in contexts:
            doc = ctx.document
            if self._settings.stamp_version and target is not None and (doc.version is None or doc.version < target):
                doc.version = target
            final = doc.version if doc.version is not None else VersionTag.lowest()
            applied = result.applied[doc.name]
            logger.info(
                "migration_finished",
                document=doc.name,
                version=str(final),
                blocks_applied=len(applied),
            )
            self._event_bus.emit(
                DocumentMigrated(
                    document=doc.name,
                    from_version=stored[id(doc)],
                    to_version=final,
                    blocks_applied=len(applied),
                )
            )
        return result

    def _run_block(self, ctx: MigrationContext, migration: MigrationBlock, result: MigrationResult) -> None:
        ctx.block_name = migration.name
        doc_name = ctx.document.name
        try:
            with migration_log_context(doc_name, migration.name):
                migration(ctx)
        except MigrationError as e:
            logger.warning(
                "migration_block_failed",
                document=doc_name,
                block=migration.name,
                error=str(e),
            )
            ctx.warning(f"Migration step '{migration.name}' failed for {doc_name}: {e}")
            self._event_bus.emit(BlockFailed(document=doc_name, block=migration.name, error=str(e)))
            return
        finally:
            ctx.block_name = ""

        result.applied[doc_name].append(migration.name)
        logger.debug(
            "migration_block_applied",
            document=doc_name,
            block=migration.name,
            version=None if migration.version is None else str(migration.version),
        )
        self._event_bus.emit(
            BlockApplied(
                document=doc_name,
                block=migration.name,
                version=migration.version,
                phase=migration.phase,
            )
        )


def migrate_documents(
    documents: Sequence[Document],
    *,
    settings: MigrationSettings | None = None,
    registry: MigrationRegistry | None = None,
    event_bus: EventBusProtocol | None = None,
) -> MigrationResult:
    """Migrate documents with the built-in blocks (plus any registered plugins).

    Args:
        documents: Every document of the load, main file first
        settings: Migration settings (defaults when omitted)
        registry: Block registry; built from the plugin manager when omitted
        event_bus: Progress observer

    Returns:
        MigrationResult with reports and counters
    """
    if registry is None:
        from igor.plugins.manager import MigrationPluginManager

        manager = MigrationPluginManager()
        manager.register_builtin_migrations()
        registry = manager.build_registry()
    return MigrationRunner(registry, settings=settings, event_bus=event_bus).run(documents)
