"""Observability events for migration.

Emitted by the runner on the event bus so a host can show progress while a
file loads. Reports remain the authoritative user-facing output; events are
for live feedback and diagnostics.
"""

from dataclasses import dataclass

from igor.contracts.enums import MigrationPhase
from igor.contracts.version import VersionTag


@dataclass(frozen=True, slots=True)
class BlockApplied:
    """Emitted after a migration block ran against a document.

    Attributes:
        document: Document name
        block: Block name
        version: Guard version of the block (None for every-load blocks)
        phase: Phase the block belongs to
    """

    document: str
    block: str
    version: VersionTag | None
    phase: MigrationPhase


@dataclass(frozen=True, slots=True)
class BlockFailed:
    """Emitted when a block raised a recoverable MigrationError."""

    document: str
    block: str
    error: str


@dataclass(frozen=True, slots=True)
class EntitySkipped:
    """Emitted when a block left one entity unconverted.

    Attributes:
        document: Document name
        block: Block name
        entity_name: Entity that was skipped
        reason: Why conversion was not possible
    """

    document: str
    block: str
    entity_name: str
    reason: str


@dataclass(frozen=True, slots=True)
class DocumentMigrated:
    """Emitted once per document when every phase finished.

    Attributes:
        document: Document name
        from_version: Version stored in the file
        to_version: Version stamped after migration
        blocks_applied: Number of blocks that ran
    """

    document: str
    from_version: VersionTag
    to_version: VersionTag
    blocks_applied: int
