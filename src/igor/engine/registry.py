# src/igor/engine/registry.py
"""Migration script registry.

A migration block is one version-gated transform: a function applied to a
document whose stored version predates the block's guard. The registry
orders blocks deterministically: by phase, then by guard version, then by
registration order. Blocks without a guard run on every load and sort
first within their phase; they must detect their own work from content.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from igor.contracts.enums import MigrationPhase
from igor.contracts.errors import RegistryError
from igor.contracts.types import BlockName
from igor.contracts.version import VersionTag

if TYPE_CHECKING:
    from igor.engine.context import MigrationContext

type MigrationFn = Callable[[MigrationContext], None]

_PHASE_ORDER: dict[MigrationPhase, int] = {
    MigrationPhase.READ: 0,
    MigrationPhase.AFTER_LINKING: 1,
}


@dataclass(frozen=True, slots=True)
class MigrationBlock:
    """A version-gated transform.

    Attributes:
        name: Unique block name (used in reports and logs)
        func: Transform applied to one document
        version: Guard; the block runs for documents stored strictly below it.
            None runs the block on every load.
        phase: READ (per document) or AFTER_LINKING (references resolved)
        since: Lower bound for range blocks: documents below it are skipped
        description: One-line summary for diagnostics
    """

    name: BlockName
    func: MigrationFn
    version: VersionTag | None
    phase: MigrationPhase = MigrationPhase.READ
    since: VersionTag | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise RegistryError("Migration block name must not be empty")
        if self.since is not None:
            if self.version is None:
                raise RegistryError(f"Block '{self.name}' has a lower bound but runs on every load")
            if self.since >= self.version:
                raise RegistryError(f"Block '{self.name}' lower bound {self.since} is not below its guard {self.version}")

    def __call__(self, context: MigrationContext) -> None:
        self.func(context)


def block(
    name: str,
    func: MigrationFn,
    version: tuple[int, int] | None,
    *,
    phase: MigrationPhase = MigrationPhase.READ,
    since: tuple[int, int] | None = None,
) -> MigrationBlock:
    """Shorthand used by the versioning modules to declare a block."""
    doc = (func.__doc__ or "").strip().splitlines()
    return MigrationBlock(
        name=BlockName(name),
        func=func,
        version=None if version is None else VersionTag(*version),
        phase=phase,
        since=None if since is None else VersionTag(*since),
        description=doc[0] if doc else "",
    )


class MigrationRegistry:
    """Ordered collection of migration blocks.

    Example:
        registry = MigrationRegistry()
        registry.register_all(V400_BLOCKS)
        for block in registry.blocks(MigrationPhase.READ):
            ...
    """

    def __init__(self, blocks: Iterable[MigrationBlock] = ()) -> None:
        self._blocks: dict[BlockName, tuple[int, MigrationBlock]] = {}
        self.register_all(blocks)

    def register(self, migration: MigrationBlock) -> None:
        """Add a block.

        Raises:
            RegistryError: If a block with the same name is already registered
        """
        if migration.name in self._blocks:
            raise RegistryError(f"Duplicate migration block name: '{migration.name}'")
        self._blocks[migration.name] = (len(self._blocks), migration)

    def register_all(self, blocks: Iterable[MigrationBlock]) -> None:
        for migration in blocks:
            self.register(migration)

    @staticmethod
    def _sort_key(entry: tuple[int, MigrationBlock]) -> tuple[int, int, tuple[int, int], int]:
        index, migration = entry
        if migration.version is None:
            return (_PHASE_ORDER[migration.phase], 0, (0, 0), index)
        return (_PHASE_ORDER[migration.phase], 1, migration.version.as_tuple(), index)

    def blocks(self, phase: MigrationPhase | None = None) -> list[MigrationBlock]:
        """Blocks in execution order, optionally restricted to one phase."""
        ordered = sorted(self._blocks.values(), key=self._sort_key)
        return [migration for _, migration in ordered if phase is None or migration.phase == phase]

    def get(self, name: str) -> MigrationBlock | None:
        entry = self._blocks.get(BlockName(name))
        return None if entry is None else entry[1]

    def highest_version(self) -> VersionTag | None:
        """Highest guard version; documents stamped with it skip every guarded block."""
        versions = [migration.version for _, migration in self._blocks.values() if migration.version is not None]
        return max(versions) if versions else None

    def __iter__(self) -> Iterator[MigrationBlock]:
        return iter(self.blocks())

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, name: object) -> bool:
        return name in self._blocks
