# src/igor/core/version_gate.py
"""Per-document version gate.

Every migration block is guarded by the version that introduced the change
it makes. A block runs iff the document was written strictly before that
version, so a file saved after the change never sees it applied again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from igor.contracts.version import VersionTag

if TYPE_CHECKING:
    from igor.engine.registry import MigrationBlock


class VersionGate:
    """Answers version questions for one document.

    Linked libraries can be written by a different release than the file
    that links them, so each document gets its own gate.

    Example:
        gate = VersionGate(VersionTag(400, 5))
        gate.at_least(400, 5)   # True
        gate.at_least(400, 6)   # False, blocks guarded by 400.6 run
    """

    __slots__ = ("_stored",)

    def __init__(self, stored: VersionTag | tuple[int, int] | None) -> None:
        self._stored = VersionTag.coerce(stored)

    @property
    def stored(self) -> VersionTag:
        """Version the document was written with ((0, 0) when unknown)."""
        return self._stored

    def at_least(self, major: int, minor: int) -> bool:
        """True when the stored version is >= (major, minor)."""
        return self._stored >= VersionTag(major, minor)

    def allows(self, block: MigrationBlock) -> bool:
        """Whether ``block`` must run against this document.

        Blocks without a guard version run on every load. Range blocks
        additionally require the document to be at least ``block.since``.
        """
        if block.version is None:
            return True
        if self.at_least(block.version.major, block.version.minor):
            return False
        if block.since is not None and not self.at_least(block.since.major, block.since.minor):
            return False
        return True

    def __repr__(self) -> str:
        return f"VersionGate({self._stored})"
