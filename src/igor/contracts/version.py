"""File version tag.

A document records the (major, minor) revision of the writer that produced
it. Tags compare lexicographically, so (401, 2) > (400, 33).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class VersionTag:
    """Ordered (major, minor) schema revision.

    Attributes:
        major: Release line (e.g., 402 for the 4.2 series)
        minor: Sub-revision bumped with every versioning change in a release line
    """

    major: int
    minor: int

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0:
            raise ValueError(f"VersionTag components must be non-negative, got ({self.major}, {self.minor})")

    @classmethod
    def lowest(cls) -> VersionTag:
        """Tag assumed for documents that carry no version at all."""
        return cls(0, 0)

    @classmethod
    def coerce(cls, value: VersionTag | tuple[int, int] | None) -> VersionTag:
        """Normalize loader input: None means the lowest possible tag."""
        if value is None:
            return cls.lowest()
        if isinstance(value, VersionTag):
            return value
        major, minor = value
        return cls(int(major), int(minor))

    def as_tuple(self) -> tuple[int, int]:
        return (self.major, self.minor)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"
