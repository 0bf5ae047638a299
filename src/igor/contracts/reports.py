"""User-facing migration reports.

Reports are what the host shows after loading: a warning per material that
could not be converted, an info line per repaired reference. They are
ordered by emission and never deduplicated.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field

from igor.contracts.enums import ReportLevel


@dataclass(frozen=True, slots=True)
class Report:
    """One leveled report entry.

    Attributes:
        level: INFO or WARNING
        message: Human-readable message
        entity_name: Name of the affected entity, if any
        document: Name of the document the entity belongs to
        library: Library path of a linked entity, if any
    """

    level: ReportLevel
    message: str
    entity_name: str | None = None
    document: str | None = None
    library: str | None = None

    def __str__(self) -> str:
        return f"{self.level.upper()}: {self.message}"


@dataclass
class ReportList:
    """Ordered report sink plus summary counters.

    Counters aggregate occurrences the host summarizes rather than lists,
    such as the number of lost proxy references.
    """

    entries: list[Report] = field(default_factory=list)
    counters: Counter[str] = field(default_factory=Counter)

    def add(self, report: Report) -> Report:
        self.entries.append(report)
        return report

    def info(self, message: str, *, entity_name: str | None = None, document: str | None = None, library: str | None = None) -> Report:
        return self.add(Report(ReportLevel.INFO, message, entity_name, document, library))

    def warning(
        self, message: str, *, entity_name: str | None = None, document: str | None = None, library: str | None = None
    ) -> Report:
        return self.add(Report(ReportLevel.WARNING, message, entity_name, document, library))

    def count(self, counter: str, amount: int = 1) -> None:
        self.counters[counter] += amount

    def of_level(self, level: ReportLevel) -> list[Report]:
        return [entry for entry in self.entries if entry.level == level]

    @property
    def warnings(self) -> list[Report]:
        return self.of_level(ReportLevel.WARNING)

    def __iter__(self) -> Iterator[Report]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
