# src/igor/core/oracle.py
"""Struct Membership Oracle.

Answers "did this record type have this member when the file was written?"
from the schema snapshot the loader hands over. Version numbers alone are
not always enough: some members were added without a version bump, so the
defaults for them must only be written when the stored layout lacks them.
"""

from __future__ import annotations

from igor.contracts.schema import SchemaSnapshot


class StructMembershipOracle:
    """Precomputed membership table over a stored schema.

    Lookups are O(1) set probes, built once per document.

    Example:
        oracle = StructMembershipOracle.from_snapshot(document.schema)
        if not oracle.field_exists("LightProbe", "grid_bake_samples"):
            probe.fields["grid_bake_samples"] = 2048
    """

    __slots__ = ("_fields", "_typed_fields", "_structs")

    def __init__(self, members: dict[str, dict[str, str]]) -> None:
        self._structs: frozenset[str] = frozenset(members)
        self._fields: frozenset[tuple[str, str]] = frozenset(
            (struct, field) for struct, fields in members.items() for field in fields
        )
        self._typed_fields: frozenset[tuple[str, str, str]] = frozenset(
            (struct, type_name, field) for struct, fields in members.items() for field, type_name in fields.items()
        )

    @classmethod
    def from_snapshot(cls, snapshot: SchemaSnapshot) -> StructMembershipOracle:
        return cls({struct.name: {f.name: f.type_name for f in struct.fields} for struct in snapshot.structs})

    def struct_exists(self, record_type: str) -> bool:
        return record_type in self._structs

    def field_exists(self, record_type: str, field_name: str, type_name: str | None = None) -> bool:
        """Whether ``record_type`` stored ``field_name`` (optionally of ``type_name``).

        Returns False when the record type itself is absent from the file.
        """
        if type_name is None:
            return (record_type, field_name) in self._fields
        return (record_type, type_name, field_name) in self._typed_fields
