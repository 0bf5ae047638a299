"""Stored schema snapshot supplied by the loader.

Describes every record type exactly as it was laid out in the file being
loaded, not as igor's current model lays it out. The Struct Membership
Oracle is built from this.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, Field, ValidationError, model_validator

from igor.contracts.errors import SchemaSnapshotError


class FieldSchema(BaseModel):
    """One member of a stored record type."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str = Field(min_length=1, description="Member name as written on disk")
    type_name: str = Field(min_length=1, description="Stored type name (e.g., 'float', 'ListBase')")


class StructSchema(BaseModel):
    """A stored record type and its members."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str = Field(min_length=1, description="Record type name (e.g., 'Material')")
    fields: tuple[FieldSchema, ...] = Field(default=(), description="Members in on-disk order")


class SchemaSnapshot(BaseModel):
    """All record types of one stored file.

    Example:
        snapshot = SchemaSnapshot.from_mapping({
            "Material": {"blend_method": "char", "alpha_threshold": "float"},
            "Scene": {"r": "RenderData"},
        })
    """

    model_config = {"frozen": True, "extra": "forbid"}

    structs: tuple[StructSchema, ...] = Field(default=(), description="Stored record types")

    @model_validator(mode="after")
    def _validate_unique_struct_names(self) -> SchemaSnapshot:
        seen: set[str] = set()
        for struct in self.structs:
            if struct.name in seen:
                raise ValueError(f"record type '{struct.name}' appears more than once in the schema snapshot")
            seen.add(struct.name)
        return self

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Mapping[str, str]]) -> SchemaSnapshot:
        """Build a snapshot from ``{record_type: {field_name: type_name}}``.

        Raises:
            SchemaSnapshotError: If the mapping does not describe a valid snapshot
        """
        try:
            return cls(
                structs=tuple(
                    StructSchema(
                        name=struct_name,
                        fields=tuple(FieldSchema(name=field_name, type_name=type_name) for field_name, type_name in members.items()),
                    )
                    for struct_name, members in mapping.items()
                )
            )
        except ValidationError as e:
            raise SchemaSnapshotError(f"Invalid schema snapshot: {e}") from e

    @classmethod
    def empty(cls) -> SchemaSnapshot:
        """Snapshot of a file that predates every tracked member."""
        return cls()
