# src/igor/core/document.py
"""Deserialized document and its entities.

The loader builds these before migration starts. Entities hold their stored
values in a plain ``fields`` mapping so that members which no longer exist
in the current model can still be read by the block that retires them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from igor.contracts.enums import EntityKind
from igor.contracts.schema import SchemaSnapshot
from igor.contracts.version import VersionTag

if TYPE_CHECKING:
    from igor.core.nodes.graph import NodeTree


@dataclass(eq=False)
class Entity:
    """A named, typed record of a document.

    Identity is object identity: two materials with equal fields are still
    two materials.

    Attributes:
        name: Entity name, unique per kind within a document
        kind: Collection the entity belongs to
        fields: Stored member values keyed by member name
        node_tree: Embedded node tree owned by this entity (materials, worlds, scenes, lights)
        library: Library path when the entity was linked from another file
    """

    name: str
    kind: EntityKind
    fields: dict[str, Any] = field(default_factory=dict)
    node_tree: NodeTree | None = None
    library: str | None = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.fields[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.fields

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind}:{self.name!r})"


class Document:
    """Everything deserialized from one file.

    Collections keep deserialization order, which is what "the first scene"
    means for blocks that need one.
    """

    def __init__(
        self,
        name: str,
        *,
        version: VersionTag | tuple[int, int] | None = None,
        schema: SchemaSnapshot | None = None,
    ) -> None:
        self.name = name
        self.version: VersionTag | None = None if version is None else VersionTag.coerce(version)
        self.schema = schema if schema is not None else SchemaSnapshot.empty()
        self._collections: dict[EntityKind, list[Entity]] = {kind: [] for kind in EntityKind}

    def add(self, entity: Entity) -> Entity:
        """Append an entity to the collection of its kind."""
        self._collections[entity.kind].append(entity)
        return entity

    def collection(self, kind: EntityKind) -> list[Entity]:
        return self._collections[kind]

    def first(self, kind: EntityKind) -> Entity | None:
        entities = self._collections[kind]
        return entities[0] if entities else None

    def find(self, kind: EntityKind, name: str) -> Entity | None:
        for entity in self._collections[kind]:
            if entity.name == name:
                return entity
        return None

    def __iter__(self) -> Iterator[Entity]:
        for kind in EntityKind:
            yield from self._collections[kind]

    def __repr__(self) -> str:
        return f"Document({self.name!r}, version={self.version})"
