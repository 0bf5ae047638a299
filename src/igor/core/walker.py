# src/igor/core/walker.py
"""Object graph walker.

Yields the entities of one kind across a document. For node trees that means
every reachable tree: top-level node groups, trees embedded in materials,
worlds, scenes and lights, and trees referenced by group nodes at any
nesting depth. A tree reachable from several owners is visited once.

Walks are restartable: each ``iter()`` starts a fresh traversal over the
document's current state.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from igor.contracts.enums import EntityKind
from igor.core.document import Document, Entity

if TYPE_CHECKING:
    from igor.core.nodes.graph import NodeTree


class NodeTreeWalk:
    """Restartable iterable of ``(owner, tree)`` pairs.

    ``owner`` is the entity embedding the tree, or None for top-level trees
    and trees only reached through a group node.
    """

    def __init__(self, document: Document) -> None:
        self._document = document

    def __iter__(self) -> Iterator[tuple[Entity | None, NodeTree]]:
        seen: set[int] = set()
        stack: list[tuple[Entity | None, NodeTree]] = []

        # Reverse so pops follow collection order
        for kind in reversed(EntityKind):
            for entity in reversed(self._document.collection(kind)):
                if kind == EntityKind.NODE_TREE:
                    stack.append((None, entity))  # type: ignore[arg-type]
                elif entity.node_tree is not None:
                    stack.append((entity, entity.node_tree))

        while stack:
            owner, tree = stack.pop()
            if id(tree) in seen:
                continue
            seen.add(id(tree))
            yield owner, tree
            # Collected after yielding so groups added by the caller are still found
            for group in reversed(list(tree.group_trees())):
                if id(group) not in seen:
                    stack.append((None, group))


class EntityWalk:
    """Restartable iterable over the entities of one kind."""

    def __init__(self, document: Document, kind: EntityKind) -> None:
        self._document = document
        self._kind = kind

    def __iter__(self) -> Iterator[Entity]:
        if self._kind == EntityKind.NODE_TREE:
            for _owner, tree in NodeTreeWalk(self._document):
                yield tree
            return
        # Snapshot so a block may add entities of the walked kind
        yield from list(self._document.collection(self._kind))


class DocumentWalker:
    """Entry point for walking one document.

    Example:
        walker = DocumentWalker(document)
        for owner, tree in walker.node_trees():
            version_principled_bsdf_coat(tree)
        for material in walker.entities(EntityKind.MATERIAL):
            ...
    """

    def __init__(self, document: Document) -> None:
        self.document = document

    def entities(self, kind: EntityKind) -> EntityWalk:
        return EntityWalk(self.document, kind)

    def node_trees(self) -> NodeTreeWalk:
        return NodeTreeWalk(self.document)
