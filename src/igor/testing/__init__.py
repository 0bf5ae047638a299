# src/igor/testing/__init__.py
"""Test infrastructure for igor migrations.

Factories for constructing documents, entities and node trees with sensible
defaults. When an entity's stored layout changes, update the factory here.
Tests that use factories need ZERO changes.

Usage:
    from igor.testing import make_document, make_material, make_shader_tree
    from igor.testing import make_scene, make_object, make_legacy_socket
"""

from __future__ import annotations

from typing import Any

from igor.contracts.enums import BlendMethod, BlendShadow, EntityKind, NodeTreeType, RenderEngine
from igor.contracts.schema import SchemaSnapshot
from igor.core.document import Document, Entity
from igor.core.nodes.graph import NodeTree
from igor.core.nodes.models import LegacySocket, Node

# =============================================================================
# Documents
# =============================================================================


def make_document(
    name: str = "test.blend",
    *,
    version: tuple[int, int] | None = (400, 0),
    schema: dict[str, dict[str, str]] | None = None,
) -> Document:
    """Create a document stamped with ``version``.

    Args:
        name: File name
        version: Stored version, None for a document predating version stamps
        schema: Stored struct layout as ``{record: {field: type}}``
    """
    snapshot = SchemaSnapshot.from_mapping(schema) if schema is not None else None
    return Document(name, version=version, schema=snapshot)


# =============================================================================
# Node trees
# =============================================================================


def make_node_tree(
    name: str = "NodeTree",
    tree_type: NodeTreeType = NodeTreeType.SHADER,
    *,
    document: Document | None = None,
    library: str | None = None,
) -> NodeTree:
    """Create an empty tree, registered as a top-level group when ``document`` is given."""
    tree = NodeTree(name, tree_type, library=library)
    if document is not None:
        document.add(tree)
    return tree


def make_shader_tree(name: str = "Shader Nodetree") -> tuple[NodeTree, Node]:
    """Create a shader tree holding a single active Material Output node.

    Returns:
        (tree, output_node)
    """
    tree = NodeTree(name, NodeTreeType.SHADER)
    output = tree.add_node("ShaderNodeOutputMaterial")
    return tree, output


def make_legacy_socket(
    name: str,
    idname: str = "NodeSocketFloat",
    *,
    identifier: str | None = None,
    **attributes: Any,
) -> LegacySocket:
    return LegacySocket(name=name, identifier=identifier if identifier is not None else name, idname=idname, **attributes)


# =============================================================================
# Entities
# =============================================================================


def make_material(
    name: str = "Material",
    *,
    document: Document | None = None,
    node_tree: NodeTree | None = None,
    blend_method: BlendMethod = BlendMethod.OPAQUE,
    blend_shadow: BlendShadow = BlendShadow.SOLID,
    alpha_threshold: float = 0.5,
    use_nodes: bool = True,
    **fields: Any,
) -> Entity:
    material = Entity(
        name=name,
        kind=EntityKind.MATERIAL,
        fields={
            "use_nodes": use_nodes,
            "blend_method": blend_method,
            "blend_shadow": blend_shadow,
            "alpha_threshold": alpha_threshold,
            **fields,
        },
        node_tree=node_tree,
    )
    if document is not None:
        document.add(material)
    return material


def make_scene(
    name: str = "Scene",
    *,
    document: Document | None = None,
    render_engine: str = RenderEngine.EEVEE,
    node_tree: NodeTree | None = None,
    **fields: Any,
) -> Entity:
    scene = Entity(
        name=name,
        kind=EntityKind.SCENE,
        fields={"render_engine": render_engine, "frame_start": 1, "frame_end": 250, **fields},
        node_tree=node_tree,
    )
    if document is not None:
        document.add(scene)
    return scene


def make_object(
    name: str = "Object",
    *,
    document: Document | None = None,
    materials: list[Entity | None] | None = None,
    library: str | None = None,
    **fields: Any,
) -> Entity:
    ob = Entity(
        name=name,
        kind=EntityKind.OBJECT,
        fields={"materials": list(materials or []), "proxy": None, "proxy_from": None, **fields},
        library=library,
    )
    if document is not None:
        document.add(ob)
    return ob


def make_entity(
    kind: EntityKind,
    name: str,
    *,
    document: Document | None = None,
    node_tree: NodeTree | None = None,
    library: str | None = None,
    **fields: Any,
) -> Entity:
    """Create any other entity kind from raw stored fields."""
    entity = Entity(name=name, kind=kind, fields=dict(fields), node_tree=node_tree, library=library)
    if document is not None:
        document.add(entity)
    return entity


__all__ = [
    "make_document",
    "make_entity",
    "make_legacy_socket",
    "make_material",
    "make_node_tree",
    "make_object",
    "make_scene",
    "make_shader_tree",
]
