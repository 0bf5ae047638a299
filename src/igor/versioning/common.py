# src/igor/versioning/common.py
"""Helpers shared by the versioning modules.

Stored member names used by the built-in blocks (values live in
``Entity.fields``):

- scene: ``render_engine``, ``frame_start``, ``frame_end``,
  ``simulation_frame_start``, ``simulation_frame_end``, ``eevee`` (dict)
- material: ``use_nodes``, ``blend_method``, ``blend_shadow``,
  ``alpha_threshold``, ``surface_render_method``, ``use_transparent_shadow``,
  ``cycles`` (dict of add-on properties)
- object: ``materials`` (list of material entities, None for empty slots),
  ``proxy``, ``proxy_from``, ``hide_shadow``
- light: ``type``, ``energy``, ``energy_deprecated``
- grease_pencil: ``drawings`` (list of dicts with ``type``, ``radii`` and
  ``curve_attributes``)
"""

from __future__ import annotations

from collections.abc import Iterator

from igor.contracts.enums import EntityKind, NodeTreeType, SocketDirection
from igor.core.document import Document
from igor.core.nodes.graph import NodeTree
from igor.engine.context import MigrationContext

# Stroke radii were stored in pixels, 1 unit = 2000 pixels at the legacy default scale
LEGACY_RADIUS_CONVERSION_FACTOR = 1.0 / 2000.0

DRAWING_TYPE = "DRAWING"


def all_node_trees(ctx: MigrationContext, tree_type: NodeTreeType | None = None) -> Iterator[NodeTree]:
    """Every reachable node tree (embedded and group trees included), each once."""
    for _owner, tree in ctx.node_trees():
        if tree_type is None or tree.tree_type == tree_type:
            yield tree


def node_groups(ctx: MigrationContext, tree_type: NodeTreeType | None = None) -> Iterator[NodeTree]:
    """Top-level node trees only (not the ones embedded in other entities)."""
    for tree in list(ctx.document.collection(EntityKind.NODE_TREE)):
        if isinstance(tree, NodeTree) and (tree_type is None or tree.tree_type == tree_type):
            yield tree


def first_scene_engine(document: Document) -> str | None:
    scene = document.first(EntityKind.SCENE)
    return None if scene is None else scene.get("render_engine")


def rename_node_socket(tree: NodeTree, idname: str, direction: SocketDirection, old_name: str, new_name: str) -> int:
    """Rename matching sockets of every ``idname`` node.

    Returns:
        Number of sockets renamed
    """
    renamed = 0
    for node in tree.find_nodes(idname):
        for socket in list(node.sockets(direction)):
            if socket.identifier == old_name:
                tree.rename_socket(socket, new_name)
                renamed += 1
    return renamed


def drawings(grease_pencil_fields: dict) -> Iterator[dict]:
    """Drawings of a grease pencil entity, skipping references to other drawings."""
    for drawing in grease_pencil_fields.get("drawings", []):
        if drawing.get("type", DRAWING_TYPE) == DRAWING_TYPE:
            yield drawing
