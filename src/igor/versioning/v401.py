# src/igor/versioning/v401.py
"""Versioning for files written before the 4.1 series completed."""

from __future__ import annotations

from igor.contracts.enums import (
    BlendMethod,
    BlendShadow,
    EntityKind,
    MigrationPhase,
    NodeTreeType,
    RenderEngine,
    SocketDirection,
    SocketType,
)
from igor.core.logging import get_logger
from igor.core.nodes.graph import NodeTree
from igor.engine.context import MigrationContext
from igor.engine.interface_migrator import fix_socket_subtype_idnames
from igor.engine.registry import MigrationBlock, block
from igor.engine.rescale import scale_values
from igor.plugins.hookspecs import hookimpl
from igor.versioning.common import LEGACY_RADIUS_CONVERSION_FACTOR, all_node_trees, drawings, first_scene_engine, node_groups

logger = get_logger(__name__)

# Ray tracing denoise flags and stages, as stored
RAYTRACE_USE_DENOISE = 1 << 0
RAYTRACE_DENOISE_SPATIAL = 1 << 0
RAYTRACE_DENOISE_TEMPORAL = 1 << 1
RAYTRACE_DENOISE_BILATERAL = 1 << 2


# === Read phase ===


def grease_pencil_radii_scaling(ctx: MigrationContext) -> None:
    """Stroke radii moved from pixels to scene units."""
    for grease_pencil in ctx.entities(EntityKind.GREASE_PENCIL):
        for drawing in drawings(grease_pencil.fields):
            radii = drawing.get("radii")
            if radii:
                scale_values(radii, LEGACY_RADIUS_CONVERSION_FACTOR, ctx.settings.concurrency)


def version_replace_split_viewer(tree: NodeTree) -> int:
    """Turn Split Viewer nodes into a Split node feeding a new Viewer.

    Returns:
        Number of nodes replaced
    """
    replaced = 0
    for node in tree.find_nodes("CompositorNodeSplitViewer"):
        node.idname = "CompositorNodeSplit"
        viewer = tree.add_node("CompositorNodeViewer")
        viewer.parent = node.parent
        viewer.location = (node.location[0] + node.width + viewer.width / 4.0, node.location[1])

        split_out = node.find_output("Image")
        if split_out is None:
            split_out = tree.add_socket(node, SocketDirection.OUTPUT, SocketType.RGBA, "Image")
        viewer_in = viewer.find_input("Image")
        assert viewer_in is not None
        tree.add_link(split_out, viewer_in)
        replaced += 1
    return replaced


def replace_split_viewer(ctx: MigrationContext) -> None:
    """The Split Viewer node was split into Split and Viewer."""
    for tree in all_node_trees(ctx, NodeTreeType.COMPOSITOR):
        if version_replace_split_viewer(tree):
            logger.debug("split_viewer_replaced", tree=tree.name)


def material_transparent_shadow(ctx: MigrationContext) -> None:
    """Transparent shadows became a material toggle shared by both renderers."""
    engine = first_scene_engine(ctx.document)
    is_eevee = engine in (RenderEngine.EEVEE, RenderEngine.EEVEE_NEXT)
    for material in ctx.entities(EntityKind.MATERIAL):
        if is_eevee:
            transparent_shadows = material.get("blend_shadow", BlendShadow.SOLID) != BlendShadow.SOLID
        else:
            transparent_shadows = bool(material.get("cycles", {}).get("use_transparent_shadow", True))
        material["use_transparent_shadow"] = transparent_shadows


def material_surface_render_method(ctx: MigrationContext) -> None:
    """Blended materials render forward, everything else deferred."""
    if ctx.oracle.field_exists("Material", "surface_render_method", "char"):
        return
    for material in ctx.entities(EntityKind.MATERIAL):
        blended = material.get("blend_method") == BlendMethod.BLEND
        material["surface_render_method"] = "FORWARD" if blended else "DEFERRED"


def eevee_ray_tracing_defaults(ctx: MigrationContext) -> None:
    """Initialize the ray tracing options of every scene."""
    if ctx.oracle.field_exists("SceneEEVEE", "ray_tracing_options", "RaytraceEEVEE"):
        return
    for scene in ctx.entities(EntityKind.SCENE):
        eevee = scene.fields.setdefault("eevee", {})
        eevee["ray_tracing_options"] = {
            "flag": RAYTRACE_USE_DENOISE,
            "denoise_stages": RAYTRACE_DENOISE_SPATIAL | RAYTRACE_DENOISE_TEMPORAL | RAYTRACE_DENOISE_BILATERAL,
            "screen_trace_quality": 0.25,
            "screen_trace_thickness": 0.2,
            "trace_max_roughness": 0.5,
            "resolution_scale": 2,
        }


def version_object_info_absolute_scale(tree: NodeTree) -> int:
    """Insert an absolute-value node after every linked Object Info 'Scale'.

    Returns:
        Number of nodes inserted
    """
    inserted = 0
    for node in tree.find_nodes("GeometryNodeObjectInfo"):
        scale = node.find_output("Scale")
        if scale is None:
            continue
        old_links = tree.links_from(scale)
        if not old_links:
            continue
        absolute = tree.add_node("ShaderNodeVectorMath")
        absolute.properties["operation"] = "ABSOLUTE"
        absolute.parent = node.parent
        absolute.location = (node.location[0] + 100.0, node.location[1] - 50.0)
        tree.add_link(scale, absolute.inputs[0])
        for link in old_links:
            tree.relink_from(link, absolute.outputs[0])
        inserted += 1
    return inserted


def object_info_absolute_scale(ctx: MigrationContext) -> None:
    """Object Info now outputs signed scale; keep the old absolute value."""
    for tree in node_groups(ctx, NodeTreeType.GEOMETRY):
        version_object_info_absolute_scale(tree)


def fix_interface_socket_subtypes(ctx: MigrationContext) -> None:
    """Early converted interfaces stored subtype socket labels."""
    for tree in all_node_trees(ctx):
        fixed = fix_socket_subtype_idnames(tree)
        if fixed:
            logger.debug("socket_subtypes_fixed", tree=tree.name, count=fixed)


# === After linking ===


def eevee_shadow_visibility(ctx: MigrationContext) -> None:
    """Objects with material slots cast shadows only if one of their materials does."""
    if first_scene_engine(ctx.document) == RenderEngine.CYCLES:
        return
    for ob in ctx.entities(EntityKind.OBJECT):
        materials = ob.get("materials") or []
        if materials:
            ob["hide_shadow"] = all(mat is not None and mat.get("blend_shadow") == BlendShadow.NONE for mat in materials)


BLOCKS: tuple[MigrationBlock, ...] = (
    block("grease_pencil_radii_scaling", grease_pencil_radii_scaling, (401, 1)),
    block("replace_split_viewer", replace_split_viewer, (401, 5)),
    block("material_transparent_shadow", material_transparent_shadow, (401, 5)),
    block("material_surface_render_method", material_surface_render_method, (401, 7)),
    block("eevee_ray_tracing_defaults", eevee_ray_tracing_defaults, (401, 10)),
    block("object_info_absolute_scale", object_info_absolute_scale, (401, 10)),
    block("fix_interface_socket_subtypes", fix_interface_socket_subtypes, (401, 11), since=(400, 20)),
    block("eevee_shadow_visibility", eevee_shadow_visibility, (401, 5), phase=MigrationPhase.AFTER_LINKING),
)


class V401Migrations:
    """Registers the 4.1 versioning blocks."""

    @hookimpl
    def igor_get_migrations(self) -> list[MigrationBlock]:
        return list(BLOCKS)
