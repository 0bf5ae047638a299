# src/igor/versioning/v400.py
"""Versioning for files written before the 4.0 series completed."""

from __future__ import annotations

import math

from igor.contracts.enums import EntityKind, InterfacePanelFlag, MigrationPhase, NodeTreeType, SocketDirection, SocketType
from igor.core.document import Entity
from igor.core.logging import get_logger
from igor.core.nodes.graph import NodeTree
from igor.engine.context import MigrationContext
from igor.engine.interface_migrator import (
    convert_legacy_socket_lists,
    discard_legacy_socket_lists,
    sort_interface_items,
    split_dual_role_sockets,
)
from igor.engine.registry import MigrationBlock, block
from igor.plugins.hookspecs import hookimpl
from igor.versioning.common import all_node_trees, node_groups, rename_node_socket

logger = get_logger(__name__)

_SHARP_DISTRIBUTION_NODES = ("ShaderNodeBsdfAnisotropic", "ShaderNodeBsdfGlass", "ShaderNodeBsdfRefraction")


# === Read phase ===


def replace_legacy_glossy_node(ctx: MigrationContext) -> None:
    """Legacy glossy nodes become the anisotropic glossy node."""
    for tree in all_node_trees(ctx):
        for node in tree.find_nodes("ShaderNodeBsdfGlossy"):
            node.idname = "ShaderNodeBsdfAnisotropic"


def remove_microfacet_sharp_distribution(ctx: MigrationContext) -> None:
    """The SHARP distribution is GGX with zero roughness."""
    for tree in all_node_trees(ctx):
        for node in tree.find_nodes(*_SHARP_DISTRIBUTION_NODES):
            if node.properties.get("distribution") != "SHARP":
                continue
            node.properties["distribution"] = "GGX"
            roughness = node.find_input("Roughness")
            if roughness is None:
                continue
            link = tree.incoming_link(roughness)
            if link is not None:
                tree.remove_link(link)
            roughness.default_value = 0.0


def version_replace_texcoord_normal_socket(tree: NodeTree) -> int:
    """Route links from Texture Coordinate 'Normal' through Geometry 'Incoming'.

    One Geometry and one normal-space Vector Transform node are shared by
    every rerouted link.

    Returns:
        Number of links rerouted
    """
    transform_out = None
    rerouted = 0
    for link in list(tree.links):
        from_node = tree.node(link.from_node)
        from_socket, _to_socket = tree.link_endpoints(link)
        if from_node.idname != "ShaderNodeTexCoord" or from_socket.identifier != "Normal":
            continue
        if transform_out is None:
            geometry = tree.add_node("ShaderNodeNewGeometry")
            transform = tree.add_node("ShaderNodeVectorTransform")
            transform.properties["vector_type"] = "NORMAL"
            incoming = geometry.find_output("Incoming")
            transform_in = transform.find_input("Vector")
            transform_out = transform.find_output("Vector")
            assert incoming is not None and transform_in is not None and transform_out is not None
            tree.add_link(incoming, transform_in)
        tree.relink_from(link, transform_out)
        rerouted += 1
    return rerouted


def replace_texcoord_normal_socket(ctx: MigrationContext) -> None:
    """Spot light normals were the incoming light direction."""
    for light in ctx.entities(EntityKind.LIGHT):
        if light.get("type") == "SPOT" and light.node_tree is not None:
            version_replace_texcoord_normal_socket(light.node_tree)


def light_probe_grid_defaults(ctx: MigrationContext) -> None:
    """Initialize light probe and world bake settings missing from the stored layout."""
    if not ctx.oracle.field_exists("LightProbe", "grid_bake_samples", "int"):
        for probe in ctx.entities(EntityKind.LIGHT_PROBE):
            probe.fields.update(
                grid_bake_samples=2048,
                grid_normal_bias=0.3,
                grid_view_bias=0.0,
                grid_facing_bias=0.5,
                grid_dilation_threshold=0.5,
                grid_dilation_radius=1.0,
            )
    if not ctx.oracle.field_exists("World", "probe_resolution", "int"):
        for world in ctx.entities(EntityKind.WORLD):
            world["probe_resolution"] = 1024
    if not ctx.oracle.field_exists("LightProbe", "grid_surface_bias", "float"):
        for probe in ctx.entities(EntityKind.LIGHT_PROBE):
            probe.fields.update(grid_surface_bias=0.05, grid_escape_bias=0.1)


def convert_interface_socket_lists(ctx: MigrationContext) -> None:
    """Move flat legacy socket lists into the hierarchical interface."""
    for tree in all_node_trees(ctx):
        if convert_legacy_socket_lists(tree):
            logger.debug("interface_converted", tree=tree.name, items=len(tree.interface.root.items))


def discard_legacy_interface_sockets(ctx: MigrationContext) -> None:
    """Drop legacy socket lists written only for older readers."""
    for tree in all_node_trees(ctx):
        discard_legacy_socket_lists(tree)


def root_panel_allow_child_panels(ctx: MigrationContext) -> None:
    """Root panels predate the child panel flag."""
    for tree in all_node_trees(ctx):
        tree.interface.root.flag |= InterfacePanelFlag.ALLOW_CHILD_PANELS


def set_shade_smooth_face_domain(ctx: MigrationContext) -> None:
    """Set Shade Smooth used to always work on faces."""
    for tree in node_groups(ctx, NodeTreeType.GEOMETRY):
        for node in tree.find_nodes("GeometryNodeSetShadeSmooth"):
            node.properties["domain"] = "FACE"


def version_principled_bsdf_coat(tree: NodeTree) -> None:
    """Add 'Coat IOR' and rename the clearcoat inputs of Principled BSDF nodes."""
    for node in tree.find_nodes("ShaderNodeBsdfPrincipled"):
        if node.find_input("Coat IOR") is not None:
            continue
        coat_ior = tree.add_socket(node, SocketDirection.INPUT, SocketType.FLOAT, "Coat IOR", default_value=1.5)
        clearcoat = node.find_input("Clearcoat")
        if clearcoat is None:
            continue
        # Coat intensity is four times the clearcoat intensity
        clearcoat.default_value = float(clearcoat.default_value or 0.0) * 0.25
        # A linked coat cannot be scaled; a lower IOR roughly quarters reflectivity instead
        coat_ior.default_value = 1.2 if tree.is_linked(clearcoat) else 1.5

    for old_name, new_name in (
        ("Clearcoat", "Coat"),
        ("Clearcoat Roughness", "Coat Roughness"),
        ("Clearcoat Normal", "Coat Normal"),
    ):
        rename_node_socket(tree, "ShaderNodeBsdfPrincipled", SocketDirection.INPUT, old_name, new_name)


def principled_bsdf_coat(ctx: MigrationContext) -> None:
    """Clearcoat inputs became coat inputs."""
    for tree in all_node_trees(ctx, NodeTreeType.SHADER):
        version_principled_bsdf_coat(tree)


def split_dual_role_interface_sockets(ctx: MigrationContext) -> None:
    """Interface sockets flagged as both input and output are split in two."""
    for tree in all_node_trees(ctx):
        created = split_dual_role_sockets(tree)
        if created:
            logger.debug("interface_sockets_split", tree=tree.name, count=len(created))


def enable_geometry_nodes_is_modifier(ctx: MigrationContext) -> None:
    """Geometry groups with a geometry output can be used as modifiers."""
    for tree in node_groups(ctx, NodeTreeType.GEOMETRY):
        for socket in tree.interface.sockets():
            if socket.is_output and socket.socket_type == "NodeSocketGeometry":
                traits = tree.fields.setdefault("asset_traits", set())
                traits.add("modifier")
                break


def scene_simulation_frame_range(ctx: MigrationContext) -> None:
    """Simulation range starts out as the render range."""
    for scene in ctx.entities(EntityKind.SCENE):
        scene["simulation_frame_start"] = scene.get("frame_start", 1)
        scene["simulation_frame_end"] = scene.get("frame_end", 250)


def sort_interface_sockets(ctx: MigrationContext) -> None:
    """Outputs above inputs, sockets above panels."""
    for tree in node_groups(ctx):
        sort_interface_items(tree.interface.root)


# === After linking ===


def area_light_energy(ctx: MigrationContext) -> None:
    """Area light power was rescaled."""
    for light in ctx.entities(EntityKind.LIGHT):
        if "energy_deprecated" not in light:
            continue
        light["energy"] = light["energy_deprecated"]
        if light.get("type") == "AREA":
            light["energy"] *= math.pi / 4.0


def version_composite_nodetree_null_id(tree: NodeTree, scene: Entity) -> None:
    for node in tree.find_nodes("CompositorNodeRLayers"):
        if node.entity_ref is None:
            node.entity_ref = scene


def composite_render_layer_scene(ctx: MigrationContext) -> None:
    """Render layer nodes without a scene render their owning scene."""
    for scene in ctx.entities(EntityKind.SCENE):
        if scene.node_tree is not None:
            version_composite_nodetree_null_id(scene.node_tree, scene)


def object_proxy_cleanup(ctx: MigrationContext) -> None:
    """Proxies must point at linked data; anything else is a lost proxy."""
    for ob in ctx.entities(EntityKind.OBJECT):
        proxy: Entity | None = ob.get("proxy")
        if proxy is None:
            continue
        if proxy.library is None:
            proxy["proxy_from"] = None
            ob["proxy"] = None
            ctx.info(f"Proxy lost from object {ob.name} lib {ob.library or '<NONE>'}", ob)
            ctx.reports.count("missing_obproxies")
        else:
            proxy["proxy_from"] = ob


BLOCKS: tuple[MigrationBlock, ...] = (
    block("replace_legacy_glossy_node", replace_legacy_glossy_node, (400, 6)),
    block("remove_microfacet_sharp_distribution", remove_microfacet_sharp_distribution, (400, 6)),
    block("replace_texcoord_normal_socket", replace_texcoord_normal_socket, (400, 9)),
    block("light_probe_grid_defaults", light_probe_grid_defaults, (400, 12)),
    block("convert_interface_socket_lists", convert_interface_socket_lists, (400, 20)),
    block("discard_legacy_interface_sockets", discard_legacy_interface_sockets, None),
    block("root_panel_allow_child_panels", root_panel_allow_child_panels, (400, 22)),
    block("set_shade_smooth_face_domain", set_shade_smooth_face_domain, (400, 23)),
    block("principled_bsdf_coat", principled_bsdf_coat, (400, 24)),
    block("split_dual_role_interface_sockets", split_dual_role_interface_sockets, (400, 24)),
    block("enable_geometry_nodes_is_modifier", enable_geometry_nodes_is_modifier, (400, 26)),
    block("scene_simulation_frame_range", scene_simulation_frame_range, (400, 26)),
    block("sort_interface_sockets", sort_interface_sockets, (400, 33)),
    block("area_light_energy", area_light_energy, (400, 9), phase=MigrationPhase.AFTER_LINKING),
    block("composite_render_layer_scene", composite_render_layer_scene, (400, 9), phase=MigrationPhase.AFTER_LINKING),
    block("object_proxy_cleanup", object_proxy_cleanup, (400, 9), phase=MigrationPhase.AFTER_LINKING),
)


class V400Migrations:
    """Registers the 4.0 versioning blocks."""

    @hookimpl
    def igor_get_migrations(self) -> list[MigrationBlock]:
        return list(BLOCKS)
