# src/igor/versioning/v402.py
"""Versioning for files written before the 4.2 series completed."""

from __future__ import annotations

from igor.contracts.enums import AlphaState, BlendMethod, BlendShadow, EntityKind, MigrationPhase, RenderEngine, SocketDirection
from igor.core.logging import get_logger
from igor.core.nodes.graph import NodeTree
from igor.engine.alpha import convert_blend_mode
from igor.engine.context import MigrationContext
from igor.engine.registry import MigrationBlock, block
from igor.engine.rescale import invert_values
from igor.plugins.hookspecs import hookimpl
from igor.versioning.common import drawings, first_scene_engine, node_groups, rename_node_socket

logger = get_logger(__name__)


# === Read phase ===


def grease_pencil_hardness_to_softness(ctx: MigrationContext) -> None:
    """Stroke hardness is stored inverted, as softness."""
    for grease_pencil in ctx.entities(EntityKind.GREASE_PENCIL):
        for drawing in drawings(grease_pencil.fields):
            attributes = drawing.get("curve_attributes", {})
            if "hardness" not in attributes:
                continue
            values = attributes.pop("hardness")
            invert_values(values, ctx.settings.concurrency)
            attributes["softness"] = values


def version_transform_location_to_translation(tree: NodeTree) -> int:
    renamed = rename_node_socket(tree, "FunctionNodeCombineTransform", SocketDirection.INPUT, "Location", "Translation")
    renamed += rename_node_socket(tree, "FunctionNodeSeparateTransform", SocketDirection.OUTPUT, "Location", "Translation")
    return renamed


def transform_location_to_translation(ctx: MigrationContext) -> None:
    """Transform nodes call their location 'Translation'."""
    for tree in node_groups(ctx):
        version_transform_location_to_translation(tree)


# === After linking ===


def material_blend_mode_to_alpha(ctx: MigrationContext) -> None:
    """Fold the discrete blend mode of EEVEE materials into their node trees.

    Clipped materials get their alpha stepped at the clip threshold, opaque
    materials get their alpha forced to one, and both keep their blend mode.
    A surface that is plainly opaque or plainly transparent has no alpha to
    fold, so its blend mode is set from the classification instead.
    Materials that already blend, or whose shadow mode disagrees with the
    blend mode, are left alone.
    """
    if first_scene_engine(ctx.document) != RenderEngine.EEVEE:
        return

    max_depth = ctx.settings.analyzer.max_depth
    for material in ctx.entities(EntityKind.MATERIAL):
        tree = material.node_tree
        if not material.get("use_nodes") or tree is None:
            continue

        blend_method = material.get("blend_method", BlendMethod.OPAQUE)
        if blend_method in (BlendMethod.HASHED, BlendMethod.BLEND):
            continue

        blend_shadow = material.get("blend_shadow", BlendShadow.SOLID)
        if (blend_shadow == BlendShadow.CLIP and blend_method != BlendMethod.CLIP) or blend_shadow == BlendShadow.HASHED:
            ctx.skip(material, f"Couldn't convert material {material.name} because of different Blend Mode and Shadow Mode")
            continue

        threshold = material.get("alpha_threshold", 0.5) if blend_method == BlendMethod.CLIP else None
        conversion = convert_blend_mode(tree, threshold, max_depth=max_depth)
        if not conversion.converted:
            ctx.skip(material, f"Couldn't convert material {material.name} because of non-trivial alpha blending")
            continue

        if conversion.driving_socket is None:
            # Nothing to fold into a socket: the surface alone says opaque or transparent
            material["blend_method"] = BlendMethod.OPAQUE if conversion.state == AlphaState.OPAQUE else BlendMethod.BLEND
        logger.debug("material_blend_converted", material=material.name, alpha=str(conversion.state))


def eevee_next_engine(ctx: MigrationContext) -> None:
    """The legacy EEVEE engine was replaced by EEVEE Next."""
    for scene in ctx.entities(EntityKind.SCENE):
        if scene.get("render_engine") == RenderEngine.EEVEE:
            scene["render_engine"] = RenderEngine.EEVEE_NEXT


BLOCKS: tuple[MigrationBlock, ...] = (
    block("grease_pencil_hardness_to_softness", grease_pencil_hardness_to_softness, (402, 38)),
    block("transform_location_to_translation", transform_location_to_translation, (402, 40)),
    block("material_blend_mode_to_alpha", material_blend_mode_to_alpha, (402, 51), phase=MigrationPhase.AFTER_LINKING),
    block("eevee_next_engine", eevee_next_engine, (402, 52), phase=MigrationPhase.AFTER_LINKING),
)


class V402Migrations:
    """Registers the 4.2 versioning blocks."""

    @hookimpl
    def igor_get_migrations(self) -> list[MigrationBlock]:
        return list(BLOCKS)
