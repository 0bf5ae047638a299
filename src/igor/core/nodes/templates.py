# src/igor/core/nodes/templates.py
"""Default socket layouts of the node types migration blocks create or inspect.

A template describes a node type as the current model lays it out. Nodes of
types without a template (types retired by an older release, or types no
block needs) are created without sockets; the loader supplies their sockets
from the file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from igor.contracts.enums import SocketType
from igor.contracts.errors import UnknownNodeTypeError

_BLACK = (0.0, 0.0, 0.0, 1.0)
_WHITE = (1.0, 1.0, 1.0, 1.0)
_GREY = (0.8, 0.8, 0.8, 1.0)
_ZERO3 = (0.0, 0.0, 0.0)
_ONE3 = (1.0, 1.0, 1.0)


@dataclass(frozen=True, slots=True)
class SocketTemplate:
    """Declaration of one default socket."""

    name: str
    socket_type: SocketType
    default: Any = None
    identifier: str | None = None

    @property
    def key(self) -> str:
        return self.identifier if self.identifier is not None else self.name


@dataclass(frozen=True, slots=True)
class NodeTemplate:
    """Default sockets and settings of a node type."""

    idname: str
    label: str
    inputs: tuple[SocketTemplate, ...] = ()
    outputs: tuple[SocketTemplate, ...] = ()
    width: float = 140.0
    properties: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


def _t(name: str, socket_type: SocketType, default: Any = None, identifier: str | None = None) -> SocketTemplate:
    return SocketTemplate(name, socket_type, default, identifier)


def _props(**values: Any) -> Mapping[str, Any]:
    return MappingProxyType(values)


F = SocketType.FLOAT
V = SocketType.VECTOR
C = SocketType.RGBA
S = SocketType.SHADER
G = SocketType.GEOMETRY
B = SocketType.BOOLEAN

# Group nodes reference another tree; their sockets mirror that tree's interface.
GROUP_NODE_IDNAMES: frozenset[str] = frozenset({"ShaderNodeGroup", "GeometryNodeGroup", "CompositorNodeGroup", "TextureNodeGroup"})

REROUTE_IDNAME = "NodeReroute"

_TEMPLATES: dict[str, NodeTemplate] = {}


def register_template(template: NodeTemplate) -> None:
    """Register (or replace) the template of a node type."""
    _TEMPLATES[template.idname] = template


def get_template(idname: str) -> NodeTemplate:
    """Look up a node type's template.

    Raises:
        UnknownNodeTypeError: If no template is registered for ``idname``
    """
    try:
        return _TEMPLATES[idname]
    except KeyError:
        raise UnknownNodeTypeError(idname) from None


def has_template(idname: str) -> bool:
    return idname in _TEMPLATES


for _template in (
    # Common
    NodeTemplate(REROUTE_IDNAME, "Reroute", (_t("Input", C, _WHITE),), (_t("Output", C, _WHITE),), width=16.0),
    NodeTemplate("NodeFrame", "Frame"),
    NodeTemplate("NodeGroupInput", "Group Input"),
    NodeTemplate("NodeGroupOutput", "Group Output"),
    *(NodeTemplate(idname, "Group") for idname in sorted(GROUP_NODE_IDNAMES)),
    # Shader
    NodeTemplate(
        "ShaderNodeOutputMaterial",
        "Material Output",
        (_t("Surface", S), _t("Volume", S), _t("Displacement", V, _ZERO3)),
        properties=_props(target="ALL", is_active_output=True),
    ),
    NodeTemplate(
        "ShaderNodeBsdfTransparent",
        "Transparent BSDF",
        (_t("Color", C, _WHITE), _t("Weight", F, 0.0)),
        (_t("BSDF", S),),
    ),
    NodeTemplate(
        "ShaderNodeMixShader",
        "Mix Shader",
        (_t("Fac", F, 0.5), _t("Shader", S), _t("Shader", S, identifier="Shader_001")),
        (_t("Shader", S),),
    ),
    NodeTemplate(
        "ShaderNodeAddShader",
        "Add Shader",
        (_t("Shader", S), _t("Shader", S, identifier="Shader_001")),
        (_t("Shader", S),),
    ),
    NodeTemplate(
        "ShaderNodeBsdfPrincipled",
        "Principled BSDF",
        (
            _t("Base Color", C, _GREY),
            _t("Metallic", F, 0.0),
            _t("Roughness", F, 0.5),
            _t("IOR", F, 1.5),
            _t("Alpha", F, 1.0),
            _t("Normal", V, _ZERO3),
            _t("Coat", F, 0.0),
            _t("Coat Roughness", F, 0.03),
            _t("Coat IOR", F, 1.5),
            _t("Coat Normal", V, _ZERO3),
            _t("Emission Color", C, _WHITE),
        ),
        (_t("BSDF", S),),
        width=240.0,
        properties=_props(distribution="MULTI_GGX", subsurface_method="RANDOM_WALK"),
    ),
    NodeTemplate(
        "ShaderNodeEeveeSpecular",
        "Specular BSDF",
        (
            _t("Base Color", C, _GREY),
            _t("Specular", C, (0.03, 0.03, 0.03, 1.0)),
            _t("Roughness", F, 0.2),
            _t("Emissive Color", C, _BLACK),
            _t("Transparency", F, 0.0),
            _t("Normal", V, _ZERO3),
        ),
        (_t("BSDF", S),),
    ),
    NodeTemplate(
        "ShaderNodeBsdfAnisotropic",
        "Glossy BSDF",
        (
            _t("Color", C, _GREY),
            _t("Roughness", F, 0.5),
            _t("Anisotropy", F, 0.0),
            _t("Rotation", F, 0.0),
            _t("Normal", V, _ZERO3),
            _t("Tangent", V, _ZERO3),
        ),
        (_t("BSDF", S),),
        properties=_props(distribution="MULTI_GGX"),
    ),
    NodeTemplate(
        "ShaderNodeBsdfGlass",
        "Glass BSDF",
        (_t("Color", C, _WHITE), _t("Roughness", F, 0.0), _t("IOR", F, 1.5), _t("Normal", V, _ZERO3)),
        (_t("BSDF", S),),
        properties=_props(distribution="MULTI_GGX"),
    ),
    NodeTemplate(
        "ShaderNodeBsdfRefraction",
        "Refraction BSDF",
        (_t("Color", C, _WHITE), _t("Roughness", F, 0.0), _t("IOR", F, 1.45), _t("Normal", V, _ZERO3)),
        (_t("BSDF", S),),
        properties=_props(distribution="BECKMANN"),
    ),
    NodeTemplate(
        "ShaderNodeMath",
        "Math",
        (_t("Value", F, 0.5), _t("Value", F, 0.5, identifier="Value_001"), _t("Value", F, 0.5, identifier="Value_002")),
        (_t("Value", F, 0.0),),
        properties=_props(operation="ADD", use_clamp=False),
    ),
    NodeTemplate(
        "ShaderNodeVectorMath",
        "Vector Math",
        (
            _t("Vector", V, _ZERO3),
            _t("Vector", V, _ZERO3, identifier="Vector_001"),
            _t("Vector", V, _ZERO3, identifier="Vector_002"),
            _t("Scale", F, 1.0),
        ),
        (_t("Vector", V, _ZERO3), _t("Value", F, 0.0)),
        properties=_props(operation="ADD"),
    ),
    NodeTemplate(
        "ShaderNodeTexImage",
        "Image Texture",
        (_t("Vector", V, _ZERO3),),
        (_t("Color", C, _BLACK), _t("Alpha", F, 1.0)),
        width=240.0,
        properties=_props(interpolation="Linear", extension="REPEAT"),
    ),
    NodeTemplate("ShaderNodeValue", "Value", (), (_t("Value", F, 0.5),)),
    NodeTemplate(
        "ShaderNodeTexCoord",
        "Texture Coordinate",
        (),
        tuple(_t(name, V, _ZERO3) for name in ("Generated", "Normal", "UV", "Object", "Camera", "Window", "Reflection")),
    ),
    NodeTemplate(
        "ShaderNodeNewGeometry",
        "Geometry",
        (),
        (
            _t("Position", V, _ZERO3),
            _t("Normal", V, _ZERO3),
            _t("Tangent", V, _ZERO3),
            _t("True Normal", V, _ZERO3),
            _t("Incoming", V, _ZERO3),
            _t("Parametric", V, _ZERO3),
            _t("Backfacing", F, 0.0),
            _t("Pointiness", F, 0.5),
            _t("Random Per Island", F, 0.0),
        ),
    ),
    NodeTemplate(
        "ShaderNodeVectorTransform",
        "Vector Transform",
        (_t("Vector", V, (0.5, 0.5, 0.5)),),
        (_t("Vector", V, _ZERO3),),
        properties=_props(vector_type="VECTOR", convert_from="WORLD", convert_to="OBJECT"),
    ),
    # Compositor
    NodeTemplate("CompositorNodeRLayers", "Render Layers", (), (_t("Image", C, _BLACK), _t("Alpha", F, 1.0))),
    NodeTemplate("CompositorNodeComposite", "Composite", (_t("Image", C, _BLACK),), ()),
    NodeTemplate("CompositorNodeViewer", "Viewer", (_t("Image", C, _BLACK),), (), properties=_props(use_alpha=True)),
    NodeTemplate(
        "CompositorNodeSplit",
        "Split",
        (_t("Image", C, _WHITE), _t("Image", C, _WHITE, identifier="Image_001")),
        (_t("Image", C, _BLACK),),
        properties=_props(axis="X", factor=50),
    ),
    # Geometry
    NodeTemplate(
        "GeometryNodeObjectInfo",
        "Object Info",
        (_t("Object", SocketType.OBJECT), _t("As Instance", B, False)),
        (
            _t("Transform", SocketType.MATRIX),
            _t("Location", V, _ZERO3),
            _t("Rotation", SocketType.ROTATION, _ZERO3),
            _t("Scale", V, _ONE3),
            _t("Geometry", G),
        ),
        properties=_props(transform_space="ORIGINAL"),
    ),
    NodeTemplate(
        "GeometryNodeSetShadeSmooth",
        "Set Shade Smooth",
        (_t("Geometry", G), _t("Selection", B, True), _t("Shade Smooth", B, True)),
        (_t("Geometry", G),),
        properties=_props(domain="FACE"),
    ),
    NodeTemplate(
        "FunctionNodeCombineTransform",
        "Combine Transform",
        (_t("Translation", V, _ZERO3), _t("Rotation", SocketType.ROTATION, _ZERO3), _t("Scale", V, _ONE3)),
        (_t("Transform", SocketType.MATRIX),),
    ),
    NodeTemplate(
        "FunctionNodeSeparateTransform",
        "Separate Transform",
        (_t("Transform", SocketType.MATRIX),),
        (_t("Translation", V, _ZERO3), _t("Rotation", SocketType.ROTATION, _ZERO3), _t("Scale", V, _ONE3)),
    ),
):
    register_template(_template)
