# src/igor/engine/alpha.py
"""Alpha/transparency source analyzer.

Legacy EEVEE materials choose their transparency with a discrete blend mode
(opaque, alpha clip, alpha hashed, alpha blend). The current model always
blends by the closure tree's alpha. Converting alpha clip (or opaque) without
changing the look requires turning the alpha that reaches the output into a
step function, which is only possible when a single scalar socket decides
it. This module finds that socket and rewrites it.
"""

from __future__ import annotations

from dataclasses import dataclass

from igor.contracts.enums import AlphaState, SocketType
from igor.core.logging import get_logger
from igor.core.nodes.graph import NodeTree
from igor.core.nodes.models import Node, Socket
from igor.core.nodes.templates import GROUP_NODE_IDNAMES, REROUTE_IDNAME

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 100

MATERIAL_OUTPUT_IDNAME = "ShaderNodeOutputMaterial"
_EEVEE_OUTPUT_TARGETS = frozenset({"ALL", "EEVEE"})


@dataclass(frozen=True, slots=True)
class AlphaSource:
    """Classification of the alpha reaching a closure socket.

    Attributes:
        state: Opaque, fully transparent, semi-transparent or complex
        socket: Scalar (or colour) socket deciding the alpha, if any
        is_transparency: The socket carries ``1 - alpha`` rather than alpha
    """

    state: AlphaState
    socket: Socket | None = None
    is_transparency: bool = False

    @classmethod
    def opaque(cls) -> AlphaSource:
        return cls(AlphaState.OPAQUE)

    @classmethod
    def fully_transparent(cls, socket: Socket | None = None, inverted: bool = False) -> AlphaSource:
        return cls(AlphaState.FULLY_TRANSPARENT, socket, inverted)

    @classmethod
    def alpha_source(cls, socket: Socket, inverted: bool = False) -> AlphaSource:
        return cls(AlphaState.SEMI_TRANSPARENT, socket, inverted)

    @classmethod
    def complex(cls) -> AlphaSource:
        return cls(AlphaState.COMPLEX)

    @property
    def is_opaque(self) -> bool:
        return self.state == AlphaState.OPAQUE

    @property
    def is_fully_transparent(self) -> bool:
        return self.state == AlphaState.FULLY_TRANSPARENT

    @property
    def is_transparent(self) -> bool:
        """Any state other than opaque (complex counts as transparent)."""
        return self.state != AlphaState.OPAQUE

    @property
    def is_semi_transparent(self) -> bool:
        return self.state == AlphaState.SEMI_TRANSPARENT

    @property
    def is_complex(self) -> bool:
        return self.state == AlphaState.COMPLEX

    @staticmethod
    def mix(a: AlphaSource, b: AlphaSource, factor: Socket) -> AlphaSource:
        """Combine two sources blended by ``factor`` (0 selects ``a``, 1 selects ``b``).

        A semi-transparent operand would need a second blending decision,
        so it makes the result complex whatever the other side is.
        """
        if a.is_complex or b.is_complex:
            return AlphaSource.complex()
        if a.is_semi_transparent or b.is_semi_transparent:
            return AlphaSource.complex()
        if a.is_fully_transparent and b.is_fully_transparent:
            return AlphaSource.fully_transparent()
        if a.is_opaque and b.is_opaque:
            return AlphaSource.opaque()
        # Exactly one side is fully transparent
        return AlphaSource.alpha_source(factor, inverted=not a.is_transparent)

    @staticmethod
    def add(a: AlphaSource, b: AlphaSource) -> AlphaSource:
        """Combine two sources added together."""
        if a.is_complex or b.is_complex:
            return AlphaSource.complex()
        if a.is_semi_transparent and b.is_transparent:
            return AlphaSource.complex()
        if a.is_transparent and b.is_semi_transparent:
            return AlphaSource.complex()
        return a if a.is_transparent else b


def _rgb_equals(value: object, channel: float) -> bool:
    if not isinstance(value, tuple | list) or len(value) < 3:
        return False
    return all(float(component) == channel for component in value[:3])


def _float_value(socket: Socket) -> float:
    return float(socket.default_value if socket.default_value is not None else 0.0)


def _input_at(node: Node, index: int) -> Socket | None:
    return node.inputs[index] if index < len(node.inputs) else None


def analyze_alpha_source(tree: NodeTree, socket: Socket | None, depth: int = 0, *, max_depth: int = DEFAULT_MAX_DEPTH) -> AlphaSource:
    """Classify the alpha reaching closure input ``socket``.

    The depth counter bounds the recursion; exceeding ``max_depth`` (which
    also happens on a cycle) classifies the tree as complex.
    """
    if depth > max_depth:
        return AlphaSource.complex()
    if socket is None:
        return AlphaSource.opaque()

    link = tree.incoming_link(socket)
    if link is None:
        # An unconnected closure input is opaque black
        return AlphaSource.opaque()

    node = tree.node(link.from_node)
    idname = node.idname

    if idname == REROUTE_IDNAME:
        return analyze_alpha_source(tree, _input_at(node, 0), depth + 1, max_depth=max_depth)

    if idname in GROUP_NODE_IDNAMES:
        return AlphaSource.complex()

    if idname == "ShaderNodeBsdfTransparent":
        color = node.find_input("Color")
        if color is None:
            return AlphaSource.opaque()
        if not tree.is_linked(color):
            if _rgb_equals(color.default_value, 0.0):
                return AlphaSource.opaque()
            if _rgb_equals(color.default_value, 1.0):
                return AlphaSource.fully_transparent(color, inverted=True)
        return AlphaSource.alpha_source(color, inverted=True)

    if idname == "ShaderNodeMixShader":
        factor = node.find_input("Fac")
        src0 = analyze_alpha_source(tree, _input_at(node, 1), depth + 1, max_depth=max_depth)
        src1 = analyze_alpha_source(tree, _input_at(node, 2), depth + 1, max_depth=max_depth)
        if factor is None:
            return AlphaSource.complex()
        if not tree.is_linked(factor):
            value = _float_value(factor)
            if value == 0.0:
                return src0
            if value == 1.0:
                return src1
        return AlphaSource.mix(src0, src1, factor)

    if idname == "ShaderNodeAddShader":
        src0 = analyze_alpha_source(tree, _input_at(node, 0), depth + 1, max_depth=max_depth)
        src1 = analyze_alpha_source(tree, _input_at(node, 1), depth + 1, max_depth=max_depth)
        return AlphaSource.add(src0, src1)

    if idname == "ShaderNodeBsdfPrincipled":
        alpha = node.find_input("Alpha")
        if alpha is None:
            return AlphaSource.opaque()
        if not tree.is_linked(alpha):
            value = _float_value(alpha)
            if value == 0.0:
                return AlphaSource.fully_transparent(alpha)
            if value == 1.0:
                return AlphaSource.opaque()
        return AlphaSource.alpha_source(alpha)

    if idname == "ShaderNodeEeveeSpecular":
        transparency = node.find_input("Transparency")
        if transparency is None:
            return AlphaSource.opaque()
        if not tree.is_linked(transparency):
            value = _float_value(transparency)
            if value == 0.0:
                return AlphaSource.fully_transparent(transparency, inverted=True)
            if value == 1.0:
                return AlphaSource.opaque()
        return AlphaSource.alpha_source(transparency, inverted=True)

    return AlphaSource.opaque()


def find_material_output(tree: NodeTree) -> Node | None:
    """Material output node EEVEE renders from.

    The active output wins; otherwise the first output targeting EEVEE.
    """
    candidates = [node for node in tree.find_nodes(MATERIAL_OUTPUT_IDNAME) if node.properties.get("target", "ALL") in _EEVEE_OUTPUT_TARGETS]
    for node in candidates:
        if node.properties.get("is_active_output"):
            return node
    return candidates[0] if candidates else None


@dataclass(frozen=True, slots=True)
class BlendConversion:
    """Outcome of converting one material tree.

    Attributes:
        converted: False when the alpha was too complex to convert (nothing changed)
        state: Classification of the alpha reaching the output
        comparison_node: Math node inserted in front of the alpha socket, if any
        driving_socket: Socket the alpha was folded into; None when the
            classification alone decides between opaque and transparent
    """

    converted: bool
    state: AlphaState
    comparison_node: Node | None = None
    driving_socket: Socket | None = None


def _set_opaque_default(socket: Socket, is_transparency: bool) -> None:
    value = 0.0 if is_transparency else 1.0
    if socket.socket_type == SocketType.RGBA:
        socket.default_value = (value, value, value, 1.0)
    else:
        socket.default_value = value


def _insert_comparison(tree: NodeTree, source: AlphaSource, threshold: float) -> Node:
    socket = source.socket
    assert socket is not None
    link = tree.incoming_link(socket)
    assert link is not None
    from_socket, to_socket = tree.link_endpoints(link)
    from_node = tree.node(link.from_node)
    to_node = tree.node(link.to_node)
    tree.remove_link(link)

    math_node = tree.add_node("ShaderNodeMath")
    math_node.properties["operation"] = "GREATER_THAN"
    math_node.hidden = True
    math_node.parent = to_node.parent
    math_node.location = (
        to_node.location[0] - math_node.width - 30.0,
        min(to_node.location[1], from_node.location[1]),
    )

    value_socket, threshold_socket = math_node.inputs[0], math_node.inputs[1]
    tree.add_link(from_socket, value_socket)
    tree.add_link(math_node.outputs[0], to_socket)
    threshold_socket.default_value = 1.0 - threshold if source.is_transparency else threshold
    return math_node


def _apply_threshold(socket: Socket, is_transparency: bool, threshold: float) -> None:
    cutoff = 1.0 - threshold if is_transparency else threshold
    if socket.socket_type == SocketType.RGBA:
        rgba = socket.default_value or (0.0, 0.0, 0.0, 1.0)
        total = float(rgba[0]) + float(rgba[1]) + float(rgba[2])
        # Avoid the division when possible to keep exact ones
        average = 1.0 if total >= 3.0 else total / 3.0
        value = float(average > cutoff)
        socket.default_value = (value, value, value, 1.0)
    else:
        socket.default_value = float(_float_value(socket) > cutoff)


def convert_blend_mode(tree: NodeTree, threshold: float | None, *, max_depth: int = DEFAULT_MAX_DEPTH) -> BlendConversion:
    """Collapse the tree's alpha into a step function at ``threshold``.

    Args:
        tree: Material node tree, rewritten in place
        threshold: Alpha clip threshold, or None for a fully opaque material
        max_depth: Recursion cap of the analyzer

    Returns:
        BlendConversion; ``converted`` is False (and nothing changed) when
        the alpha is decided by more than one blending operation
    """
    output = find_material_output(tree)
    if output is None:
        return BlendConversion(converted=True, state=AlphaState.OPAQUE)

    source = analyze_alpha_source(tree, output.find_input("Surface"), max_depth=max_depth)
    if source.is_complex:
        return BlendConversion(converted=False, state=source.state)
    if source.socket is None:
        return BlendConversion(converted=True, state=source.state)

    socket = source.socket
    if threshold is None:
        link = tree.incoming_link(socket)
        if link is not None:
            tree.remove_link(link)
        _set_opaque_default(socket, source.is_transparency)
        logger.debug("alpha_forced_opaque", tree=tree.name, socket=socket.identifier)
        return BlendConversion(converted=True, state=AlphaState.OPAQUE, driving_socket=socket)

    if tree.is_linked(socket):
        math_node = _insert_comparison(tree, source, threshold)
        logger.debug("alpha_comparison_inserted", tree=tree.name, node=math_node.name, threshold=threshold)
        return BlendConversion(converted=True, state=source.state, comparison_node=math_node, driving_socket=socket)

    _apply_threshold(socket, source.is_transparency, threshold)
    return BlendConversion(converted=True, state=source.state, driving_socket=socket)
