# tests/strategies/nodes.py
"""Closure tree strategies for alpha analysis testing.

Strategies produce plain nested tuples ("closure expressions") so that a
failing example prints readably; build_shader_tree() turns one into a
NodeTree whose material output is fed by the expression.

Expression forms:
    ("principled", alpha, alpha_linked)
    ("transparent", color, color_linked)
    ("specular", transparency, transparency_linked)
    ("reroute", child)
    ("mix", factor, factor_linked, child_a, child_b)
    ("add", child_a, child_b)
"""

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

from igor.core.nodes.graph import NodeTree
from igor.core.nodes.models import Node, Socket
from igor.testing import make_shader_tree

type ClosureExpr = tuple[Any, ...]

_BLACK = (0.0, 0.0, 0.0, 1.0)
_WHITE = (1.0, 1.0, 1.0, 1.0)
_GREY = (0.5, 0.5, 0.5, 1.0)

# The analyzer special-cases exactly 0 and 1
scalar_defaults = st.sampled_from([0.0, 0.5, 1.0])
color_defaults = st.sampled_from([_BLACK, _WHITE, _GREY])


def _leaves(include_specular: bool) -> st.SearchStrategy[ClosureExpr]:
    leaves = [
        st.tuples(st.just("principled"), scalar_defaults, st.booleans()),
        st.tuples(st.just("transparent"), color_defaults, st.booleans()),
    ]
    if include_specular:
        leaves.append(st.tuples(st.just("specular"), scalar_defaults, st.booleans()))
    return st.one_of(*leaves)


def closure_exprs(*, include_specular: bool = True, include_add: bool = True, max_leaves: int = 8) -> st.SearchStrategy[ClosureExpr]:
    """Random closure expressions of up to ``max_leaves`` BSDF leaves."""

    def extend(children: st.SearchStrategy[ClosureExpr]) -> st.SearchStrategy[ClosureExpr]:
        branches = [
            st.tuples(st.just("reroute"), children),
            st.tuples(st.just("mix"), scalar_defaults, st.booleans(), children, children),
        ]
        if include_add:
            branches.append(st.tuples(st.just("add"), children, children))
        return st.one_of(*branches)

    return st.recursive(_leaves(include_specular), extend, max_leaves=max_leaves)


def _drive(tree: NodeTree, socket: Socket) -> None:
    """Feed ``socket`` from a fresh Value node."""
    tree.add_link(tree.add_node("ShaderNodeValue").outputs[0], socket)


def _input(node: Node, identifier: str) -> Socket:
    socket = node.find_input(identifier)
    assert socket is not None
    return socket


def _build(tree: NodeTree, expr: ClosureExpr) -> Socket:
    kind = expr[0]
    if kind == "principled":
        node = tree.add_node("ShaderNodeBsdfPrincipled")
        alpha = _input(node, "Alpha")
        alpha.default_value = expr[1]
        if expr[2]:
            _drive(tree, alpha)
        return node.outputs[0]
    if kind == "transparent":
        node = tree.add_node("ShaderNodeBsdfTransparent")
        color = _input(node, "Color")
        color.default_value = expr[1]
        if expr[2]:
            _drive(tree, color)
        return node.outputs[0]
    if kind == "specular":
        node = tree.add_node("ShaderNodeEeveeSpecular")
        transparency = _input(node, "Transparency")
        transparency.default_value = expr[1]
        if expr[2]:
            _drive(tree, transparency)
        return node.outputs[0]
    if kind == "reroute":
        node = tree.add_node("NodeReroute")
        tree.add_link(_build(tree, expr[1]), node.inputs[0])
        return node.outputs[0]
    if kind == "mix":
        node = tree.add_node("ShaderNodeMixShader")
        factor = _input(node, "Fac")
        factor.default_value = expr[1]
        if expr[2]:
            _drive(tree, factor)
        tree.add_link(_build(tree, expr[3]), node.inputs[1])
        tree.add_link(_build(tree, expr[4]), node.inputs[2])
        return node.outputs[0]
    if kind == "add":
        node = tree.add_node("ShaderNodeAddShader")
        tree.add_link(_build(tree, expr[1]), node.inputs[0])
        tree.add_link(_build(tree, expr[2]), node.inputs[1])
        return node.outputs[0]
    raise ValueError(f"Unknown closure expression kind: {kind!r}")


def build_shader_tree(expr: ClosureExpr) -> tuple[NodeTree, Node]:
    """Materialize ``expr`` into a shader tree feeding the material output.

    Returns:
        (tree, output_node)
    """
    tree, output = make_shader_tree()
    tree.add_link(_build(tree, expr), _input(output, "Surface"))
    return tree, output
