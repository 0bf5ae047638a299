# tests/unit/core/test_node_tree.py
"""Tests for NodeTree: nodes, sockets and links over the networkx graph."""

import pytest

from igor.contracts.enums import SocketDirection, SocketType
from igor.contracts.errors import GraphIntegrityError, UnknownNodeTypeError
from igor.core.nodes.graph import NodeTree
from igor.core.nodes.templates import get_template, has_template


class TestNodes:
    def test_add_node_uses_template_sockets(self) -> None:
        tree = NodeTree("T")
        mix = tree.add_node("ShaderNodeMixShader")

        assert [s.identifier for s in mix.inputs] == ["Fac", "Shader", "Shader_001"]
        assert [s.identifier for s in mix.outputs] == ["Shader"]
        assert mix.find_input("Fac") is not None
        assert mix.find_input("Fac").default_value == 0.5  # type: ignore[union-attr]

    def test_template_properties_are_copied(self) -> None:
        tree = NodeTree("T")
        first = tree.add_node("ShaderNodeMath")
        first.properties["operation"] = "GREATER_THAN"

        second = tree.add_node("ShaderNodeMath")

        assert second.properties["operation"] == "ADD"

    def test_node_names_are_unique(self) -> None:
        tree = NodeTree("T")
        names = [tree.add_node("ShaderNodeValue").name for _ in range(3)]

        assert names == ["Value", "Value.001", "Value.002"]

    def test_unknown_type_has_no_sockets(self) -> None:
        tree = NodeTree("T")
        node = tree.add_node("ShaderNodeBsdfGlossy")

        assert node.inputs == [] and node.outputs == []
        assert not has_template("ShaderNodeBsdfGlossy")
        with pytest.raises(UnknownNodeTypeError):
            get_template("ShaderNodeBsdfGlossy")

    def test_remove_node_drops_links_and_parents(self) -> None:
        tree = NodeTree("T")
        frame = tree.add_node("NodeFrame")
        value = tree.add_node("ShaderNodeValue")
        math = tree.add_node("ShaderNodeMath")
        math.parent = frame.id
        tree.add_link(value.outputs[0], math.inputs[0])

        tree.remove_node(value)
        tree.remove_node(frame)

        assert tree.link_count == 0
        assert math.parent is None
        assert tree.node_count == 1
        tree.validate()

    def test_remove_foreign_node_raises(self) -> None:
        other = NodeTree("Other")
        node = other.add_node("ShaderNodeValue")

        with pytest.raises(GraphIntegrityError):
            NodeTree("T").remove_node(node)


class TestLinks:
    def test_link_connects_output_to_input(self) -> None:
        tree = NodeTree("T")
        value = tree.add_node("ShaderNodeValue")
        math = tree.add_node("ShaderNodeMath")

        link = tree.add_link(value.outputs[0], math.inputs[1])

        assert tree.incoming_link(math.inputs[1]) is link
        assert tree.is_linked(math.inputs[1])
        assert tree.is_linked(value.outputs[0])
        assert tree.links_from(value.outputs[0]) == [link]
        assert tree.link_endpoints(link) == (value.outputs[0], math.inputs[1])

    def test_input_accepts_one_link(self) -> None:
        tree = NodeTree("T")
        a = tree.add_node("ShaderNodeValue")
        b = tree.add_node("ShaderNodeValue")
        math = tree.add_node("ShaderNodeMath")

        tree.add_link(a.outputs[0], math.inputs[0])
        replacement = tree.add_link(b.outputs[0], math.inputs[0])

        assert tree.links == [replacement]
        tree.validate()

    def test_wrong_direction_rejected(self) -> None:
        tree = NodeTree("T")
        value = tree.add_node("ShaderNodeValue")
        math = tree.add_node("ShaderNodeMath")

        with pytest.raises(GraphIntegrityError, match="output to an input"):
            tree.add_link(math.inputs[0], value.outputs[0])

    def test_parallel_links_between_same_nodes(self) -> None:
        tree = NodeTree("T")
        value = tree.add_node("ShaderNodeValue")
        math = tree.add_node("ShaderNodeMath")

        tree.add_link(value.outputs[0], math.inputs[0])
        tree.add_link(value.outputs[0], math.inputs[1])

        assert tree.get_nx_graph().number_of_edges(value.id, math.id) == 2

    def test_relink_from_keeps_target(self) -> None:
        tree = NodeTree("T")
        a = tree.add_node("ShaderNodeValue")
        b = tree.add_node("ShaderNodeValue")
        math = tree.add_node("ShaderNodeMath")
        old = tree.add_link(a.outputs[0], math.inputs[2])

        new = tree.relink_from(old, b.outputs[0])

        assert tree.links == [new]
        assert tree.link_endpoints(new) == (b.outputs[0], math.inputs[2])

    def test_remove_socket_drops_its_links(self) -> None:
        tree = NodeTree("T")
        value = tree.add_node("ShaderNodeValue")
        math = tree.add_node("ShaderNodeMath")
        tree.add_link(value.outputs[0], math.inputs[0])

        tree.remove_socket(math.inputs[0])

        assert tree.link_count == 0
        assert [s.identifier for s in math.inputs] == ["Value_001", "Value_002"]


class TestSockets:
    def test_add_socket_appends(self) -> None:
        tree = NodeTree("T")
        node = tree.add_node("ShaderNodeBsdfGlossy")

        socket = tree.add_socket(node, SocketDirection.INPUT, SocketType.FLOAT, "Roughness", default_value=0.2)

        assert node.inputs == [socket]
        assert socket.identifier == "Roughness"
        assert tree.node_of(socket) is node

    def test_add_socket_to_foreign_node_rejected(self) -> None:
        other = NodeTree("Other")
        foreign = other.add_node("ShaderNodeValue")
        tree = NodeTree("T")
        tree.add_node("ShaderNodeValue")

        with pytest.raises(GraphIntegrityError):
            tree.add_socket(foreign, SocketDirection.OUTPUT, SocketType.FLOAT, "Extra")

        assert [socket.name for socket in foreign.outputs] == ["Value"]
        tree.validate()
        other.validate()

    def test_rename_socket_updates_identifier(self) -> None:
        tree = NodeTree("T")
        node = tree.add_node("ShaderNodeValue")

        tree.rename_socket(node.outputs[0], "Amount")

        assert node.find_output("Amount") is node.outputs[0]

    def test_change_socket_type_keeps_links(self) -> None:
        tree = NodeTree("T")
        value = tree.add_node("ShaderNodeValue")
        math = tree.add_node("ShaderNodeMath")
        tree.add_link(value.outputs[0], math.inputs[0])

        tree.change_socket_type(math.inputs[0], SocketType.INT, 3)

        assert math.inputs[0].socket_type == SocketType.INT
        assert math.inputs[0].default_value == 3
        assert tree.is_linked(math.inputs[0])

    def test_foreign_socket_rejected(self) -> None:
        other = NodeTree("Other")
        foreign = other.add_node("ShaderNodeValue").outputs[0]
        tree = NodeTree("T")
        math = tree.add_node("ShaderNodeMath")

        with pytest.raises(GraphIntegrityError):
            tree.add_link(foreign, math.inputs[0])
