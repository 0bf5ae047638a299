# tests/unit/core/test_walker.py
"""Tests for the object graph walker."""

from igor.contracts.enums import EntityKind, NodeTreeType
from igor.core.nodes.graph import NodeTree
from igor.core.walker import DocumentWalker
from tests.fixtures.factories import make_document, make_entity, make_material, make_node_tree, make_scene


def _use_group(tree: NodeTree, group: NodeTree) -> None:
    node = tree.add_node("ShaderNodeGroup")
    node.group_tree = group


class TestNodeTreeWalk:
    def test_visits_top_level_and_embedded_trees(self) -> None:
        doc = make_document()
        group = make_node_tree("Group", document=doc)
        material_tree = NodeTree("Shader Nodetree")
        make_material(document=doc, node_tree=material_tree)
        compositor = NodeTree("Compositing", NodeTreeType.COMPOSITOR)
        make_scene(document=doc, node_tree=compositor)

        visited = [tree for _owner, tree in DocumentWalker(doc).node_trees()]

        assert len(visited) == 3
        assert {id(t) for t in visited} == {id(group), id(material_tree), id(compositor)}

    def test_owner_is_embedding_entity(self) -> None:
        doc = make_document()
        material_tree = NodeTree("Shader Nodetree")
        material = make_material(document=doc, node_tree=material_tree)
        top = make_node_tree("Top", document=doc)

        owners = {id(tree): owner for owner, tree in DocumentWalker(doc).node_trees()}

        assert owners[id(material_tree)] is material
        assert owners[id(top)] is None

    def test_nested_groups_are_reached(self) -> None:
        doc = make_document()
        inner = NodeTree("Inner")
        middle = NodeTree("Middle")
        _use_group(middle, inner)
        material_tree = NodeTree("Shader Nodetree")
        _use_group(material_tree, middle)
        make_material(document=doc, node_tree=material_tree)

        names = [tree.name for _owner, tree in DocumentWalker(doc).node_trees()]

        assert names == ["Shader Nodetree", "Middle", "Inner"]

    def test_shared_group_visited_once(self) -> None:
        doc = make_document()
        shared = make_node_tree("Shared", document=doc)
        for name in ("A", "B"):
            tree = NodeTree(f"{name} Nodetree")
            _use_group(tree, shared)
            make_material(name, document=doc, node_tree=tree)

        visited = [tree for _owner, tree in DocumentWalker(doc).node_trees()]

        assert sum(1 for tree in visited if tree is shared) == 1

    def test_recursive_group_reference_terminates(self) -> None:
        doc = make_document()
        loop = make_node_tree("Loop", document=doc)
        _use_group(loop, loop)

        assert [tree.name for _owner, tree in DocumentWalker(doc).node_trees()] == ["Loop"]

    def test_walk_is_restartable(self) -> None:
        doc = make_document()
        make_node_tree("Group", document=doc)
        walk = DocumentWalker(doc).node_trees()

        assert len(list(walk)) == len(list(walk)) == 1


class TestEntityWalk:
    def test_entities_of_kind(self) -> None:
        doc = make_document()
        make_entity(EntityKind.LIGHT, "Spot", document=doc, type="SPOT")
        make_entity(EntityKind.LIGHT, "Sun", document=doc, type="SUN")
        make_material(document=doc)

        names = [light.name for light in DocumentWalker(doc).entities(EntityKind.LIGHT)]

        assert names == ["Spot", "Sun"]

    def test_node_tree_kind_includes_embedded(self) -> None:
        doc = make_document()
        make_material(document=doc, node_tree=NodeTree("Embedded"))

        names = [tree.name for tree in DocumentWalker(doc).entities(EntityKind.NODE_TREE)]

        assert names == ["Embedded"]

    def test_adding_entities_while_walking_is_safe(self) -> None:
        doc = make_document()
        make_material("A", document=doc)

        for material in DocumentWalker(doc).entities(EntityKind.MATERIAL):
            make_material(f"{material.name}.copy", document=doc)

        assert [m.name for m in doc.collection(EntityKind.MATERIAL)] == ["A", "A.copy"]
