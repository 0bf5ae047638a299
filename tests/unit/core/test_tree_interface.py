# tests/unit/core/test_tree_interface.py
"""Tests for the hierarchical tree interface."""

import pytest

from igor.contracts.enums import InterfacePanelFlag, InterfaceSocketFlag
from igor.contracts.errors import InterfaceError
from igor.core.nodes.interface import InterfacePanel, InterfaceSocket, TreeInterface

IN = InterfaceSocketFlag.INPUT
OUT = InterfaceSocketFlag.OUTPUT


def _socket(identifier: str, flag: InterfaceSocketFlag = IN) -> InterfaceSocket:
    return InterfaceSocket(name=identifier, identifier=identifier, socket_type="NodeSocketFloat", flag=flag)


def _panel(identifier: str) -> InterfacePanel:
    return InterfacePanel(name=identifier, identifier=identifier)


class TestFindValidInsertPosition:
    def test_socket_snaps_before_first_panel(self) -> None:
        panel = InterfacePanel("root", "root", items=[_socket("a"), _panel("p"), _panel("q")])

        assert panel.find_valid_insert_position(_socket("b"), 3) == 1

    def test_panel_snaps_after_last_socket(self) -> None:
        panel = InterfacePanel("root", "root", items=[_socket("a"), _socket("b"), _panel("p")])

        assert panel.find_valid_insert_position(_panel("q"), 0) == 2

    def test_position_is_clamped(self) -> None:
        panel = InterfacePanel("root", "root", items=[_socket("a")])

        assert panel.find_valid_insert_position(_socket("b"), 10) == 1
        assert panel.find_valid_insert_position(_socket("b"), -4) == 0

    def test_free_layout_keeps_requested_position(self) -> None:
        panel = InterfacePanel(
            "root",
            "root",
            flag=InterfacePanelFlag.ALLOW_SOCKETS_AFTER_PANELS,
            items=[_socket("a"), _panel("p")],
        )

        assert panel.find_valid_insert_position(_socket("b"), 2) == 2


class TestTreeInterface:
    def test_new_interface_is_empty(self) -> None:
        interface = TreeInterface()
        assert interface.is_empty
        assert interface.root.identifier == "root"

    def test_add_socket_mints_identifiers(self) -> None:
        interface = TreeInterface()
        a = interface.add_socket("A", "NodeSocketFloat", IN)
        b = interface.add_socket("B", "NodeSocketFloat", OUT)

        assert (a.identifier, b.identifier) == ("Socket_0", "Socket_1")
        assert interface.next_uid == 2

    def test_mint_skips_identifiers_in_use(self) -> None:
        interface = TreeInterface()
        interface.add_socket("A", "NodeSocketFloat", IN, identifier="Socket_0")

        assert interface.mint_identifier() == "Socket_1"

    def test_freed_identifiers_are_not_reused(self) -> None:
        interface = TreeInterface()
        a = interface.add_socket("A", "NodeSocketFloat", IN)
        interface.remove_item(a)

        assert interface.add_socket("B", "NodeSocketFloat", IN).identifier == "Socket_1"

    def test_duplicate_identifier_rejected(self) -> None:
        interface = TreeInterface()
        interface.add_socket("A", "NodeSocketFloat", IN, identifier="x")

        with pytest.raises(InterfaceError, match="already used"):
            interface.add_socket("B", "NodeSocketFloat", IN, identifier="x")

    def test_nested_panel_requires_flag(self) -> None:
        interface = TreeInterface()
        outer = interface.add_panel("Outer")

        with pytest.raises(InterfaceError, match="child panels"):
            interface.add_panel("Inner", parent=outer)

        outer.flag |= InterfacePanelFlag.ALLOW_CHILD_PANELS
        inner = interface.add_panel("Inner", parent=outer)
        assert interface.find_item_parent(inner) is outer

    def test_find_item_and_position(self) -> None:
        interface = TreeInterface()
        panel = interface.add_panel("P")
        socket = interface.add_socket("S", "NodeSocketFloat", IN, parent=panel)

        assert interface.find_item(socket.identifier) is socket
        assert interface.find_item_parent(socket) is panel
        assert interface.find_item_position(socket) == 0
        assert interface.find_item("missing") is None

    def test_unknown_item_parent_raises(self) -> None:
        with pytest.raises(InterfaceError):
            TreeInterface().find_item_parent(_socket("ghost"))

    def test_foreach_item_is_depth_first(self) -> None:
        interface = TreeInterface()
        a = interface.add_socket("A", "NodeSocketFloat", IN)
        panel = interface.add_panel("P")
        b = interface.add_socket("B", "NodeSocketFloat", IN, parent=panel)

        assert list(interface.foreach_item()) == [a, panel, b]
        assert interface.sockets() == [a, b]
        assert interface.panels() == [panel]

    def test_duplicate_socket_copies_attributes(self) -> None:
        original = InterfaceSocket(
            name="Geo",
            identifier="Socket_0",
            socket_type="NodeSocketGeometry",
            flag=IN | OUT,
            description="geometry",
            properties={"min": 0},
        )

        copy = original.duplicate("Socket_9")

        assert copy.identifier == "Socket_9"
        assert (copy.name, copy.socket_type, copy.description) == ("Geo", "NodeSocketGeometry", "geometry")
        assert copy.properties == {"min": 0}
        assert copy.properties is not original.properties

    def test_validate_detects_duplicates(self) -> None:
        interface = TreeInterface()
        interface.root.items.extend([_socket("x"), _socket("x")])

        with pytest.raises(InterfaceError):
            interface.validate()
