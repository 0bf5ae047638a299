# src/igor/core/nodes/interface.py
"""Hierarchical node tree interface.

The interface declares a tree's externally visible ports as a tree of items:
sockets, and panels grouping further items. Group nodes map their sockets to
interface sockets by identifier, never by position, so reordering items is
always safe while changing an identifier is not.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

from igor.contracts.enums import InterfaceItemType, InterfacePanelFlag, InterfaceSocketFlag
from igor.contracts.errors import InterfaceError

ROOT_PANEL_IDENTIFIER = "root"


@dataclass(eq=False)
class InterfaceSocket:
    """Declaration of one interface port.

    Attributes:
        name: Display name
        identifier: Interface-unique identifier
        socket_type: Base socket type name (e.g., 'NodeSocketFloat')
        flag: Role (INPUT/OUTPUT) and display flags
        description: Tooltip text
        default_value: Default used by group nodes
        default_attribute_name: Attribute looked up when nothing is connected
        attribute_domain: Domain hint for attribute inputs
        properties: Type-specific settings (min/max/subtype, ...)
    """

    item_type: ClassVar[InterfaceItemType] = InterfaceItemType.SOCKET

    name: str
    identifier: str
    socket_type: str
    flag: InterfaceSocketFlag = InterfaceSocketFlag.NONE
    description: str = ""
    default_value: Any = None
    default_attribute_name: str = ""
    attribute_domain: str = "POINT"
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def is_input(self) -> bool:
        return bool(self.flag & InterfaceSocketFlag.INPUT)

    @property
    def is_output(self) -> bool:
        return bool(self.flag & InterfaceSocketFlag.OUTPUT)

    def duplicate(self, identifier: str) -> InterfaceSocket:
        """Copy every displayable attribute under a new identifier."""
        return replace(
            self,
            identifier=identifier,
            default_value=copy.deepcopy(self.default_value),
            properties=copy.deepcopy(self.properties),
        )

    def __repr__(self) -> str:
        return f"InterfaceSocket({self.identifier!r}, name={self.name!r}, {self.socket_type}, {self.flag!r})"


@dataclass(eq=False)
class InterfacePanel:
    """A named group of interface items."""

    item_type: ClassVar[InterfaceItemType] = InterfaceItemType.PANEL

    name: str
    identifier: str
    flag: InterfacePanelFlag = InterfacePanelFlag.NONE
    description: str = ""
    items: list[InterfaceItem] = field(default_factory=list)

    def find_valid_insert_position(self, item: InterfaceItem, initial_pos: int) -> int:
        """Closest position to ``initial_pos`` where ``item`` may be inserted.

        Unless the panel allows sockets after panels, its sockets must all
        precede its child panels: a panel snaps to after the last socket, a
        socket snaps to before the first panel. The result is clamped to
        ``[0, len(items)]``.
        """
        items = self.items
        pos = initial_pos
        if not self.flag & InterfacePanelFlag.ALLOW_SOCKETS_AFTER_PANELS:
            if isinstance(item, InterfacePanel):
                # Scan from the end, only panels may sit at or after the position
                for test_pos in range(len(items) - 1, max(initial_pos, 0) - 1, -1):
                    if not isinstance(items[test_pos], InterfacePanel):
                        pos = test_pos + 1
                        break
            else:
                # Scan from the start, no panel may sit before the position
                for test_pos in range(0, min(initial_pos, len(items) - 1) + 1):
                    if isinstance(items[test_pos], InterfacePanel):
                        pos = test_pos
                        break
        return min(max(pos, 0), len(items))

    def __repr__(self) -> str:
        return f"InterfacePanel({self.identifier!r}, name={self.name!r}, items={len(self.items)})"


type InterfaceItem = InterfaceSocket | InterfacePanel


class TreeInterface:
    """Interface item tree of one node tree.

    Identifiers minted here come from a monotonic counter, so an identifier
    freed by removing an item is never handed out again within this
    interface.
    """

    def __init__(self, root: InterfacePanel | None = None, *, next_uid: int = 0) -> None:
        self.root = root if root is not None else InterfacePanel(name="", identifier=ROOT_PANEL_IDENTIFIER)
        self.next_uid = next_uid

    @property
    def is_empty(self) -> bool:
        return not self.root.items

    def foreach_item(self, *, include_root: bool = False) -> Iterator[InterfaceItem]:
        """Depth-first, pre-order iteration over all items."""
        if include_root:
            yield self.root
        stack: list[Iterator[InterfaceItem]] = [iter(self.root.items)]
        while stack:
            item = next(stack[-1], None)
            if item is None:
                stack.pop()
                continue
            yield item
            if isinstance(item, InterfacePanel):
                stack.append(iter(item.items))

    def sockets(self) -> list[InterfaceSocket]:
        return [item for item in self.foreach_item() if isinstance(item, InterfaceSocket)]

    def panels(self) -> list[InterfacePanel]:
        return [item for item in self.foreach_item() if isinstance(item, InterfacePanel)]

    def identifiers(self) -> set[str]:
        return {item.identifier for item in self.foreach_item()}

    def find_item(self, identifier: str) -> InterfaceItem | None:
        for item in self.foreach_item():
            if item.identifier == identifier:
                return item
        return None

    def find_item_parent(self, item: InterfaceItem) -> InterfacePanel:
        """Panel that directly contains ``item``.

        Raises:
            InterfaceError: If the item is not part of this interface
        """
        for panel in (self.root, *self.panels()):
            if any(child is item for child in panel.items):
                return panel
        raise InterfaceError(f"Item {item.identifier!r} is not part of this interface")

    def find_item_position(self, item: InterfaceItem) -> int:
        """Index of ``item`` within its parent panel."""
        parent = self.find_item_parent(item)
        for index, child in enumerate(parent.items):
            if child is item:
                return index
        raise InterfaceError(f"Item {item.identifier!r} is not part of this interface")

    def mint_identifier(self, prefix: str = "Socket") -> str:
        """Allocate a fresh identifier from the monotonic counter."""
        used = self.identifiers()
        while True:
            candidate = f"{prefix}_{self.next_uid}"
            self.next_uid += 1
            if candidate not in used:
                return candidate

    def insert_item(self, item: InterfaceItem, parent: InterfacePanel, position: int) -> int:
        """Insert ``item`` into ``parent`` as close to ``position`` as layout rules allow.

        Returns:
            The position the item was actually inserted at

        Raises:
            InterfaceError: If the identifier is already used
        """
        if item.identifier in self.identifiers():
            raise InterfaceError(f"Interface identifier {item.identifier!r} is already used")
        if isinstance(item, InterfacePanel) and parent is not self.root and not parent.flag & InterfacePanelFlag.ALLOW_CHILD_PANELS:
            raise InterfaceError(f"Panel {parent.identifier!r} does not allow child panels")
        pos = parent.find_valid_insert_position(item, position)
        parent.items.insert(pos, item)
        return pos

    def add_socket(
        self,
        name: str,
        socket_type: str,
        flag: InterfaceSocketFlag,
        *,
        parent: InterfacePanel | None = None,
        identifier: str | None = None,
        **attributes: Any,
    ) -> InterfaceSocket:
        """Append a new socket to ``parent`` (root by default)."""
        parent = parent if parent is not None else self.root
        socket = InterfaceSocket(
            name=name,
            identifier=identifier if identifier is not None else self.mint_identifier("Socket"),
            socket_type=socket_type,
            flag=flag,
            **attributes,
        )
        self.insert_item(socket, parent, len(parent.items))
        return socket

    def add_panel(
        self,
        name: str,
        *,
        parent: InterfacePanel | None = None,
        flag: InterfacePanelFlag = InterfacePanelFlag.NONE,
        identifier: str | None = None,
    ) -> InterfacePanel:
        """Append a new panel to ``parent`` (root by default)."""
        parent = parent if parent is not None else self.root
        panel = InterfacePanel(
            name=name,
            identifier=identifier if identifier is not None else self.mint_identifier("Panel"),
            flag=flag,
        )
        self.insert_item(panel, parent, len(parent.items))
        return panel

    def remove_item(self, item: InterfaceItem) -> None:
        parent = self.find_item_parent(item)
        parent.items.pop(self.find_item_position(item))

    def validate(self) -> None:
        """Check identifier uniqueness.

        Raises:
            InterfaceError: If two items share an identifier
        """
        seen: set[str] = set()
        for item in self.foreach_item():
            if item.identifier in seen:
                raise InterfaceError(f"Interface identifier {item.identifier!r} appears more than once")
            seen.add(item.identifier)
