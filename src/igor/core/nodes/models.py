# src/igor/core/nodes/models.py
"""Nodes, sockets and links of a node tree.

Leaf module: no intra-package imports besides contracts (prevents import
cycles between graph.py and templates.py).

Sockets and nodes are addressed by stable string IDs. A Link stores only
endpoint IDs; it is resolved through the owning NodeTree, never through
object references, so a removed socket cannot be reached through a stale
link.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from igor.contracts.enums import SocketDirection, SocketType
from igor.contracts.types import LinkID, NodeID, SocketID

if TYPE_CHECKING:
    from igor.core.document import Entity
    from igor.core.nodes.graph import NodeTree


# Stored default of an unconnected socket:
# - float/int/boolean sockets: a scalar
# - vector/rotation sockets: a 3-tuple
# - rgba sockets: a 4-tuple
# - string sockets: a str
# - shader/geometry/object/image sockets: None (or an entity reference)
type SocketValue = Any


@dataclass(eq=False)
class Socket:
    """A typed connection point owned by exactly one node.

    Attributes:
        id: Tree-unique socket ID
        node_id: Owning node
        direction: INPUT or OUTPUT
        socket_type: Data type carried by the socket
        name: Display name
        identifier: Lookup key, stable across renames of the display name
        default_value: Value used when the input is not connected
        available: False when the node's current mode hides the socket
    """

    id: SocketID
    node_id: NodeID
    direction: SocketDirection
    socket_type: SocketType
    name: str
    identifier: str
    default_value: SocketValue = None
    available: bool = True

    @property
    def is_input(self) -> bool:
        return self.direction == SocketDirection.INPUT

    def __repr__(self) -> str:
        return f"Socket({self.id}, {self.direction}:{self.identifier!r}, {self.socket_type})"


@dataclass(eq=False)
class Node:
    """A typed node with ordered input and output socket lists.

    Attributes:
        id: Tree-unique node ID
        idname: Node type (e.g., 'ShaderNodeMixShader')
        name: Tree-unique display name
        inputs: Input sockets in display order
        outputs: Output sockets in display order
        properties: Per-type settings (operation, distribution, domain, ...)
        location: Editor location (x, y)
        width: Editor width
        parent: Frame node the node sits in, if any
        hidden: Collapsed in the editor
        group_tree: Referenced (not owned) tree for group nodes
        entity_ref: Referenced entity (e.g., the scene of a render layer node)
    """

    id: NodeID
    idname: str
    name: str
    inputs: list[Socket] = field(default_factory=list)
    outputs: list[Socket] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)
    location: tuple[float, float] = (0.0, 0.0)
    width: float = 140.0
    parent: NodeID | None = None
    hidden: bool = False
    group_tree: NodeTree | None = None
    entity_ref: Entity | None = None

    def find_input(self, identifier: str) -> Socket | None:
        for socket in self.inputs:
            if socket.identifier == identifier:
                return socket
        return None

    def find_output(self, identifier: str) -> Socket | None:
        for socket in self.outputs:
            if socket.identifier == identifier:
                return socket
        return None

    def sockets(self, direction: SocketDirection) -> list[Socket]:
        return self.inputs if direction == SocketDirection.INPUT else self.outputs

    def __repr__(self) -> str:
        return f"Node({self.id}, {self.idname}, name={self.name!r})"


@dataclass(frozen=True, slots=True)
class Link:
    """A directed edge from an output socket to an input socket."""

    id: LinkID
    from_node: NodeID
    from_socket: SocketID
    to_node: NodeID
    to_socket: SocketID


@dataclass
class LegacySocket:
    """Entry of the flat interface socket lists written before 4.0.

    ``idname`` is the full socket type name including subtype
    (e.g., 'NodeSocketFloatFactor'); the hierarchical interface stores the
    base type only.

    Attributes:
        name: Display name
        identifier: Stable identifier referenced by group node sockets
        idname: Socket type name including subtype
        description: Tooltip text
        hide_value: Value hidden on group nodes
        hide_in_modifier: Socket hidden in the modifier panel
        attribute_domain: Domain hint for attribute inputs
        default_attribute_name: Attribute name used when nothing is connected
        default_value: Stored default
        properties: Remaining type-specific settings (min/max/subtype, ...)
    """

    name: str
    identifier: str
    idname: str
    description: str = ""
    hide_value: bool = False
    hide_in_modifier: bool = False
    attribute_domain: str = "POINT"
    default_attribute_name: str = ""
    default_value: SocketValue = None
    properties: dict[str, Any] = field(default_factory=dict)
