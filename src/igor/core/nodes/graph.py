# src/igor/core/nodes/graph.py
"""NodeTree class: the node-graph rewriter.

Wraps a NetworkX MultiDiGraph keyed by node ID with one edge per link (edge
key = link ID). Nodes own their sockets and the tree owns its nodes; links
and interface items hold ID references resolved through the tree.

Every primitive keeps the tree well-formed: after any sequence of calls,
each link's endpoints resolve to existing sockets on existing nodes. Socket
type compatibility across a link is NOT enforced.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable
from typing import Any, cast

import networkx as nx
from networkx import MultiDiGraph

from igor.contracts.enums import EntityKind, NodeTreeType, SocketDirection, SocketType
from igor.contracts.errors import GraphIntegrityError
from igor.contracts.types import LinkID, NodeID, SocketID
from igor.core.document import Entity
from igor.core.nodes.interface import TreeInterface
from igor.core.nodes.models import LegacySocket, Link, Node, Socket, SocketValue
from igor.core.nodes.templates import get_template, has_template


class NodeTree(Entity):
    """A node tree entity.

    Trees are either top-level entities of a document (node groups) or
    embedded in an owning entity (a material's shader tree, a scene's
    compositor tree).
    """

    def __init__(
        self,
        name: str,
        tree_type: NodeTreeType = NodeTreeType.SHADER,
        *,
        library: str | None = None,
        fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(name=name, kind=EntityKind.NODE_TREE, fields=fields or {}, library=library)
        self.tree_type = tree_type
        self.interface = TreeInterface()
        self.inputs_legacy: list[LegacySocket] = []
        self.outputs_legacy: list[LegacySocket] = []
        self._graph: MultiDiGraph[str] = nx.MultiDiGraph()
        self._sockets: dict[SocketID, Socket] = {}
        self._links: dict[LinkID, Link] = {}
        self._incoming: dict[SocketID, LinkID] = {}
        self._node_ids = itertools.count()
        self._socket_ids = itertools.count()
        self._link_ids = itertools.count()

    # -- Queries -----------------------------------------------------------

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def link_count(self) -> int:
        return self._graph.number_of_edges()

    @property
    def nodes(self) -> list[Node]:
        """Nodes in insertion order."""
        return [cast(Node, data["node"]) for _, data in self._graph.nodes(data=True)]

    @property
    def links(self) -> list[Link]:
        """Links in insertion order."""
        return list(self._links.values())

    def get_nx_graph(self) -> MultiDiGraph[str]:
        """Return a frozen copy of the node-level topology."""
        return nx.freeze(self._graph.copy())  # type: ignore[no-any-return]

    def has_node(self, node: Node) -> bool:
        return self._graph.has_node(node.id) and self._graph.nodes[node.id]["node"] is node

    def node(self, node_id: NodeID) -> Node:
        """Get a node by ID.

        Raises:
            KeyError: If node doesn't exist
        """
        if not self._graph.has_node(node_id):
            raise KeyError(f"Node not found: {node_id}")
        return cast(Node, self._graph.nodes[node_id]["node"])

    def socket(self, socket_id: SocketID) -> Socket:
        """Get a socket by ID.

        Raises:
            KeyError: If socket doesn't exist
        """
        return self._sockets[socket_id]

    def node_of(self, socket: Socket) -> Node:
        return self.node(socket.node_id)

    def find_nodes(self, *idnames: str) -> list[Node]:
        wanted = set(idnames)
        return [node for node in self.nodes if node.idname in wanted]

    def incoming_link(self, socket: Socket) -> Link | None:
        """The link feeding an input socket, if any."""
        link_id = self._incoming.get(socket.id)
        return None if link_id is None else self._links[link_id]

    def is_linked(self, socket: Socket) -> bool:
        if socket.is_input:
            return socket.id in self._incoming
        return any(link.from_socket == socket.id for link in self._links.values())

    def links_from(self, socket: Socket) -> list[Link]:
        return [link for link in self._links.values() if link.from_socket == socket.id]

    def link_endpoints(self, link: Link) -> tuple[Socket, Socket]:
        return self._sockets[link.from_socket], self._sockets[link.to_socket]

    # -- Nodes -------------------------------------------------------------

    def add_node(self, idname: str, *, name: str | None = None, default_sockets: bool = True) -> Node:
        """Create a node with the default sockets of its type.

        Types without a registered template (or ``default_sockets=False``)
        start without sockets; callers add them with add_socket().
        """
        template = get_template(idname) if has_template(idname) else None
        node = Node(
            id=NodeID(f"node_{next(self._node_ids)}"),
            idname=idname,
            name=self._unique_node_name(name or (template.label if template else idname)),
        )
        if template is not None:
            node.width = template.width
            node.properties.update(template.properties)
            if default_sockets:
                for direction, templates in ((SocketDirection.INPUT, template.inputs), (SocketDirection.OUTPUT, template.outputs)):
                    for st in templates:
                        self.add_socket(node, direction, st.socket_type, st.name, identifier=st.key, default_value=st.default)
        self._graph.add_node(node.id, node=node)
        return node

    def remove_node(self, node: Node) -> None:
        """Remove a node together with every link touching its sockets."""
        self._require_node(node)
        for socket in [*node.inputs, *node.outputs]:
            self._remove_socket_links(socket)
            del self._sockets[socket.id]
        for other in self.nodes:
            if other.parent == node.id:
                other.parent = None
        self._graph.remove_node(node.id)

    def _unique_node_name(self, base: str) -> str:
        taken = {node.name for node in self.nodes}
        if base not in taken:
            return base
        for suffix in itertools.count(1):
            candidate = f"{base}.{suffix:03d}"
            if candidate not in taken:
                return candidate
        raise AssertionError("unreachable")

    def _require_node(self, node: Node) -> None:
        if not self.has_node(node):
            raise GraphIntegrityError(f"Node {node.name!r} is not part of tree {self.name!r}")

    # -- Sockets -----------------------------------------------------------

    def add_socket(
        self,
        node: Node,
        direction: SocketDirection,
        socket_type: SocketType,
        name: str,
        *,
        identifier: str | None = None,
        default_value: SocketValue = None,
    ) -> Socket:
        """Append a socket to the input or output list of ``node``."""
        self._require_node(node)
        socket = Socket(
            id=SocketID(f"socket_{next(self._socket_ids)}"),
            node_id=node.id,
            direction=direction,
            socket_type=socket_type,
            name=name,
            identifier=identifier if identifier is not None else name,
            default_value=default_value,
        )
        node.sockets(direction).append(socket)
        self._sockets[socket.id] = socket
        return socket

    def remove_socket(self, socket: Socket) -> None:
        """Remove a socket together with any link attached to it."""
        self._require_socket(socket)
        self._remove_socket_links(socket)
        self.node_of(socket).sockets(socket.direction).remove(socket)
        del self._sockets[socket.id]

    def change_socket_type(self, socket: Socket, socket_type: SocketType, default_value: SocketValue = None) -> None:
        """Retype a socket in place; links stay attached."""
        self._require_socket(socket)
        socket.socket_type = socket_type
        socket.default_value = default_value

    def rename_socket(self, socket: Socket, name: str) -> None:
        """Rename a socket; the identifier follows the display name."""
        self._require_socket(socket)
        socket.name = name
        socket.identifier = name

    def _remove_socket_links(self, socket: Socket) -> None:
        for link in [link for link in self._links.values() if socket.id in (link.from_socket, link.to_socket)]:
            self.remove_link(link)

    def _require_socket(self, socket: Socket) -> None:
        if self._sockets.get(socket.id) is not socket:
            raise GraphIntegrityError(f"Socket {socket.identifier!r} is not part of tree {self.name!r}")

    # -- Links -------------------------------------------------------------

    def add_link(self, from_socket: Socket, to_socket: Socket) -> Link:
        """Connect an output socket to an input socket.

        An input accepts at most one link: an existing link into
        ``to_socket`` is removed first.

        Raises:
            GraphIntegrityError: If either socket is foreign or the direction is wrong
        """
        self._require_socket(from_socket)
        self._require_socket(to_socket)
        if from_socket.is_input or not to_socket.is_input:
            raise GraphIntegrityError(
                f"Links run from an output to an input, got {from_socket.direction} {from_socket.identifier!r} "
                f"-> {to_socket.direction} {to_socket.identifier!r}"
            )
        existing = self.incoming_link(to_socket)
        if existing is not None:
            self.remove_link(existing)
        link = Link(
            id=LinkID(f"link_{next(self._link_ids)}"),
            from_node=from_socket.node_id,
            from_socket=from_socket.id,
            to_node=to_socket.node_id,
            to_socket=to_socket.id,
        )
        self._links[link.id] = link
        self._incoming[to_socket.id] = link.id
        # Link ID as key allows several links between the same node pair
        self._graph.add_edge(link.from_node, link.to_node, key=link.id, link=link)
        return link

    def remove_link(self, link: Link) -> None:
        if self._links.get(link.id) is not link:
            raise GraphIntegrityError(f"Link {link.id} is not part of tree {self.name!r}")
        del self._links[link.id]
        del self._incoming[link.to_socket]
        self._graph.remove_edge(link.from_node, link.to_node, key=link.id)

    def relink_from(self, link: Link, from_socket: Socket) -> Link:
        """Replace ``link`` by one from ``from_socket`` into the same input."""
        to_socket = self._sockets[link.to_socket]
        self.remove_link(link)
        return self.add_link(from_socket, to_socket)

    # -- Validation --------------------------------------------------------

    def validate(self) -> None:
        """Check that every link endpoint resolves.

        Raises:
            GraphIntegrityError: If a link references a missing node or socket
        """
        for link in self._links.values():
            for node_id, socket_id in ((link.from_node, link.from_socket), (link.to_node, link.to_socket)):
                if not self._graph.has_node(node_id):
                    raise GraphIntegrityError(f"Link {link.id} references missing node {node_id}")
                socket = self._sockets.get(socket_id)
                if socket is None or socket.node_id != node_id:
                    raise GraphIntegrityError(f"Link {link.id} references missing socket {socket_id}")
                if socket not in self.node(node_id).sockets(socket.direction):
                    raise GraphIntegrityError(f"Socket {socket_id} is not owned by node {node_id}")
        if len(self._incoming) != len(self._links):
            raise GraphIntegrityError(f"Tree {self.name!r} has inputs with more than one incoming link")
        self.interface.validate()

    def group_trees(self) -> Iterable[NodeTree]:
        """Trees referenced by group nodes of this tree."""
        for node in self.nodes:
            if node.group_tree is not None:
                yield node.group_tree

    def __repr__(self) -> str:
        return f"NodeTree({self.name!r}, {self.tree_type}, nodes={self.node_count}, links={self.link_count})"
