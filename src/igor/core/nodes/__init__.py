# src/igor/core/nodes/__init__.py
"""Node trees: nodes, sockets, links, templates and the interface item tree."""

from igor.core.nodes.graph import NodeTree
from igor.core.nodes.interface import (
    InterfaceItem,
    InterfacePanel,
    InterfaceSocket,
    TreeInterface,
)
from igor.core.nodes.models import LegacySocket, Link, Node, Socket, SocketValue
from igor.core.nodes.templates import (
    GROUP_NODE_IDNAMES,
    REROUTE_IDNAME,
    NodeTemplate,
    SocketTemplate,
    get_template,
    has_template,
    register_template,
)

__all__ = [
    "GROUP_NODE_IDNAMES",
    "REROUTE_IDNAME",
    "InterfaceItem",
    "InterfacePanel",
    "InterfaceSocket",
    "LegacySocket",
    "Link",
    "Node",
    "NodeTemplate",
    "NodeTree",
    "Socket",
    "SocketTemplate",
    "SocketValue",
    "TreeInterface",
    "get_template",
    "has_template",
    "register_template",
]
