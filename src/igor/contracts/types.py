"""Semantic type aliases for compile-time type safety.

NewType creates distinct types that mypy treats as incompatible,
preventing accidental misuse of semantically different string values.
"""

from typing import NewType

NodeID = NewType("NodeID", str)
"""Stable node identifier within one node tree (e.g., 'node_0007')"""

SocketID = NewType("SocketID", str)
"""Stable socket identifier within one node tree (e.g., 'sock_0031')"""

LinkID = NewType("LinkID", str)
"""Stable link identifier within one node tree (e.g., 'link_0012')"""

BlockName = NewType("BlockName", str)
"""Unique name of a migration block (e.g., 'split_dual_role_interface_sockets')"""
