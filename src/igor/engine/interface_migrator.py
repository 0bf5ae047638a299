# src/igor/engine/interface_migrator.py
"""Socket interface migrator.

Files written before 4.0 store a node tree's external ports as two flat
lists (inputs and outputs). The current model stores one hierarchical tree
of interface items, each carrying its own role. This module converts the
former into the latter, then repairs what early 4.0 builds got wrong:
subtype-suffixed type labels and items flagged as both input and output.
"""

from __future__ import annotations

from igor.contracts.enums import InterfaceSocketFlag
from igor.core.logging import get_logger
from igor.core.nodes.graph import NodeTree
from igor.core.nodes.interface import InterfacePanel, InterfaceSocket, TreeInterface
from igor.core.nodes.models import LegacySocket

logger = get_logger(__name__)

_SUBTYPES: dict[str, tuple[str, ...]] = {
    "NodeSocketFloat": ("Unsigned", "Percentage", "Factor", "Angle", "Time", "TimeAbsolute", "Distance"),
    "NodeSocketInt": ("Unsigned", "Percentage", "Factor"),
    "NodeSocketVector": ("Translation", "Direction", "Velocity", "Acceleration", "Euler", "XYZ"),
}

# e.g. 'NodeSocketFloatFactor' -> 'NodeSocketFloat'
SOCKET_SUBTYPE_BASES: dict[str, str] = {base + suffix: base for base, suffixes in _SUBTYPES.items() for suffix in suffixes}


def socket_base_type(idname: str) -> str:
    """Strip a subtype suffix from a socket type name; other names pass through."""
    return SOCKET_SUBTYPE_BASES.get(idname, idname)


def _legacy_to_interface_socket(legacy: LegacySocket, role: InterfaceSocketFlag, interface: TreeInterface) -> InterfaceSocket:
    flag = role
    if legacy.hide_value:
        flag |= InterfaceSocketFlag.HIDE_VALUE
    if legacy.hide_in_modifier:
        flag |= InterfaceSocketFlag.HIDE_IN_MODIFIER

    identifier = legacy.identifier
    if identifier in interface.identifiers():
        # Inputs and outputs had separate identifier namespaces
        identifier = interface.mint_identifier("Socket")
        logger.debug(
            "legacy_socket_identifier_reminted",
            original=legacy.identifier,
            identifier=identifier,
        )

    return InterfaceSocket(
        name=legacy.name,
        identifier=identifier,
        socket_type=socket_base_type(legacy.idname),
        flag=flag,
        description=legacy.description,
        default_value=legacy.default_value,
        default_attribute_name=legacy.default_attribute_name,
        attribute_domain=legacy.attribute_domain,
        properties=dict(legacy.properties),
    )


def convert_legacy_socket_lists(tree: NodeTree) -> bool:
    """Move the flat legacy socket lists into the interface tree.

    Outputs are placed first, then inputs, each in original order. When the
    interface is already populated (a newer writer that also emitted the
    legacy lists for older readers) the legacy lists are discarded unused.
    The legacy lists are empty afterwards in every case.

    Returns:
        True when items were moved into the interface
    """
    if not tree.inputs_legacy and not tree.outputs_legacy:
        return False

    converted = False
    if tree.interface.is_empty:
        root = tree.interface.root
        for legacy in tree.outputs_legacy:
            root.items.append(_legacy_to_interface_socket(legacy, InterfaceSocketFlag.OUTPUT, tree.interface))
        for legacy in tree.inputs_legacy:
            root.items.append(_legacy_to_interface_socket(legacy, InterfaceSocketFlag.INPUT, tree.interface))
        converted = True

    tree.inputs_legacy.clear()
    tree.outputs_legacy.clear()
    return converted


def discard_legacy_socket_lists(tree: NodeTree) -> bool:
    """Drop legacy lists written for backward compatibility next to a populated interface."""
    if tree.interface.is_empty or not (tree.inputs_legacy or tree.outputs_legacy):
        return False
    tree.inputs_legacy.clear()
    tree.outputs_legacy.clear()
    return True


def fix_socket_subtype_idnames(tree: NodeTree) -> int:
    """Truncate subtype-suffixed socket type labels to their base type.

    Only the type label changes; stored defaults are left untouched.

    Returns:
        Number of interface sockets corrected
    """
    fixed = 0
    for socket in tree.interface.sockets():
        corrected = socket_base_type(socket.socket_type)
        if corrected != socket.socket_type:
            socket.socket_type = corrected
            fixed += 1
    return fixed


def _sort_key(item: InterfaceSocket | InterfacePanel) -> tuple[int, int]:
    if isinstance(item, InterfacePanel):
        return (1, 0)
    return (0, 0 if item.is_output else 1)


def sort_interface_items(panel: InterfacePanel) -> None:
    """Stable sort: sockets before panels, outputs before inputs, recursively.

    Purely cosmetic; group nodes reference items by identifier.
    """
    panel.items.sort(key=_sort_key)
    for item in panel.items:
        if isinstance(item, InterfacePanel):
            sort_interface_items(item)


def split_socket(interface: TreeInterface, socket: InterfaceSocket) -> InterfaceSocket:
    """Split a dual-role socket into an output-only original and an input-only copy.

    The copy gets a freshly minted identifier and is inserted right after
    the original, subject to the parent panel's layout constraint.

    Returns:
        The new input-only socket
    """
    parent = interface.find_item_parent(socket)
    position = interface.find_item_position(socket)
    duplicate = socket.duplicate(interface.mint_identifier("Socket"))
    interface.insert_item(duplicate, parent, position + 1)
    socket.flag &= ~InterfaceSocketFlag.INPUT
    duplicate.flag &= ~InterfaceSocketFlag.OUTPUT
    return duplicate


def split_dual_role_sockets(tree: NodeTree) -> list[InterfaceSocket]:
    """Split every interface socket flagged as both input and output.

    Returns:
        The newly created input-only sockets, in interface order
    """
    dual_role = [socket for socket in tree.interface.sockets() if socket.is_input and socket.is_output]
    return [split_socket(tree.interface, socket) for socket in dual_role]
