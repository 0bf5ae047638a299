"""All kinds, roles, states and flags used across subsystem boundaries.

String-valued enums match the values the deserializer writes into entity
fields, so comparisons against loader data work without conversion.
"""

from enum import IntFlag, StrEnum


class EntityKind(StrEnum):
    """Kind of a top-level entity collection in a document."""

    SCENE = "scene"
    MATERIAL = "material"
    OBJECT = "object"
    LIGHT = "light"
    WORLD = "world"
    LIGHT_PROBE = "light_probe"
    GREASE_PENCIL = "grease_pencil"
    NODE_TREE = "node_tree"


class NodeTreeType(StrEnum):
    """Domain of a node tree."""

    SHADER = "shader"
    GEOMETRY = "geometry"
    COMPOSITOR = "compositor"
    TEXTURE = "texture"
    CUSTOM = "custom"


class SocketDirection(StrEnum):
    """Which list of a node a socket belongs to."""

    INPUT = "input"
    OUTPUT = "output"


class SocketType(StrEnum):
    """Data type carried by a node socket."""

    FLOAT = "float"
    INT = "int"
    BOOLEAN = "boolean"
    VECTOR = "vector"
    RGBA = "rgba"
    STRING = "string"
    SHADER = "shader"
    OBJECT = "object"
    IMAGE = "image"
    GEOMETRY = "geometry"
    ROTATION = "rotation"
    MATRIX = "matrix"
    CUSTOM = "custom"


class InterfaceItemType(StrEnum):
    """Kind of an item in a node tree interface."""

    SOCKET = "socket"
    PANEL = "panel"


class InterfaceSocketFlag(IntFlag):
    """Role and display flags of an interface socket.

    INPUT and OUTPUT are independent bits. Files written by early 4.0 builds
    can carry both on the same item; those are split during migration.
    """

    NONE = 0
    INPUT = 1 << 0
    OUTPUT = 1 << 1
    HIDE_VALUE = 1 << 2
    HIDE_IN_MODIFIER = 1 << 3
    COMPACT = 1 << 4
    SINGLE_VALUE_ONLY = 1 << 5


class InterfacePanelFlag(IntFlag):
    """Layout flags of an interface panel."""

    NONE = 0
    DEFAULT_CLOSED = 1 << 0
    ALLOW_CHILD_PANELS = 1 << 1
    ALLOW_SOCKETS_AFTER_PANELS = 1 << 2


class AlphaState(StrEnum):
    """Classification of the transparency reaching a material output.

    Values:
        OPAQUE: Alpha is 1 everywhere
        FULLY_TRANSPARENT: Alpha is 0 everywhere
        SEMI_TRANSPARENT: Alpha is driven by a single scalar socket
        COMPLEX: More than one blending decision, cannot be collapsed
    """

    OPAQUE = "opaque"
    FULLY_TRANSPARENT = "fully_transparent"
    SEMI_TRANSPARENT = "semi_transparent"
    COMPLEX = "complex"


class ReportLevel(StrEnum):
    """Severity of a migration report entry shown to the user."""

    INFO = "info"
    WARNING = "warning"


class MigrationPhase(StrEnum):
    """When a migration block runs relative to library linking.

    READ blocks see each document in isolation. AFTER_LINKING blocks run
    once every document finished its READ phase, so cross-document
    references are resolved.
    """

    READ = "read"
    AFTER_LINKING = "after_linking"


class BlendMethod(StrEnum):
    """Legacy discrete material blend mode."""

    OPAQUE = "OPAQUE"
    CLIP = "CLIP"
    HASHED = "HASHED"
    BLEND = "BLEND"


class BlendShadow(StrEnum):
    """Legacy discrete material shadow mode."""

    NONE = "NONE"
    SOLID = "OPAQUE"
    CLIP = "CLIP"
    HASHED = "HASHED"


class RenderEngine(StrEnum):
    """Render engine identifiers stored on scenes."""

    EEVEE = "BLENDER_EEVEE"
    EEVEE_NEXT = "BLENDER_EEVEE_NEXT"
    CYCLES = "CYCLES"
    WORKBENCH = "BLENDER_WORKBENCH"
