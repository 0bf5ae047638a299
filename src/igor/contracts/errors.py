"""Exception hierarchy for migration.

MigrationError subclasses describe recoverable domain failures: the runner
reports them against the block and document and carries on with the next
block. Anything that is not a MigrationError is a bug in igor and
propagates.
"""


class MigrationError(Exception):
    """Base class for recoverable migration failures."""


class GraphIntegrityError(MigrationError):
    """Raised when a node tree rewrite would break graph well-formedness.

    Examples: removing a node that is not part of the tree, linking an
    input socket as a link source, or a link whose endpoint vanished.
    """


class InterfaceError(MigrationError):
    """Raised when an interface item operation references an unknown item."""


class UnknownNodeTypeError(MigrationError):
    """Raised when a node template is requested for an unregistered idname."""

    def __init__(self, idname: str) -> None:
        self.idname = idname
        super().__init__(f"No node template registered for '{idname}'")


class RegistryError(MigrationError):
    """Raised when migration blocks are registered inconsistently.

    Duplicate block names, or range blocks whose lower bound is not below
    their guard, make the ordering ambiguous and are rejected up front.
    """


class SchemaSnapshotError(MigrationError):
    """Raised when the loader supplies a malformed schema snapshot."""
