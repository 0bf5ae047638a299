"""Progress events for hosts watching a migration.

The runner emits the dataclasses from igor.contracts.events here as blocks
apply, fail or skip entities. A host can drive a progress view from them.
Reports are still what the user gets shown at the end of a load; events are
for live observation only.
"""

from collections import defaultdict
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

E = TypeVar("E")


class EventBusProtocol(Protocol):
    """What the runner needs from a bus; EventBus and NullEventBus both fit."""

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None: ...

    def emit(self, event: E) -> None: ...


class EventBus:
    """Synchronous dispatch keyed on the exact event class.

    Handlers run in the order they subscribed, on the runner's thread, and
    an exception from a handler propagates out of the migration.

    Example:
        bus = EventBus()
        bus.subscribe(EntitySkipped, lambda e: skipped.append(e.entity_name))
        migrate_documents(documents, event_bus=bus)
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        self._handlers[event_type].append(handler)

    def emit(self, event: E) -> None:
        # .get so emitting never registers an empty handler list
        for handler in self._handlers.get(type(event), ()):
            handler(event)


class NullEventBus:
    """Bus used when the host passes none. Subscriptions are dropped."""

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        return None

    def emit(self, event: E) -> None:
        return None
