# tests/conftest.py
"""Shared fixtures and Hypothesis profiles.

Profiles (select with HYPOTHESIS_PROFILE, default "ci"):
- ci: 100 examples, no deadline
- nightly: 1000 examples
- debug: 10 examples, verbose

    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import logging
import os
from collections.abc import Iterator

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from igor.contracts.reports import ReportList
from igor.core.config import MigrationSettings
from igor.core.document import Document
from igor.core.events import EventBus
from igor.engine.context import MigrationContext
from igor.engine.registry import MigrationRegistry
from igor.plugins.manager import MigrationPluginManager
from igor.testing import make_document

# =============================================================================
# Hypothesis Configuration
# =============================================================================

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

# Tree building times vary a lot between machines, so no profile has a deadline
settings.register_profile("ci", max_examples=100, phases=_PHASES, deadline=None)
settings.register_profile("nightly", max_examples=1000, phases=_PHASES, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose, phases=_PHASES, deadline=None)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo any configure_logging() call a test made."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def document() -> Document:
    """An empty document written by 4.0.0."""
    return make_document()


@pytest.fixture
def reports() -> ReportList:
    return ReportList()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def ctx(document: Document, reports: ReportList, event_bus: EventBus) -> MigrationContext:
    """Migration context over the ``document`` fixture."""
    return MigrationContext.for_document(document, reports, settings=MigrationSettings(), event_bus=event_bus)


@pytest.fixture
def builtin_registry() -> MigrationRegistry:
    """Registry holding every built-in versioning block."""
    manager = MigrationPluginManager()
    manager.register_builtin_migrations()
    return manager.build_registry()
