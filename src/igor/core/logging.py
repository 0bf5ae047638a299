# src/igor/core/logging.py
"""Structured logging for igor.

igor itself only obtains loggers. A host that wants igor's output formatted
calls configure_logging() once; stdlib records (pluggy, dynaconf) are routed
through the same structlog processor chain via ProcessorFormatter, so every
line comes out in one format.

While a block runs, the runner binds the document and block names into
structlog's context variables (see migration_log_context), so debug lines
emitted from inside a transform carry them without threading them through
every helper.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

from igor.core.config import LoggingSettings

# Dependencies that log plugin discovery and settings merging at DEBUG
_QUIET_LOGGERS = ("pluggy", "dynaconf")


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """ProcessorFormatter injects _record and _from_structlog into every event."""
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _renderer(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_bookkeeping,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [_drop_formatter_bookkeeping, structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog and stdlib logging to stdout in one format.

    Args:
        json_output: One JSON object per line instead of console rendering
        level: Root level name (DEBUG, INFO, WARNING, ERROR)
    """
    root_level = logging.getLevelNamesMapping()[level.upper()]
    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure between cases
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ProcessorFormatter(processors=_renderer(json_output), foreign_pre_chain=pre_chain))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(root_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))


def configure_from_settings(settings: LoggingSettings) -> None:
    """configure_logging() driven by the ``logging`` section of MigrationSettings."""
    configure_logging(json_output=settings.json_output, level=settings.level)


@contextmanager
def migration_log_context(document: str, block: str) -> Iterator[None]:
    """Bind ``document`` and ``block`` to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(document=document, block=block):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for an igor module (pass ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
