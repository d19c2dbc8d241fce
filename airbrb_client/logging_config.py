from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping

import structlog
from structlog.processors import CallsiteParameter

from airbrb_client.config import DEBUG, LOG_LEVEL

Processor = Callable[[Any, str, MutableMapping[str, Any]], Any]

QUIET_LOGGERS = ("urllib3", "requests", "sqlalchemy.engine", "alembic", "uvicorn.access")


def _renderer_chain() -> list[Processor]:
    """
    Final processors: colored console output when debugging, JSON otherwise.

    JSON output needs tracebacks flattened into the event; the console
    renderer formats ``exc_info`` itself.
    """
    if DEBUG:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def setup_logging() -> None:
    """
    Configure stdlib logging and structlog for the whole process.

    Events are tagged with the emitting thread so lines from the
    reconciliation thread can be told apart from request handlers.
    """
    logging.basicConfig(
        format="[%(asctime)s] %(levelname)s %(threadName)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        level=LOG_LEVEL,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder([CallsiteParameter.THREAD_NAME]),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        *_renderer_chain(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(LOG_LEVEL)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
