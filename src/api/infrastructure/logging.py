"""Structlog setup for the Rent Tracker API.

The API logs only through its domain probes (startup, database, tenant
resolution and document repository). This module decides how those
events are rendered: a colored console in a terminal or when FORCE_COLOR
is set, one JSON object per line everywhere else. Every event carries the
service name and version so that lines from several deployments can be
told apart. RENTTRACKER_DEBUG lowers the threshold from INFO to DEBUG,
which is where per-record repository events are emitted.
"""

import logging
import os
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from infrastructure.version import __version__

SERVICE_NAME = "renttracker-api"


def _add_service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def _use_colors() -> bool:
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def configure_logging(debug: bool = False) -> None:
    """Configure structlog for the probes.

    Args:
        debug: Emit debug-level events (otherwise INFO and above)
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if _use_colors():
        processors: list[Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
