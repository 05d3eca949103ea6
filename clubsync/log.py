import logging
import sys

import structlog

from clubsync.config import settings


def configure_logging(level: str | None = None) -> int:
    """(Re)configure structlog. Returns the numeric level in effect.

    Events go to stderr so scripts can write CSV or JSON to stdout. DEBUG
    renders for a terminal; anything else is one JSON object per line.
    """
    name = (level or settings.log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer()
            if numeric <= logging.DEBUG
            else structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        cache_logger_on_first_use=False,
    )
    return numeric


configure_logging()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
