"""
Structured logging configuration using structlog.

Library modules log structlog events into stdlib loggers under the
``eml_multipart`` namespace. That namespace carries only a NullHandler, so a
plain library call writes nothing; applications decide where events go, and
the CLI does so through ``setup_logging()``.
"""

import logging
import sys

import structlog

from .config import settings

PACKAGE_LOGGER = "eml_multipart"
_HANDLER_NAME = "eml_multipart.stderr"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def setup_logging() -> None:
    """
    Configure structlog for structured JSON logging on stderr.

    Sets up processors for:
    - Context variable merging
    - Log level addition
    - Exception info rendering
    - Timestamp addition
    - JSON or console rendering based on settings

    Rendered events are written by a stderr handler on the package logger,
    filtered at ``settings.log_level``. Calling this again replaces the handler.
    """
    level = logging.getLevelName(settings.log_level.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if settings.log_json
                else structlog.dev.ConsoleRenderer(colors=False)
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a logger instance with the given name.

    The returned logger always writes to the stdlib logger ``name``,
    whatever structlog's global logger factory is.

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog BoundLogger instance
    """
    return structlog.wrap_logger(logging.getLogger(name))
