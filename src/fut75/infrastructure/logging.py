"""Logging configuration.

structlog on top of the standard library: modules log key-value events
through ``structlog.get_logger(__name__)`` and this module decides where
they go.  Logs are written to stderr so CLI output stays clean.
"""

import logging
import os
import sys

import structlog


def get_log_level(verbose: bool = False) -> str:
    """DEBUG when asked for, else ``LOG_LEVEL`` (default WARNING)."""
    if verbose:
        return "DEBUG"
    return os.getenv("LOG_LEVEL", "WARNING").upper()


def setup_stdlib_logging(level: str) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    root_logger.addHandler(handler)


def setup_structlog() -> None:
    env = os.getenv("ENVIRONMENT", "development").lower()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if env == "production":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(verbose: bool = False) -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging(get_log_level(verbose))
    setup_structlog()
