"""Logging setup for the fsguard loggers."""

from __future__ import annotations

import logging

import structlog
from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

LOGGER_NAMES = ("fsguard", "fsguard_core")


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Render stdlib log records as one JSON object per line."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def configure_logging(level: str = "info", fmt: str = "text") -> None:
    """Attach a single handler to the fsguard loggers.

    ``text`` renders through Rich on stderr; ``json`` emits JSON lines.
    Calling this again replaces the previously installed handler.
    """
    if level not in _LEVELS:
        raise ValueError(f"Unknown log level {level!r}: expected one of {sorted(_LEVELS)}")

    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(json_formatter())
    elif fmt == "text":
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    else:
        raise ValueError(f"Unknown log format {fmt!r}: expected 'text' or 'json'")

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
        logger.addHandler(handler)
        logger.setLevel(_LEVELS[level])
