"""Structured logging: structlog processor pipeline + stdlib bridge.

After configure_logging():
- structlog.get_logger() → structured JSON/console output
- logging.getLogger()  → ALSO structured (uvicorn's loggers included)

Logs go to stderr; stdout is reserved for output documents.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

# Level names accepted in config; "warn" and "warning" are both valid
_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_log_level(name: str) -> int:
    """Map a config level name to a stdlib logging level.

    Raises:
        ValueError: If the name is not a known level.
    """
    try:
        return _LEVELS[name.strip().lower()]
    except KeyError:
        expected = ", ".join(sorted(_LEVELS))
        msg = f"unknown log_level {name!r} (expected one of: {expected})"
        raise ValueError(msg) from None


def configure_logging(
    *,
    json_output: bool = True,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Install a structlog formatter on a fresh root handler."""
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    target = stream if stream is not None else sys.stderr
    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=target.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
