"""
campusnav.core.logging_setup - Structured Logging Setup
=========================================================

Modules log through ``structlog.get_logger()`` and bind a ``component``
field per class. This module wires structlog onto the stdlib root logger
once per process so that uvicorn's own records and ours share a handler and
a level.

Level precedence:
    1. explicit ``level`` argument
    2. CAMPUSNAV_LOG_LEVEL environment variable
    3. INFO
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import structlog


_configured = False


def configure_logging(level: Optional[str] = None, fmt: str = "console") -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call more than once; only the first call has an effect.

    Args:
        level: Level name such as "DEBUG" or "info". Unknown names fall back
            to INFO.
        fmt: "console" for coloured key/value lines, "json" for one JSON
            object per line.
    """
    global _configured
    if _configured:
        return

    level_name = (level or os.environ.get("CAMPUSNAV_LOG_LEVEL") or "INFO").upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    renderer: structlog.types.Processor
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    _configured = True
