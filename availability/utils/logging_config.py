"""Logging configuration.

Engine modules log through ``get_logger(__name__)`` and emit key-value
events such as ``task_scheduled`` or ``goal_sessions_selected``. Nothing
is configured on import; an application calls ``setup_logging()`` once.

Environment:
    AVAILABILITY_LOG_LEVEL   DEBUG, INFO (default), WARNING, ...
    AVAILABILITY_LOG_FORMAT  ``json`` for JSON lines, console otherwise
"""

import logging
import os
import sys
from typing import IO, List, Optional

import structlog

LOG_LEVEL_ENV = 'AVAILABILITY_LOG_LEVEL'
LOG_FORMAT_ENV = 'AVAILABILITY_LOG_FORMAT'


def _resolve_level(level: Optional[str]) -> int:
    name = level or os.environ.get(LOG_LEVEL_ENV, 'INFO')
    return getattr(logging, name.upper(), logging.INFO)


def _wants_json(json_output: Optional[bool]) -> bool:
    if json_output is not None:
        return json_output
    return os.environ.get(LOG_FORMAT_ENV, '').lower() == 'json'


def _pre_chain() -> List:
    """Processors shared by engine events and plain stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
    ]


def setup_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
    stream: Optional[IO] = None,
) -> None:
    """Route structlog events through one root handler.

    Args:
        level: Level name; falls back to AVAILABILITY_LOG_LEVEL.
        json_output: JSON lines instead of console output; falls back to
            AVAILABILITY_LOG_FORMAT.
        stream: Destination, stderr by default.
    """
    if _wants_json(json_output):
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=_pre_chain() + [
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    ))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))


def get_logger(name: Optional[str] = None):
    """Module logger, e.g. ``get_logger(__name__)``."""
    return structlog.get_logger(name)
