"""
structlog setup for the monitor: JSON lines for log collectors, readable
console output when stderr is a terminal.
"""
from __future__ import annotations

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger, Processor


def _output_processors(json_output: bool) -> list[Processor]:
    if json_output:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer(ensure_ascii=False)]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def setup_logging(level: str = "info", json_output: bool | None = None) -> None:
    """Configure structlog once at startup.

    json_output defaults to True unless stderr is a TTY.
    """
    if json_output is None:
        json_output = not sys.stderr.isatty()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.dev.set_exc_info,
            *_output_processors(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> FilteringBoundLogger:
    return structlog.get_logger(component=component)
