"""Logging utilities for reqcov.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to stderr or a log file. Each logger is
self-contained and does not modify global structlog configuration.
"""

import logging
import sys
from functools import cache
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from reqcov.config import Config

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str | None) -> int:
    """Resolve the effective logging level.

    Precedence: REQCOV_DEBUG (forces DEBUG), then the `level` argument, then
    REQCOV_LOG_LEVEL, then INFO.

    Args:
        level: Optional log level string (debug, info, warning, error).

    Returns:
        The logging level as an integer.
    """
    if getenv("REQCOV_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    name = level if level is not None else getenv("REQCOV_LOG_LEVEL", "info")
    return log_levels.get(name.upper(), logging.INFO)


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "text",
    log_file: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger.

    Args:
        level: Optional log level string (debug, info, warning, error).
            Overrides REQCOV_LOG_LEVEL but not REQCOV_DEBUG.
        log_format: Output format, either "json" or "text".
        log_file: Path to a log file opened in append mode. Empty writes
            to stderr.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger_factory = structlog.WriteLoggerFactory(file=log_path.open("a"))
    else:
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(
                _log_level_from_string(level)
            ),
            context_class=dict,
        ),
    )


def create_logger_from_config(config: "Config") -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger from the logging section of a loaded Config."""
    return create_logger(
        level=config.logging.level.value,
        log_format=cast("LogFormatType", config.logging.format.value),
        log_file=config.logging.file,
    )


@cache
def default_logger() -> "FilteringBoundLogger":  # noqa: UP037
    """Return the process-wide stderr logger used when none is injected."""
    return create_logger().bind(component="reqcov")
