"""Utility helpers for reqcov."""

from ._logging import (
    LogFormatType,
    create_logger,
    create_logger_from_config,
    default_logger,
)

__all__ = [
    "LogFormatType",
    "create_logger",
    "create_logger_from_config",
    "default_logger",
]
