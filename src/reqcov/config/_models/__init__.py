"""Configuration models.

This module provides Pydantic models for reqcov configuration sections
and the main Config container class.
"""

from reqcov.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from reqcov.config._models._config import Config
from reqcov.config._models._coverage import (
    DEFAULT_TESTS_PER_REQUIREMENT,
    CoverageConfiguration,
)
from reqcov.config._models._logging import LoggingConfig

__all__ = [
    "DEFAULT_TESTS_PER_REQUIREMENT",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "CoverageConfiguration",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
]
