"""reqcov configuration.

This module provides the public API for reqcov configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from reqcov.config import Config
    >>> config = Config.load()
    >>> config.coverage.estimated_tests_per_requirement
    4
"""

from reqcov.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._loader import deep_merge, parse_env_vars, read_toml_file, set_nested_key
from ._models import (
    DEFAULT_TESTS_PER_REQUIREMENT,
    Config,
    ConfigSource,
    ConfigSourceName,
    CoverageConfiguration,
    LogFormat,
    LoggingConfig,
    LogLevel,
)
from ._validation import ValidationIssue, raise_if_validation_errors, validate_config

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_TESTS_PER_REQUIREMENT",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "CoverageConfiguration",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ValidationIssue",
    "deep_merge",
    "parse_env_vars",
    "raise_if_validation_errors",
    "read_toml_file",
    "set_nested_key",
    "validate_config",
]
