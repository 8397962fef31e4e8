# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing reqcov configuration values.
"""

from pathlib import Path
from typing import Any, ClassVar, Self, TypeVar, overload

import tomli_w
from pydantic import BaseModel, ConfigDict, PrivateAttr

from reqcov.config._defaults import DEFAULT_CONFIG
from reqcov.config._loader import copy_value, deep_merge, parse_env_vars, read_toml_file
from reqcov.config._models._common import ConfigSource, ConfigSourceName
from reqcov.config._models._coverage import CoverageConfiguration
from reqcov.config._models._logging import LoggingConfig

T = TypeVar("T")


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to reqcov configuration.
    Use factory methods to create instances rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _coverage: CoverageConfiguration = PrivateAttr(
        default_factory=CoverageConfiguration
    )
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
        _coverage: CoverageConfiguration | None = None,
        _logging: LoggingConfig | None = None,
    ) -> None:
        """Initialize configuration container.

        This constructor is intended for internal use. Use factory methods
        like from_dict(), from_file(), or load() to create Config instances.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
            _coverage: Parsed coverage configuration section.
            _logging: Parsed logging configuration section.
        """
        super().__init__()
        self._data = _data if _data is not None else copy_value(DEFAULT_CONFIG)
        self._sources = _sources
        self._coverage = _coverage if _coverage is not None else CoverageConfiguration()
        self._logging = _logging if _logging is not None else LoggingConfig()

    @classmethod
    def _from_merged(
        cls,
        merged: dict[str, Any],
        sources: tuple[ConfigSource, ...],
        *,
        validate: bool,
        source: str | None = None,
    ) -> Self:
        # Deferred import to avoid circular dependency
        from reqcov.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        if validate:
            issues = validate_config(merged)
            raise_if_validation_errors(issues, source=source)

        return cls(
            _data=merged,
            _sources=sources,
            _coverage=CoverageConfiguration.model_validate(merged.get("coverage", {})),
            _logging=LoggingConfig.model_validate(merged.get("logging", {})),
        )

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        validate: bool = True,
    ) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values.
            validate: Whether to validate the configuration.

        Returns:
            Configuration object from the dictionary.

        Raises:
            ConfigValidationError: If validation fails.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls._from_merged(merged, (), validate=validate)

    @classmethod
    def from_file(
        cls,
        path: Path,
        *,
        validate: bool = True,
    ) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.
            validate: Whether to validate the loaded config.

        Returns:
            Configuration object from the specified file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.FILE, path=path, exists=True, values=data
        )
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls._from_merged(merged, (source,), validate=validate, source=str(path))

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_env: bool = True,
    ) -> Self:
        """Load merged configuration from all sources.

        Merges sources in precedence order (defaults -> file -> env). A missing
        config_path is skipped rather than treated as an error.

        Args:
            config_path: Optional TOML config file.
            include_env: Include REQCOV_* environment variables as a source.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If the config file cannot be parsed.
            ConfigValidationError: If merged config fails validation.
        """
        sources: list[ConfigSource] = [
            ConfigSource(
                name=ConfigSourceName.DEFAULT,
                path=None,
                exists=True,
                values=copy_value(DEFAULT_CONFIG),
            )
        ]

        if config_path is not None:
            exists = config_path.is_file()
            sources.append(
                ConfigSource(
                    name=ConfigSourceName.FILE,
                    path=config_path,
                    exists=exists,
                    values=read_toml_file(config_path) if exists else {},
                )
            )

        if include_env:
            env_values = parse_env_vars()
            sources.append(
                ConfigSource(
                    name=ConfigSourceName.ENV,
                    path=None,
                    exists=bool(env_values),
                    values=env_values,
                )
            )

        merged: dict[str, Any] = {}
        for source in sources:
            if source.values:
                merged = deep_merge(merged, source.values)

        # Sources are collected lowest-to-highest, expose highest first
        return cls._from_merged(merged, tuple(reversed(sources)), validate=True)

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration."""
        return list(self._sources)

    @property
    def coverage(self) -> CoverageConfiguration:
        """Return the coverage configuration section."""
        return self._coverage

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("coverage.estimated_tests_per_requirement")
            4
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the merged configuration data."""
        return copy_value(self._data)

    def to_toml(self) -> str:
        """Convert configuration to a TOML string."""
        return tomli_w.dumps(self.to_dict())
