"""reqcov exceptions."""

from pathlib import Path
from typing import Any


class ReqcovError(Exception):
    """Base exception for reqcov errors."""


class InvalidArgumentError(ReqcovError, ValueError):
    """Raised when a caller passes a value the engine cannot interpret.

    Attributes:
        argument: Name of the offending argument.
        value: The rejected value.
        expected: Description of the accepted values.
    """

    def __init__(
        self,
        message: str,
        *,
        argument: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and argument context."""
        super().__init__(message)
        self.argument: str = argument
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(ReqcovError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
