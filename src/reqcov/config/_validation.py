# pyright: reportAny=false, reportExplicitAny=false, reportUnknownArgumentType=false, reportUnknownMemberType=false, reportUnknownVariableType=false
"""Configuration validation using Pydantic schemas.

This module validates merged reqcov configuration dictionaries against the
frozen Pydantic models from _models/.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from reqcov.config._models._coverage import CoverageConfiguration
from reqcov.config._models._logging import LoggingConfig
from reqcov.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Represents a configuration validation issue.

    Attributes:
        key: Dotted path to the configuration key (e.g., "logging.level").
        message: Human-readable description of the issue.
        expected: Description of expected value or type, if available.
        actual: The actual value that caused the issue.
        source: Name of the source where the issue was found, or None.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    source: str | None


class ConfigSchema(BaseModel):
    """Pydantic schema for root configuration (lenient mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    coverage: CoverageConfiguration = CoverageConfiguration()
    logging: LoggingConfig = LoggingConfig()


def _pydantic_error_to_issue(
    error: "ErrorDetails",
    source: str | None,
) -> ValidationIssue:
    """Convert a Pydantic error dict to a ValidationIssue."""
    key = ".".join(str(part) for part in error.get("loc", ()))
    message = str(error.get("msg", "Validation error"))

    ctx = error.get("ctx")
    expected: str | None = None
    if ctx is not None:
        if "expected" in ctx:
            expected = str(ctx["expected"])
        elif "ge" in ctx:
            expected = f">= {ctx['ge']}"

    return ValidationIssue(
        key=key,
        message=message,
        expected=expected,
        actual=error.get("input"),
        source=source,
    )


def validate_config(
    config: dict[str, Any],
    *,
    source: str | None = None,
) -> list[ValidationIssue]:
    """Validate a merged configuration dictionary.

    Args:
        config: The configuration dictionary to validate.
        source: Optional source name attached to every issue.

    Returns:
        List of ValidationIssue objects. Empty list indicates valid config.
    """
    try:
        _ = ConfigSchema.model_validate(config)
    except ValidationError as e:
        return [_pydantic_error_to_issue(err, source=source) for err in e.errors()]
    else:
        return []


def raise_if_validation_errors(
    issues: list[ValidationIssue],
    source: str | None = None,
) -> None:
    """Raise ConfigValidationError for the first issue.

    Raises:
        ConfigValidationError: If there is any issue.
    """
    if issues:
        issue = issues[0]
        msg = f"Invalid configuration value for '{issue.key}'"
        raise ConfigValidationError(
            msg,
            key=issue.key,
            value=issue.actual,
            expected=issue.expected or issue.message,
            source=source or issue.source,
        )
