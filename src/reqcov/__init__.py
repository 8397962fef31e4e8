"""reqcov: hierarchical test coverage statistics for requirement trees."""

from reqcov.config import Config, CoverageConfiguration
from reqcov.coverage import (
    CoverageContext,
    Release,
    Requirement,
    RequirementOutcome,
    RequirementsOutcomes,
    ResultCategory,
    TestOutcome,
    TestOutcomes,
    TestResult,
    TestTag,
)
from reqcov.exceptions import InvalidArgumentError, ReqcovError

__all__ = [
    "Config",
    "CoverageConfiguration",
    "CoverageContext",
    "InvalidArgumentError",
    "Release",
    "ReqcovError",
    "Requirement",
    "RequirementOutcome",
    "RequirementsOutcomes",
    "ResultCategory",
    "TestOutcome",
    "TestOutcomes",
    "TestResult",
    "TestTag",
]
