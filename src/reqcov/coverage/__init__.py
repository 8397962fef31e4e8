"""Hierarchical requirement coverage.

This package aggregates executed test results over a tree of requirements:
per-requirement outcomes, flattened coverage sets, cached requirement counts,
estimated coverage proportions and views filtered by requirement type or
release.

Classes:
    RequirementsOutcomes: Coverage aggregate over a list of requirements.
    RequirementOutcome: One requirement with its tests and estimates.
    TestOutcomes: Pool of executed tests, scoped per requirement.
    CoverageContext: Settings and collaborators shared by derived views.
    ReleaseManager: Default release tagging collaborator.
    RequirementTreeProvider: Parent lookup over an in-memory tree.

Models:
    Requirement, TestOutcome, TestTag, Release, TestResult, ResultCategory.

Example:
    >>> from reqcov.coverage import RequirementsOutcomes, TestOutcomes
    >>> coverage = RequirementsOutcomes.build(requirements, TestOutcomes.of(tests))
    >>> coverage.requirements_without_tests_count()
    1
    >>> coverage.proportion.passing
    0.4
"""

from reqcov.coverage._aggregate import DEFAULT_REQUIREMENT_TYPE, RequirementsOutcomes
from reqcov.coverage._aggregator import (
    build_requirement_outcomes,
    requirement_outcome_for,
)
from reqcov.coverage._cache import CoverageMetric, MetricCache
from reqcov.coverage._context import CoverageContext
from reqcov.coverage._counters import OutcomeCounter, RequirementsProportionCounter
from reqcov.coverage._models import (
    Release,
    Requirement,
    ResultCategory,
    TestOutcome,
    TestResult,
    TestTag,
    overall_result,
)
from reqcov.coverage._outcome import RequirementOutcome
from reqcov.coverage._pool import TestOutcomes
from reqcov.coverage._providers import (
    ParentRequirementProvider,
    RequirementTreeProvider,
    parent_requirement_of,
)
from reqcov.coverage._releases import ReleaseManager, ReleaseTagger

__all__ = [
    "DEFAULT_REQUIREMENT_TYPE",
    "CoverageContext",
    "CoverageMetric",
    "MetricCache",
    "OutcomeCounter",
    "ParentRequirementProvider",
    "Release",
    "ReleaseManager",
    "ReleaseTagger",
    "Requirement",
    "RequirementOutcome",
    "RequirementTreeProvider",
    "RequirementsOutcomes",
    "RequirementsProportionCounter",
    "ResultCategory",
    "TestOutcome",
    "TestOutcomes",
    "TestResult",
    "TestTag",
    "build_requirement_outcomes",
    "overall_result",
    "parent_requirement_of",
    "requirement_outcome_for",
]
