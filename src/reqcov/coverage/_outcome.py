"""Per-requirement coverage outcome.

A RequirementOutcome pairs one requirement with the tests that belong to it
and the estimate of tests still missing in its subtree. Status predicates
combine the requirement's own rolled-up result with those of its children,
each child being scoped to this outcome's tests.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from reqcov.config import CoverageConfiguration
from reqcov.coverage._models import Requirement, TestResult
from reqcov.coverage._pool import TestOutcomes

__all__ = ["RequirementOutcome"]


@dataclass(frozen=True, slots=True)
class RequirementOutcome:
    """Aggregate of one requirement and the tests recorded against it.

    Equality and hashing cover the requirement and the set of tests only, so
    the same requirement reached through different traversals collapses to a
    single outcome.

    Attributes:
        requirement: The requirement this outcome describes.
        test_outcomes: Tests exercising the requirement or its descendants.
        requirements_without_tests: Requirements in this subtree (self
            included) with no tests.
        estimated_unimplemented_tests: requirements_without_tests multiplied
            by the estimated tests per requirement.
    """

    requirement: Requirement
    test_outcomes: TestOutcomes
    requirements_without_tests: int = field(default=0, compare=False)
    estimated_unimplemented_tests: int = field(default=0, compare=False)

    @property
    def test_count(self) -> int:
        return self.test_outcomes.total

    @property
    def result(self) -> TestResult:
        """Rolled-up result of this requirement's own tests."""
        return self.test_outcomes.result

    @property
    def flattened_requirement_count(self) -> int:
        """Number of requirements in this subtree, self included."""
        return 1 + len(self.requirement.nested_children)

    @property
    def release_versions(self) -> set[str]:
        """Union of the release versions of every test in the outcome."""
        versions: set[str] = set()
        for outcome in self.test_outcomes:
            versions.update(outcome.versions)
        return versions

    # -------------------------------------------------------------------------
    # Status predicates
    # -------------------------------------------------------------------------

    def _child_outcomes(self) -> list["RequirementOutcome"]:
        return [
            RequirementOutcome(child, self.test_outcomes.for_requirement(child))
            for child in self.requirement.children
        ]

    def _result_or_any_child(
        self,
        result: TestResult,
        predicate: Callable[["RequirementOutcome"], bool],
    ) -> bool:
        if self.result is result:
            return True
        return any(predicate(child) for child in self._child_outcomes())

    @property
    def is_complete(self) -> bool:
        """All tests pass and every child requirement is complete."""
        if self.result is not TestResult.SUCCESS:
            return False
        return all(child.is_complete for child in self._child_outcomes())

    @property
    def is_failure(self) -> bool:
        return self._result_or_any_child(TestResult.FAILURE, lambda o: o.is_failure)

    @property
    def is_error(self) -> bool:
        return self._result_or_any_child(TestResult.ERROR, lambda o: o.is_error)

    @property
    def is_compromised(self) -> bool:
        return self._result_or_any_child(
            TestResult.COMPROMISED, lambda o: o.is_compromised
        )

    @property
    def is_pending(self) -> bool:
        return self._result_or_any_child(TestResult.PENDING, lambda o: o.is_pending)

    @property
    def is_ignored(self) -> bool:
        return self.result is TestResult.IGNORED

    def tests_requirement(self, requirement: Requirement) -> bool:
        """Check whether a requirement is this outcome's or a descendant."""
        return (
            requirement == self.requirement
            or requirement in self.requirement.nested_children
        )

    # -------------------------------------------------------------------------
    # Pruning
    # -------------------------------------------------------------------------

    def without_unrelated_requirements(
        self, settings: CoverageConfiguration
    ) -> "RequirementOutcome":
        """Return a copy whose requirement tree omits untested excluded types.

        A child is removed when it has no tests in this outcome and its type
        is listed in settings.excluded_unrelated_requirement_types. Surviving
        children are pruned by the same rule, recursively.
        """
        return RequirementOutcome(
            self._pruned(self.requirement, settings),
            self.test_outcomes,
            self.requirements_without_tests,
            self.estimated_unimplemented_tests,
        )

    def _pruned(
        self, requirement: Requirement, settings: CoverageConfiguration
    ) -> Requirement:
        kept = [
            self._pruned(child, settings)
            for child in requirement.children
            if not self._is_unrelated(child, settings)
        ]
        return requirement.with_children(kept)

    def _is_unrelated(
        self, requirement: Requirement, settings: CoverageConfiguration
    ) -> bool:
        return (
            settings.excludes_untested_requirement_of_type(requirement.req_type)
            and self.test_outcomes.for_requirement(requirement).total == 0
        )
