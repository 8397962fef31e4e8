"""Test counts and coverage proportions.

OutcomeCounter reports raw test counts for a result category.
RequirementsProportionCounter turns counts into proportions of a blended
denominator: the tests actually recorded plus an estimate of the tests that
untested requirements will eventually need. Proportions are therefore an
estimate of progress, not an exact measure.
"""

from dataclasses import dataclass

from reqcov.coverage._models import ResultCategory, TestResult
from reqcov.coverage._pool import TestOutcomes

__all__ = ["OutcomeCounter", "RequirementsProportionCounter"]


@dataclass(frozen=True, slots=True)
class OutcomeCounter:
    """Test counts by result, restricted to a category.

    Attributes:
        category: The category the counter is restricted to.
        test_outcomes: Tests in scope before the category filter.
    """

    category: ResultCategory
    test_outcomes: TestOutcomes

    @property
    def total(self) -> int:
        """Number of tests in the category."""
        return self.test_outcomes.count(self.category)

    def with_result(self, result: TestResult) -> int:
        """Number of tests in the category with a given result."""
        if not self.category.matches(result):
            return 0
        return sum(1 for outcome in self.test_outcomes if outcome.result is result)

    @property
    def passing(self) -> int:
        return self.with_result(TestResult.SUCCESS)

    @property
    def failing(self) -> int:
        return self.with_result(TestResult.FAILURE)

    @property
    def errors(self) -> int:
        return self.with_result(TestResult.ERROR)

    @property
    def pending(self) -> int:
        return self.with_result(TestResult.PENDING)

    @property
    def compromised(self) -> int:
        return self.with_result(TestResult.COMPROMISED)

    @property
    def ignored(self) -> int:
        return self.with_result(TestResult.IGNORED)

    @property
    def skipped(self) -> int:
        return self.with_result(TestResult.SKIPPED)


@dataclass(frozen=True, slots=True)
class RequirementsProportionCounter:
    """Coverage proportions over implemented plus estimated tests.

    Every proportion is a float in [0, 1]. When nothing is implemented and
    nothing is estimated every proportion is 0.0.

    Attributes:
        category: Result category measured by `value`.
        test_outcomes: Tests actually recorded in scope.
        estimated_unimplemented_tests: Heuristic count of tests still missing.
    """

    category: ResultCategory
    test_outcomes: TestOutcomes
    estimated_unimplemented_tests: int

    @property
    def is_estimate(self) -> bool:
        """Whether the denominator includes estimated, unwritten tests."""
        return self.estimated_unimplemented_tests > 0

    @property
    def total_estimated_and_implemented_tests(self) -> int:
        return self.test_outcomes.total + self.estimated_unimplemented_tests

    def _proportion(self, count: int) -> float:
        denominator = self.total_estimated_and_implemented_tests
        if denominator == 0:
            return 0.0
        return count / denominator

    @property
    def value(self) -> float:
        """Proportion of tests in this counter's category."""
        return self._proportion(self.test_outcomes.count(self.category))

    def of_result(self, result: TestResult) -> float:
        return self._proportion(self.test_outcomes.count(result))

    @property
    def passing(self) -> float:
        return self.of_result(TestResult.SUCCESS)

    @property
    def failing(self) -> float:
        return self.of_result(TestResult.FAILURE)

    @property
    def error(self) -> float:
        return self.of_result(TestResult.ERROR)

    @property
    def pending(self) -> float:
        return self.of_result(TestResult.PENDING)

    @property
    def compromised(self) -> float:
        return self.of_result(TestResult.COMPROMISED)

    @property
    def ignored(self) -> float:
        return self.of_result(TestResult.IGNORED)

    @property
    def skipped(self) -> float:
        return self.of_result(TestResult.SKIPPED)

    @property
    def not_implemented(self) -> float:
        """Proportion of the denominator made up of estimated tests."""
        return self._proportion(self.estimated_unimplemented_tests)
