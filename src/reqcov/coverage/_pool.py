"""Pool of executed test outcomes.

The pool answers which recorded tests belong to a requirement. A test belongs
to a requirement when it exercises the requirement itself or any of its
descendants, so the subset for a parent always contains the subsets of its
children.
"""

from collections.abc import Iterable, Iterator
from typing import Final, Self

from reqcov.coverage._models import (
    Requirement,
    ResultCategory,
    TestOutcome,
    TestResult,
    overall_result,
)

__all__ = ["TestOutcomes"]


class TestOutcomes:
    """Immutable, de-duplicated collection of test outcomes.

    Outcomes keep their first-seen order. Two pools are equal when they hold
    the same set of outcomes, whatever the order.
    """

    __slots__: Final = ("_hash", "_outcomes")

    _outcomes: tuple[TestOutcome, ...]
    _hash: int | None

    def __init__(self, outcomes: Iterable[TestOutcome] = ()) -> None:
        self._outcomes = tuple(dict.fromkeys(outcomes))
        self._hash = None

    @classmethod
    def of(cls, outcomes: Iterable[TestOutcome]) -> Self:
        """Create a pool from an explicit list of outcomes."""
        return cls(outcomes)

    @property
    def outcomes(self) -> tuple[TestOutcome, ...]:
        return self._outcomes

    @property
    def total(self) -> int:
        """Number of distinct tests in the pool."""
        return len(self._outcomes)

    @property
    def result(self) -> TestResult:
        """Rolled-up result of every test in the pool."""
        return overall_result(outcome.result for outcome in self._outcomes)

    def for_requirement(self, requirement: Requirement) -> "TestOutcomes":
        """Return the tests that exercise a requirement or its descendants.

        Args:
            requirement: Requirement to scope the pool to.

        Returns:
            A new, possibly empty, pool preserving this pool's order.
        """
        targets = (requirement, *requirement.nested_children)
        return TestOutcomes(
            outcome
            for outcome in self._outcomes
            if any(outcome.belongs_to(target) for target in targets)
        )

    def with_result(
        self, category: ResultCategory | TestResult | str
    ) -> "TestOutcomes":
        """Return the tests whose result falls into a category.

        Raises:
            InvalidArgumentError: If category is an unknown name.
        """
        resolved = ResultCategory.parse(category)
        return TestOutcomes(o for o in self._outcomes if resolved.matches(o.result))

    def count(self, category: ResultCategory | TestResult | str) -> int:
        """Count the tests whose result falls into a category.

        Raises:
            InvalidArgumentError: If category is an unknown name.
        """
        return self.with_result(category).total

    def for_release(self, release_name: str) -> "TestOutcomes":
        """Return the tests tagged with a release version."""
        return TestOutcomes(o for o in self._outcomes if release_name in o.versions)

    def __iter__(self) -> Iterator[TestOutcome]:
        return iter(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def __bool__(self) -> bool:
        return bool(self._outcomes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TestOutcomes):
            return NotImplemented
        return len(self._outcomes) == len(other._outcomes) and set(
            self._outcomes
        ) == set(other._outcomes)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._outcomes))
        return self._hash

    def __repr__(self) -> str:
        return f"TestOutcomes(total={self.total}, result={self.result.value})"
