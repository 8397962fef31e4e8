"""Coverage aggregate over a list of requirements.

RequirementsOutcomes is the object reporting layers query. It holds one
RequirementOutcome per distinct top-level requirement and the pool of tests
in scope, and derives counts, proportions and filtered views from them.
Instances never change after construction: filters return new aggregates,
each with its own metric cache.
"""

import threading
from collections.abc import Callable, Iterable
from typing import Final, Self

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
)
from reqcov.coverage._outcome import RequirementOutcome
from reqcov.coverage._pool import TestOutcomes
from reqcov.coverage._providers import parent_requirement_of

__all__ = ["RequirementsOutcomes"]

DEFAULT_REQUIREMENT_TYPE: Final = "requirement"


class RequirementsOutcomes:
    """Test results for a list of high-level requirements.

    Use build() to aggregate requirements against a pool of tests. The
    constructor wraps outcomes that have already been aggregated.

    Counting queries look at the top-level outcomes only and are cached per
    instance. Flattening expands every subtree into one outcome per
    requirement. of_type(), released_requirements_for() and
    without_unrelated_requirements() return new, independent aggregates.

    The requirement trees must be acyclic; nothing here detects cycles.
    """

    __slots__: Final = (
        "_cache",
        "_context",
        "_flattened",
        "_lock",
        "_of_type",
        "_parent_requirement",
        "_requirement_outcomes",
        "_test_outcomes",
    )

    _requirement_outcomes: tuple[RequirementOutcome, ...]
    _test_outcomes: TestOutcomes
    _parent_requirement: Requirement | None
    _context: CoverageContext
    _cache: MetricCache
    _lock: threading.Lock
    _flattened: tuple[RequirementOutcome, ...] | None
    _of_type: dict[str, "RequirementsOutcomes"]

    def __init__(
        self,
        requirement_outcomes: Iterable[RequirementOutcome],
        test_outcomes: TestOutcomes,
        *,
        parent_requirement: Requirement | None = None,
        context: CoverageContext | None = None,
    ) -> None:
        """Wrap already aggregated requirement outcomes.

        Outcomes for a requirement already seen are dropped, keeping the
        first.

        Args:
            requirement_outcomes: Outcomes of the top-level requirements.
            test_outcomes: Every test in scope for this aggregate.
            parent_requirement: Requirement these outcomes are children of.
            context: Settings and collaborators. Defaults to CoverageContext().
        """
        distinct: dict[Requirement, RequirementOutcome] = {}
        for outcome in requirement_outcomes:
            _ = distinct.setdefault(outcome.requirement, outcome)

        self._requirement_outcomes = tuple(distinct.values())
        self._test_outcomes = test_outcomes
        self._parent_requirement = parent_requirement
        self._context = context if context is not None else CoverageContext()
        self._cache = MetricCache()
        self._lock = threading.Lock()
        self._flattened = None
        self._of_type = {}

    @classmethod
    def build(
        cls,
        requirements: Iterable[Requirement],
        test_outcomes: TestOutcomes,
        *,
        parent_requirement: Requirement | None = None,
        context: CoverageContext | None = None,
    ) -> Self:
        """Aggregate requirements against a pool of tests.

        Args:
            requirements: Top-level requirements. Duplicates are ignored.
            test_outcomes: Every test in scope.
            parent_requirement: Requirement these requirements are children of.
            context: Settings and collaborators. Defaults to CoverageContext().

        Returns:
            A new aggregate with one outcome per distinct requirement.
        """
        context = context if context is not None else CoverageContext()
        outcomes = build_requirement_outcomes(
            requirements, test_outcomes, context.settings
        )
        context.log.debug(
            "requirements_outcomes_built",
            requirements=len(outcomes),
            tests=test_outcomes.total,
            parent=parent_requirement.path if parent_requirement else None,
        )
        return cls(
            outcomes,
            test_outcomes,
            parent_requirement=parent_requirement,
            context=context,
        )

    def _derive(
        self, requirements: Iterable[Requirement], test_outcomes: TestOutcomes
    ) -> "RequirementsOutcomes":
        return RequirementsOutcomes.build(
            requirements, test_outcomes, context=self._context
        ).without_unrelated_requirements()

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    @property
    def requirement_outcomes(self) -> tuple[RequirementOutcome, ...]:
        return self._requirement_outcomes

    @property
    def test_outcomes(self) -> TestOutcomes:
        return self._test_outcomes

    @property
    def context(self) -> CoverageContext:
        return self._context

    @property
    def parent_requirement(self) -> Requirement | None:
        return self._parent_requirement

    def grandparent_requirement(self) -> Requirement | None:
        """Resolve the parent of the parent requirement through the providers.

        Returns:
            None when there is no parent requirement, when the parent is a
            root, or when no provider knows the parent's parent.
        """
        parent = self._parent_requirement
        if parent is None or not parent.parent:
            return None
        return parent_requirement_of(self._context.parent_providers, parent)

    @property
    def requirement_count(self) -> int:
        """Number of top-level requirements."""
        return len(self._requirement_outcomes)

    @property
    def type(self) -> str:
        """Type of the first top-level requirement, or "requirement"."""
        if not self._requirement_outcomes:
            return DEFAULT_REQUIREMENT_TYPE
        return self._requirement_outcomes[0].requirement.req_type

    @property
    def children_type(self) -> str | None:
        """Type of the first child of the first top-level requirement with any."""
        for outcome in self._requirement_outcomes:
            if outcome.requirement.children:
                return outcome.requirement.children[0].req_type
        return None

    def types(self) -> list[str]:
        """Distinct requirement types across every tree, in tree order."""
        return list(
            dict.fromkeys(
                requirement.req_type for requirement in self._all_requirements()
            )
        )

    def total_requirements(self) -> int:
        """Number of requirements across every tree, all levels included."""
        return len(self._all_requirements())

    def _all_requirements(self) -> list[Requirement]:
        requirements: list[Requirement] = []
        for outcome in self._requirement_outcomes:
            requirements.append(outcome.requirement)
            requirements.extend(outcome.requirement.nested_children)
        return requirements

    def _top_level_requirements(self) -> list[Requirement]:
        return [outcome.requirement for outcome in self._requirement_outcomes]

    # -------------------------------------------------------------------------
    # Cached requirement counts
    # -------------------------------------------------------------------------

    def _cached(self, metric: CoverageMetric, compute: Callable[[], int]) -> int:
        def _compute_and_log() -> int:
            value = compute()
            self._context.log.debug(
                "coverage_metric_computed", metric=metric.value, value=value
            )
            return value

        return self._cache.get_or_compute(metric, _compute_and_log)

    def _count_outcomes(
        self,
        metric: CoverageMetric,
        predicate: Callable[[RequirementOutcome], bool],
    ) -> int:
        return self._cached(
            metric,
            lambda: sum(
                1 for outcome in self._requirement_outcomes if predicate(outcome)
            ),
        )

    def completed_requirements_count(self) -> int:
        return self._count_outcomes(
            CoverageMetric.COMPLETED_REQUIREMENTS, lambda o: o.is_complete
        )

    def error_requirements_count(self) -> int:
        return self._count_outcomes(
            CoverageMetric.ERROR_REQUIREMENTS, lambda o: o.is_error
        )

    def failing_requirements_count(self) -> int:
        return self._count_outcomes(
            CoverageMetric.FAILING_REQUIREMENTS, lambda o: o.is_failure
        )

    def pending_requirements_count(self) -> int:
        return self._count_outcomes(
            CoverageMetric.PENDING_REQUIREMENTS, lambda o: o.is_pending
        )

    def compromised_requirements_count(self) -> int:
        return self._count_outcomes(
            CoverageMetric.COMPROMISED_REQUIREMENTS, lambda o: o.is_compromised
        )

    def ignored_requirements_count(self) -> int:
        return self._count_outcomes(
            CoverageMetric.IGNORED_REQUIREMENTS, lambda o: o.is_ignored
        )

    def unsuccessful_requirements_count(self) -> int:
        """Requirements with errors, failures or compromised tests."""
        return (
            self.error_requirements_count()
            + self.failing_requirements_count()
            + self.compromised_requirements_count()
        )

    def requirements_without_tests_count(self) -> int:
        """Top-level requirements with no recorded test that are not pending."""
        return self._cached(
            CoverageMetric.REQUIREMENTS_WITHOUT_TESTS,
            lambda: sum(
                1
                for requirement in self._top_level_requirements()
                if not self._tests_recorded_for(requirement)
                and not self._is_pending(requirement)
            ),
        )

    def _tests_recorded_for(self, requirement: Requirement) -> bool:
        return any(
            outcome.tests_requirement(requirement) and outcome.test_count > 0
            for outcome in self._requirement_outcomes
        )

    def _is_pending(self, requirement: Requirement) -> bool:
        return any(
            outcome.requirement == requirement and outcome.is_pending
            for outcome in self._requirement_outcomes
        )

    def flattened_requirement_count(self) -> int:
        """Sum of the subtree sizes of the top-level requirements."""
        return self._cached(
            CoverageMetric.FLATTENED_REQUIREMENTS,
            lambda: sum(
                outcome.flattened_requirement_count
                for outcome in self._requirement_outcomes
            ),
        )

    # -------------------------------------------------------------------------
    # Test counts and proportions
    # -------------------------------------------------------------------------

    @property
    def estimated_tests_per_requirement(self) -> int:
        return self._context.settings.estimated_tests_per_requirement

    def total_test_count(self) -> int:
        """Number of distinct tests in scope."""
        return self._test_outcomes.total

    def estimated_unimplemented_tests(self) -> int:
        """Tests assumed missing for top-level requirements without tests."""
        without_tests = self.requirements_without_tests_count()
        return without_tests * self.estimated_tests_per_requirement

    def count(
        self, category: ResultCategory | TestResult | str = ResultCategory.ANY
    ) -> OutcomeCounter:
        """Count the tests in scope by result.

        Args:
            category: Result category or its name (case-insensitive).

        Raises:
            InvalidArgumentError: If category is an unknown name.
        """
        return OutcomeCounter(ResultCategory.parse(category), self._test_outcomes)

    @property
    def total(self) -> OutcomeCounter:
        return self.count(ResultCategory.ANY)

    def proportion_of(
        self, category: ResultCategory | TestResult | str = ResultCategory.ANY
    ) -> RequirementsProportionCounter:
        """Coverage proportions over implemented plus estimated tests.

        The denominator adds estimated_unimplemented_tests() to the recorded
        tests, so the result is an estimate whenever some requirement has no
        tests yet.

        Args:
            category: Result category measured by the counter's value.

        Raises:
            InvalidArgumentError: If category is an unknown name.
        """
        return RequirementsProportionCounter(
            ResultCategory.parse(category),
            self._test_outcomes,
            self.estimated_unimplemented_tests(),
        )

    @property
    def proportion(self) -> RequirementsProportionCounter:
        return self.proportion_of(ResultCategory.ANY)

    # -------------------------------------------------------------------------
    # Flattening
    # -------------------------------------------------------------------------

    @property
    def flattened_requirement_outcomes(self) -> tuple[RequirementOutcome, ...]:
        """One outcome per requirement reachable from the top-level list.

        Untested requirements of excluded types are left out at every level,
        including the top one.
        """
        with self._lock:
            if self._flattened is not None:
                return self._flattened

        flattened = tuple(self.flatten(self._pruned(self._requirement_outcomes)))

        with self._lock:
            if self._flattened is None:
                self._flattened = flattened
            return self._flattened

    def flatten(
        self, outcomes: Iterable[RequirementOutcome]
    ) -> list[RequirementOutcome]:
        """Expand outcomes into every outcome reachable through their children.

        Each child is aggregated against its parent's tests rather than the
        whole pool, so views that were already filtered stay consistent. The
        result holds each outcome once; flattening it again returns the same
        set. Nested levels run on the calling thread.

        Args:
            outcomes: Outcomes to expand.

        Returns:
            Distinct outcomes in discovery order.
        """
        settings = self._context.settings
        flattened: dict[RequirementOutcome, None] = {}

        for outcome in outcomes:
            _ = flattened.setdefault(outcome)
            for child in outcome.requirement.children:
                child_outcome = requirement_outcome_for(
                    child, outcome.test_outcomes, settings
                )
                _ = flattened.setdefault(child_outcome)

                # Nested levels are aggregated inline, without a worker pool
                nested = RequirementsOutcomes(
                    (
                        requirement_outcome_for(
                            grandchild, child_outcome.test_outcomes, settings
                        )
                        for grandchild in child.children
                    ),
                    child_outcome.test_outcomes,
                    parent_requirement=child,
                    context=self._context,
                ).without_unrelated_requirements()
                for nested_outcome in self.flatten(nested.requirement_outcomes):
                    _ = flattened.setdefault(nested_outcome)

        return list(flattened)

    # -------------------------------------------------------------------------
    # Filtered views
    # -------------------------------------------------------------------------

    def of_type(self, req_type: str) -> "RequirementsOutcomes":
        """Aggregate only the requirements of one type (case-insensitive).

        The new aggregate's test pool is the union of the matching outcomes'
        tests.
        """
        wanted = req_type.casefold()
        matching_requirements: list[Requirement] = []
        matching_tests: list[TestOutcome] = []

        for outcome in self.flattened_requirement_outcomes:
            if outcome.requirement.req_type.casefold() == wanted:
                matching_requirements.append(outcome.requirement)
                matching_tests.extend(outcome.test_outcomes)

        return self._derive(matching_requirements, TestOutcomes.of(matching_tests))

    def requirements_of_type(self, req_type: str) -> "RequirementsOutcomes":
        """Memoized of_type(), one entry per type for this instance."""
        key = req_type.casefold()
        with self._lock:
            if key in self._of_type:
                return self._of_type[key]

        view = self.of_type(req_type)

        with self._lock:
            return self._of_type.setdefault(key, view)

    def released_requirements_for(self, release: Release) -> "RequirementsOutcomes":
        """Aggregate only the requirements and tests of one release.

        Tests are first tagged with their release versions by the context's
        release tagger. Requirements without a test in the release are
        dropped, together with their subtrees.
        """
        tagger = self._context.tagger
        enriched = tagger.enrich_requirement_outcomes_with_release_tags(
            self._requirement_outcomes
        )
        self._context.log.debug("release_tags_enriched", outcomes=len(enriched))

        matching_requirements: dict[Requirement, None] = {}
        matching_tests: dict[TestOutcome, None] = {}

        for outcome in enriched:
            if release.name not in outcome.release_versions:
                continue
            _ = tagger.enrich_outcomes_with_release_tags(outcome.test_outcomes.outcomes)
            release_tests = outcome.test_outcomes.for_release(release.name)
            if release_tests:
                matching_tests.update(dict.fromkeys(release_tests))
                _ = matching_requirements.setdefault(outcome.requirement)

        tests = TestOutcomes.of(matching_tests)
        requirements = _with_tested_children(matching_requirements, tests)
        self._context.log.debug(
            "released_requirements_selected",
            release=release.name,
            requirements=len(requirements),
            tests=tests.total,
        )
        return self._derive(requirements, tests)

    def should_prune(self, outcome: RequirementOutcome) -> bool:
        """Whether an outcome is untested and of an excluded requirement type."""
        return (
            outcome.test_count == 0
            and self._context.settings.excludes_untested_requirement_of_type(
                outcome.requirement.req_type
            )
        )

    def without_unrelated_requirements(self) -> "RequirementsOutcomes":
        """Drop untested requirements of excluded types at every level.

        Returns this instance unchanged when no type is excluded.
        """
        if not self._context.settings.excludes_unrelated_requirements:
            return self

        pruned = self._pruned(self._requirement_outcomes)
        self._context.log.debug(
            "unrelated_requirements_pruned",
            before=len(self._requirement_outcomes),
            after=len(pruned),
        )
        return RequirementsOutcomes(
            pruned,
            self._test_outcomes,
            parent_requirement=self._parent_requirement,
            context=self._context,
        )

    def _pruned(
        self, outcomes: Iterable[RequirementOutcome]
    ) -> list[RequirementOutcome]:
        settings = self._context.settings
        if not settings.excludes_unrelated_requirements:
            return list(outcomes)
        return list(
            dict.fromkeys(
                outcome.without_unrelated_requirements(settings)
                for outcome in outcomes
                if not self.should_prune(outcome)
            )
        )

    def __repr__(self) -> str:
        parent = self._parent_requirement.path if self._parent_requirement else None
        return (
            f"RequirementsOutcomes(requirements={self.requirement_count}, "
            f"tests={self._test_outcomes.total}, parent={parent!r})"
        )


def _with_tested_children(
    requirements: Iterable[Requirement], tests: TestOutcomes
) -> list[Requirement]:
    """Rebuild requirements keeping only subtrees that contain a test."""
    kept: list[Requirement] = []
    for requirement in requirements:
        if tests.for_requirement(requirement).total == 0:
            continue
        kept.append(
            requirement.with_children(
                _with_tested_children(requirement.children, tests)
            )
        )
    return kept
