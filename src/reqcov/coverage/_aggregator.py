"""Building requirement outcomes from a pool of test outcomes.

Each top-level requirement is aggregated independently of the others, so the
per-requirement work is fanned out to a thread pool. Results come back in
input order whatever order the workers finish in.
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from functools import partial

from reqcov.config import CoverageConfiguration
from reqcov.coverage._models import Requirement
from reqcov.coverage._outcome import RequirementOutcome
from reqcov.coverage._pool import TestOutcomes

__all__ = ["build_requirement_outcomes", "requirement_outcome_for"]


def requirement_outcome_for(
    requirement: Requirement,
    test_outcomes: TestOutcomes,
    settings: CoverageConfiguration,
) -> RequirementOutcome:
    """Aggregate one requirement against a pool of test outcomes.

    Args:
        requirement: Requirement to aggregate.
        test_outcomes: Pool the requirement's tests are drawn from.
        settings: Supplies the estimated tests per requirement.

    Returns:
        The requirement's outcome, with the number of untested requirements
        in its own subtree and the resulting test estimate.
    """
    scoped = test_outcomes.for_requirement(requirement)
    # Descendant subsets are subsets of the scoped pool, so search that
    without_tests = sum(
        1
        for node in (requirement, *requirement.nested_children)
        if scoped.for_requirement(node).total == 0
    )
    return RequirementOutcome(
        requirement,
        scoped,
        requirements_without_tests=without_tests,
        estimated_unimplemented_tests=(
            without_tests * settings.estimated_tests_per_requirement
        ),
    )


def build_requirement_outcomes(
    requirements: Iterable[Requirement],
    test_outcomes: TestOutcomes,
    settings: CoverageConfiguration,
) -> list[RequirementOutcome]:
    """Aggregate every distinct requirement of a list.

    Duplicate requirements are dropped first, keeping the first occurrence.

    Args:
        requirements: Top-level requirements, possibly with duplicates.
        test_outcomes: Pool every requirement's tests are drawn from.
        settings: Supplies the estimate constant and the worker pool size.

    Returns:
        One outcome per distinct requirement, in input order.
    """
    distinct = list(dict.fromkeys(requirements))
    aggregate = partial(
        requirement_outcome_for, test_outcomes=test_outcomes, settings=settings
    )

    if len(distinct) < 2:  # noqa: PLR2004
        return [aggregate(requirement) for requirement in distinct]

    with ThreadPoolExecutor(max_workers=settings.max_workers) as executor:
        return list(executor.map(aggregate, distinct))
