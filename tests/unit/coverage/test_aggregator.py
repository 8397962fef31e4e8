from collections.abc import Callable
from unittest.mock import patch

from reqcov.config import CoverageConfiguration
from reqcov.coverage import (
    Requirement,
    TestOutcome as Outcome,
    TestOutcomes as Outcomes,
    TestResult as Result,
    build_requirement_outcomes,
    requirement_outcome_for,
)


class TestRequirementOutcomeFor:
    def test_scopes_pool_to_requirement(
        self, checkout: Requirement, checkout_tests: Outcomes
    ) -> None:
        shipping = checkout.children[1]

        outcome = requirement_outcome_for(
            shipping, checkout_tests, CoverageConfiguration()
        )

        assert outcome.test_count == 0
        assert outcome.requirements_without_tests == 1
        assert outcome.estimated_unimplemented_tests == 4

    def test_estimate_uses_configured_tests_per_requirement(
        self, checkout: Requirement, checkout_tests: Outcomes
    ) -> None:
        settings = CoverageConfiguration(estimated_tests_per_requirement=7)

        outcome = requirement_outcome_for(checkout, checkout_tests, settings)

        assert outcome.estimated_unimplemented_tests == 7

    def test_zero_estimate(
        self, checkout: Requirement, checkout_tests: Outcomes
    ) -> None:
        settings = CoverageConfiguration(estimated_tests_per_requirement=0)

        outcome = requirement_outcome_for(checkout, checkout_tests, settings)

        assert outcome.requirements_without_tests == 1
        assert outcome.estimated_unimplemented_tests == 0


class TestBuildRequirementOutcomes:
    def test_empty_input(self) -> None:
        assert build_requirement_outcomes([], Outcomes(), CoverageConfiguration()) == []

    def test_drops_duplicate_requirements(
        self, checkout: Requirement, checkout_tests: Outcomes
    ) -> None:
        outcomes = build_requirement_outcomes(
            [checkout, checkout], checkout_tests, CoverageConfiguration()
        )

        assert [o.requirement for o in outcomes] == [checkout]

    def test_preserves_input_order_across_workers(
        self,
        make_requirement: Callable[..., Requirement],
        make_outcome: Callable[..., Outcome],
    ) -> None:
        requirements = [make_requirement(f"Feature {i}") for i in range(8)]
        tests = Outcomes.of(
            make_outcome(f"test {i}", Result.SUCCESS, f"feature-{i}")
            for i in range(0, 8, 2)
        )
        settings = CoverageConfiguration(max_workers=3)

        outcomes = build_requirement_outcomes(requirements, tests, settings)

        assert [o.requirement for o in outcomes] == requirements
        assert [o.test_count for o in outcomes] == [1, 0] * 4

    def test_single_requirement_skips_the_worker_pool(
        self, checkout: Requirement, checkout_tests: Outcomes
    ) -> None:
        with patch("reqcov.coverage._aggregator.ThreadPoolExecutor") as executor:
            outcomes = build_requirement_outcomes(
                [checkout], checkout_tests, CoverageConfiguration()
            )

        executor.assert_not_called()
        assert len(outcomes) == 1

    def test_worker_pool_sized_from_settings(
        self, make_requirement: Callable[..., Requirement]
    ) -> None:
        requirements = [make_requirement("A"), make_requirement("B")]
        settings = CoverageConfiguration(max_workers=2)

        with patch("reqcov.coverage._aggregator.ThreadPoolExecutor") as executor:
            executor.return_value.__enter__.return_value.map.return_value = iter([])
            _ = build_requirement_outcomes(requirements, Outcomes(), settings)

        executor.assert_called_once_with(max_workers=2)
