from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from reqcov.coverage import (
    CoverageContext,
    Release,
    ReleaseManager,
    Requirement,
    RequirementsOutcomes,
    TestOutcome as Outcome,
    TestOutcomes as Outcomes,
    TestResult as Result,
    TestTag as Tag,
)


def _top_level_names(coverage: RequirementsOutcomes) -> list[str]:
    return [o.requirement.name for o in coverage.requirement_outcomes]


class TestOfType:
    def test_selects_requirements_at_any_depth(
        self, checkout_coverage: RequirementsOutcomes
    ) -> None:
        features = checkout_coverage.of_type("FEATURE")

        assert _top_level_names(features) == ["Payment", "Shipping"]
        assert features.total_test_count() == 3
        assert features.requirements_without_tests_count() == 1
        assert features.estimated_unimplemented_tests() == 4

    def test_unknown_type_gives_empty_aggregate(
        self, checkout_coverage: RequirementsOutcomes
    ) -> None:
        stories = checkout_coverage.of_type("story")

        assert stories.requirement_count == 0
        assert stories.total_test_count() == 0

    def test_does_not_modify_the_source(
        self, checkout_coverage: RequirementsOutcomes
    ) -> None:
        _ = checkout_coverage.of_type("feature")

        assert _top_level_names(checkout_coverage) == ["Checkout"]
        assert checkout_coverage.total_test_count() == 3

    def test_view_shares_the_context(
        self, checkout_coverage: RequirementsOutcomes
    ) -> None:
        features = checkout_coverage.of_type("feature")

        assert features.context is checkout_coverage.context
        assert features.parent_requirement is None

    def test_excluded_untested_types_are_left_out(
        self,
        checkout: Requirement,
        checkout_tests: Outcomes,
        make_context: Callable[..., CoverageContext],
    ) -> None:
        context = make_context(excluded_unrelated_requirement_types="feature")
        coverage = RequirementsOutcomes.build(
            [checkout], checkout_tests, context=context
        )

        assert _top_level_names(coverage.of_type("feature")) == ["Payment"]

    def test_requirements_of_type_is_memoized(
        self, checkout_coverage: RequirementsOutcomes
    ) -> None:
        first = checkout_coverage.requirements_of_type("feature")

        assert checkout_coverage.requirements_of_type("Feature") is first
        assert checkout_coverage.requirements_of_type("epic") is not first


class TestWithoutUnrelatedRequirements:
    def test_returns_same_instance_when_nothing_is_excluded(
        self, checkout_coverage: RequirementsOutcomes
    ) -> None:
        assert checkout_coverage.without_unrelated_requirements() is checkout_coverage

    def test_drops_untested_top_level_requirements_of_excluded_type(
        self,
        checkout: Requirement,
        checkout_tests: Outcomes,
        make_requirement: Callable[..., Requirement],
        make_context: Callable[..., CoverageContext],
        logger: MagicMock,
    ) -> None:
        context = make_context(excluded_unrelated_requirement_types=["Theme"])
        branding = make_requirement("Branding", "theme")
        coverage = RequirementsOutcomes.build(
            [checkout, branding], checkout_tests, context=context
        )

        pruned = coverage.without_unrelated_requirements()

        assert _top_level_names(pruned) == ["Checkout"]
        assert _top_level_names(coverage) == ["Checkout", "Branding"]
        logger.debug.assert_any_call("unrelated_requirements_pruned", before=2, after=1)

    def test_keeps_tested_requirements_of_excluded_type(
        self,
        make_requirement: Callable[..., Requirement],
        make_outcome: Callable[..., Outcome],
        make_context: Callable[..., CoverageContext],
    ) -> None:
        context = make_context(excluded_unrelated_requirement_types=["theme"])
        branding = make_requirement("Branding", "theme")
        tests = Outcomes.of([make_outcome("logo shows", Result.SUCCESS, "branding")])
        coverage = RequirementsOutcomes.build([branding], tests, context=context)

        assert _top_level_names(coverage.without_unrelated_requirements()) == [
            "Branding"
        ]

    def test_should_prune(
        self,
        checkout: Requirement,
        checkout_tests: Outcomes,
        make_context: Callable[..., CoverageContext],
    ) -> None:
        context = make_context(excluded_unrelated_requirement_types=["feature"])
        features = RequirementsOutcomes.build(
            checkout.children, checkout_tests, context=context
        )
        payment, shipping = features.requirement_outcomes

        assert not features.should_prune(payment)
        assert features.should_prune(shipping)


@pytest.fixture
def released_checkout(make_requirement: Callable[..., Requirement]) -> Requirement:
    return make_requirement(
        "Checkout",
        "epic",
        make_requirement("Payment", "feature", release_versions=("1.0",)),
        make_requirement("Shipping", "feature", release_versions=("2.0",)),
        make_requirement("Returns", "feature"),
    )


@pytest.fixture
def released_coverage(
    released_checkout: Requirement,
    checkout_tests: Outcomes,
    make_outcome: Callable[..., Outcome],
    context: CoverageContext,
) -> RequirementsOutcomes:
    tests = Outcomes.of(
        [
            *checkout_tests,
            make_outcome("ships parcel", Result.SUCCESS, "checkout/shipping"),
        ]
    )
    return RequirementsOutcomes.build([released_checkout], tests, context=context)


class TestReleasedRequirementsFor:
    def test_keeps_only_requirements_tested_in_the_release(
        self, released_coverage: RequirementsOutcomes
    ) -> None:
        release = released_coverage.released_requirements_for(Release("1.0"))

        (checkout,) = release.requirement_outcomes
        assert [c.name for c in checkout.requirement.children] == ["Payment"]
        assert release.total_test_count() == 3
        assert release.failing_requirements_count() == 1

    def test_other_release(self, released_coverage: RequirementsOutcomes) -> None:
        release = released_coverage.released_requirements_for(Release("2.0"))

        (checkout,) = release.requirement_outcomes
        assert [c.name for c in checkout.requirement.children] == ["Shipping"]
        assert release.total_test_count() == 1
        assert release.completed_requirements_count() == 1

    def test_unknown_release_is_empty(
        self, released_coverage: RequirementsOutcomes, logger: MagicMock
    ) -> None:
        release = released_coverage.released_requirements_for(Release("9.9"))

        assert release.requirement_count == 0
        assert release.total_test_count() == 0
        logger.debug.assert_any_call(
            "released_requirements_selected", release="9.9", requirements=0, tests=0
        )

    def test_release_from_version_tags(
        self,
        checkout: Requirement,
        make_outcome: Callable[..., Outcome],
        context: CoverageContext,
    ) -> None:
        tests = Outcomes.of(
            [
                make_outcome(
                    "pays",
                    Result.SUCCESS,
                    "checkout/payment",
                    tags=(Tag("Version", "3.1"),),
                ),
                make_outcome("ships", Result.SUCCESS, "checkout/shipping"),
            ]
        )
        coverage = RequirementsOutcomes.build([checkout], tests, context=context)

        release = coverage.released_requirements_for(Release("3.1"))

        assert release.total_test_count() == 1
        (outcome,) = release.requirement_outcomes
        assert [c.name for c in outcome.requirement.children] == ["Payment"]

    def test_flattened_view_is_scoped_to_the_release(
        self, released_coverage: RequirementsOutcomes
    ) -> None:
        release = released_coverage.released_requirements_for(Release("2.0"))

        assert {
            o.requirement.name: o.test_count
            for o in release.flattened_requirement_outcomes
        } == {"Checkout": 1, "Shipping": 1}

    def test_uses_the_context_release_tagger(
        self,
        released_checkout: Requirement,
        checkout_tests: Outcomes,
        logger: MagicMock,
    ) -> None:
        tagger = MagicMock(wraps=ReleaseManager())
        context = CoverageContext(release_tagger=tagger, logger=logger)
        coverage = RequirementsOutcomes.build(
            [released_checkout], checkout_tests, context=context
        )

        _ = coverage.released_requirements_for(Release("1.0"))

        tagger.enrich_requirement_outcomes_with_release_tags.assert_called_once()
