from collections.abc import Callable
from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from reqcov.config import CoverageConfiguration
from reqcov.coverage import (
    CoverageContext,
    Requirement,
    RequirementsOutcomes,
    TestOutcome as Outcome,
    TestOutcomes as Outcomes,
    TestResult as Result,
    TestTag as Tag,
)

RequirementFactory = Callable[..., Requirement]
OutcomeFactory = Callable[..., Outcome]


def _slug(name: str) -> str:
    return name.lower().replace(" ", "-")


def _place(requirement: Requirement, parent: str | None) -> Requirement:
    path = f"{parent}/{_slug(requirement.name)}" if parent else _slug(requirement.name)
    return replace(
        requirement,
        path=path,
        parent=parent,
        children=tuple(_place(child, path) for child in requirement.children),
    )


@pytest.fixture
def make_requirement() -> RequirementFactory:
    """Build a requirement whose children are re-rooted under its path."""

    def _make(
        name: str,
        req_type: str = "feature",
        *children: Requirement,
        release_versions: tuple[str, ...] = (),
    ) -> Requirement:
        root = Requirement(
            name=name,
            req_type=req_type,
            children=children,
            release_versions=release_versions,
        )
        return _place(root, None)

    return _make


@pytest.fixture
def make_outcome() -> OutcomeFactory:
    """Build a test outcome exercising the given requirement paths."""

    def _make(
        name: str,
        result: Result = Result.SUCCESS,
        *paths: str,
        tags: tuple[Tag, ...] = (),
        versions: tuple[str, ...] = (),
    ) -> Outcome:
        return Outcome(
            name=name,
            result=result,
            requirement_paths=paths,
            tags=tags,
            versions=set(versions),
        )

    return _make


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def context(logger: MagicMock) -> CoverageContext:
    return CoverageContext(logger=logger)


@pytest.fixture
def make_context(logger: MagicMock) -> Callable[..., CoverageContext]:
    def _make(**settings: object) -> CoverageContext:
        return CoverageContext(
            settings=CoverageConfiguration.model_validate(settings), logger=logger
        )

    return _make


@pytest.fixture
def checkout(make_requirement: RequirementFactory) -> Requirement:
    """Epic Checkout with a tested Payment feature and an untested Shipping one."""
    return make_requirement(
        "Checkout",
        "epic",
        make_requirement("Payment", "feature"),
        make_requirement("Shipping", "feature"),
    )


@pytest.fixture
def checkout_tests(make_outcome: OutcomeFactory) -> Outcomes:
    return Outcomes.of(
        [
            make_outcome("pays by card", Result.SUCCESS, "checkout/payment"),
            make_outcome("pays by voucher", Result.SUCCESS, "checkout/payment"),
            make_outcome("rejects expired card", Result.FAILURE, "checkout/payment"),
        ]
    )


@pytest.fixture
def checkout_coverage(
    checkout: Requirement, checkout_tests: Outcomes, context: CoverageContext
) -> RequirementsOutcomes:
    return RequirementsOutcomes.build([checkout], checkout_tests, context=context)
