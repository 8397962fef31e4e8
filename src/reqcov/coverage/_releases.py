"""Release tagging of test outcomes.

Release filtering needs every test to know which releases it counts towards.
A ReleaseTagger attaches those versions to the tests in place before the
filter runs. Tagging is idempotent: tagging an already tagged test again
changes nothing.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from reqcov.config import CoverageConfiguration
from reqcov.coverage._models import TestOutcome

if TYPE_CHECKING:
    from reqcov.coverage._outcome import RequirementOutcome

__all__ = ["ReleaseManager", "ReleaseTagger"]


@runtime_checkable
class ReleaseTagger(Protocol):
    """Protocol for collaborators that attach release versions to tests."""

    def enrich_outcomes_with_release_tags(
        self, outcomes: Sequence[TestOutcome]
    ) -> Sequence[TestOutcome]:
        """Attach release versions to tests and return the same tests."""
        ...

    def enrich_requirement_outcomes_with_release_tags(
        self, outcomes: Sequence["RequirementOutcome"]
    ) -> Sequence["RequirementOutcome"]:
        """Attach release versions to the tests of each requirement outcome."""
        ...


class ReleaseManager:
    """Default ReleaseTagger driven by tags and requirement release versions.

    A test receives the name of every tag it carries whose type is a
    configured release type, plus the release versions declared on any
    requirement in the outcome's subtree that the test belongs to.
    """

    __slots__: Final = ("_settings",)

    _settings: CoverageConfiguration

    def __init__(self, settings: CoverageConfiguration | None = None) -> None:
        self._settings = settings if settings is not None else CoverageConfiguration()

    def enrich_outcomes_with_release_tags(
        self, outcomes: Sequence[TestOutcome]
    ) -> Sequence[TestOutcome]:
        for outcome in outcomes:
            outcome.add_versions(
                tag.name
                for tag in outcome.tags
                if self._settings.is_release_type(tag.tag_type)
            )
        return outcomes

    def enrich_requirement_outcomes_with_release_tags(
        self, outcomes: Sequence["RequirementOutcome"]
    ) -> Sequence["RequirementOutcome"]:
        for requirement_outcome in outcomes:
            tests = requirement_outcome.test_outcomes
            _ = self.enrich_outcomes_with_release_tags(tests.outcomes)

            root = requirement_outcome.requirement
            for requirement in (root, *root.nested_children):
                if not requirement.release_versions:
                    continue
                for test in tests.for_requirement(requirement):
                    test.add_versions(requirement.release_versions)
        return outcomes
