"""Data models for requirement coverage.

This module defines the result enums and the value objects the aggregation
engine works on: requirements, executed test outcomes, tags and releases.
Requirements are immutable tree nodes; rebuilding a node with different
children returns a new instance.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from enum import StrEnum

from reqcov.exceptions import InvalidArgumentError

# =============================================================================
# Result Enums
# =============================================================================


class TestResult(StrEnum):
    """Execution result of a single test.

    UNDEFINED is never recorded for a test; it is the roll-up of an empty set
    of results.
    """

    UNDEFINED = "undefined"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"
    PENDING = "pending"
    COMPROMISED = "compromised"
    IGNORED = "ignored"
    SKIPPED = "skipped"


# Worst result first; the first result present wins the roll-up.
_ROLLUP_PRIORITY: tuple[TestResult, ...] = (
    TestResult.COMPROMISED,
    TestResult.ERROR,
    TestResult.FAILURE,
    TestResult.PENDING,
    TestResult.SUCCESS,
    TestResult.SKIPPED,
    TestResult.IGNORED,
)


def overall_result(results: Iterable[TestResult]) -> TestResult:
    """Roll a collection of test results up into a single result.

    Args:
        results: Results to combine.

    Returns:
        UNDEFINED for an empty collection, otherwise the highest priority
        result present (compromised, error, failure, pending, success,
        skipped, ignored).
    """
    present = set(results)
    for result in _ROLLUP_PRIORITY:
        if result in present:
            return result
    return TestResult.UNDEFINED


class ResultCategory(StrEnum):
    """Test result category used by counting and proportion queries.

    ANY matches every test; the other members match one TestResult each.
    """

    ANY = "any"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"
    PENDING = "pending"
    COMPROMISED = "compromised"
    IGNORED = "ignored"
    SKIPPED = "skipped"

    @classmethod
    def parse(cls, value: "ResultCategory | TestResult | str") -> "ResultCategory":
        """Resolve a category from an enum member or a case-insensitive name.

        Accepts the aliases "pass" and "fail" for SUCCESS and FAILURE.

        Raises:
            InvalidArgumentError: If the name matches no category.
        """
        if isinstance(value, ResultCategory):
            return value
        name = str(value).strip().lower()
        name = _CATEGORY_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            msg = f"Unknown test result category: {value!r}"
            raise InvalidArgumentError(
                msg,
                argument="category",
                value=value,
                expected=", ".join(member.value for member in cls),
            ) from None

    def matches(self, result: TestResult) -> bool:
        """Check whether a test result falls into this category."""
        return self is ResultCategory.ANY or self.value == result.value


_CATEGORY_ALIASES: dict[str, str] = {
    "pass": "success",
    "passed": "success",
    "passing": "success",
    "fail": "failure",
    "failed": "failure",
    "failing": "failure",
}


# =============================================================================
# Value Objects
# =============================================================================


@dataclass(frozen=True, slots=True)
class TestTag:
    """Typed tag attached to a test or requirement.

    Tags keep their original case; use matches() for the case-insensitive
    comparison used when linking tests to requirements.

    Attributes:
        tag_type: Tag category (e.g. "feature", "version").
        name: Tag value.
    """

    tag_type: str
    name: str

    def matches(self, other: "TestTag") -> bool:
        """Compare type and name case-insensitively."""
        return (
            self.tag_type.casefold() == other.tag_type.casefold()
            and self.name.casefold() == other.name.casefold()
        )

    def __str__(self) -> str:
        return f"{self.tag_type}:{self.name}"


@dataclass(frozen=True, slots=True)
class Release:
    """Named release used to filter coverage.

    Attributes:
        name: Release name as it appears in version tags (e.g. "1.2").
        label: Optional display label.
    """

    name: str
    label: str | None = None


# =============================================================================
# Core Entities
# =============================================================================


@dataclass(frozen=True, slots=True)
class Requirement:
    """Immutable node of a requirement tree.

    Equality and hashing cover name, type and path only, so a requirement
    rebuilt with a pruned child list still equals the original.

    Attributes:
        name: Requirement name.
        req_type: Free-form type tag such as "epic" or "feature".
        path: Slash-separated display path, unique within the tree. Defaults
            to the name.
        parent: Path of the parent requirement, or None for a root.
        children: Ordered child requirements.
        description: Narrative text.
        release_versions: Releases this requirement is scheduled for.
    """

    name: str
    req_type: str
    path: str = ""
    parent: str | None = field(default=None, compare=False)
    children: tuple["Requirement", ...] = field(default=(), compare=False)
    description: str = field(default="", compare=False)
    release_versions: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not self.path:
            object.__setattr__(self, "path", self.name)

    def with_children(self, children: Iterable["Requirement"]) -> "Requirement":
        """Return a copy of this requirement with a different child list."""
        return replace(self, children=tuple(children))

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def nested_children(self) -> list["Requirement"]:
        """All descendants in depth-first pre-order."""
        return list(self._iter_descendants())

    def _iter_descendants(self) -> Iterator["Requirement"]:
        for child in self.children:
            yield child
            yield from child._iter_descendants()

    def as_tag(self) -> TestTag:
        """Tag that marks a test as exercising this requirement."""
        return TestTag(self.req_type, self.name)

    def covers_path(self, path: str) -> bool:
        """Check whether a requirement path is this requirement or below it."""
        return path == self.path or path.startswith(f"{self.path}/")


@dataclass(frozen=True, slots=True)
class TestOutcome:
    """One executed test.

    The version set is the only mutable part: release enrichment adds to it
    in place. It is excluded from equality and hashing.

    Attributes:
        name: Qualified test name, unique within a test run.
        result: Execution result.
        requirement_paths: Paths of the requirements the test exercises.
        tags: Tags attached to the test.
        versions: Release versions the test counts towards.
    """

    name: str
    result: TestResult
    requirement_paths: tuple[str, ...] = ()
    tags: tuple[TestTag, ...] = ()
    versions: set[str] = field(default_factory=set, compare=False)

    def belongs_to(self, requirement: Requirement) -> bool:
        """Check whether this test exercises a requirement directly."""
        if any(requirement.covers_path(path) for path in self.requirement_paths):
            return True
        target = requirement.as_tag()
        return any(tag.matches(target) for tag in self.tags)

    def add_versions(self, versions: Iterable[str]) -> None:
        """Attach release versions. Re-adding a known version is a no-op."""
        self.versions.update(versions)
