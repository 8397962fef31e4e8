"""Coverage configuration model.

This module provides the CoverageConfiguration Pydantic model holding the
tunables of the coverage aggregation engine.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TESTS_PER_REQUIREMENT = 4


def _split_types(value: object) -> object:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(
            str(item).strip().casefold() for item in value if str(item).strip()
        )
    return value


class CoverageConfiguration(BaseModel):
    """Coverage estimation and pruning settings.

    Attributes:
        estimated_tests_per_requirement: Number of tests a requirement without
            any recorded test is assumed to need eventually.
        excluded_unrelated_requirement_types: Requirement types that are pruned
            from aggregates when they have no tests. Empty disables pruning.
        release_types: Tag types whose tag names identify a release.
        max_workers: Worker pool size for building requirement outcomes.
            None uses the executor default.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    estimated_tests_per_requirement: int = Field(
        default=DEFAULT_TESTS_PER_REQUIREMENT,
        ge=0,
        description="Estimated number of tests per untested requirement.",
    )
    excluded_unrelated_requirement_types: tuple[str, ...] = Field(
        default=(),
        description="Untested requirement types removed from aggregates.",
    )
    release_types: tuple[str, ...] = Field(
        default=("version", "release", "iteration", "sprint"),
        description="Tag types naming a release.",
    )
    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Worker pool size for the parallel outcome build.",
    )

    @field_validator(
        "excluded_unrelated_requirement_types", "release_types", mode="before"
    )
    @classmethod
    def _normalise_types(cls, value: object) -> object:
        return _split_types(value)

    @property
    def excludes_unrelated_requirements(self) -> bool:
        """Whether the unrelated requirement filter is enabled."""
        return bool(self.excluded_unrelated_requirement_types)

    def excludes_untested_requirement_of_type(self, req_type: str) -> bool:
        """Check whether untested requirements of a type should be pruned.

        Args:
            req_type: Requirement type to check (case-insensitive).

        Returns:
            True if the type is listed in excluded_unrelated_requirement_types.
        """
        return req_type.casefold() in self.excluded_unrelated_requirement_types

    def is_release_type(self, tag_type: str) -> bool:
        """Check whether a tag type names a release (case-insensitive)."""
        return tag_type.casefold() in self.release_types
