"""Collaborators shared by an aggregate and every view derived from it."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Self

from reqcov.config import Config, CoverageConfiguration
from reqcov.coverage._providers import ParentRequirementProvider
from reqcov.coverage._releases import ReleaseManager, ReleaseTagger
from reqcov.utils import create_logger_from_config, default_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

__all__ = ["CoverageContext"]


@dataclass(frozen=True, slots=True)
class CoverageContext:
    """Settings and collaborators for building coverage aggregates.

    Attributes:
        settings: Coverage configuration section.
        parent_providers: Parent lookup chain, in priority order.
        release_tagger: Release tagging collaborator. Defaults to a
            ReleaseManager over settings.
        logger: Logger for engine events. Defaults to the stderr logger.
    """

    settings: CoverageConfiguration = field(default_factory=CoverageConfiguration)
    parent_providers: tuple[ParentRequirementProvider, ...] = ()
    release_tagger: ReleaseTagger | None = None
    logger: "FilteringBoundLogger | None" = None

    def __post_init__(self) -> None:
        if self.release_tagger is None:
            object.__setattr__(self, "release_tagger", ReleaseManager(self.settings))
        if self.logger is None:
            object.__setattr__(self, "logger", default_logger())

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        parent_providers: Iterable[ParentRequirementProvider] = (),
        release_tagger: ReleaseTagger | None = None,
    ) -> Self:
        """Build a context from a loaded Config, including its logger."""
        return cls(
            settings=config.coverage,
            parent_providers=tuple(parent_providers),
            release_tagger=release_tagger,
            logger=create_logger_from_config(config),
        )

    @property
    def tagger(self) -> ReleaseTagger:
        assert self.release_tagger is not None  # noqa: S101
        return self.release_tagger

    @property
    def log(self) -> "FilteringBoundLogger":  # noqa: UP037
        assert self.logger is not None  # noqa: S101
        return self.logger
