"""Parent requirement lookup.

Requirements reference their parent by path. Providers resolve that path to
a Requirement; callers ask an ordered chain of providers and take the first
answer.
"""

from collections.abc import Iterable
from typing import Final, Protocol, runtime_checkable

from reqcov.coverage._models import Requirement

__all__ = [
    "ParentRequirementProvider",
    "RequirementTreeProvider",
    "parent_requirement_of",
]


@runtime_checkable
class ParentRequirementProvider(Protocol):
    """Protocol for collaborators that can resolve a requirement's parent."""

    def parent_requirement_of(self, requirement: Requirement) -> Requirement | None:
        """Return the parent of a requirement, or None if unknown."""
        ...


class RequirementTreeProvider:
    """Resolves parents from an in-memory requirement tree, indexed by path."""

    __slots__: Final = ("_by_path",)

    _by_path: dict[str, Requirement]

    def __init__(self, requirements: Iterable[Requirement]) -> None:
        self._by_path = {}
        for root in requirements:
            for requirement in (root, *root.nested_children):
                _ = self._by_path.setdefault(requirement.path, requirement)

    def parent_requirement_of(self, requirement: Requirement) -> Requirement | None:
        if requirement.parent is None:
            return None
        return self._by_path.get(requirement.parent)


def parent_requirement_of(
    providers: Iterable[ParentRequirementProvider],
    requirement: Requirement,
) -> Requirement | None:
    """Ask each provider in turn for a requirement's parent.

    Args:
        providers: Providers in priority order.
        requirement: Requirement whose parent is wanted.

    Returns:
        The first non-None answer, or None if no provider knows the parent.
    """
    for provider in providers:
        parent = provider.parent_requirement_of(requirement)
        if parent is not None:
            return parent
    return None
