from unittest.mock import MagicMock

from reqcov.coverage import (
    ParentRequirementProvider,
    Requirement,
    RequirementTreeProvider,
    parent_requirement_of,
)


class TestRequirementTreeProvider:
    def test_satisfies_protocol(self, checkout: Requirement) -> None:
        provider = RequirementTreeProvider([checkout])

        assert isinstance(provider, ParentRequirementProvider)

    def test_resolves_parent_by_path(self, checkout: Requirement) -> None:
        provider = RequirementTreeProvider([checkout])

        assert provider.parent_requirement_of(checkout.children[1]) == checkout

    def test_root_has_no_parent(self, checkout: Requirement) -> None:
        provider = RequirementTreeProvider([checkout])

        assert provider.parent_requirement_of(checkout) is None

    def test_unknown_parent(self, checkout: Requirement) -> None:
        orphan = Requirement(
            "Refunds", "feature", path="billing/refunds", parent="billing"
        )

        assert RequirementTreeProvider([checkout]).parent_requirement_of(orphan) is None


class TestParentRequirementOf:
    def test_first_answer_wins(self, checkout: Requirement) -> None:
        silent = MagicMock(spec=ParentRequirementProvider)
        silent.parent_requirement_of.return_value = None
        other = Requirement("Other", "epic")
        loud = MagicMock(spec=ParentRequirementProvider)
        loud.parent_requirement_of.return_value = other
        tree = RequirementTreeProvider([checkout])

        parent = parent_requirement_of([silent, tree, loud], checkout.children[0])

        assert parent == checkout
        silent.parent_requirement_of.assert_called_once_with(checkout.children[0])
        loud.parent_requirement_of.assert_not_called()

    def test_no_providers(self, checkout: Requirement) -> None:
        assert parent_requirement_of([], checkout.children[0]) is None
