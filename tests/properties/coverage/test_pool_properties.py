"""Property-based tests for TestOutcomes invariants."""

from hypothesis import given, strategies as st

from reqcov.coverage import (
    Requirement,
    TestOutcome as Outcome,
    TestOutcomes as Outcomes,
    TestResult as Result,
    overall_result,
)

RECORDED_RESULTS = [r for r in Result if r is not Result.UNDEFINED]

path_segment = st.sampled_from(["a", "b", "c"])
paths = st.lists(path_segment, min_size=1, max_size=3).map("/".join)

outcomes = st.builds(
    Outcome,
    name=st.text(alphabet="xyz", min_size=1, max_size=3),
    result=st.sampled_from(RECORDED_RESULTS),
    requirement_paths=st.tuples(paths),
)


@given(st.lists(outcomes, max_size=20))
def test_pool_holds_each_outcome_once(items: list[Outcome]) -> None:
    pool = Outcomes.of(items + items)

    assert pool.total == len(set(items))
    assert list(pool) == list(dict.fromkeys(items))


@given(st.lists(outcomes, max_size=20), paths)
def test_parent_scope_contains_child_scope(items: list[Outcome], path: str) -> None:
    pool = Outcomes.of(items)
    parent_path = path.rsplit("/", 1)[0]
    child = Requirement("child", "story", path=path)
    parent = Requirement("parent", "feature", path=parent_path, children=(child,))

    assert set(pool.for_requirement(child)) <= set(pool.for_requirement(parent))


@given(st.lists(outcomes, max_size=20))
def test_result_is_one_of_the_recorded_results(items: list[Outcome]) -> None:
    pool = Outcomes.of(items)

    if items:
        assert pool.result in {item.result for item in items}
    else:
        assert pool.result is Result.UNDEFINED
    assert pool.result is overall_result(item.result for item in items)


@given(st.lists(outcomes, max_size=20))
def test_counts_partition_the_pool(items: list[Outcome]) -> None:
    pool = Outcomes.of(items)

    assert sum(pool.count(result) for result in RECORDED_RESULTS) == pool.total
