"""Property tests for the failure policies."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from hypothesis import given, settings
from hypothesis import strategies as st
import pytest

from streamext import (
    FunctionExecutionError,
    fallback,
    filter_quiet,
    map_e,
    map_quiet,
    quiet,
    quiet_predicate,
    rethrow,
)
from tests.helpers import RecordingFallback, ScriptedOp

pytestmark = pytest.mark.unit

_elements = st.lists(st.integers(), max_size=30)


@given(xs=_elements)
@settings(max_examples=50, deadline=None, derandomize=True)
def test_policies_agree_when_nothing_fails(xs: list[int]) -> None:
    """Property: without failures every policy equals the bare operation."""

    def op(n: int) -> int:
        return n * 3 + 1

    expected = [op(x) for x in xs]
    for adapted in (rethrow(op), quiet(op), fallback(op, RecordingFallback("x"))):
        assert [adapted(x) for x in xs] == expected


@given(xs=_elements, data=st.data())
@settings(max_examples=50, deadline=None, derandomize=True)
def test_fallback_substitutes_exactly_the_failures(xs: list[int], data) -> None:
    """Property: fallback(op, f)(x) == f(x, e) for failing x, once each."""
    failing = tuple(data.draw(st.sets(st.sampled_from(xs))) if xs else ())
    op = ScriptedOp(result=lambda n: n + 1, fail_on=failing)
    strategy = RecordingFallback("fb")

    out = list(map_e(xs, op, strategy))

    assert out == ["fb" if x in failing else x + 1 for x in xs]
    assert op.calls == xs
    assert [el for el, _ in strategy.calls] == [x for x in xs if x in failing]
    assert [err for _, err in strategy.calls] == op.raised


@given(x=st.integers(), message=st.text())
@settings(max_examples=50, deadline=None, derandomize=True)
def test_rethrow_round_trips_the_cause(x: int, message: str) -> None:
    """Property: unwrap(rethrow failure) is the original exception."""
    original = ValueError(message)

    def op(_: int) -> int:
        raise original

    with pytest.raises(FunctionExecutionError) as exc:
        rethrow(op)(x)

    assert exc.value.cause is original
    assert exc.value.element == x


@given(xs=_elements, data=st.data())
@settings(max_examples=50, deadline=None, derandomize=True)
def test_quiet_filter_drops_only_failures(xs: list[int], data) -> None:
    failing = tuple(data.draw(st.sets(st.sampled_from(xs))) if xs else ())
    pred = ScriptedOp(result=lambda _: True, fail_on=failing)

    assert list(filter_quiet(xs, pred)) == [x for x in xs if x not in failing]


@given(xs=_elements, data=st.data())
@settings(max_examples=50, deadline=None, derandomize=True)
def test_quiet_mapper_marks_failures_with_none(xs: list[int], data) -> None:
    failing = tuple(data.draw(st.sets(st.sampled_from(xs))) if xs else ())
    op = ScriptedOp(fail_on=failing)

    out = list(map_quiet(xs, op))

    assert [o is None for o in out] == [x in failing for x in xs]


def test_quiet_predicate_result_is_false_not_none() -> None:
    pred = quiet_predicate(ScriptedOp(fail_on=(1,)))
    assert pred(1) is False


def test_adapted_callable_is_reusable_across_threads() -> None:
    """One adapted instance, many workers: results match sequential use."""
    adapted = fallback(lambda n: 100 // n, lambda _n, _e: -1)
    xs = list(range(-50, 50))

    with ThreadPoolExecutor(max_workers=8) as pool:
        parallel = list(pool.map(adapted, xs))

    assert parallel == [adapted(x) for x in xs]
    assert parallel[xs.index(0)] == -1
