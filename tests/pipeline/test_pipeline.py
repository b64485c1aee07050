"""Tests for the lazy pipeline.

Critical Invariants:
- Evaluation is element-at-a-time and stops at the bound
- Expanding steps never push results past the bound
- A pipeline allows exactly one terminal pull
"""

import itertools
import logging
import operator
import warnings

import pytest

from lazychain import (
    Pipeline,
    PipelineConsumedError,
    PipelineSettings,
    PipelineState,
    SequenceShapeError,
    lazy,
)


def plus_one(x):
    return x + 1


def is_even(x):
    return x % 2 == 0


def double(x):
    return x * 2


def simulate(source, count):
    """Reference: push each element through every step before pulling the next."""
    results = []
    for x in source:
        if len(results) >= count:
            break
        y = plus_one(x)
        if not is_even(y):
            continue
        results.append(double(y))
    return results


def test_end_to_end_example(sample):
    result = lazy(sample).map(plus_one).sieve(is_even).map(double).take(3)

    assert result == [4, 8, 12]


@pytest.mark.parametrize("count", range(0, 11))
def test_every_prefix_matches_simulation(sample, count):
    result = lazy(sample).map(plus_one).sieve(is_even).map(double).take(count)

    assert result == simulate(sample, count)


def test_steps_interleave_per_element():
    """CRITICAL: Each element passes the whole queue before the next is pulled.

    Why: This is what makes take(n) lazy instead of a staged batch run.
    """
    log: list[tuple[str, int]] = []

    def tap(tag, fn):
        def step(x):
            log.append((tag, x))
            return fn(x)

        return step

    lazy([1, 2, 3]).map(tap("map", plus_one)).sieve(tap("sieve", is_even)).map(
        tap("double", double)
    ).take(1)

    assert log == [("map", 1), ("sieve", 2), ("double", 2)]


def test_take_stops_pulling_at_bound(counter_factory):
    counter = counter_factory(range(100))

    assert lazy(iter(counter)).map(double).take(3) == [0, 2, 4]
    assert counter.pulled == 3


def test_take_zero_pulls_nothing(counter_factory):
    counter = counter_factory([1, 2, 3])
    pipeline = lazy(iter(counter))

    assert pipeline.take(0) == []
    assert counter.pulled == 0
    assert pipeline.consumed


def test_infinite_source_with_bound():
    assert lazy(itertools.count()).sieve(is_even).take(4) == [0, 2, 4, 6]


def test_take_shorter_when_source_runs_out():
    assert lazy([1, 2]).take(5) == [1, 2]


def test_expansion_truncated_at_bound():
    """CRITICAL: One element expanding past the bound is cut, never overflows."""
    result = lazy([1, 2, 3]).unmonad(lambda x, k: [x] * k, 3).take(4)

    assert result == [1, 1, 1, 2]


def test_expansion_of_first_element_truncated():
    assert lazy(["a,b,c,d"]).unmonad(str.split, ",").take(2) == ["a", "b"]


def test_chaining_returns_same_pipeline():
    pipeline = lazy([1])

    assert pipeline.map(plus_one) is pipeline
    assert pipeline.sieve(is_even) is pipeline
    assert pipeline.unmonad(lambda x: [x]) is pipeline


def test_filter_is_sieve():
    assert lazy([1, 2, 3, 4]).filter(is_even).take_all() == [2, 4]


def test_chaining_does_not_evaluate():
    calls: list[int] = []
    pipeline = lazy([1, 2, 3]).map(lambda x: calls.append(x) or x)

    assert calls == []
    pipeline.take_all()
    assert calls == [1, 2, 3]


def test_source_shapes():
    assert lazy().take_all() == []
    assert lazy(None).take_all() == []
    assert lazy(5).take_all() == [5]
    assert lazy("text").map(str.upper).take_all() == ["TEXT"]
    assert lazy([[1, 2]]).take_all() == [[1, 2]]


def test_source_is_not_mutated(sample):
    lazy(sample).map(double).take_all()

    assert sample == [1, 2, 3, 4, 5, 6, 7, 8, 9, 0]


# Single-use discipline


def test_second_take_fails():
    pipeline = lazy([1, 2, 3])
    assert pipeline.take(2) == [1, 2]

    assert pipeline.state is PipelineState.CONSUMED
    with pytest.raises(PipelineConsumedError, match="take"):
        pipeline.take(1)


@pytest.mark.parametrize(
    "call",
    [
        lambda p: p.map(plus_one),
        lambda p: p.sieve(is_even),
        lambda p: p.filter(is_even),
        lambda p: p.unmonad(lambda x: [x]),
        lambda p: p.take(1),
        lambda p: p.take_all(),
        lambda p: p.seq(),
        lambda p: p.fold_l(0, operator.add),
        lambda p: p.fold_l_wrap(0, operator.add),
        lambda p: p.seq_unmonad(sorted),
        lambda p: p.seq_unmonad_wrap(sorted),
    ],
)
def test_every_method_fails_after_consumption(call):
    pipeline = lazy([1, 2])
    pipeline.take_all()

    with pytest.raises(PipelineConsumedError):
        call(pipeline)


def test_consumed_error_is_reference_error():
    pipeline = lazy([1])
    pipeline.take_all()

    with pytest.raises(ReferenceError):
        pipeline.take_all()


def test_state_readable_after_consumption():
    pipeline = lazy([1]).map(plus_one)
    assert pipeline.state is PipelineState.OPEN
    assert repr(pipeline) == "Pipeline(state=OPEN, queued=1)"

    pipeline.take_all()

    assert pipeline.consumed
    assert repr(pipeline) == "Pipeline(state=CONSUMED)"


def test_failure_mid_pull_leaves_pipeline_consumed():
    pipeline = lazy([1, 0]).map(lambda x: 1 / x)

    with pytest.raises(ZeroDivisionError):
        pipeline.take_all()
    assert pipeline.consumed
    with pytest.raises(PipelineConsumedError):
        pipeline.take_all()


def test_shape_error_surfaces_during_pull():
    pipeline = lazy([1]).unmonad(lambda x: x)

    with pytest.raises(SequenceShapeError):
        pipeline.take(1)
    assert pipeline.consumed


@pytest.mark.parametrize("count", [-1, -10])
def test_negative_count_rejected(count):
    pipeline = lazy([1])

    with pytest.raises(ValueError):
        pipeline.take(count)
    assert pipeline.state is PipelineState.OPEN


@pytest.mark.parametrize("count", ["3", 2.0, None, True])
def test_non_int_count_rejected(count):
    with pytest.raises(TypeError):
        lazy([1]).take(count)


# Strict operators


def test_fold_l_returns_raw_accumulator():
    assert lazy([1, 2, 3, 4]).fold_l(0, lambda acc, x: acc + x) == 10


def test_fold_l_index_counts_materialized_positions():
    visits = lazy([5, 6, 7, 8]).sieve(is_even).fold_l([], lambda acc, x, i: acc + [(i, x)])

    assert visits == [(0, 6), (1, 8)]


def test_fold_l_wrap_continues_on_single_result():
    """Steps after a fold see the one folded value, not the original elements."""
    original = lazy([1, 2, 3, 4])
    folded = original.fold_l_wrap(0, operator.add)

    assert isinstance(folded, Pipeline)
    assert folded is not original
    assert original.consumed
    assert folded.map(double).take_all() == [20]


def test_fold_l_wrap_keeps_sequence_accumulator_whole():
    result = lazy([1, 2]).fold_l_wrap([], lambda acc, x: acc + [x]).take_all()

    assert result == [[1, 2]]


def test_fold_l_over_empty_source_returns_seed():
    assert lazy(None).fold_l("seed", operator.add) == "seed"


def test_seq_unmonad_receives_materialized_results():
    assert lazy([3, 1, 2]).map(double).seq_unmonad(sorted) == [2, 4, 6]


def test_seq_unmonad_wrap_continues_chaining(sample):
    result = (
        lazy(sample)
        .map(plus_one)
        .sieve(is_even)
        .map(double)
        .seq_unmonad_wrap(lambda batch, fn: [fn(x) for x in batch], double)
        .take(6)
    )

    assert result == [8, 16, 24, 32, 40]


def test_seq_materializes_into_fresh_pipeline():
    original = lazy([1, 2, 3]).map(plus_one)
    fresh = original.seq()

    assert original.consumed
    assert fresh.state is PipelineState.OPEN
    assert fresh.map(double).take(2) == [4, 6]


def test_wrapped_pipeline_inherits_settings(limited_settings):
    fresh = lazy([1], settings=limited_settings).seq()

    with pytest.warns(UserWarning, match="take_all_limit=3"):
        assert fresh.unmonad(lambda x: [x] * 5).take_all() == [1, 1, 1]


# Settings and logging


def test_take_all_limit_truncates_with_warning(limited_settings):
    pipeline = lazy(itertools.count(), settings=limited_settings)

    with pytest.warns(UserWarning, match="take_all_limit"):
        assert pipeline.take_all() == [0, 1, 2]


def test_take_all_limit_silent_when_source_fits(limited_settings):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert lazy([1, 2, 3], settings=limited_settings).take_all() == [1, 2, 3]


def test_take_ignores_take_all_limit(limited_settings):
    assert lazy(range(10), settings=limited_settings).take(5) == [0, 1, 2, 3, 4]


def test_strict_operator_respects_take_all_limit(limited_settings):
    with pytest.warns(UserWarning):
        total = lazy(range(10), settings=limited_settings).fold_l(0, operator.add)

    assert total == 3


def test_default_settings_from_environment(monkeypatch, settings_cache):
    monkeypatch.setenv("LAZYCHAIN_TAKE_ALL_LIMIT", "2")

    with pytest.warns(UserWarning):
        assert lazy([1, 2, 3]).take_all() == [1, 2]


def test_drain_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="lazychain.pipeline.pipeline"):
        lazy([1, 2, 3]).unmonad(lambda x: [x, x]).take(3)

    assert "Queued unmonad step" in caplog.text
    assert "Drained 2 elements into 3 results" in caplog.text
    assert "dropped=1" in caplog.text
