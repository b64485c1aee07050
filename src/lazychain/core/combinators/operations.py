"""Transformer factories: map, sieve, fold, adapter-wrap and re-boxing.

Every factory returns a fresh transformer (`Batch -> Batch`) or reducer
(`Batch -> scalar`). Transformers never mutate the batch they receive.

Usage:
    double = map_each(lambda x: x * 2)
    evens = sieve(lambda x: x % 2 == 0)
    total = fold_l(0, lambda acc, x: acc + x)

    double([1, 2, 3])          # [2, 4, 6]
    evens([1, 2, 3, 4])        # [2, 4]
    total([1, 2, 3, 4])        # [10]

    # Host batch-producing functions, element as receiver
    words = unmonad(str.split, ",")
    words(["a,b", "c"])        # ["a", "b", "c"]
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from lazychain.core.errors import SequenceShapeError
from lazychain.core.source import ensure_batch, is_sequence
from lazychain.core.types import Batch, Reducer, Transformer


def _require_batch(batch: Any, combinator: str) -> None:
    if not is_sequence(batch):
        raise SequenceShapeError(
            f"{combinator}() transformer expected an ordered sequence, "
            f"got {type(batch).__name__}: {batch!r}"
        )


def _takes_index(fn: Callable[..., Any]) -> bool:
    """Check if a fold function accepts (accumulator, element, index)."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(None, None, None)
    except TypeError:
        return False
    return True


def _name_of(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def map_each(fn: Callable[[Any], Any]) -> Transformer:
    """Lazy transformer replacing each element with `fn(element)`.

    Args:
        fn: One-argument mapping function.

    Returns:
        Transformer producing exactly one output per input, in order.
    """

    def transform(batch: Batch) -> Batch:
        _require_batch(batch, "map_each")
        return [fn(x) for x in batch]

    return transform


def sieve(fn: Callable[[Any], Any]) -> Transformer:
    """Lazy transformer keeping elements for which `fn` is truthy.

    Kept elements are passed through unchanged.
    """

    def transform(batch: Batch) -> Batch:
        _require_batch(batch, "sieve")
        return [x for x in batch if fn(x)]

    return transform


def fold(seed: Any, fn: Callable[..., Any]) -> Reducer:
    """Reducer folding a batch from the left into a single accumulator.

    Calls `fn(accumulator, element, index)` for each element in order, where
    index is the 0-based position in the batch being folded (not in the
    original source). Two-argument functions such as `operator.add` are
    called as `fn(accumulator, element)`.

    Args:
        seed: Initial accumulator value, returned unchanged for an empty batch.
        fn: Folding function.

    Returns:
        Reducer returning the final accumulator.
    """
    with_index = _takes_index(fn)

    def reduce(batch: Batch) -> Any:
        _require_batch(batch, "fold")
        accumulator = seed
        for index, x in enumerate(batch):
            if with_index:
                accumulator = fn(accumulator, x, index)
            else:
                accumulator = fn(accumulator, x)
        return accumulator

    return reduce


def fold_l(seed: Any, fn: Callable[..., Any]) -> Transformer:
    """Strict transformer: fold the whole batch, emit `[accumulator]`.

    Needs the full batch before producing its one output, so inside a
    Pipeline it only runs after materialization.
    """
    return rebox(fold(seed, fn))


def unmonad(fn: Callable[..., Any], *args: Any) -> Transformer:
    """Lazy adapter embedding a host batch-producing function.

    For each element, calls `fn(element, *args)` with the element as the
    receiver, so unbound methods work directly (`unmonad(str.split, ",")`).
    Whatever the call returns is that element's output batch; the batches are
    concatenated in order.

    Args:
        fn: Host function returning a sequence (or iterator) per element.
        *args: Fixed extra arguments for every call.

    Returns:
        Transformer producing zero or more outputs per input element.

    Raises:
        SequenceShapeError: When the transformer runs and `fn` returns a
            non-sequence.
    """
    where = f"unmonad({_name_of(fn)})"

    def transform(batch: Batch) -> Batch:
        _require_batch(batch, "unmonad")
        result: Batch = []
        for x in batch:
            result.extend(ensure_batch(fn(x, *args), where))
        return result

    return transform


def seq_unmonad(fn: Callable[..., Any], *args: Any) -> Transformer:
    """Strict adapter: call `fn(batch, *args)` once with the whole batch.

    The batch itself is the receiver, so list-level host operations
    (`sorted`, `list.__add__`, ...) can be embedded. The returned sequence
    becomes the output batch.
    """
    where = f"seq_unmonad({_name_of(fn)})"

    def transform(batch: Batch) -> Batch:
        _require_batch(batch, "seq_unmonad")
        return ensure_batch(fn(list(batch), *args), where)

    return transform


def rebox(fn: Callable[[Batch], Any]) -> Transformer:
    """Lift a scalar-returning function into a transformer emitting `[result]`.

    Lets a strict, scalar-producing operator feed further lazy chaining.
    """

    def transform(batch: Batch) -> Batch:
        return [fn(batch)]

    return transform
