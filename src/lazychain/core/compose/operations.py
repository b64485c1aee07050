"""Eager composition of transformers.

Unlike the Pipeline, which pulls one element at a time, composition hands the
whole output of each step to the next step.

Usage:
    pipeline = curry(map_each(lambda x: x + 1), sieve(lambda x: x % 2 == 0))
    pipeline([1, 2, 3, 4])                     # [2, 4]

    # Scalar-producing reducers need re-boxing under curry_apply
    curry_apply(map_each(abs), rebox(fold(0, operator.add)))([-1, 2])  # [3]

    # Source first, transformers later
    chain([1, 2, 3])(map_each(str))            # ["1", "2", "3"]
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeAlias

from lazychain.core.errors import SequenceShapeError
from lazychain.core.source import is_sequence
from lazychain.core.types import Transformer

Handoff: TypeAlias = Callable[[Transformer, Any], Any]


def _spread(fn: Transformer, value: Any) -> Any:
    if is_sequence(value):
        return fn(list(value))
    return fn([value])


def _raw(fn: Transformer, value: Any) -> Any:
    return fn(value)


def _apply(fn: Transformer, value: Any) -> Any:
    if not is_sequence(value):
        raise SequenceShapeError(
            f"curry_apply() requires each intermediate value to be an ordered sequence, "
            f"got {type(value).__name__}: {value!r}"
        )
    return fn(list(value))


def _compose(handoff: Handoff, transformers: tuple[Transformer, ...]) -> Callable[[Any], Any]:
    steps = list(transformers)

    def run(source: Any) -> Any:
        result = source
        for step in steps:
            result = handoff(step, result)
        return result

    return run


def curry(*transformers: Transformer) -> Callable[[Any], Any]:
    """Compose transformers, spreading sequences and lifting scalars.

    A sequence running value is spread into a fresh batch; any other value is
    handed over as a one-element batch.

    Args:
        *transformers: Transformers applied first to last.

    Returns:
        Function computing `tn(...t2(t1(source)))`. With no transformers,
        the identity.
    """
    return _compose(_spread, transformers)


def curry_call(*transformers: Transformer) -> Callable[[Any], Any]:
    """Compose transformers, handing each the running value untouched."""
    return _compose(_raw, transformers)


def curry_apply(*transformers: Transformer) -> Callable[[Any], Any]:
    """Compose transformers, spreading a running value that must be a sequence.

    Raises:
        SequenceShapeError: If the source or any intermediate result is not
            an ordered sequence. Raised before the next transformer runs.
    """
    return _compose(_apply, transformers)


def chain(source: Any) -> Callable[..., Any]:
    """Bind a source first and supply the transformers afterwards.

    Args:
        source: Starting value (sequence or scalar).

    Returns:
        Function taking transformers and returning `curry(*transformers)(source)`.
    """

    def run(*transformers: Transformer) -> Any:
        return curry(*transformers)(source)

    return run
