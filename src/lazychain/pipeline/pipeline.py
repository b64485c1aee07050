"""Lazy, single-use, dot-chainable pipeline.

Usage:
    # Lazy steps are queued, nothing runs until a terminal pull
    lazy([1, 2, 3, 4, 5, 6, 7, 8, 9, 0]).map(lambda x: x + 1).sieve(
        lambda x: x % 2 == 0
    ).map(lambda x: x * 2).take(3)  # [4, 8, 12]

    # Expanding steps are truncated at the bound
    lazy([1, 2]).unmonad(lambda x, k: [x] * k, 3).take(4)  # [1, 1, 1, 2]

    # Strict operators materialize first
    lazy([1, 2, 3, 4]).fold_l(0, operator.add)  # 10
    lazy([1, 2, 3, 4]).fold_l_wrap(0, operator.add).map(str).take_all()  # ["10"]

    # One terminal pull per pipeline
    p = lazy([1, 2, 3])
    p.take(1)
    p.take(1)  # raises PipelineConsumedError
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from typing import Any

from lazychain.config import PipelineSettings, get_settings
from lazychain.core.combinators import fold, fold_l, map_each, seq_unmonad, sieve, unmonad
from lazychain.core.compose import curry_call
from lazychain.core.source import SourceCursor, wrap_source
from lazychain.core.types import Batch, Transformer
from lazychain.pipeline.models import PipelineState

logger = logging.getLogger(__name__)


class PipelineConsumedError(ReferenceError):
    """Raised when a pipeline is used after its terminal pull."""

    pass


class Pipeline:
    """Single-use binding of a source cursor to a queue of lazy transformers.

    Lazy methods (`map`, `sieve`/`filter`, `unmonad`) append to the queue and
    return the same pipeline. A terminal pull (`take`, `take_all`, `seq` or a
    strict operator) drains the source element by element through the queued
    transformers, then drops the cursor and queue. Any later call raises
    PipelineConsumedError.

    A pipeline returned by a `*_wrap` operator or by `seq()` is a new,
    independent pipeline over the materialized result.

    Args:
        source: Input of any shape (None, scalar, sequence or iterator).
        settings: Pipeline settings. Defaults to `get_settings()`.
    """

    def __init__(self, source: Any = None, settings: PipelineSettings | None = None):
        self._cursor: SourceCursor | None = wrap_source(source)
        self._queue: list[Transformer] | None = []
        self._settings = settings if settings is not None else get_settings()
        self._state = PipelineState.OPEN

    @property
    def state(self) -> PipelineState:
        """Current lifecycle state."""
        return self._state

    @property
    def consumed(self) -> bool:
        return self._state is PipelineState.CONSUMED

    def __repr__(self) -> str:
        if self._queue is None:
            return f"Pipeline(state={self._state.name})"
        return f"Pipeline(state={self._state.name}, queued={len(self._queue)})"

    # Lazy chaining

    def map(self, fn: Callable[[Any], Any]) -> Pipeline:
        """Queue a mapping step: one output per element."""
        return self._enqueue("map", map_each(fn))

    def sieve(self, fn: Callable[[Any], Any]) -> Pipeline:
        """Queue a filtering step: keep elements for which fn is truthy."""
        return self._enqueue("sieve", sieve(fn))

    filter = sieve

    def unmonad(self, fn: Callable[..., Any], *args: Any) -> Pipeline:
        """Queue an adapter step: `fn(element, *args)` yields the element's outputs."""
        return self._enqueue("unmonad", unmonad(fn, *args))

    # Terminal pulls

    def take(self, count: int) -> Batch:
        """Evaluate lazily until `count` results exist or the source runs out.

        Each pulled element passes through the whole queue before the next is
        pulled. When one element expands past the remaining capacity, its
        outputs are truncated and the overflow is dropped.

        Args:
            count: Maximum number of results, a non-negative int.

        Returns:
            Up to `count` results in source order.

        Raises:
            PipelineConsumedError: If the pipeline was already consumed.
            TypeError: If count is not an int.
            ValueError: If count is negative.
        """
        self._ensure_open("take")
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"take() count must be an int, got {type(count).__name__}")
        if count < 0:
            raise ValueError(f"take() count must be non-negative, got {count}")
        results, _ = self._drain(count, probe=False)
        return results

    def take_all(self) -> Batch:
        """Evaluate every remaining element.

        Bounded only by `PipelineSettings.take_all_limit`; if that limit cuts
        the results short, a UserWarning is issued.
        """
        self._ensure_open("take_all")
        limit = self._settings.take_all_limit
        results, truncated = self._drain(limit)
        if truncated:
            warnings.warn(
                f"take_all() stopped at take_all_limit={limit}; remaining elements were dropped.",
                stacklevel=2,
            )
        return results

    def seq(self) -> Pipeline:
        """Materialize now and continue chaining on a fresh pipeline."""
        self._ensure_open("seq")
        return Pipeline(self.take_all(), settings=self._settings)

    # Strict operators

    def fold_l(self, seed: Any, fn: Callable[..., Any]) -> Any:
        """Materialize, then fold from the left. Returns the raw accumulator.

        `fn` is called as `fn(accumulator, element, index)`, or as
        `fn(accumulator, element)` when it takes two arguments. The index
        counts positions in the materialized results.
        """
        self._ensure_open("fold_l")
        reducer = fold(seed, fn)
        return reducer(self.take_all())

    def fold_l_wrap(self, seed: Any, fn: Callable[..., Any]) -> Pipeline:
        """Materialize, fold, and continue chaining over `[accumulator]`."""
        self._ensure_open("fold_l_wrap")
        transform = fold_l(seed, fn)
        return Pipeline(transform(self.take_all()), settings=self._settings)

    def seq_unmonad(self, fn: Callable[..., Any], *args: Any) -> Batch:
        """Materialize, then call `fn(results, *args)` once. Returns its batch."""
        self._ensure_open("seq_unmonad")
        transform = seq_unmonad(fn, *args)
        return transform(self.take_all())

    def seq_unmonad_wrap(self, fn: Callable[..., Any], *args: Any) -> Pipeline:
        """Like `seq_unmonad`, but continue chaining over the returned batch."""
        self._ensure_open("seq_unmonad_wrap")
        transform = seq_unmonad(fn, *args)
        return Pipeline(transform(self.take_all()), settings=self._settings)

    # Internals

    def _ensure_open(self, method: str) -> None:
        if self._state is PipelineState.CONSUMED:
            raise PipelineConsumedError(
                f"{method}() called on a consumed pipeline; "
                f"pipelines allow a single terminal pull"
            )

    def _enqueue(self, name: str, transform: Transformer) -> Pipeline:
        self._ensure_open(name)
        assert self._queue is not None
        self._queue.append(transform)
        logger.debug(f"Queued {name} step ({len(self._queue)} pending)")
        return self

    def _consume(self) -> tuple[SourceCursor, list[Transformer]]:
        """Take ownership of cursor and queue, leaving the pipeline CONSUMED."""
        cursor, queue = self._cursor, self._queue
        assert cursor is not None and queue is not None
        self._cursor = None
        self._queue = None
        self._state = PipelineState.CONSUMED
        return cursor, queue

    def _drain(self, limit: int | None, probe: bool = True) -> tuple[Batch, bool]:
        """Pull elements through the composed queue into a bounded buffer.

        Consumes the pipeline before pulling, so a failure mid-drain still
        leaves it unusable.

        Args:
            limit: Maximum number of results, or None for no bound.
            probe: Whether to check for leftover source elements once the
                bound is reached. Probing pulls one element from an iterator
                source, so bounded `take` never does it.

        Returns:
            (results, truncated) where truncated is True when outputs were
            dropped, or when probing found elements left at the bound.
        """
        cursor, queue = self._consume()
        transform = curry_call(*queue)
        queue.clear()

        results: Batch = []
        dropped = 0
        while (limit is None or len(results) < limit) and cursor.has_more():
            outputs = transform([cursor.next()])
            if limit is not None:
                room = limit - len(results)
                if len(outputs) > room:
                    dropped += len(outputs) - room
                    outputs = outputs[:room]
            results.extend(outputs)

        logger.debug(
            f"Drained {cursor.position} elements into {len(results)} results "
            f"(limit={limit}, dropped={dropped})"
        )
        truncated = dropped > 0
        if probe and limit is not None and not truncated and len(results) >= limit:
            truncated = cursor.has_more()
        return results, truncated


def lazy(source: Any = None, settings: PipelineSettings | None = None) -> Pipeline:
    """Wrap a source in a new Pipeline."""
    return Pipeline(source, settings=settings)
