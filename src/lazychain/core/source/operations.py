"""Source wrapping and sequence-shape checks.

Usage:
    wrap_source(None)        # -> cursor over []
    wrap_source(5)           # -> cursor over [5]
    wrap_source("abc")       # -> cursor over ["abc"]
    wrap_source([1, 2, 3])   # -> cursor over [1, 2, 3]
    wrap_source(gen())       # -> cursor pulling lazily from the generator
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from lazychain.core.errors import SequenceShapeError
from lazychain.core.source.models import SourceCursor
from lazychain.core.types import Batch

_TEXT_TYPES = (str, bytes, bytearray)


def is_sequence(value: Any) -> bool:
    """Check if a value is an ordered sequence of elements.

    Text types are sequences to Python but are treated as single values here,
    so `"abc"` is one element rather than three.

    Args:
        value: Value to check.

    Returns:
        True for non-text `collections.abc.Sequence` instances.
    """
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def wrap_source(value: Any) -> SourceCursor:
    """Normalize an arbitrary input into a cursor over the intended elements.

    Handles multiple input shapes:
    - None -> empty sequence
    - Ordered sequence -> itself, in original order
    - Iterator (e.g. a generator) -> pulled lazily
    - Anything else -> one-element sequence containing the value,
      including falsy values such as 0, "" or {}

    Never fails; every input is coerced.

    Args:
        value: Input of unconstrained shape.

    Returns:
        Cursor over the wrapped elements.
    """
    if value is None:
        return SourceCursor(())
    if is_sequence(value) or isinstance(value, Iterator):
        return SourceCursor(value)
    return SourceCursor((value,))


def ensure_batch(value: Any, where: str) -> Batch:
    """Convert a sequence or iterator into a fresh batch.

    Args:
        value: Value that is contractually an ordered sequence.
        where: Name of the caller, used in the error message.

    Returns:
        New list holding the elements of value.

    Raises:
        SequenceShapeError: If value is neither a sequence nor an iterator.
    """
    if is_sequence(value) or isinstance(value, Iterator):
        return list(value)
    raise SequenceShapeError(
        f"{where} expected an ordered sequence, got {type(value).__name__}: {value!r}"
    )
