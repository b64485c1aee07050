"""Source cursor: forward-only pull access to a wrapped input."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

_EMPTY = object()


class SourceCursor:
    """Forward-only cursor over an ordered source.

    Exposes only "more remains" and "take next element". Elements are pulled
    from the underlying iterable on demand, one at a time, so a bounded pull
    over a generator never advances it further than needed. Never rewinds.

    Args:
        items: Ordered iterable to pull from. Sequences are iterated in place,
            never copied or mutated.
    """

    __slots__ = ("_iterator", "_pending", "_position")

    def __init__(self, items: Iterable[Any]):
        self._iterator: Iterator[Any] | None = iter(items)
        self._pending: Any = _EMPTY
        self._position = 0

    @property
    def position(self) -> int:
        """Number of elements handed out so far."""
        return self._position

    def has_more(self) -> bool:
        """Check whether at least one more element can be pulled."""
        if self._pending is not _EMPTY:
            return True
        if self._iterator is None:
            return False
        try:
            self._pending = next(self._iterator)
        except StopIteration:
            self._iterator = None
            return False
        return True

    def next(self) -> Any:
        """Pull the next element and advance.

        Raises:
            IndexError: If the cursor is exhausted.
        """
        if not self.has_more():
            raise IndexError(f"Source cursor exhausted after {self._position} elements")
        value = self._pending
        self._pending = _EMPTY
        self._position += 1
        return value

    def __iter__(self) -> Iterator[Any]:
        while self.has_more():
            yield self.next()

    def __repr__(self) -> str:
        return f"SourceCursor(position={self._position})"
