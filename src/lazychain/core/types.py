"""Core type definitions for lazychain."""

from collections.abc import Callable
from typing import Any, TypeAlias

Batch: TypeAlias = list[Any]
"""The canonical ordered sequence passed between transformers.

Every transformer receives a batch and returns a new one. Inputs are never
mutated in place.
"""

Transformer: TypeAlias = Callable[[Batch], Batch]
"""Function from an ordered batch of inputs to an ordered batch of outputs."""

Reducer: TypeAlias = Callable[[Batch], Any]
"""Function collapsing a whole batch into one scalar value (see `rebox`)."""
