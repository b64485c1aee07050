"""Core functionalities: stateless transformers, composition and source wrapping.

Architecture Note:
    core/ contains pure, stateless building blocks. Every factory returns a
    new, independent function and nothing here holds runtime state beyond a
    SourceCursor's position. For the stateful, single-use builder, see
    pipeline/.
"""

from lazychain.core.combinators import (
    fold,
    fold_l,
    map_each,
    rebox,
    seq_unmonad,
    sieve,
    unmonad,
)
from lazychain.core.compose import chain, curry, curry_apply, curry_call
from lazychain.core.errors import SequenceShapeError
from lazychain.core.source import SourceCursor, ensure_batch, is_sequence, wrap_source
from lazychain.core.types import Batch, Reducer, Transformer

__all__ = [
    # Types
    "Batch",
    "Transformer",
    "Reducer",
    # Errors
    "SequenceShapeError",
    # Source
    "SourceCursor",
    "wrap_source",
    "is_sequence",
    "ensure_batch",
    # Combinators
    "map_each",
    "sieve",
    "fold",
    "fold_l",
    "unmonad",
    "seq_unmonad",
    "rebox",
    # Compose
    "curry",
    "curry_call",
    "curry_apply",
    "chain",
]
