"""Combinator factory: elementary transformers and reducers."""

from lazychain.core.combinators.operations import (
    fold,
    fold_l,
    map_each,
    rebox,
    seq_unmonad,
    sieve,
    unmonad,
)

__all__ = [
    "map_each",
    "sieve",
    "fold",
    "fold_l",
    "unmonad",
    "seq_unmonad",
    "rebox",
]
