"""Curry/compose engine: stateless eager composition of transformers."""

from lazychain.core.compose.operations import chain, curry, curry_apply, curry_call

__all__ = [
    "curry",
    "curry_call",
    "curry_apply",
    "chain",
]
