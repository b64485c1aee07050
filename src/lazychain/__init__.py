"""lazychain: lazy, composable sequence pipelines.

Usage:
    import operator
    from lazychain import lazy, curry, map_each, sieve, fold_l

    # Dot-chained, evaluated on demand, single use
    lazy(range(10)).map(lambda x: x + 1).sieve(lambda x: x % 2 == 0).take(3)
    # [2, 4, 6]

    # Eager functional composition
    curry(map_each(lambda x: x + 1), fold_l(0, operator.add))([1, 2, 3])
    # [9]
"""

import logging

__version__ = "0.1.0"

# Configuration
from lazychain.config import PipelineSettings, get_settings

# Core primitives
from lazychain.core import (
    Batch,
    Reducer,
    SequenceShapeError,
    SourceCursor,
    Transformer,
    chain,
    curry,
    curry_apply,
    curry_call,
    fold,
    fold_l,
    map_each,
    rebox,
    seq_unmonad,
    sieve,
    unmonad,
    wrap_source,
)

# Pipeline
from lazychain.pipeline import (
    Pipeline,
    PipelineConsumedError,
    PipelineState,
    lazy,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Types
    "Batch",
    "Transformer",
    "Reducer",
    # Source
    "SourceCursor",
    "wrap_source",
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
    # Pipeline
    "Pipeline",
    "PipelineState",
    "lazy",
    # Errors
    "SequenceShapeError",
    "PipelineConsumedError",
    # Config
    "PipelineSettings",
    "get_settings",
]
