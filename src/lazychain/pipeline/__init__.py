"""Lazy pipeline: stateful, single-use, dot-chainable evaluation.

Architecture Note:
    pipeline/ is the stateful layer. Unlike core/ (stateless functions), a
    Pipeline owns a source cursor and a transformer queue, both discarded by
    its one terminal pull.
"""

from lazychain.pipeline.models import PipelineState
from lazychain.pipeline.pipeline import Pipeline, PipelineConsumedError, lazy

__all__ = [
    "Pipeline",
    "PipelineState",
    "PipelineConsumedError",
    "lazy",
]
