"""Source wrapping: normalize any input into a pull cursor."""

from lazychain.core.source.models import SourceCursor
from lazychain.core.source.operations import ensure_batch, is_sequence, wrap_source

__all__ = [
    # Models
    "SourceCursor",
    # Operations
    "wrap_source",
    "is_sequence",
    "ensure_batch",
]
