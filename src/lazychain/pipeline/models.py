"""Pipeline state."""

from __future__ import annotations

from enum import Enum, auto


class PipelineState(Enum):
    """Lifecycle state of a Pipeline."""

    OPEN = auto()  # Accepts chaining calls and one terminal pull
    CONSUMED = auto()  # Terminal: every method call fails
