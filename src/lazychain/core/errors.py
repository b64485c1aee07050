"""Errors raised by the stateless core."""


class SequenceShapeError(TypeError):
    """Raised when a non-sequence is supplied where an ordered sequence is required."""

    pass
