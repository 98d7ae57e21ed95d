"""Exceptions raised by the DragDrop core."""


class DiagramError(Exception):
    """Base class for DragDrop errors."""


class InvalidConfigurationError(DiagramError, ValueError):
    """Raised when sizes or timings cannot produce meaningful hit tests."""


class ReferentialIntegrityError(DiagramError, LookupError):
    """Raised when a line refers to a shape that does not exist."""

    def __init__(self, shape_id: str):
        super().__init__(f"No shape with id {shape_id!r}")
        self.shape_id = shape_id
