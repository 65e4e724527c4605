"""Errors raised by the transformation library.

Text content never raises: malformed input degrades to an empty string or a
pass-through. Only configuration mistakes are errors.
"""


class TransformationConfigError(ValueError):
    """A transformation was configured with a value it cannot apply."""


class SelectionError(ValueError):
    """The requested replacement range does not fit the document."""
