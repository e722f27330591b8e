"""
Exception types raised by the phased_array package.
"""


class PhasedArrayError(Exception):
    """Base class for all phased array errors."""


class InvalidGeometryError(PhasedArrayError, ValueError):
    """Raised when an antenna array cannot be constructed from the given geometry."""


class CalculationError(PhasedArrayError, RuntimeError):
    """Raised when an array factor calculation could not complete."""


class FieldMismatchError(PhasedArrayError, ValueError):
    """Raised when two fields cannot be combined."""
