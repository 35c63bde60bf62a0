"""Errors raised by the acquisition data model."""


class AcquisitionDataError(Exception):
    """An error in the acquisition data model or its transforms."""


class ShapeMismatchError(AcquisitionDataError, ValueError):
    """Declared counts and actual tensor shapes disagree."""


class IndexOutOfRangeError(AcquisitionDataError, IndexError):
    """An echo, coil, slice, repetition or profile index is outside its valid range."""


class UnsupportedGeometryError(AcquisitionDataError, ValueError):
    """A transform was called on a trajectory geometry it cannot handle."""


class DegenerateSelectionError(AcquisitionDataError, ValueError):
    """A selection left an echo without any k-space nodes."""
