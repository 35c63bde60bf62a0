"""Algorithms used by the acquisition data transforms, e.g. density compensation."""

from mracq.algorithms import dcf
__all__ = ["dcf"]
