"""Utilities."""

from mracq.utils.summarize_tensorvalues import summarize_tensorvalues
__all__ = ["summarize_tensorvalues"]
