"""Density Compensation Calculation."""

from mracq.algorithms.dcf.dcf_nufft import dcf_nufft
__all__ = ["dcf_nufft"]
