"""Linear operators, e.g. the Fourier transform used for re-gridding."""

from mracq.operators.LinearOperator import LinearOperator
from mracq.operators.FastFourierOp import FastFourierOp

__all__ = ["FastFourierOp", "LinearOperator"]
