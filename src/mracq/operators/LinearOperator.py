"""Linear Operators."""

from __future__ import annotations

from abc import ABC, abstractmethod

import torch


class LinearOperator(ABC, torch.nn.Module):
    """General Linear Operator.

    LinearOperators have exactly one input tensor and one output tensor,
    and fulfill :math:`f(a*x + b*y) = a*f(x) + b*f(y)`
    with :math:`a`, :math:`b` scalars and :math:`x`, :math:`y` tensors.

    Subclasses must implement the forward and adjoint methods. Both return a 1-tuple.
    The `~LinearOperator.H` property returns the adjoint operator.
    """

    @abstractmethod
    def forward(self, x: torch.Tensor) -> tuple[torch.Tensor,]:
        """Apply forward operator."""
        ...

    @abstractmethod
    def adjoint(self, x: torch.Tensor) -> tuple[torch.Tensor,]:
        """Adjoint of the operator."""
        ...

    def __call__(self, x: torch.Tensor) -> tuple[torch.Tensor,]:
        """Apply the forward operator."""
        return super().__call__(x)

    @property
    def H(self) -> LinearOperator:  # noqa: N802
        """Adjoint operator.

        Note: ``linear_operator.H.H == linear_operator``
        """
        return AdjointLinearOperator(self)


class AdjointLinearOperator(LinearOperator):
    """Adjoint of a LinearOperator."""

    def __init__(self, operator: LinearOperator) -> None:
        """Initialize the adjoint of a LinearOperator."""
        super().__init__()
        self._operator = operator

    def forward(self, x: torch.Tensor) -> tuple[torch.Tensor,]:
        """Apply the adjoint of the original LinearOperator."""
        return self._operator.adjoint(x)

    def adjoint(self, x: torch.Tensor) -> tuple[torch.Tensor,]:
        """Apply the adjoint of the adjoint, i.e. the original LinearOperator."""
        return self._operator.forward(x)

    @property
    def H(self) -> LinearOperator:  # noqa: N802
        """Adjoint of adjoint operator, i.e. original LinearOperator."""
        return self._operator
