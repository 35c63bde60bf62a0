"""Class for Fast Fourier Operator."""

from collections.abc import Sequence

import torch

from mracq.operators.LinearOperator import LinearOperator


class FastFourierOp(LinearOperator):
    """Fast Fourier operator class.

    Applies a centered, unitary Fast Fourier Transformation along selected dimensions.

    The transformation is done with 'ortho' normalization, i.e. the forward transform is scaled by
    :math:`1/\\sqrt{N}` and the adjoint is its exact inverse [FFT]_.

    Both forward and adjoint assume the zero-frequency (and the image center) to be at index ``N//2``.
    Therefore, ifftshift is applied before and fftshift after `torch.fft.fftn` / `torch.fft.ifftn`.

    References
    ----------
    .. [FFT] FFT https://numpy.org/doc/stable/reference/routines.fft.html
    """

    def __init__(self, dim: Sequence[int] = (-1,)) -> None:
        """Initialize a Fast Fourier Operator.

        Parameters
        ----------
        dim
            dim along which FFT and IFFT are applied, by default the last dimension.
        """
        super().__init__()
        self._dim = tuple(dim)

    def forward(self, x: torch.Tensor) -> tuple[torch.Tensor,]:
        """FFT from image space to k-space.

        Parameters
        ----------
        x
            data in image space

        Returns
        -------
            FFT of x
        """
        y = torch.fft.fftshift(
            torch.fft.fftn(torch.fft.ifftshift(x, dim=self._dim), dim=self._dim, norm='ortho'),
            dim=self._dim,
        )
        return (y,)

    def adjoint(self, y: torch.Tensor) -> tuple[torch.Tensor,]:
        """IFFT from k-space to image space.

        Parameters
        ----------
        y
            k-space data

        Returns
        -------
            IFFT of y
        """
        x = torch.fft.fftshift(
            torch.fft.ifftn(torch.fft.ifftshift(y, dim=self._dim), dim=self._dim, norm='ortho'),
            dim=self._dim,
        )
        return (x,)
