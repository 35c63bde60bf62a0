"""Tests for Fast Fourier Operator class."""

import numpy as np
import pytest
import torch
from mracq.operators import FastFourierOp

from tests import RandomGenerator, dotproduct_adjointness_test, linear_operator_unitary_test


@pytest.mark.parametrize(('npoints', 'a'), [(100, 20), (300, 20)])
def test_fast_fourier_op_forward(npoints: int, a: int) -> None:
    """Test Fast Fourier Op transformation using a Gaussian."""
    # Utilize that a Fourier transform of a Gaussian function is given by
    # F(exp(-x^2/a)) = sqrt(pi*a)exp(-a*pi^2k^2)

    # Define k-space between [-1, 1) and image space accordingly
    dk = 2 / npoints
    k = torch.linspace(-1, 1 - dk, npoints)
    dx = 1 / 2
    x = torch.linspace(-1 / (2 * dk), 1 / (2 * dk) - dx, npoints)

    # Create Gaussian function in k-space and image space
    igauss = torch.exp(-(x**2) / a).to(torch.complex64)
    kgauss = np.sqrt(torch.pi * a) * torch.exp(-a * torch.pi**2 * k**2).to(torch.complex64)

    # Transform image to k-space
    ff_op = FastFourierOp(dim=(0,))
    (igauss_fwd,) = ff_op(igauss)

    # Scaling to "undo" fft scaling
    igauss_fwd *= np.sqrt(npoints) / 2
    torch.testing.assert_close(igauss_fwd, kgauss)


@pytest.mark.parametrize('n', [7, 8])
def test_fast_fourier_op_centered(n: int) -> None:
    """The k-space center is at index n//2 in both domains."""
    delta = torch.zeros(n, dtype=torch.complex64)
    delta[n // 2] = 1.0
    (kspace,) = FastFourierOp()(delta)
    torch.testing.assert_close(kspace, torch.full((n,), 1 / np.sqrt(n), dtype=torch.complex64))
    (image,) = FastFourierOp().H(kspace)
    torch.testing.assert_close(image, delta)


def test_fast_fourier_op_matches_numpy() -> None:
    """Compare the adjoint with the centered inverse DFT of numpy."""
    data = RandomGenerator(seed=0).complex128_tensor((3, 10, 4))
    (result,) = FastFourierOp(dim=(-2,)).adjoint(data)
    expected = np.fft.fftshift(np.fft.ifft(np.fft.ifftshift(data.numpy(), axes=-2), axis=-2, norm='ortho'), axes=-2)
    torch.testing.assert_close(result, torch.as_tensor(expected))


@pytest.mark.parametrize(('shape', 'dim'), [((5, 6, 7), (-1,)), ((5, 6, 7), (-2,)), ((4, 6, 8), (0, 2))])
def test_fast_fourier_op_adjoint(shape, dim) -> None:
    """Test adjointness of Fast Fourier Op."""
    generator = RandomGenerator(seed=0)
    u = generator.complex64_tensor(shape)
    v = generator.complex64_tensor(shape)
    dotproduct_adjointness_test(FastFourierOp(dim=dim), u, v)


def test_fast_fourier_op_unitary() -> None:
    """The adjoint is the inverse."""
    u = RandomGenerator(seed=1).complex64_tensor((2, 16, 3))
    linear_operator_unitary_test(FastFourierOp(dim=(-2,)), u)


def test_fast_fourier_op_adjoint_of_adjoint() -> None:
    """H of H is the operator itself."""
    operator = FastFourierOp()
    assert operator.H.H is operator
