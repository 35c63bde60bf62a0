"""Iterative density compensation function based on the NUFFT interpolation kernel."""

import math
from collections.abc import Sequence

import torch
from torchkbnufft import calc_density_compensation_function

DEFAULT_OVERSAMPLING = 1.25
"""Grid oversampling factor of the NUFFT."""

DEFAULT_KERNEL_HALF_WIDTH = 3
"""Half width of the Kaiser-Bessel kernel in grid points."""

DEFAULT_N_ITERATIONS = 10
"""Number of fixed point iterations."""


def dcf_nufft(
    nodes: torch.Tensor,
    shape: Sequence[int],
    oversampling: float = DEFAULT_OVERSAMPLING,
    kernel_half_width: int = DEFAULT_KERNEL_HALF_WIDTH,
    n_iterations: int = DEFAULT_N_ITERATIONS,
) -> torch.Tensor:
    """Calculate the sampling density compensation function of an arbitrary trajectory.

    Uses the fixed point iteration of Pipe and Menon [PIP1999]_, i.e. repeated gridding
    and re-interpolation with the Kaiser-Bessel kernel of the NUFFT, as implemented in
    `torchkbnufft.calc_density_compensation_function`.

    Parameters
    ----------
    nodes
        k-space positions normalized to [-0.5, 0.5), shape `(dims, n_nodes)`
    shape
        image matrix size, one entry per row of `nodes` and in the same order
    oversampling
        grid oversampling. The grid size along each axis is the next even number of ``oversampling * n``.
    kernel_half_width
        half width of the interpolation kernel
    n_iterations
        number of iterations

    Returns
    -------
        complex density compensation values, shape `(n_nodes,)`

    Raises
    ------
    `ValueError`
        If `nodes` does not match `shape` or the oversampled grid is smaller than the kernel.

    References
    ----------
    .. [PIP1999] Pipe JG, Menon P (1999) Sampling density compensation in MRI: Rationale and an iterative numerical
       solution. MRM 41(1) https://doi.org/10.1002/(SICI)1522-2594(199901)41:1<179::AID-MRM25>3.0.CO;2-V
    """
    if nodes.ndim != 2 or nodes.shape[0] != len(shape):
        raise ValueError(f'Expected nodes of shape ({len(shape)}, n_nodes), got {tuple(nodes.shape)}.')
    if nodes.shape[-1] == 0:
        return torch.zeros(0, dtype=torch.complex64, device=nodes.device)
    im_size = tuple(int(n) for n in shape)
    grid_size = tuple(2 * math.ceil(oversampling * n / 2) for n in im_size)
    if min(grid_size) < 2 * kernel_half_width:
        raise ValueError(
            f'Oversampled grid {grid_size} of image size {im_size} is smaller than the kernel width '
            f'{2 * kernel_half_width}. Use a larger image size or a smaller kernel.'
        )
    # torchkbnufft expects radians in [-pi, pi)
    ktraj = 2 * torch.pi * nodes.to(torch.float32)
    dcf = calc_density_compensation_function(
        ktraj=ktraj,
        im_size=im_size,
        num_iterations=n_iterations,
        grid_size=grid_size,
        numpoints=2 * kernel_half_width,
    )
    return dcf.flatten()
