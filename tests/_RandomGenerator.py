"""Random generator."""

from collections.abc import Sequence

import torch


class RandomGenerator:
    """Generate random numbers for testing purposes. Uses a fixed seed to
    ensure reproducibility.

    provides:
        tensor of uniform random numbers:
            int64_tensor, float32_tensor, float64_tensor, complex64_tensor, complex128_tensor
        scalar uniform random numbers:
            int64, float32, float64
        random permutations and subsets:
            randperm, subset
    """

    def __init__(self, seed):
        """Initialize with a fixed seed."""
        self.generator = torch.Generator().manual_seed(seed)

    def _rand(self, size, low, high, dtype=torch.float32) -> torch.Tensor:
        """Generate uniform random floats in [low, high) with given dtype."""
        if low > high:
            raise ValueError('low should be lower than high')
        return (torch.rand(size, generator=self.generator, dtype=dtype) * (high - low)) + low

    def float32_tensor(self, size: Sequence[int] | int = (1,), low: float = 0.0, high: float = 1.0) -> torch.Tensor:
        """Generate float32 tensor of given size in [low, high)."""
        return self._rand(size, low, high, torch.float32)

    def float64_tensor(self, size: Sequence[int] | int = (1,), low: float = 0.0, high: float = 1.0) -> torch.Tensor:
        """Generate float64 tensor of given size in [low, high)."""
        return self._rand(size, low, high, torch.float64)

    def complex64_tensor(self, size: Sequence[int] | int = (1,), low: float = 0.0, high: float = 1.0) -> torch.Tensor:
        """Generate complex64 tensor of given size with amplitude in [low, high)."""
        if low < 0:
            raise ValueError('low/high refer to the amplitude and must be positive')
        amp = self.float32_tensor(size, low, high)
        phase = self.float32_tensor(size, -torch.pi, torch.pi)
        return torch.polar(amp, phase)

    def complex128_tensor(self, size: Sequence[int] | int = (1,), low: float = 0.0, high: float = 1.0) -> torch.Tensor:
        """Generate complex128 tensor of given size with amplitude in [low, high)."""
        if low < 0:
            raise ValueError('low/high refer to the amplitude and must be positive')
        amp = self.float64_tensor(size, low, high)
        phase = self.float64_tensor(size, -torch.pi, torch.pi)
        return torch.polar(amp, phase)

    def int64_tensor(self, size: Sequence[int] | int = (1,), low: int = 0, high: int = 1 << 16) -> torch.Tensor:
        """Generate int64 tensor of given size in [low, high)."""
        if isinstance(size, int):
            size = (size,)
        return torch.randint(low, high, tuple(size), generator=self.generator, dtype=torch.int64)

    def int64(self, low: int = 0, high: int = 1 << 16) -> int:
        """Generate a random int64 integer in [low, high)."""
        return int(self.int64_tensor((1,), low, high).item())

    def float32(self, low: float = 0.0, high: float = 1.0) -> float:
        """Generate a float32 scalar in [low, high)."""
        return self.float32_tensor((1,), low, high).item()

    def float64(self, low: float = 0.0, high: float = 1.0) -> float:
        """Generate a float64 scalar in [low, high)."""
        return self.float64_tensor((1,), low, high).item()

    def randperm(self, n, *, dtype=torch.int64) -> torch.Tensor:
        """Generate random permutation of integers from 0 to n-1."""
        return torch.randperm(n, generator=self.generator, dtype=dtype)

    def subset(self, n: int, k: int) -> torch.Tensor:
        """Generate k distinct integers from 0 to n-1 in random order."""
        return self.randperm(n)[:k]
