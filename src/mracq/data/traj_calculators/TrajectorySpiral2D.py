"""2D spiral trajectory class."""

import torch

from mracq.data.enums import TrajectoryKind
from mracq.data.Trajectory import Trajectory
from mracq.data.traj_calculators.TrajectoryCalculator import TrajectoryCalculator


class TrajectorySpiral2D(TrajectoryCalculator):
    """Archimedean spiral trajectory with uniformly rotated interleaves.

    Each interleave starts in the k-space center and winds outwards with constant
    radial speed, reaching (but not including) radius 0.5 at its last sample.
    """

    def __init__(self, n_windings: float = 6.0) -> None:
        """Initialize TrajectorySpiral2D.

        Parameters
        ----------
        n_windings
            number of turns of each interleave
        """
        if n_windings <= 0:
            raise ValueError('Number of windings must be positive.')
        super().__init__()
        self.n_windings = n_windings

    def __call__(
        self,
        *,
        n_profiles: int,
        n_samples_per_profile: int,
        n_slices: int = 1,
        echo_time: float = 0.0,
        acq_time_per_profile: float = 1e-3,
    ) -> Trajectory:
        """Calculate spiral 2D trajectory.

        Parameters
        ----------
        n_profiles
            number of interleaves
        n_samples_per_profile
            number of samples along each interleave
        n_slices
            must be 1
        echo_time
            echo time in s
        acq_time_per_profile
            duration of one interleave in s

        Returns
        -------
            spiral 2D trajectory
        """
        if n_slices != 1:
            raise ValueError(f'Spiral 2D trajectories have a single slice, got {n_slices}.')
        t = torch.arange(n_samples_per_profile, dtype=torch.float64) / n_samples_per_profile
        start_angle = 2 * torch.pi * torch.arange(n_profiles, dtype=torch.float64)[:, None] / n_profiles
        k = 0.5 * t * torch.exp(1j * (2 * torch.pi * self.n_windings * t + start_angle))
        times = self._readout_times(n_profiles, n_samples_per_profile, n_slices, echo_time, acq_time_per_profile)
        return Trajectory(
            nodes=torch.stack([k.real.flatten(), k.imag.flatten()], dim=0),
            times=times,
            n_profiles=n_profiles,
            n_samples_per_profile=n_samples_per_profile,
            n_slices=n_slices,
            echo_time=echo_time,
            acq_time_per_profile=acq_time_per_profile,
            kind=TrajectoryKind.SPIRAL,
        )
