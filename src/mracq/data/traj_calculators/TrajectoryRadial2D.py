"""2D radial trajectory class."""

import torch

from mracq.data.enums import TrajectoryKind
from mracq.data.Trajectory import Trajectory
from mracq.data.traj_calculators.TrajectoryCalculator import TrajectoryCalculator


class TrajectoryRadial2D(TrajectoryCalculator):
    """Radial 2D trajectory."""

    def __init__(self, angle: float | None = None) -> None:
        """Initialize TrajectoryRadial2D.

        Parameters
        ----------
        angle
            angle in rad between two radial lines.
            `None` distributes the lines uniformly over [0, pi).
        """
        super().__init__()
        self.angle = angle

    def __call__(
        self,
        *,
        n_profiles: int,
        n_samples_per_profile: int,
        n_slices: int = 1,
        echo_time: float = 0.0,
        acq_time_per_profile: float = 1e-3,
    ) -> Trajectory:
        """Calculate radial 2D trajectory.

        Parameters
        ----------
        n_profiles
            number of radial lines
        n_samples_per_profile
            number of samples along each line
        n_slices
            must be 1
        echo_time
            echo time in s
        acq_time_per_profile
            duration of one readout in s

        Returns
        -------
            radial 2D trajectory
        """
        if n_slices != 1:
            raise ValueError(f'Radial 2D trajectories have a single slice, got {n_slices}.')
        angle = torch.pi / n_profiles if self.angle is None else self.angle
        radial = (torch.arange(n_samples_per_profile, dtype=torch.float64) - n_samples_per_profile / 2) / (
            n_samples_per_profile
        )
        angles = torch.arange(n_profiles, dtype=torch.float64)[:, None] * angle
        kx = radial * torch.cos(angles)
        ky = radial * torch.sin(angles)
        times = self._readout_times(n_profiles, n_samples_per_profile, n_slices, echo_time, acq_time_per_profile)
        return Trajectory(
            nodes=torch.stack([kx.flatten(), ky.flatten()], dim=0),
            times=times,
            n_profiles=n_profiles,
            n_samples_per_profile=n_samples_per_profile,
            n_slices=n_slices,
            echo_time=echo_time,
            acq_time_per_profile=acq_time_per_profile,
            kind=TrajectoryKind.RADIAL,
        )
