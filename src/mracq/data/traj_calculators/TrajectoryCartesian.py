"""Cartesian trajectory class."""

import torch

from mracq.data.enums import TrajectoryKind
from mracq.data.Trajectory import Trajectory
from mracq.data.traj_calculators.TrajectoryCalculator import TrajectoryCalculator, centered_positions


class TrajectoryCartesian(TrajectoryCalculator):
    """Cartesian trajectory.

    2D if `n_slices` is 1, otherwise 3D with the slices as phase encoding along z.
    """

    def __call__(
        self,
        *,
        n_profiles: int,
        n_samples_per_profile: int,
        n_slices: int = 1,
        echo_time: float = 0.0,
        acq_time_per_profile: float = 1e-3,
    ) -> Trajectory:
        """Calculate Cartesian trajectory.

        Parameters
        ----------
        n_profiles
            number of phase encoding lines (y)
        n_samples_per_profile
            number of samples in readout direction (x)
        n_slices
            number of partitions (z). A 2D trajectory is created for a single partition.
        echo_time
            echo time in s
        acq_time_per_profile
            duration of one readout in s

        Returns
        -------
            Cartesian trajectory
        """
        kz, ky, kx = torch.meshgrid(
            centered_positions(n_slices),
            centered_positions(n_profiles),
            centered_positions(n_samples_per_profile),
            indexing='ij',
        )
        axes = (kx, ky) if n_slices == 1 else (kx, ky, kz)
        nodes = torch.stack([k.flatten() for k in axes], dim=0)
        times = self._readout_times(n_profiles, n_samples_per_profile, n_slices, echo_time, acq_time_per_profile)
        return Trajectory(
            nodes=nodes,
            times=times,
            n_profiles=n_profiles,
            n_samples_per_profile=n_samples_per_profile,
            n_slices=n_slices,
            echo_time=echo_time,
            acq_time_per_profile=acq_time_per_profile,
            kind=TrajectoryKind.CARTESIAN,
        )
