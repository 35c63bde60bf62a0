"""K-space trajectory base class."""

from abc import ABC, abstractmethod

import torch

from mracq.data.Trajectory import Trajectory


class TrajectoryCalculator(ABC):
    """Base class for k-space trajectories."""

    @abstractmethod
    def __call__(
        self,
        *,
        n_profiles: int,
        n_samples_per_profile: int,
        n_slices: int = 1,
        echo_time: float = 0.0,
        acq_time_per_profile: float = 1e-3,
    ) -> Trajectory:
        """Calculate the trajectory.

        Not all of the parameters will be used by all implementations.

        Parameters
        ----------
        n_profiles
            number of readouts per slice
        n_samples_per_profile
            number of samples along one readout
        n_slices
            number of slices or partitions
        echo_time
            echo time in s
        acq_time_per_profile
            duration of one readout in s

        Returns
        -------
            Trajectory
        """

    def _readout_times(
        self,
        n_profiles: int,
        n_samples_per_profile: int,
        n_slices: int,
        echo_time: float,
        acq_time_per_profile: float,
    ) -> torch.Tensor:
        """Calculate the readout time of each node.

        Every readout starts at the echo time and takes `acq_time_per_profile`.

        Returns
        -------
            readout times, shape `(n_slices * n_profiles * n_samples_per_profile,)`
        """
        readout = echo_time + acq_time_per_profile * torch.arange(n_samples_per_profile, dtype=torch.float64) / (
            n_samples_per_profile
        )
        return readout.repeat(n_slices * n_profiles)


def centered_positions(n: int) -> torch.Tensor:
    """Normalized Cartesian grid positions in [-0.5, 0.5) with the k-space center at index ``ceil((n-1)/2)``.

    Parameters
    ----------
    n
        number of grid positions
    """
    return (torch.arange(n, dtype=torch.float64) - (n // 2)) / n
