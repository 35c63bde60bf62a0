"""Read access to the k-space samples of AcquisitionData."""

import torch
from einops import rearrange

from mracq.data._acqdata.AcquisitionDataProtocol import _AcquisitionDataProtocol
from mracq.data.exceptions import IndexOutOfRangeError, ShapeMismatchError


def _check_index(name: str, index: int, size: int) -> None:
    """Raise an IndexOutOfRangeError if index is not in [0, size)."""
    if not 0 <= index < size:
        raise IndexOutOfRangeError(f'{name} index {index} is out of range for {size} {name}(s).')


class AcquisitionDataAccessMixin(_AcquisitionDataProtocol):
    """Access the k-space samples of AcquisitionData.

    All methods return views or new tensors and never modify the data.
    All indices are 0-based.
    """

    def _checked_entry(self, echo: int, slice: int, repetition: int) -> torch.Tensor:  # noqa: A002
        _check_index('echo', echo, self.n_echoes)
        _check_index('slice', slice, self.n_slices)
        _check_index('repetition', repetition, self.n_reps)
        return self.kdata[echo][slice, repetition]

    def k_data(self, echo: int = 0, coil: int = 0, slice: int = 0, repetition: int = 0) -> torch.Tensor:  # noqa: A002
        """Return the samples of one coil.

        Parameters
        ----------
        echo
            echo index
        coil
            coil index
        slice
            slice index
        repetition
            repetition index

        Returns
        -------
            k-space samples, shape `(n_nodes,)` with the number of (subsampled) nodes of the echo

        Raises
        ------
        `IndexOutOfRangeError`
            If any of the indices is out of range.
        """
        entry = self._checked_entry(echo, slice, repetition)
        _check_index('coil', coil, self.n_coils)
        return entry[:, coil]

    def multi_echo_data(self, coil: int, slice: int, repetition: int = 0) -> torch.Tensor:  # noqa: A002
        """Return the samples of one coil for all echoes, concatenated in echo order.

        Parameters
        ----------
        coil
            coil index
        slice
            slice index
        repetition
            repetition index
        """
        _check_index('coil', coil, self.n_coils)
        _check_index('slice', slice, self.n_slices)
        _check_index('repetition', repetition, self.n_reps)
        return torch.cat([kdata[slice, repetition, :, coil] for kdata in self.kdata])

    def multi_coil_data(self, echo: int, slice: int, repetition: int = 0) -> torch.Tensor:  # noqa: A002
        """Return the samples of all coils of one echo.

        The samples are ordered coil by coil: all nodes of coil 0, then all nodes of coil 1, etc.

        Parameters
        ----------
        echo
            echo index
        slice
            slice index
        repetition
            repetition index

        Returns
        -------
            k-space samples, shape `(n_coils * n_nodes,)`
        """
        entry = self._checked_entry(echo, slice, repetition)
        return rearrange(entry, 'nodes coils -> (coils nodes)')

    def multi_coil_multi_echo_data(self, slice: int, repetition: int = 0) -> torch.Tensor:  # noqa: A002
        """Return the samples of all coils and echoes.

        Ordered coil-major: for each coil the samples of echo 0, echo 1, etc.

        Parameters
        ----------
        slice
            slice index
        repetition
            repetition index
        """
        _check_index('slice', slice, self.n_slices)
        _check_index('repetition', repetition, self.n_reps)
        return torch.cat(
            [kdata[slice, repetition, :, coil] for coil in range(self.n_coils) for kdata in self.kdata]
        )

    def kdata_single_slice(self, slice: int, repetition: int = 0) -> torch.Tensor:  # noqa: A002
        """Return the samples of all echoes and coils of one slice.

        Ordered echo-major, i.e. the concatenation of `multi_coil_data` for echo 0, echo 1, etc.

        Parameters
        ----------
        slice
            slice index
        repetition
            repetition index
        """
        return torch.cat([self.multi_coil_data(echo, slice, repetition) for echo in range(self.n_echoes)])

    def profile_data(self, echo: int, slice: int, repetition: int, profile: int) -> torch.Tensor:  # noqa: A002
        """Return the samples of one readout.

        For a 3D trajectory with more than one slice (partition), all slices are stored in
        the entry of slice 0 and `slice` selects the partition within the trajectory.

        Parameters
        ----------
        echo
            echo index
        slice
            slice index, or partition index for 3D trajectories
        repetition
            repetition index
        profile
            readout index within the slice

        Returns
        -------
            k-space samples, shape `(n_samples_per_profile, n_coils)`

        Raises
        ------
        `IndexOutOfRangeError`
            If any of the indices is out of range.
        `ShapeMismatchError`
            If the number of nodes is not a whole number of profiles.
        """
        _check_index('echo', echo, self.n_echoes)
        trajectory = self.trajectories[echo]
        n_samples, n_partitions = trajectory.n_samples_per_profile, trajectory.n_slices
        partitioned = trajectory.dims == 3 and n_partitions > 1
        if not partitioned:
            n_partitions = 1
        entry = self._checked_entry(echo, 0 if partitioned else slice, repetition)
        n_nodes = entry.shape[0]
        if n_nodes % (n_samples * n_partitions):
            raise ShapeMismatchError(
                f'{n_nodes} nodes of echo {echo} are not a whole number of profiles '
                f'with {n_samples} samples and {n_partitions} partition(s).'
            )
        profiles = rearrange(
            entry,
            '(partitions profiles samples) coils -> partitions profiles samples coils',
            partitions=n_partitions,
            samples=n_samples,
        )
        if partitioned:
            _check_index('partition', slice, n_partitions)
        _check_index('profile', profile, profiles.shape[1])
        return profiles[slice if partitioned else 0, profile]
