"""AcquisitionData class."""

import warnings
from collections.abc import Sequence
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

import torch
from einops import rearrange
from typing_extensions import Self

from mracq.algorithms.dcf.dcf_nufft import dcf_nufft
from mracq.data._acqdata.AcquisitionDataAccessMixin import AcquisitionDataAccessMixin, _check_index
from mracq.data.enums import TrajectoryKind
from mracq.data.exceptions import DegenerateSelectionError, ShapeMismatchError, UnsupportedGeometryError
from mracq.data.MoveDataMixin import InconsistentDeviceError, MoveDataMixin
from mracq.data.SpatialDimension import SpatialDimension, as_spatial_dimension
from mracq.data.traj_calculators.TrajectoryCartesian import TrajectoryCartesian
from mracq.data.Trajectory import Trajectory
from mracq.operators.FastFourierOp import FastFourierOp


@dataclass
class AcquisitionData(AcquisitionDataAccessMixin, MoveDataMixin):
    """K-space data of a multi-echo, multi-coil, multi-slice, multi-repetition acquisition.

    Every echo has its own trajectory. The samples of echo ``e`` are stored in ``kdata[e]``
    with shape `(n_slices, n_reps, n_nodes, n_coils)`, where ``n_nodes`` is the number of
    acquired nodes, i.e. ``len(subsample_indices[e])``. Row ``i`` of an entry was acquired at
    the trajectory node ``subsample_indices[e][i]``.

    Counts that are not given (``0``) are derived from the trajectories and the data.
    Counts that are given must match the data.
    """

    trajectories: list[Trajectory]
    """Trajectory of each echo. A single trajectory is wrapped into a list."""

    kdata: list[torch.Tensor]
    """K-space samples of each echo, shape `(n_slices, n_reps, n_nodes, n_coils)`."""

    n_echoes: int = 0
    """Number of echoes/contrasts."""

    n_coils: int = 0
    """Number of receiver coils."""

    n_slices: int = 0
    """Number of slices. After `convert_3d_to_2d` the number of slices obtained from the readout."""

    n_reps: int = 0
    """Number of repetitions."""

    subsample_indices: list[torch.Tensor] | None = None
    """Acquired trajectory nodes of each echo (0-based). `None` means all nodes were acquired."""

    encoding_size: SpatialDimension[int] = field(default_factory=lambda: SpatialDimension(0, 0, 0))
    """Encoding matrix size. Can also be given as (x, y, z) sequence. All zero if unknown."""

    fov: SpatialDimension[float] = field(default_factory=lambda: SpatialDimension(0.0, 0.0, 0.0))
    """Field of view in m. Can also be given as (x, y, z) sequence. All zero if unknown."""

    sequence_info: dict[str, Any] = field(default_factory=dict)
    """Sequence parameters. Not interpreted."""

    def __post_init__(self) -> None:
        """Derive missing counts, set default subsample indices and check consistency."""
        if isinstance(self.trajectories, Trajectory):
            self.trajectories = [self.trajectories]
        else:
            self.trajectories = list(self.trajectories)
        if isinstance(self.kdata, torch.Tensor):
            self.kdata = [self.kdata]
        else:
            self.kdata = [torch.as_tensor(kdata) for kdata in self.kdata]
        if min(self.n_echoes, self.n_coils, self.n_slices, self.n_reps) < 0:
            raise ValueError('Number of echoes, coils, slices and repetitions must not be negative.')
        if not self.trajectories or not self.kdata:
            raise ShapeMismatchError('At least one echo with trajectory and k-space data is required.')
        for echo, kdata in enumerate(self.kdata):
            if kdata.ndim != 4:
                raise ShapeMismatchError(
                    f'kdata of echo {echo} must have shape (slices, repetitions, nodes, coils), '
                    f'got {tuple(kdata.shape)}.'
                )
        self.n_echoes = self.n_echoes or len(self.trajectories)
        self.n_slices = self.n_slices or self.kdata[0].shape[0]
        self.n_reps = self.n_reps or self.kdata[0].shape[1]
        self.n_coils = self.n_coils or self.kdata[0].shape[3]

        if len(self.trajectories) != self.n_echoes:
            raise ShapeMismatchError(f'Expected {self.n_echoes} trajectories, got {len(self.trajectories)}.')
        if len(self.kdata) != self.n_echoes:
            raise ShapeMismatchError(f'Expected kdata for {self.n_echoes} echoes, got {len(self.kdata)}.')

        if self.subsample_indices is None:
            self.subsample_indices = [
                torch.arange(trajectory.n_nodes, device=trajectory.nodes.device) for trajectory in self.trajectories
            ]
        else:
            self.subsample_indices = [torch.as_tensor(idx, dtype=torch.int64) for idx in self.subsample_indices]
        if len(self.subsample_indices) != self.n_echoes:
            raise ShapeMismatchError(
                f'Expected subsample indices for {self.n_echoes} echoes, got {len(self.subsample_indices)}.'
            )
        for echo, (trajectory, kdata, idx) in enumerate(
            zip(self.trajectories, self.kdata, self.subsample_indices, strict=True)
        ):
            expected_shape = (self.n_slices, self.n_reps, len(idx), self.n_coils)
            if tuple(kdata.shape) != expected_shape:
                raise ShapeMismatchError(
                    f'kdata of echo {echo} has shape {tuple(kdata.shape)}, expected {expected_shape} '
                    '(slices, repetitions, nodes, coils).'
                )
            if idx.ndim != 1:
                raise ShapeMismatchError(f'Subsample indices of echo {echo} must be one-dimensional.')
            if idx.numel() and (idx.min() < 0 or idx.max() >= trajectory.n_nodes):
                raise ShapeMismatchError(
                    f'Subsample indices of echo {echo} must be in [0, {trajectory.n_nodes}), '
                    f'got values in [{idx.min()}, {idx.max()}].'
                )
            if torch.unique(idx).numel() != idx.numel():
                raise ValueError(f'Subsample indices of echo {echo} contain duplicates.')

        self.encoding_size = as_spatial_dimension(self.encoding_size, default=0)
        self.fov = as_spatial_dimension(self.fov, default=0.0)

    @classmethod
    def from_entries(
        cls,
        trajectories: Trajectory | Sequence[Trajectory],
        entries: Sequence[Sequence[Sequence[torch.Tensor]]],
        **kwargs: Any,
    ) -> Self:
        """Create AcquisitionData from individual (nodes, coils) matrices.

        Parameters
        ----------
        trajectories
            trajectory of each echo
        entries
            nested sequence indexed ``[echo][slice][repetition]`` of k-space samples with shape `(nodes, coils)`
        kwargs
            further arguments of `AcquisitionData`, e.g. ``subsample_indices`` or ``encoding_size``

        Raises
        ------
        `ShapeMismatchError`
            If the nesting is ragged or the matrices of one echo differ in shape.
        """
        if not entries or not entries[0] or not entries[0][0]:
            raise ShapeMismatchError('At least one echo, slice and repetition are required.')
        n_slices, n_reps = len(entries[0]), len(entries[0][0])
        kdata = []
        for echo, slices in enumerate(entries):
            if len(slices) != n_slices or any(len(reps) != n_reps for reps in slices):
                raise ShapeMismatchError(
                    f'Expected {n_slices} slices with {n_reps} repetitions each for every echo, echo {echo} differs.'
                )
            matrices = [torch.as_tensor(matrix) for reps in slices for matrix in reps]
            if any(matrix.ndim != 2 or matrix.shape != matrices[0].shape for matrix in matrices):
                raise ShapeMismatchError(f'All entries of echo {echo} must be (nodes, coils) matrices of equal shape.')
            stacked = torch.stack(matrices)
            kdata.append(rearrange(stacked, '(slices reps) nodes coils -> slices reps nodes coils', reps=n_reps))
        return cls(trajectories=trajectories, kdata=kdata, **kwargs)

    def trajectory(self, echo: int = 0) -> Trajectory:
        """Return the trajectory of an echo."""
        _check_index('echo', echo, self.n_echoes)
        return self.trajectories[echo]

    def entry(self, echo: int, slice: int, repetition: int = 0) -> torch.Tensor:  # noqa: A002
        """Return the k-space samples of one echo, slice and repetition, shape `(nodes, coils)`."""
        return self._checked_entry(echo, slice, repetition)

    def convert_undersampled_data(self) -> Self:
        """Reduce the trajectories to the acquired nodes.

        Returns a copy in which every trajectory only contains the nodes in `subsample_indices`
        (in their order) and the subsample indices enumerate all nodes. Cartesian trajectories
        are marked as `TrajectoryKind.ARBITRARY` as the remaining nodes no longer form a full grid.
        The k-space samples are not changed.
        """
        new = self.clone()
        for echo, (trajectory, idx) in enumerate(zip(new.trajectories, new.subsample_indices, strict=True)):
            trajectory.select_nodes_(idx)
            if trajectory.is_cartesian:
                trajectory.kind = TrajectoryKind.ARBITRARY
            new.subsample_indices[echo] = torch.arange(len(idx), device=idx.device)
        return new

    def change_encoding_size_2d(self, new_encoding_size: SpatialDimension[int] | Sequence[int]) -> Self:
        """Change the in-plane encoding size. Returns a modified copy.

        See `change_encoding_size_2d_` for details.
        """
        return self.clone().change_encoding_size_2d_(new_encoding_size)

    def change_encoding_size_2d_(self, new_encoding_size: SpatialDimension[int] | Sequence[int]) -> Self:
        """Change the in-plane encoding size in place.

        The k-space positions along x and y are scaled by ``encoding_size / new_encoding_size``.
        Only nodes which are still inside [-0.5, 0.5) along x and y are kept, together with their
        readout times and samples. The kept samples are scaled by ``1 / (scale_x * scale_y)``.

        Parameters
        ----------
        new_encoding_size
            new encoding size as `SpatialDimension` or (x, y[, z]) sequence. Only x and y are used.

        Returns
        -------
            self, modified in place

        Raises
        ------
        `ValueError`
            If the current encoding size is not set or the new one is not positive.
        `DegenerateSelectionError`
            If no node or no acquired node of an echo would remain. The data is not modified in this case.
        """
        new_size = as_spatial_dimension(new_encoding_size, default=0)
        if self.encoding_size.x <= 0 or self.encoding_size.y <= 0:
            raise ValueError(f'Encoding size must be set to change it, got {self.encoding_size}.')
        if new_size.x <= 0 or new_size.y <= 0:
            raise ValueError(f'New encoding size must be positive, got {new_size}.')
        if new_size.x > self.encoding_size.x or new_size.y > self.encoding_size.y:
            warnings.warn(
                f'New encoding size ({new_size.x}, {new_size.y}) is larger than the current one '
                f'({self.encoding_size.x}, {self.encoding_size.y}). No zero-filling is applied.',
                stacklevel=2,
            )
        scale_x = self.encoding_size.x / new_size.x
        scale_y = self.encoding_size.y / new_size.y

        selections = []
        for echo, trajectory in enumerate(self.trajectories):
            nodes = trajectory.nodes.clone()
            nodes[0] *= scale_x
            nodes[1] *= scale_y
            inside = ((nodes[:2] >= -0.5) & (nodes[:2] < 0.5)).all(dim=0)
            if not inside.any():
                raise DegenerateSelectionError(
                    f'No node of echo {echo} remains for encoding size ({new_size.x}, {new_size.y}).'
                )
            if not inside[self.subsample_indices[echo]].any():
                raise DegenerateSelectionError(
                    f'No acquired node of echo {echo} remains for encoding size ({new_size.x}, {new_size.y}).'
                )
            selections.append((nodes, inside))

        for echo, (trajectory, (nodes, inside)) in enumerate(zip(self.trajectories, selections, strict=True)):
            kept = torch.nonzero(inside).flatten()
            trajectory.nodes = nodes
            trajectory.select_nodes_(kept)
            if trajectory.is_cartesian:
                # the kept nodes of a full grid form a smaller grid
                trajectory.n_samples_per_profile = torch.unique(trajectory.nodes[0]).numel()
                trajectory.n_profiles = torch.unique(trajectory.nodes[1]).numel()

            # position of each kept node within the new trajectory
            new_position = torch.full_like(inside, -1, dtype=torch.int64)
            new_position[kept] = torch.arange(len(kept), device=kept.device)
            idx = self.subsample_indices[echo]
            kept_rows = inside[idx]
            self.subsample_indices[echo] = new_position[idx[kept_rows]]
            self.kdata[echo] = self.kdata[echo][:, :, kept_rows, :] / (scale_x * scale_y)

        self.encoding_size.x = new_size.x
        self.encoding_size.y = new_size.y
        return self

    def convert_3d_to_2d(self) -> Self:
        """Convert 3D Cartesian data into a stack of 2D slices.

        The samples of each readout are transformed by an inverse, centered, orthonormal FFT,
        i.e. the readout direction becomes the slice direction. The 2D trajectories have the
        phase encoding lines of the 3D trajectory as samples and its partitions as profiles.
        The number of slices of the result is the number of samples per readout.

        The subsample indices are reduced to the acquired readouts. Missing samples of partially
        acquired readouts are filled with zeros before the transform.

        Returns
        -------
            new AcquisitionData with `n_slices` equal to the number of samples per readout

        Raises
        ------
        `UnsupportedGeometryError`
            If any trajectory is not Cartesian.
        `ShapeMismatchError`
            If the data has more than one slice or the echoes differ in the number of samples per readout.
        """
        for echo, trajectory in enumerate(self.trajectories):
            if not trajectory.is_cartesian:
                raise UnsupportedGeometryError(
                    f'Conversion to 2D requires Cartesian trajectories, echo {echo} is {trajectory.kind.value}.'
                )
        if self.n_slices != 1:
            raise ShapeMismatchError(f'3D data must be stored as a single slice, got {self.n_slices} slices.')
        n_samples = self.trajectories[0].n_samples_per_profile
        if any(trajectory.n_samples_per_profile != n_samples for trajectory in self.trajectories):
            raise ShapeMismatchError('All echoes must have the same number of samples per readout.')

        fourier_op = FastFourierOp(dim=(-2,))
        trajectories, kdata, subsample_indices = [], [], []
        for echo, (trajectory, idx) in enumerate(zip(self.trajectories, self.subsample_indices, strict=True)):
            if trajectory.n_nodes != trajectory.n_slices * trajectory.n_profiles * n_samples:
                raise ShapeMismatchError(f'Trajectory of echo {echo} is not a full Cartesian grid.')
            trajectories.append(
                TrajectoryCartesian()(
                    n_profiles=trajectory.n_slices,
                    n_samples_per_profile=trajectory.n_profiles,
                    echo_time=trajectory.echo_time,
                    acq_time_per_profile=trajectory.acq_time_per_profile,
                )
            )
            readouts, readout_position = torch.unique(idx // n_samples, return_inverse=True)
            if len(readouts) * n_samples != len(idx):
                warnings.warn(
                    f'Echo {echo} contains partially acquired readouts. Missing samples are set to zero.',
                    stacklevel=2,
                )
            data = self.kdata[echo][0]
            readout_data = data.new_zeros(self.n_reps, len(readouts), n_samples, self.n_coils)
            readout_data[:, readout_position, idx % n_samples] = data
            (slice_data,) = fourier_op.H(readout_data)
            kdata.append(rearrange(slice_data, 'reps profiles samples coils -> samples reps profiles coils'))
            subsample_indices.append(readouts)

        return type(self)(
            trajectories=trajectories,
            kdata=kdata,
            n_echoes=self.n_echoes,
            n_coils=self.n_coils,
            n_slices=n_samples,
            n_reps=self.n_reps,
            subsample_indices=subsample_indices,
            encoding_size=self.encoding_size.clone(),
            fov=self.fov.clone(),
            sequence_info=deepcopy(self.sequence_info),
        )

    def sampling_density(self, shape: Sequence[int]) -> list[torch.Tensor]:
        """Calculate the square root of the density compensation of each echo.

        For Cartesian trajectories only the acquired nodes are used, otherwise all nodes of the trajectory.
        The weights are applied twice in a reconstruction (forward and adjoint), therefore the square root
        of the density compensation function is returned.

        Parameters
        ----------
        shape
            image matrix size, one entry per trajectory dimension in the order (x, y[, z])

        Returns
        -------
            non-negative weights, one tensor of shape `(n_nodes,)` per echo

        Raises
        ------
        `ShapeMismatchError`
            If `shape` does not have one entry per trajectory dimension.
        `ValueError`
            If an axis of `shape` is too small for the interpolation kernel.
        """
        weights = []
        for echo, (trajectory, idx) in enumerate(zip(self.trajectories, self.subsample_indices, strict=True)):
            if len(shape) != trajectory.dims:
                raise ShapeMismatchError(
                    f'Expected a shape with {trajectory.dims} entries for echo {echo}, got {tuple(shape)}.'
                )
            nodes = trajectory.nodes[:, idx] if trajectory.is_cartesian else trajectory.nodes
            weights.append(dcf_nufft(nodes, shape).abs().sqrt())
        return weights

    def _check_weights(self, weights: Sequence[torch.Tensor]) -> None:
        if len(weights) != self.n_echoes:
            raise ShapeMismatchError(f'Expected weights for {self.n_echoes} echoes, got {len(weights)}.')
        for echo, (weight, kdata) in enumerate(zip(weights, self.kdata, strict=True)):
            if weight.shape != (kdata.shape[2],):
                raise ShapeMismatchError(
                    f'Expected {kdata.shape[2]} weights for echo {echo}, got shape {tuple(weight.shape)}.'
                )

    def weight_data_(self, weights: Sequence[torch.Tensor]) -> Self:
        """Multiply the samples of each echo by the weights of its nodes, in place.

        Parameters
        ----------
        weights
            one weight per acquired node, one tensor per echo, e.g. from `sampling_density`
        """
        self._check_weights(weights)
        self.kdata = [kdata * weight[:, None] for kdata, weight in zip(self.kdata, weights, strict=True)]
        return self

    def weighted_data(self, weights: Sequence[torch.Tensor]) -> Self:
        """Return a copy with the samples multiplied by the weights, see `weight_data_`."""
        return self.clone().weight_data_(weights)

    def unweight_data_(self, weights: Sequence[torch.Tensor]) -> Self:
        """Divide the samples of each echo by the weights of its nodes, in place."""
        self._check_weights(weights)
        self.kdata = [kdata / weight[:, None] for kdata, weight in zip(self.kdata, weights, strict=True)]
        return self

    def unweight_data_squared_(self, weights: Sequence[torch.Tensor]) -> Self:
        """Divide the samples of each echo by the squared weights of its nodes, in place."""
        self._check_weights(weights)
        self.kdata = [kdata / weight[:, None] ** 2 for kdata, weight in zip(self.kdata, weights, strict=True)]
        return self

    def __repr__(self) -> str:
        """Representation method for AcquisitionData class."""
        try:
            device = str(self.device)
        except InconsistentDeviceError:
            device = 'mixed'
        nodes = ', '.join(str(kdata.shape[2]) for kdata in self.kdata)
        out = (
            f'{type(self).__name__} with {self.n_echoes} echo(es), {self.n_coils} coil(s), '
            f'{self.n_slices} slice(s), {self.n_reps} repetition(s) and dtype {self.kdata[0].dtype}\n'
            f'Device: {device}\n'
            f'Acquired nodes per echo: {nodes}\n'
            f'Encoding size: {self.encoding_size}, FOV [m]: {self.fov}'
        )
        return out
