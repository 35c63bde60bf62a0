"""Trajectory dataclass."""

from dataclasses import dataclass

import torch
from typing_extensions import Self

from mracq.data.enums import TrajectoryKind
from mracq.data.exceptions import ShapeMismatchError
from mracq.data.MoveDataMixin import MoveDataMixin
from mracq.utils.summarize_tensorvalues import summarize_tensorvalues


@dataclass(slots=True)
class Trajectory(MoveDataMixin):
    """K-space trajectory of one echo/contrast.

    Contains the normalized k-space position and the readout time of every node.
    Nodes are ordered sample-fastest, then profile (readout), then slice, i.e. node
    ``sample + n_samples_per_profile * (profile + n_profiles * slice)``.

    Example for a 2D Cartesian trajectory with 4 samples and 3 profiles:

        - ``nodes[0]`` (x) changes along the samples of each readout,
        - ``nodes[1]`` (y) changes from profile to profile,
        - there is no z row.
    """

    nodes: torch.Tensor
    """Normalized k-space positions in [-0.5, 0.5). Shape `(dims, n_nodes)` with rows x, y (and z)."""

    times: torch.Tensor
    """Readout time of each node in s. Shape `(n_nodes,)`"""

    n_profiles: int
    """Number of readouts per slice."""

    n_samples_per_profile: int
    """Number of samples along one readout."""

    n_slices: int = 1
    """Number of slices (or partitions for 3D encoding) in the trajectory."""

    echo_time: float = 0.0
    """Echo time in s."""

    acq_time_per_profile: float = 0.0
    """Duration of one readout in s."""

    kind: TrajectoryKind = TrajectoryKind.ARBITRARY
    """Geometry of the trajectory."""

    def __post_init__(self) -> None:
        """Check the shapes of nodes and times."""
        self.nodes = torch.as_tensor(self.nodes)
        self.times = torch.as_tensor(self.times)
        if self.nodes.ndim != 2 or self.nodes.shape[0] not in (2, 3):
            raise ShapeMismatchError(
                f'Trajectory nodes must have shape (2 or 3, n_nodes), got {tuple(self.nodes.shape)}.'
            )
        if self.times.shape != (self.n_nodes,):
            raise ShapeMismatchError(
                f'Expected one readout time per node, i.e. shape ({self.n_nodes},), got {tuple(self.times.shape)}.'
            )
        if min(self.n_profiles, self.n_samples_per_profile, self.n_slices) < 1:
            raise ValueError('Number of profiles, samples per profile and slices must be positive.')

    @property
    def n_nodes(self) -> int:
        """Number of k-space nodes."""
        return self.nodes.shape[-1]

    @property
    def dims(self) -> int:
        """Number of spatial dimensions, 2 or 3."""
        return self.nodes.shape[0]

    @property
    def is_cartesian(self) -> bool:
        """True if the nodes lie on a regular grid."""
        match self.kind:
            case TrajectoryKind.CARTESIAN:
                return True
            case TrajectoryKind.RADIAL | TrajectoryKind.SPIRAL | TrajectoryKind.ARBITRARY:
                return False

    def kspace_nodes(self) -> torch.Tensor:
        """K-space positions of all nodes. Shape `(dims, n_nodes)`"""
        return self.nodes

    def readout_times(self) -> torch.Tensor:
        """Readout time of all nodes in s. Shape `(n_nodes,)`"""
        return self.times

    def select_nodes_(self, indices: torch.Tensor) -> Self:
        """Keep only the nodes (and their readout times) at the given indices, in the given order.

        Parameters
        ----------
        indices
            integer indices of the nodes to keep

        Returns
        -------
            self, modified in place
        """
        indices = torch.as_tensor(indices, dtype=torch.int64, device=self.nodes.device)
        self.nodes = self.nodes[:, indices]
        self.times = self.times[indices]
        return self

    def __repr__(self) -> str:
        """Representation method for Trajectory class."""
        out = (
            f'{type(self).__name__} ({self.kind.value}, {self.dims}D) with {self.n_nodes} nodes: '
            f'{self.n_slices} slice(s) x {self.n_profiles} profile(s) x {self.n_samples_per_profile} sample(s)\n'
            f'TE: {self.echo_time} s, acquisition time per profile: {self.acq_time_per_profile} s\n'
            f'nodes: {summarize_tensorvalues(self.nodes)}'
        )
        return out
