"""Protocol for AcquisitionData."""

import torch
from typing_extensions import Protocol

from mracq.data.Trajectory import Trajectory


class _AcquisitionDataProtocol(Protocol):
    """Protocol for AcquisitionData used for type hinting in AcquisitionData mixins.

    Note that the actual AcquisitionData class can have more properties and methods than those defined here.

    If you want to use a property or method of AcquisitionData in a new mixin class,
    you must add it to this Protocol to make sure that the type hinting works [PRO]_.

    References
    ----------
    .. [PRO] Protocols https://typing.readthedocs.io/en/latest/spec/protocol.html#protocols
    """

    trajectories: list[Trajectory]
    kdata: list[torch.Tensor]
    n_echoes: int
    n_coils: int
    n_slices: int
    n_reps: int
    subsample_indices: list[torch.Tensor]
