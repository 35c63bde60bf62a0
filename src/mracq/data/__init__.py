"""Acquisition data containers and trajectories."""

from mracq.data import enums, exceptions, traj_calculators
from mracq.data.AcquisitionData import AcquisitionData
from mracq.data.enums import TrajectoryKind
from mracq.data.exceptions import (
    AcquisitionDataError,
    DegenerateSelectionError,
    IndexOutOfRangeError,
    ShapeMismatchError,
    UnsupportedGeometryError,
)
from mracq.data.MoveDataMixin import InconsistentDeviceError, MoveDataMixin
from mracq.data.SpatialDimension import SpatialDimension
from mracq.data.Trajectory import Trajectory

__all__ = [
    "AcquisitionData",
    "AcquisitionDataError",
    "DegenerateSelectionError",
    "InconsistentDeviceError",
    "IndexOutOfRangeError",
    "MoveDataMixin",
    "ShapeMismatchError",
    "SpatialDimension",
    "Trajectory",
    "TrajectoryKind",
    "UnsupportedGeometryError",
    "enums",
    "exceptions",
    "traj_calculators",
]
