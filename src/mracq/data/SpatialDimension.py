"""SpatialDimension dataclass."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic

from typing_extensions import TypeVar

from mracq.data.MoveDataMixin import MoveDataMixin

T = TypeVar('T', int, float)
T_co = TypeVar('T_co', int, float, covariant=True)


@dataclass(slots=True)
class SpatialDimension(MoveDataMixin, Generic[T_co]):
    """Spatial dataclass of int/float (z, y, x).

    Used for the encoding matrix size and the field of view of an acquisition.
    A value of zero along an axis means the size is not known yet.
    """

    z: T_co
    y: T_co
    x: T_co

    @classmethod
    def from_sequence_xyz(cls, data: Sequence[T_co]) -> SpatialDimension[T_co]:
        """Create a SpatialDimension from a sequence in the order (x, y, z).

        A sequence of length 2 is interpreted as (x, y) with ``z=1``.

        Parameters
        ----------
        data
            sequence of length 2 or 3 in the order (x, y, z)
        """
        match len(data):
            case 3:
                x, y, z = data
            case 2:
                x, y = data
                z = type(x)(1)
            case n:
                raise ValueError(f'Expected a sequence of length 2 or 3 in the order (x, y, z), got length {n}.')
        return cls(z, y, x)

    def __str__(self) -> str:
        """Return a string representation of the SpatialDimension."""
        return f'z={self.z}, y={self.y}, x={self.x}'


def as_spatial_dimension(
    value: SpatialDimension[T] | Sequence[T] | None, default: T
) -> SpatialDimension[T]:
    """Convert a SpatialDimension, an (x, y, z) sequence or None into a SpatialDimension.

    Parameters
    ----------
    value
        value to convert; `None` results in all axes set to `default`
    default
        value used for all axes if `value` is `None`
    """
    if value is None:
        return SpatialDimension(default, default, default)
    if isinstance(value, SpatialDimension):
        return SpatialDimension(value.z, value.y, value.x)
    if isinstance(value, Sequence) and not isinstance(value, str):
        return SpatialDimension.from_sequence_xyz([type(default)(v) for v in value])
    raise TypeError(f'Expected SpatialDimension or a sequence in the order (x, y, z), got {type(value).__name__}')
