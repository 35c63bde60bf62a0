"""Trajectory enums."""

import enum


class TrajectoryKind(enum.Enum):
    """Geometry of a k-space trajectory.

    The set is closed: code that depends on the geometry matches on all members.
    `ARBITRARY` is used for node sets that no longer follow a regular pattern,
    e.g. a Cartesian trajectory reduced to its acquired nodes.
    """

    CARTESIAN = 'cartesian'
    RADIAL = 'radial'
    SPIRAL = 'spiral'
    ARBITRARY = 'arbitrary'
