"""Classes for calculating k-space trajectories."""

from mracq.data.traj_calculators.TrajectoryCalculator import TrajectoryCalculator
from mracq.data.traj_calculators.TrajectoryCartesian import TrajectoryCartesian
from mracq.data.traj_calculators.TrajectoryRadial2D import TrajectoryRadial2D
from mracq.data.traj_calculators.TrajectorySpiral2D import TrajectorySpiral2D

__all__ = ["TrajectoryCalculator", "TrajectoryCartesian", "TrajectoryRadial2D", "TrajectorySpiral2D"]
