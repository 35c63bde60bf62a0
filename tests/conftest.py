"""PyTest fixtures for the mracq package."""

from collections.abc import Callable

import pytest
import torch
from mracq.data import AcquisitionData, SpatialDimension
from mracq.data.traj_calculators import TrajectoryCartesian, TrajectoryRadial2D

from tests import RandomGenerator


def pytest_collection_modifyitems(config, items):
    """Skip tests marked with cuda if no cuda device is available."""
    if torch.cuda.is_available():
        return
    skip_cuda = pytest.mark.skip(reason='requires a cuda device')
    for item in items:
        if 'cuda' in item.keywords:
            item.add_marker(skip_cuda)


@pytest.fixture(params=({'seed': 0},))
def random_cartesian_acquisition(request) -> Callable[..., AcquisitionData]:
    """Generator of fully sampled Cartesian acquisitions with random complex samples.

    The trajectory is 2D for ``n_partitions=1`` and 3D otherwise.
    Echo ``e`` has the echo time ``(e + 1) * 1e-3``.
    """
    generator = RandomGenerator(request.param['seed'])

    def generate(
        n_echoes: int = 1,
        n_coils: int = 2,
        n_slices: int = 1,
        n_reps: int = 1,
        n_profiles: int = 4,
        n_samples: int = 4,
        n_partitions: int = 1,
    ) -> AcquisitionData:
        trajectories = [
            TrajectoryCartesian()(
                n_profiles=n_profiles,
                n_samples_per_profile=n_samples,
                n_slices=n_partitions,
                echo_time=(echo + 1) * 1e-3,
                acq_time_per_profile=2e-3,
            )
            for echo in range(n_echoes)
        ]
        n_nodes = n_partitions * n_profiles * n_samples
        kdata = [generator.complex64_tensor((n_slices, n_reps, n_nodes, n_coils)) for _ in range(n_echoes)]
        return AcquisitionData(
            trajectories=trajectories,
            kdata=kdata,
            encoding_size=SpatialDimension(n_partitions, n_profiles, n_samples),
            fov=(0.2, 0.2, 0.005),
            sequence_info={'sequence': 'gre', 'flip_angle': [15.0]},
        )

    return generate


@pytest.fixture(params=({'seed': 1},))
def random_radial_acquisition(request) -> Callable[..., AcquisitionData]:
    """Generator of 2D radial acquisitions with random complex samples."""
    generator = RandomGenerator(request.param['seed'])

    def generate(n_echoes: int = 2, n_coils: int = 3, n_spokes: int = 8, n_samples: int = 16) -> AcquisitionData:
        trajectories = [
            TrajectoryRadial2D()(n_profiles=n_spokes, n_samples_per_profile=n_samples) for _ in range(n_echoes)
        ]
        kdata = [generator.complex64_tensor((1, 1, n_spokes * n_samples, n_coils)) for _ in range(n_echoes)]
        return AcquisitionData(trajectories, kdata, encoding_size=(n_samples, n_samples, 1))

    return generate
