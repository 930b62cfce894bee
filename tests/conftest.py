"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from pyscurv.logger import LogLevel, ScurvLogger, set_logger
from pyscurv.synthetic import (
    generate_bowl_point_cloud,
    generate_cylinder_point_cloud,
    generate_plane_point_cloud,
    generate_sphere_point_cloud,
)


@pytest.fixture(autouse=True)
def quiet_logger():
    set_logger(ScurvLogger(mode='console', console_level=LogLevel.WARNING))
    yield
    set_logger(None)


@pytest.fixture
def sphere_cloud():
    np.random.seed(0)
    return generate_sphere_point_cloud([0.3, -1.0, 2.0], 0.5, n_points=600)


@pytest.fixture
def bowl_cloud():
    np.random.seed(1)
    return generate_bowl_point_cloud([0, 0, 0], 2.0, n_points=600)


@pytest.fixture
def plane_cloud():
    np.random.seed(2)
    return generate_plane_point_cloud([0, 0, 0], [0, 0, 1], 3.0, n_points=600)


@pytest.fixture
def cylinder_cloud():
    np.random.seed(3)
    return generate_cylinder_point_cloud([1, 2, 3], [0.2, 0.3, 1.0], 0.4, 2.5, n_points=800)
