"""Tests for nearest-neighbour search and local shape estimation."""

import numpy as np
import pytest

from pyscurv.curvature import estimate_local_shape, normal_curvature, shape_values
from pyscurv.errors import ConfigurationError, PreconditionError
from pyscurv.search import KDTreeSearch, Open3DSearch


def _arrays(cloud):
    return cloud.to_numpy(), cloud.normals_numpy()


def test_kdtree_neighbors_are_sorted_and_start_with_query():
    points = np.array([[0.0, 0, 0], [1.0, 0, 0], [3.0, 0, 0], [0.0, 2, 0]])
    indices, distances = KDTreeSearch(points).neighbors(points[0], 3)
    np.testing.assert_array_equal(indices, [0, 1, 3])
    np.testing.assert_allclose(distances, [0.0, 1.0, 2.0])


def test_batched_knn_matches_single_queries():
    rng = np.random.default_rng(0)
    points = rng.uniform(size=(40, 3))
    search = KDTreeSearch(points)
    indices, distances = search.knn(points, 5)
    assert indices.shape == (40, 5)
    for i in (0, 17, 39):
        single_idx, single_dist = search.neighbors(points[i], 5)
        np.testing.assert_array_equal(indices[i], single_idx)
        np.testing.assert_allclose(distances[i], single_dist)


def test_open3d_search_agrees_with_kdtree():
    rng = np.random.default_rng(1)
    points = rng.uniform(size=(60, 3))
    idx_a, dist_a = KDTreeSearch(points).knn(points, 6)
    idx_b, dist_b = Open3DSearch(points).knn(points, 6)
    np.testing.assert_array_equal(np.sort(idx_a, axis=1), np.sort(idx_b, axis=1))
    np.testing.assert_allclose(np.sort(dist_a, axis=1), np.sort(dist_b, axis=1))


def test_sphere_is_uniformly_convex(sphere_cloud):
    points, normals = _arrays(sphere_cloud)
    values = estimate_local_shape(points, normals, KDTreeSearch(points), k=10)
    # Exact normals on a sphere of radius 0.5: curvature 1 / 0.5 along every chord
    np.testing.assert_allclose(values, (2.0 / np.pi) * np.arctan(2.0), rtol=1e-9)
    assert np.all(values > 0)


def test_bowl_is_concave(bowl_cloud):
    points, normals = _arrays(bowl_cloud)
    values = estimate_local_shape(points, normals, KDTreeSearch(points), k=10)
    np.testing.assert_allclose(values, (2.0 / np.pi) * np.arctan(-0.5), rtol=1e-9)
    assert np.all(values < 0)


def test_plane_is_flat(plane_cloud):
    points, normals = _arrays(plane_cloud)
    values = estimate_local_shape(points, normals, KDTreeSearch(points), k=10)
    np.testing.assert_allclose(values, 0.0, atol=1e-12)


def test_curvature_scale_changes_magnitude_not_sign(sphere_cloud):
    points, normals = _arrays(sphere_cloud)
    search = KDTreeSearch(points)
    soft = estimate_local_shape(points, normals, search, k=8, curvature_scale=0.1)
    hard = estimate_local_shape(points, normals, search, k=8, curvature_scale=10.0)
    assert np.all(0 < soft) and np.all(soft < hard) and np.all(hard < 1)


def test_normals_are_renormalized(sphere_cloud):
    points, normals = _arrays(sphere_cloud)
    search = KDTreeSearch(points)
    np.testing.assert_allclose(
        estimate_local_shape(points, normals * 3.0, search, k=8),
        estimate_local_shape(points, normals, search, k=8),
    )


def test_duplicate_points_give_zero_curvature():
    points = np.zeros((4, 3))
    normals = np.tile([0.0, 0.0, 1.0], (4, 1))
    indices = np.tile(np.arange(4), (4, 1))
    np.testing.assert_array_equal(normal_curvature(points, normals, indices), np.zeros(4))


def test_shape_values_stay_inside_open_interval():
    values = shape_values(np.array([np.inf, -np.inf, 1e308, -1e308, 0.0]))
    assert np.all(values < 1.0) and np.all(values > -1.0)
    assert values[-1] == 0.0


def test_k_larger_than_cloud_raises():
    points = np.random.default_rng(2).uniform(size=(5, 3))
    normals = np.tile([0.0, 0.0, 1.0], (5, 1))
    with pytest.raises(ConfigurationError):
        estimate_local_shape(points, normals, KDTreeSearch(points), k=6)


def test_k_below_two_raises():
    points = np.random.default_rng(3).uniform(size=(5, 3))
    normals = np.tile([0.0, 0.0, 1.0], (5, 1))
    with pytest.raises(ConfigurationError):
        estimate_local_shape(points, normals, KDTreeSearch(points), k=1)


def test_mismatched_normals_raise():
    points = np.random.default_rng(4).uniform(size=(5, 3))
    with pytest.raises(PreconditionError):
        estimate_local_shape(points, np.ones((4, 3)), KDTreeSearch(points), k=3)


def test_non_finite_points_raise():
    points = np.random.default_rng(5).uniform(size=(6, 3))
    normals = np.tile([0.0, 0.0, 1.0], (6, 1))
    search = KDTreeSearch(points)
    points[2, 1] = np.inf
    with pytest.raises(PreconditionError):
        estimate_local_shape(points, normals, search, k=3)


def test_non_finite_normals_raise():
    points = np.random.default_rng(6).uniform(size=(6, 3))
    normals = np.tile([0.0, 0.0, 1.0], (6, 1))
    normals[3, 0] = np.nan
    with pytest.raises(PreconditionError):
        estimate_local_shape(points, normals, KDTreeSearch(points), k=3)
