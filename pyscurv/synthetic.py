"""
Synthetic point clouds with exact normals: convex, flat and concave test objects.
"""
import numpy as np

from .pointcloud import PointCloud


def _orthonormal_basis(axis):
    axis = np.asarray(axis, dtype=np.float64)
    axis = axis / np.linalg.norm(axis)
    if np.allclose(np.abs(axis), [1, 0, 0]):
        ortho1 = np.array([0., 1., 0.])
    else:
        ortho1 = np.cross(axis, [1, 0, 0])
    ortho1 = ortho1 / np.linalg.norm(ortho1)
    ortho2 = np.cross(axis, ortho1)
    return axis, ortho1, ortho2 / np.linalg.norm(ortho2)


def _finish(points, normals, noise):
    if noise > 0:
        points = points + np.random.normal(scale=noise, size=points.shape)
    return PointCloud.from_arrays(points, normals)


def generate_sphere_point_cloud(center, radius, n_points=2000, noise=0.0):
    """
    Points on a sphere with outward normals (convex everywhere).
    Args:
        center: (3,) center
        radius: float
        n_points: int, number of points
        noise: float, stddev of Gaussian position noise
    Returns:
        PointCloud
    """
    normals = np.random.normal(size=(n_points, 3))
    normals /= np.linalg.norm(normals, axis=1, keepdims=True)
    points = np.asarray(center, dtype=np.float64) + radius * normals
    return _finish(points, normals, noise)


def generate_bowl_point_cloud(center, radius, n_points=2000, noise=0.0):
    """
    Inside of a hemispherical bowl opening towards +z, normals pointing into the bowl (concave).
    """
    dirs = np.random.normal(size=(n_points, 3))
    dirs /= np.linalg.norm(dirs, axis=1, keepdims=True)
    dirs[:, 2] = -np.abs(dirs[:, 2])
    points = np.asarray(center, dtype=np.float64) + radius * dirs
    return _finish(points, -dirs, noise)


def generate_plane_point_cloud(center, normal, size, n_points=2000, noise=0.0):
    """
    Square planar patch of side ``size`` (flat everywhere).
    """
    normal, ortho1, ortho2 = _orthonormal_basis(normal)
    u = np.random.uniform(-size / 2, size / 2, n_points)
    v = np.random.uniform(-size / 2, size / 2, n_points)
    points = np.asarray(center, dtype=np.float64) + np.outer(u, ortho1) + np.outer(v, ortho2)
    return _finish(points, np.tile(normal, (n_points, 1)), noise)


def generate_cylinder_point_cloud(center, axis, radius, height, n_points=2000, noise=0.0):
    """
    Open cylinder surface with outward normals (convex around the axis, flat along it).
    Args:
        center: (3,) center of the cylinder (at midpoint)
        axis: (3,) axis direction (will be normalized)
        radius: float
        height: float
        n_points: int, number of points
        noise: float, stddev of Gaussian position noise
    Returns:
        PointCloud
    """
    axis, ortho1, ortho2 = _orthonormal_basis(axis)
    angles = np.random.uniform(0, 2 * np.pi, n_points)
    heights = np.random.uniform(-height / 2, height / 2, n_points)
    radial = np.outer(np.cos(angles), ortho1) + np.outer(np.sin(angles), ortho2)
    points = np.asarray(center, dtype=np.float64) + np.outer(heights, axis) + radius * radial
    return _finish(points, radial, noise)
