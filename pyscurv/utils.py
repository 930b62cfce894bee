"""
Utility functions for direction generation and object frames.
"""
import numpy as np


def fibonacci_sphere(samples=100):
    """Generate evenly distributed unit directions on a sphere, from +y down to -y."""
    if samples < 2:
        raise ValueError(f"fibonacci_sphere needs at least 2 samples, got {samples}")
    points = []
    phi = np.pi * (3. - np.sqrt(5.))  # golden angle
    for i in range(samples):
        y = 1 - (i / float(samples - 1)) * 2  # y goes from 1 to -1
        radius = np.sqrt(1 - y * y)
        theta = phi * i
        x = np.cos(theta) * radius
        z = np.sin(theta) * radius
        points.append([x, y, z])
    return np.array(points)


def principal_frame(points):
    """
    Object-centered reference frame of a point set.

    Axes are the principal directions sorted by decreasing variance. Each of
    the first two axes is flipped, if needed, so the third moment of the
    points projected on it is non-negative; the third axis completes a
    right-handed frame.

    Args:
        points: (N, 3) numpy array
    Returns:
        centroid: (3,) array
        axes: (3, 3) array, one unit axis per column
    """
    points = np.asarray(points, dtype=np.float64)
    centroid = points.mean(axis=0)
    centered = points - centroid
    if len(points) < 2:
        return centroid, np.eye(3)

    cov = centered.T @ centered / len(points)
    eigvals, eigvecs = np.linalg.eigh(cov)
    order = np.argsort(eigvals, kind='stable')[::-1]
    axes = eigvecs[:, order]

    for j in range(2):
        skew = np.sum((centered @ axes[:, j]) ** 3)
        if skew < 0:
            axes[:, j] = -axes[:, j]
    axes[:, 2] = np.cross(axes[:, 0], axes[:, 1])
    return centroid, axes

