"""
Scale normalization: remap the object's extent into a fixed interval.
"""
import numpy as np

from .errors import PreconditionError


def get_normalized_value(x, low, high, min_range=0.0, max_range=1.0):
    """
    Position of ``x`` within ``[low, high]``, rescaled to ``[min_range, max_range]``.

    Works element-wise on numpy arrays. A zero-extent interval (``low == high``)
    maps everything to the midpoint of the target interval.

    Args:
        x: value(s) to normalize
        low: the minimum of the source range
        high: the maximum of the source range
        min_range: value ``low`` is mapped to
        max_range: value ``high`` is mapped to
    Returns:
        float or numpy array, same shape as ``x``
    """
    span = max_range - min_range
    if high == low:
        t = np.full_like(np.asarray(x, dtype=np.float64), 0.5)
    else:
        t = (np.asarray(x, dtype=np.float64) - low) / (high - low)
    result = min_range + t * span
    return float(result) if np.ndim(result) == 0 else result


def _check_range(min_range, max_range):
    if not min_range < max_range:
        raise PreconditionError(
            f"Normalization range must satisfy min_range < max_range, got [{min_range}, {max_range}]"
        )


def normalize_points(points, min_range=-1.0, max_range=1.0):
    """
    Uniformly rescale points so their largest extent spans ``[min_range, max_range]``.

    Every axis is shifted so its minimum lands on ``min_range`` and all axes
    are divided by the same extent (the largest of the three), which keeps
    the aspect ratio and makes the result independent of the object's
    position and size.

    Args:
        points: (N, 3) numpy array
        min_range: lower bound of the target interval
        max_range: upper bound of the target interval
    Returns:
        (N, 3) numpy array (new array)
    """
    _check_range(min_range, max_range)
    points = np.asarray(points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 3:
        raise PreconditionError(f"Expected an (N, 3) array of points, got shape {points.shape}")
    if len(points) == 0:
        raise PreconditionError("Cannot normalize an empty point cloud")
    if not np.all(np.isfinite(points)):
        raise PreconditionError("Point coordinates must be finite")
    lows = points.min(axis=0)
    extent = float(np.max(points.max(axis=0) - lows))
    normalized = np.empty_like(points)
    for axis in range(3):
        low = float(lows[axis])
        normalized[:, axis] = get_normalized_value(points[:, axis], low, low + extent, min_range, max_range)
    return normalized


def normalize_scale(cloud, min_range=-1.0, max_range=1.0):
    """
    Scale-normalize a PointCloud in place. Normals are left untouched.

    Args:
        cloud: PointCloud instance
        min_range: the minimum value of range to be scaled to
        max_range: the maximum value of range to be scaled to
    Returns:
        the same PointCloud, for chaining
    """
    cloud.set_points(normalize_points(cloud.to_numpy(), min_range, max_range))
    return cloud
