"""
Local shape estimation from the k-nearest-neighbour normal field.

Every point receives a value in (-1, 1): positive on convex patches, negative
on concave ones and close to zero on flat ones.
"""
import numpy as np

from .errors import ConfigurationError, PreconditionError
from .logger import get_logger, LogLevel

_VALUE_BOUND = np.nextafter(1.0, 0.0)


def _unit_normals(normals):
    norms = np.linalg.norm(normals, axis=1, keepdims=True)
    return np.divide(normals, norms, out=np.zeros_like(normals), where=norms > 0)


def normal_curvature(points, normals, indices):
    """
    Mean directional normal curvature of every point over its neighbours.

    For neighbour q_j of p_i the curvature along the chord is
    ``((n_j - n_i) . (q_j - p_i)) / |q_j - p_i|^2``. Neighbours at zero
    distance (the point itself, duplicates) are ignored; a point without any
    other neighbour gets 0.

    Args:
        points: (N, 3) positions
        normals: (N, 3) unit normals
        indices: (N, k) neighbour indices per point
    Returns:
        (N,) numpy array
    """
    chords = points[indices] - points[:, None, :]
    dn = normals[indices] - normals[:, None, :]
    sq_len = np.einsum('nkc,nkc->nk', chords, chords)
    valid = sq_len > 0
    ratio = np.divide(np.einsum('nkc,nkc->nk', dn, chords), sq_len,
                      out=np.zeros_like(sq_len), where=valid)
    counts = valid.sum(axis=1)
    return np.divide(ratio.sum(axis=1), counts, out=np.zeros(len(points)), where=counts > 0)


def shape_values(curvature, curvature_scale=1.0):
    """Map curvature to the bounded shape value ``(2 / pi) * arctan(scale * curvature)``."""
    values = (2.0 / np.pi) * np.arctan(curvature_scale * np.asarray(curvature, dtype=np.float64))
    # arctan rounds to pi/2 for huge curvatures; keep the interval open
    return np.clip(values, -_VALUE_BOUND, _VALUE_BOUND)


def estimate_local_shape(points, normals, search, k, curvature_scale=1.0):
    """
    Local shape value of every point.

    Args:
        points: (N, 3) positions (normally already scale-normalized)
        normals: (N, 3) normals; renormalized to unit length
        search: search method built over ``points`` (see ``pyscurv.search``)
        k: neighbours per point, the point itself included
        curvature_scale: curvature that maps to a shape value of 0.5
    Returns:
        (N,) numpy array of values in (-1, 1)
    """
    logger = get_logger()
    points = np.asarray(points, dtype=np.float64)
    normals = np.asarray(normals, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 3:
        raise PreconditionError(f"Expected an (N, 3) array of points, got shape {points.shape}")
    if normals.shape != points.shape:
        raise PreconditionError(
            f"Normals shape {normals.shape} does not match points shape {points.shape}"
        )
    if not np.all(np.isfinite(points)):
        raise PreconditionError("Point coordinates must be finite")
    if not np.all(np.isfinite(normals)):
        raise PreconditionError("Normals must be finite")
    if k < 2:
        raise ConfigurationError(f"k must be >= 2, got {k}")
    if k > len(points):
        raise ConfigurationError(
            f"k={k} nearest neighbours requested but the cloud only has {len(points)} points"
        )

    indices, _ = search.knn(points, k)
    curvature = normal_curvature(points, _unit_normals(normals), indices)
    values = shape_values(curvature, curvature_scale)

    if logger.isEnabledFor(LogLevel.DEBUG):
        logger.debug(
            f"[estimate_local_shape] N={len(points)}, k={k}: "
            f"curvature min={curvature.min():.4f}, max={curvature.max():.4f}, mean={curvature.mean():.4f}; "
            f"concave={int(np.sum(values < 0))}, convex={int(np.sum(values > 0))}"
        )
    return values
