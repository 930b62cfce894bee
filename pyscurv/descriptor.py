"""
SCurVEstimation: object-level SCurV descriptor pipeline.

normalize scale -> local shape per point -> view bins around the object
center -> per-bin cumulative distribution resampled with PCHIP -> 210 values.
"""
from contextlib import contextmanager

import numpy as np

from .config import DEFAULT_CONFIG, SIGNATURE_SIZE
from .curvature import estimate_local_shape
from .errors import ConfigurationError, PreconditionError, ScurvError, Stage
from .logger import get_logger
from .normalize import normalize_scale
from .pchip import MonotoneSpline
from .search import KDTreeSearch
from .utils import fibonacci_sphere, principal_frame

# Shape values lie strictly inside this interval
SHAPE_RANGE = (-1.0, 1.0)


class SCurVSignature210:
    """One SCurV descriptor: 210 floats."""
    __slots__ = ('histogram',)

    def __init__(self, histogram=None):
        if histogram is None:
            histogram = np.zeros(SIGNATURE_SIZE)
        histogram = np.asarray(histogram, dtype=np.float64)
        if histogram.shape != (SIGNATURE_SIZE,):
            raise ValueError(f"SCurV signature needs {SIGNATURE_SIZE} values, got shape {histogram.shape}")
        self.histogram = histogram

    def __len__(self):
        return SIGNATURE_SIZE

    def __array__(self, dtype=None, copy=None):
        return self.histogram if dtype is None else self.histogram.astype(dtype)

    def __eq__(self, other):
        if not isinstance(other, SCurVSignature210):
            return NotImplemented
        return np.array_equal(self.histogram, other.histogram)

    def __repr__(self):
        return f"SCurVSignature210(sum={self.histogram.sum():.6f}, max={self.histogram.max():.6f})"


@contextmanager
def _stage(stage):
    """Tag pyscurv errors escaping the block with ``stage`` unless already tagged."""
    try:
        yield
    except ScurvError as e:
        if e.stage is None:
            e.stage = stage
        raise


def view_directions(n_views):
    """
    Bin directions in object-frame coordinates.

    The Fibonacci poles (sphere y axis) are put on the first principal axis.
    """
    return fibonacci_sphere(n_views)[:, [1, 0, 2]]


def assign_view_bins(points, n_views):
    """
    Index of the view bin of every point.

    A point belongs to the bin direction closest to its direction from the
    centroid in the principal frame. Ties go to the lowest bin index; a point
    at the centroid falls in bin 0.

    Args:
        points: (N, 3) numpy array
        n_views: number of bins
    Returns:
        (N,) integer array
    """
    centroid, axes = principal_frame(points)
    local = (points - centroid) @ axes
    norms = np.linalg.norm(local, axis=1, keepdims=True)
    unit = np.divide(local, norms, out=np.zeros_like(local), where=norms > 0)
    return np.argmax(unit @ view_directions(n_views).T, axis=1)


def bin_control_points(values, total):
    """
    Cumulative distribution of a bin's shape values as PCHIP control points.

    Abscissas are the distinct values framed by the ends of SHAPE_RANGE;
    ordinates are cumulative counts divided by ``total`` (the cloud size), so
    the curve rises from 0 to the bin's share of the cloud.

    Returns:
        (x, f) numpy arrays, x strictly increasing
    """
    lo, hi = SHAPE_RANGE
    distinct, counts = np.unique(np.sort(values, kind='stable'), return_counts=True)
    cumulative = np.cumsum(counts) / float(total)
    x = np.concatenate([[lo], distinct, [hi]])
    f = np.concatenate([[0.0], cumulative, [cumulative[-1]]])
    return x, f


def resample_bin(values, total, abscissas, empty_value=0.0):
    """
    Resample one bin's cumulative distribution at the canonical abscissas.

    An empty bin yields ``empty_value`` for every sample.
    """
    if len(values) == 0:
        return np.full(len(abscissas), float(empty_value))
    with _stage(Stage.SPLINE_FIT):
        x, f = bin_control_points(values, total)
        return MonotoneSpline(x, f)(abscissas)


def aggregate_signature(points, values, n_views, samples_per_view, empty_value=0.0):
    """
    Build the signature from scale-normalized points and their shape values.

    Returns:
        (n_views * samples_per_view,) numpy array, bins in index order
    """
    points = np.asarray(points, dtype=np.float64)
    values = np.asarray(values, dtype=np.float64)
    if len(points) != len(values):
        raise PreconditionError(f"Got {len(values)} shape values for {len(points)} points")
    if len(points) == 0:
        raise PreconditionError("Cannot aggregate an empty point cloud")
    lo, hi = SHAPE_RANGE
    if not np.all((values > lo) & (values < hi)):
        raise PreconditionError(f"Shape values must lie strictly inside ({lo}, {hi})")

    logger = get_logger()
    bins = assign_view_bins(points, n_views)
    abscissas = np.linspace(lo, hi, samples_per_view)
    signature = np.empty(n_views * samples_per_view)
    for b in range(n_views):
        members = values[bins == b]
        logger.debug(f"[aggregate_signature] view {b}: {len(members)} points")
        signature[b * samples_per_view:(b + 1) * samples_per_view] = resample_bin(
            members, len(values), abscissas, empty_value
        )
    return signature


class SCurVEstimation:
    """
    Computes the SCurV descriptor of a whole point cloud with normals.

    The result describes the object, not its points: ``compute`` returns a
    one-element list, ``estimate`` the signature itself.
    """
    feature_name = "SCurVEstimation"

    def __init__(self, search_method=KDTreeSearch):
        """
        Args:
            search_method: class or factory ``(points, workers=...)`` returning a
                search object with a ``knn(points, k)`` method
        """
        self.search_method = search_method

    def estimate(self, cloud, config=None):
        """
        Compute the signature of ``cloud`` (a PointCloud with normals).

        The cloud itself is not modified; normalization runs on a copy.
        """
        config = (config or DEFAULT_CONFIG).validate()
        logger = get_logger()
        if len(cloud) < config.k:
            raise ConfigurationError(
                f"k={config.k} nearest neighbours requested but the cloud only has {len(cloud)} points",
                Stage.LOCAL_ESTIMATION,
            )
        normals = cloud.normals_numpy()
        if normals is None:
            raise PreconditionError("Input cloud has no normals", Stage.LOCAL_ESTIMATION)

        with _stage(Stage.NORMALIZATION):
            work = normalize_scale(cloud.copy(), config.min_range, config.max_range)
            points = work.to_numpy()

        with _stage(Stage.LOCAL_ESTIMATION):
            search = self.search_method(points, workers=config.workers)
            values = estimate_local_shape(points, normals, search, config.k, config.curvature_scale)

        with _stage(Stage.AGGREGATION):
            histogram = aggregate_signature(
                points, values, config.n_views, config.samples_per_view, config.empty_value
            )
        logger.debug(f"[{self.feature_name}] signature of {len(points)} points, k={config.k}")
        return SCurVSignature210(histogram)

    def compute(self, cloud, config=None):
        """Compute the descriptor; returns ``[SCurVSignature210]``."""
        return [self.estimate(cloud, config)]
