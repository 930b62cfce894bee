"""
pyscurv: SCurV object descriptor (surface curvature distributions) for point clouds
"""

# Make core modules available at package level
from .config import DEFAULT_CONFIG, SIGNATURE_SIZE, SCurVConfig
from .descriptor import SCurVEstimation, SCurVSignature210
from .errors import ConfigurationError, MissingNormalsError, PreconditionError, ScurvError, Stage
from .logger import ScurvLogger, get_logger, set_logger
from .normalize import get_normalized_value, normalize_points, normalize_scale
from .pchip import (
    HermitePoint,
    MonotoneSpline,
    get_hermite_derivative_interpolation,
    set_spline_pchip,
    sign_multiplied,
)
from .pointcloud import PointCloud
from .search import KDTreeSearch, Open3DSearch

__all__ = [
    'SCurVEstimation',
    'SCurVSignature210',
    'SCurVConfig',
    'DEFAULT_CONFIG',
    'SIGNATURE_SIZE',
    'PointCloud',
    'KDTreeSearch',
    'Open3DSearch',
    'HermitePoint',
    'MonotoneSpline',
    'set_spline_pchip',
    'sign_multiplied',
    'get_hermite_derivative_interpolation',
    'get_normalized_value',
    'normalize_points',
    'normalize_scale',
    'ScurvError',
    'PreconditionError',
    'ConfigurationError',
    'MissingNormalsError',
    'Stage',
    'ScurvLogger',
    'get_logger',
    'set_logger',
]
