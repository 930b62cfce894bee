"""SCurV estimation configuration."""

from __future__ import annotations

from dataclasses import dataclass
import numbers

from .errors import ConfigurationError

# Length of one SCurV signature
SIGNATURE_SIZE = 210


@dataclass(frozen=True)
class SCurVConfig:
    """Parameters of one ``SCurVEstimation.compute`` call."""

    # Nearest neighbours per point, the point itself included
    k: int = 19

    # View bins x samples per bin must give SIGNATURE_SIZE
    n_views: int = 6
    samples_per_view: int = 35

    # Target interval of the scale normalization
    min_range: float = -1.0
    max_range: float = 1.0

    # Curvature (in normalized units) mapped to a shape value of 0.5
    curvature_scale: float = 1.0

    # Fill value for view bins that receive no points
    empty_value: float = 0.0

    # Worker threads for the batched scipy neighbour query (-1: all cores)
    workers: int = -1

    @property
    def signature_size(self) -> int:
        return self.n_views * self.samples_per_view

    def validate(self) -> "SCurVConfig":
        if not isinstance(self.k, numbers.Integral) or isinstance(self.k, bool) or self.k < 2:
            raise ConfigurationError(f"k must be an integer >= 2, got {self.k}")
        if self.n_views < 2:
            raise ConfigurationError(f"n_views must be >= 2, got {self.n_views}")
        if self.samples_per_view < 2:
            raise ConfigurationError(f"samples_per_view must be >= 2, got {self.samples_per_view}")
        if self.signature_size != SIGNATURE_SIZE:
            raise ConfigurationError(
                f"n_views * samples_per_view must be {SIGNATURE_SIZE}, "
                f"got {self.n_views} * {self.samples_per_view} = {self.signature_size}"
            )
        if not self.min_range < self.max_range:
            raise ConfigurationError(
                f"min_range must be below max_range, got [{self.min_range}, {self.max_range}]"
            )
        if self.curvature_scale <= 0:
            raise ConfigurationError(f"curvature_scale must be positive, got {self.curvature_scale}")
        return self


DEFAULT_CONFIG = SCurVConfig()
