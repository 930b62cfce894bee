"""
Exceptions raised by the SCurV pipeline.
"""
from enum import Enum
from typing import Optional


class Stage(Enum):
    """Pipeline stage an error was raised in."""
    NORMALIZATION = 'normalization'
    LOCAL_ESTIMATION = 'local_estimation'
    SPLINE_FIT = 'spline_fit'
    AGGREGATION = 'aggregation'


class ScurvError(Exception):
    """Base class for all pyscurv errors."""

    def __init__(self, message: str, stage: Optional[Stage] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def __str__(self) -> str:
        if self.stage is None:
            return self.message
        return f"[{self.stage.value}] {self.message}"


class PreconditionError(ScurvError, ValueError):
    """An input violates the documented contract of an operation."""


class ConfigurationError(PreconditionError):
    """Invalid configuration, or a configuration that does not fit the input cloud."""


class MissingNormalsError(ScurvError):
    """The loaded point cloud carries no normal field."""
