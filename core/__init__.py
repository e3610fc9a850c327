"""
Core package — configuration, error taxonomy, and shared input coercion.
No estimation logic lives here.
"""

from .config import (
    INF,
    SPLINE,
    AutoInfinite,
    AutoSpline,
    BoundMode,
    DistributionConfig,
    Fixed,
    parse_bound,
)
from .errors import InsufficientData, InvalidArgument, LogicError, SplineDistributionError
from .utils import as_float_vector

__all__ = [
    "INF",
    "SPLINE",
    "AutoInfinite",
    "AutoSpline",
    "BoundMode",
    "DistributionConfig",
    "Fixed",
    "parse_bound",
    "InsufficientData",
    "InvalidArgument",
    "LogicError",
    "SplineDistributionError",
    "as_float_vector",
]
