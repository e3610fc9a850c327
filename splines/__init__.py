"""
Spline engines — curve fits through ordered knots, with derivatives.

  1. base.py     — SplineEngine interface shared by the distribution estimator
  2. natural.py  — natural / clamped cubic spline (global tridiagonal solve)
  3. hermite.py  — local cubic Hermite splines, plain and monotonicity-preserving
"""

from .base import SplineEngine
from .natural import NaturalCubicSpline
from .hermite import CubicHermiteSpline, MonotonicHermiteSpline

ENGINES = {
    "natural": NaturalCubicSpline,
    "monotonic": MonotonicHermiteSpline,
}

__all__ = [
    "SplineEngine",
    "NaturalCubicSpline",
    "CubicHermiteSpline",
    "MonotonicHermiteSpline",
    "ENGINES",
]
