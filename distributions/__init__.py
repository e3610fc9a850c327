"""
Distributions package — estimate a smooth CDF/PDF from streamed samples.

  1. empirical.py           — quantized empirical CDF knots from sorted samples
  2. tails.py               — exponential tails for AutoInfinite bounds
  3. moments.py             — closed-form mean/variance integrals over spline segments
  4. spline_distribution.py — SplineDistribution, the lazy-recompute estimator
"""

from .empirical import sampled_cdf
from .tails import ExponentialTail
from .moments import segment_moments
from .spline_distribution import SplineDistribution

__all__ = [
    "sampled_cdf",
    "ExponentialTail",
    "segment_moments",
    "SplineDistribution",
]
