"""
Error taxonomy for the spline distribution estimator.

  InvalidArgument: bad input at the API boundary (non-numeric samples, bad
      bound tokens, quantile outside (0,1), out-of-domain spline query)
  InsufficientData: fewer than 2 distinct usable samples at recompute time
  LogicError: a derived boundary knot or exponential tail is degenerate
      (non-positive slope/rate at the junction)

None of these are retried internally. The caller supplies more or different
data and queries again.
"""

from __future__ import annotations


class SplineDistributionError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(SplineDistributionError, ValueError):
    pass


class InsufficientData(SplineDistributionError, ValueError):
    pass


class LogicError(SplineDistributionError, RuntimeError):
    pass
