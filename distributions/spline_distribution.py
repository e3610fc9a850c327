"""
SplineDistribution — estimate a smooth CDF/PDF from a stream of samples.

Ingestion and model construction are decoupled:

    append(values)  ->  raw sample buffer, model marked dirty
    first query     ->  recompute():
                          1. filter samples to the interior of any Fixed bound
                          2. sort, build O(1/quantile) empirical CDF knots
                          3. insert Fixed boundary knots, fit the spline engine
                          4. derive AutoSpline boundary knots, respline once
                          5. attach exponential tails on AutoInfinite sides
    later queries   ->  read the cached spline + tails directly

Recompute is all-or-nothing: the cache is only committed once every step has
succeeded, so a failure (InsufficientData, LogicError) leaves the estimator
dirty and the next query retries from scratch.

Usage:
    sd = SplineDistribution(cdf_quantile=0.1, spline="monotonic")
    sd.append(samples)
    sd.cdf(0.5), sd.pdf(0.5), sd.support(), sd.mean(), sd.variance()
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from core.config import AutoInfinite, AutoSpline, DistributionConfig, Fixed
from core.errors import InsufficientData, InvalidArgument, LogicError
from core.utils import as_float_vector
from splines import ENGINES, SplineEngine

from .empirical import sampled_cdf
from .moments import segment_moments
from .tails import ExponentialTail

logger = logging.getLogger(__name__)


class SplineDistribution:
    """
    Streaming distribution estimator backed by a cubic spline CDF.

    Parameters
    ----------
    data : sequence of float, optional
        Initial samples
    **options
        Any DistributionConfig field: cdf_lb, cdf_ub, cdf_smooth_lb,
        cdf_smooth_ub, cdf_quantile, spline
    """

    def __init__(self, data: Any = None, **options: Any):
        self.reset()
        self.configure(data=data, **options)

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Drop all samples and restore the default configuration."""
        self._config = DistributionConfig()
        self.clear()

    def clear(self) -> None:
        """Drop all samples, keep the configuration."""
        self._data: List[float] = []
        self._dirty()

    def configure(self, data: Any = None, **options: Any) -> None:
        """
        Merge options into the configuration; if `data` is given it replaces
        the sample set. `data` itself is not remembered.
        """
        config = self._config.merged(**options)
        samples = as_float_vector(data) if data is not None else None

        self._config = config
        if samples is not None:
            self._data = []
            self._enter(samples)
        self._dirty()

    @property
    def config(self) -> DistributionConfig:
        return self._config

    @property
    def n_samples(self) -> int:
        return len(self._data)

    @property
    def is_dirty(self) -> bool:
        return self._spline is None

    def _dirty(self) -> None:
        self._spline: Optional[SplineEngine] = None
        self._lower_tail: Optional[ExponentialTail] = None
        self._upper_tail: Optional[ExponentialTail] = None
        self._n_knots = 0

    # ------------------------------------------------------------------
    # ingestion
    # ------------------------------------------------------------------

    def append(self, values: Any) -> None:
        """Add one sample or a sequence of samples."""
        self._enter(as_float_vector(values))

    put = append

    def __lshift__(self, values: Any) -> "SplineDistribution":
        self.append(values)
        return self

    def _enter(self, samples: np.ndarray) -> None:
        if len(samples) == 0:
            return
        self._data.extend(samples.tolist())
        self._dirty()

    # ------------------------------------------------------------------
    # model construction
    # ------------------------------------------------------------------

    def recompute(self) -> None:
        if not self.is_dirty:
            return

        cfg = self._config
        lb, ub = cfg.cdf_lb, cfg.cdf_ub

        raw = np.asarray(self._data, dtype=float)
        # with Fixed bounds, samples must be strictly inside them
        if isinstance(lb, Fixed):
            raw = raw[raw > lb.value]
        if isinstance(ub, Fixed):
            raw = raw[raw < ub.value]
        raw = np.sort(raw)

        if len(raw) < 2 or raw[0] == raw[-1]:
            raise InsufficientData(
                f"insufficient data, require >= 2 distinct points inside the bounds "
                f"(have {len(raw)} usable of {len(self._data)} samples)"
            )

        xs, ys = sampled_cdf(raw, cfg.cdf_quantile)

        yp_lower = yp_upper = None
        if isinstance(lb, Fixed):
            xs.insert(0, lb.value)
            ys.insert(0, 0.0)
            yp_lower = 0.0 if cfg.cdf_smooth_lb else None
        if isinstance(ub, Fixed):
            xs.append(ub.value)
            ys.append(1.0)
            yp_upper = 0.0 if cfg.cdf_smooth_ub else None

        spline = ENGINES[cfg.spline]()
        spline.configure(xs, ys, yp_lower=yp_lower, yp_upper=yp_upper)
        spline.recompute()

        respline = False
        if isinstance(lb, AutoSpline):
            b = spline.extrapolate_lower(0.0)
            if not b < xs[0]:
                raise LogicError(f"derived lower boundary knot {b!r} is not below x={xs[0]!r}")
            logger.debug("Derived lower boundary knot at x=%.6g", b)
            xs.insert(0, b)
            ys.insert(0, 0.0)
            yp_lower = 0.0 if cfg.cdf_smooth_lb else None
            respline = True
        if isinstance(ub, AutoSpline):
            b = spline.extrapolate_upper(1.0)
            if not b > xs[-1]:
                raise LogicError(f"derived upper boundary knot {b!r} is not above x={xs[-1]!r}")
            logger.debug("Derived upper boundary knot at x=%.6g", b)
            xs.append(b)
            ys.append(1.0)
            yp_upper = 0.0 if cfg.cdf_smooth_ub else None
            respline = True

        if respline:
            spline.configure(xs, ys, yp_lower=yp_lower, yp_upper=yp_upper)
            spline.recompute()

        # tails attach to the final fit so value and slope match at the junction
        lower_tail = upper_tail = None
        smin, smax = spline.domain()
        if isinstance(lb, AutoInfinite):
            lower_tail = ExponentialTail.fit("lower", smin, spline.q(smin), spline.qp(smin))
            logger.debug("Lower exponential tail: rate=%.6g", lower_tail.rate)
        if isinstance(ub, AutoInfinite):
            upper_tail = ExponentialTail.fit("upper", smax, spline.q(smax), spline.qp(smax))
            logger.debug("Upper exponential tail: rate=%.6g", upper_tail.rate)

        logger.debug(
            "Fitted %s spline: %d knots from %d samples, domain [%.6g, %.6g]%s",
            cfg.spline, len(xs), len(raw), smin, smax, " (resplined)" if respline else "",
        )

        self._spline = spline
        self._lower_tail = lower_tail
        self._upper_tail = upper_tail
        self._n_knots = len(xs)

    @property
    def spline(self) -> SplineEngine:
        """The fitted spline engine (triggers recompute)."""
        self.recompute()
        return self._spline

    @property
    def tails(self) -> Tuple[Optional[ExponentialTail], Optional[ExponentialTail]]:
        """(lower, upper) exponential tails; None on sides that are not AutoInfinite."""
        self.recompute()
        return self._lower_tail, self._upper_tail

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def cdf(self, x: Any):
        """Cumulative probability at x (scalar or array-like, +/-inf allowed), in [0, 1]."""
        values, scalar = self._regions(x, "cdf", below=0.0, above=1.0)
        return self._out(np.clip(values, 0.0, 1.0), scalar)

    def pdf(self, x: Any):
        """Density at x (scalar or array-like, +/-inf allowed), >= 0. NaN raises InvalidArgument."""
        values, scalar = self._regions(x, "pdf", below=0.0, above=0.0)
        return self._out(np.maximum(values, 0.0), scalar)

    def _regions(self, x: Any, kind: str, *, below: float, above: float) -> Tuple[np.ndarray, bool]:
        self.recompute()
        try:
            xv = np.asarray(x, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"query points must be numeric: {exc}") from exc
        if np.any(np.isnan(xv)):
            raise InvalidArgument("query points must not be NaN")
        scalar = xv.ndim == 0
        xv = np.atleast_1d(xv)

        smin, smax = self._spline.domain()
        lo = xv < smin
        hi = xv > smax
        mid = ~(lo | hi)

        out = np.empty(xv.shape, dtype=float)
        if np.any(mid):
            fn = self._spline.q if kind == "cdf" else self._spline.qp
            out[mid] = fn(xv[mid])
        if np.any(lo):
            tail = self._lower_tail
            out[lo] = below if tail is None else getattr(tail, kind)(xv[lo])
        if np.any(hi):
            tail = self._upper_tail
            out[hi] = above if tail is None else getattr(tail, kind)(xv[hi])
        return out, scalar

    @staticmethod
    def _out(values: np.ndarray, scalar: bool):
        return float(values[0]) if scalar else values

    def support(self) -> Tuple[float, float]:
        self.recompute()
        lo, hi = self._spline.domain()
        if self._lower_tail is not None:
            lo = -math.inf
        if self._upper_tail is not None:
            hi = math.inf
        return lo, hi

    def _moments(self) -> Tuple[float, float]:
        self.recompute()
        s = self._spline
        _, first, second = segment_moments(s.x, s.y, s.m)
        for tail in (self._lower_tail, self._upper_tail):
            if tail is not None:
                _, t1, t2 = tail.moments()
                first += t1
                second += t2
        return first, second

    def mean(self) -> float:
        first, _ = self._moments()
        return first

    def variance(self) -> float:
        first, second = self._moments()
        # floor absorbs rounding when the spread is tiny
        return max(0.0, second - first ** 2)

    def std(self) -> float:
        return math.sqrt(self.variance())

    # ------------------------------------------------------------------
    # tabular views
    # ------------------------------------------------------------------

    def evaluate(self, xs: Any) -> pd.DataFrame:
        """CDF and PDF on a grid of points."""
        grid = np.atleast_1d(np.asarray(xs, dtype=float))
        return pd.DataFrame({
            "x": grid,
            "cdf": self.cdf(grid),
            "pdf": self.pdf(grid),
        })

    def summary(self) -> pd.DataFrame:
        """One row per statistic of the fitted model."""
        lo, hi = self.support()
        stats: Dict[str, Any] = {
            "Engine": self._config.spline,
            "Samples": self.n_samples,
            "Knots": self._n_knots,
            "Support Lower": lo,
            "Support Upper": hi,
            "Mean": self.mean(),
            "Std": self.std(),
        }
        return pd.DataFrame([{"Statistic": k, "Value": v} for k, v in stats.items()])

    def __repr__(self) -> str:
        c = self._config
        return (
            f"SplineDistribution(n_samples={self.n_samples}, cdf_lb={c.cdf_lb!r}, "
            f"cdf_ub={c.cdf_ub!r}, cdf_quantile={c.cdf_quantile}, spline={c.spline!r}, "
            f"dirty={self.is_dirty})"
        )
