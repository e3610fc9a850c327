"""
Base class for spline engines.

A spline engine fits a curve through sorted, unique (x, y) knots and evaluates
the curve q(x) and its first two derivatives. The distribution estimator only
talks to this interface, so the natural and monotonic variants are
interchangeable.

Engines are lazy: configure() stores knots and marks the fit stale, and the
next evaluation (or an explicit recompute()) performs the fit.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from core.errors import InvalidArgument, LogicError

ArrayLike = Union[float, Sequence[float], np.ndarray]


class SplineEngine:
    """Interface + shared knot handling for cubic spline engines."""

    def __init__(
        self,
        x: Optional[Sequence[float]] = None,
        y: Optional[Sequence[float]] = None,
        *,
        yp_lower: Optional[float] = None,
        yp_upper: Optional[float] = None,
        strict_domain: bool = True,
    ):
        self.strict_domain = strict_domain
        self._x = np.empty(0)
        self._y = np.empty(0)
        self._yp_lower: Optional[float] = None
        self._yp_upper: Optional[float] = None
        self._fitted = False
        if x is not None:
            self.configure(x, y, yp_lower=yp_lower, yp_upper=yp_upper)

    def configure(
        self,
        x: Sequence[float],
        y: Sequence[float],
        *,
        yp_lower: Optional[float] = None,
        yp_upper: Optional[float] = None,
    ) -> None:
        """Replace the knots (and optional clamped end slopes); the fit goes stale."""
        try:
            xa = np.asarray(x, dtype=float)
            ya = np.asarray(y, dtype=float)
            ypl = None if yp_lower is None else float(yp_lower)
            ypu = None if yp_upper is None else float(yp_upper)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"failed to acquire knots as floating point vectors: {exc}") from exc

        if xa.ndim != 1 or ya.ndim != 1:
            raise InvalidArgument("x and y knots must be flat sequences")
        if len(xa) != len(ya):
            raise InvalidArgument("x and y data are not of same length")
        if len(xa) < 2:
            raise InvalidArgument("insufficient data, require >= 2 points")
        if np.any(np.diff(xa) <= 0.0):
            raise InvalidArgument("x data is not sorted and unique")

        self._x, self._y = xa, ya
        self._yp_lower, self._yp_upper = ypl, ypu
        self._fitted = False

    @property
    def x(self) -> np.ndarray:
        return self._x.copy()

    @property
    def y(self) -> np.ndarray:
        return self._y.copy()

    @property
    def m(self) -> np.ndarray:
        """Fitted first derivative at every knot."""
        self.recompute()
        return self.qp(self._x)

    def domain(self) -> Tuple[float, float]:
        """[lower, upper] of the x axis the spline is defined on."""
        return float(self._x[0]), float(self._x[-1])

    def recompute(self) -> None:
        if self._fitted:
            return
        if len(self._x) < 2:
            raise InvalidArgument("insufficient data, require >= 2 points")
        self._fit()
        self._fitted = True

    def _fit(self) -> None:
        raise NotImplementedError

    def q(self, x: ArrayLike):
        raise NotImplementedError

    def qp(self, x: ArrayLike):
        raise NotImplementedError

    def qpp(self, x: ArrayLike):
        raise NotImplementedError

    # Boundary knots sit where the tangent at the end knot reaches the target
    # level, so the new boundary interval has a secant equal to the end slope.
    def extrapolate_lower(self, target: float = 0.0) -> float:
        """x where the tangent at the first knot reaches `target`."""
        x0 = float(self._x[0])
        y0, yp = self.q(x0), self.qp(x0)
        if not yp > 0.0:
            raise LogicError(f"non-positive slope {yp:.6g} at lower knot x={x0:.6g}")
        return x0 - (y0 - target) / yp

    def extrapolate_upper(self, target: float = 1.0) -> float:
        """x where the tangent at the last knot reaches `target`."""
        x1 = float(self._x[-1])
        y1, yp = self.q(x1), self.qp(x1)
        if not yp > 0.0:
            raise LogicError(f"non-positive slope {yp:.6g} at upper knot x={x1:.6g}")
        return x1 + (target - y1) / yp

    def _find(self, x: ArrayLike) -> Tuple[np.ndarray, np.ndarray, np.ndarray, bool]:
        """
        Bracket query points.

        Returns (xv, jlo, jhi, scalar) where jlo/jhi index the interval holding
        each point. Points beyond the ends map onto the end intervals.
        """
        self.recompute()
        xv = np.asarray(x, dtype=float)
        scalar = xv.ndim == 0
        xv = np.atleast_1d(xv)
        if self.strict_domain:
            lo, hi = self._x[0], self._x[-1]
            bad = (xv < lo) | (xv > hi)
            if np.any(bad):
                raise InvalidArgument(
                    "argument %f out of defined range (%f, %f)" % (xv[bad][0], lo, hi)
                )
        jlo = np.clip(np.searchsorted(self._x, xv, side="right") - 1, 0, len(self._x) - 2)
        return xv, jlo, jlo + 1, scalar

    @staticmethod
    def _out(values: np.ndarray, scalar: bool):
        return float(values[0]) if scalar else values

    def __repr__(self) -> str:
        n = len(self._x)
        if n == 0:
            return f"{type(self).__name__}(empty)"
        lo, hi = self.domain()
        return f"{type(self).__name__}(n_knots={n}, domain=[{lo:.6g}, {hi:.6g}])"
