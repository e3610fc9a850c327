"""
Cubic Hermite splines.

Each interval [x_j, x_j+1] of width h is interpolated from the values and
slopes at its ends. With t = (x - x_j)/h:

    q(t) = h00(t)*y_j + h10(t)*h*m_j + h01(t)*y_j+1 + h11(t)*h*m_j+1

    h00 = 2t^3 - 3t^2 + 1      h10 = t^3 - 2t^2 + t
    h01 = -2t^3 + 3t^2         h11 = t^3 - t^2

Derivatives with respect to x pick up a factor 1/h per order (chain rule
through the affine map x -> t).

CubicHermiteSpline uses plain finite-difference slopes. MonotonicHermiteSpline
applies the Fritsch-Carlson correction so the interpolant never overshoots:
it is nondecreasing wherever the knots are nondecreasing.
"""

from __future__ import annotations

import numpy as np

from .base import ArrayLike, SplineEngine


class CubicHermiteSpline(SplineEngine):
    """Hermite spline with finite-difference gradients."""

    def _fit(self) -> None:
        self._m = self._gradients(self._x, self._y)
        if self._yp_lower is not None:
            self._m[0] = self._yp_lower
        if self._yp_upper is not None:
            self._m[-1] = self._yp_upper

    @staticmethod
    def _secants(x: np.ndarray, y: np.ndarray) -> np.ndarray:
        return np.diff(y) / np.diff(x)

    def _gradients(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        d = self._secants(x, y)
        m = np.empty(len(x))
        m[0] = d[0]
        m[-1] = d[-1]
        m[1:-1] = 0.5 * (d[:-1] + d[1:])
        return m

    @property
    def m(self) -> np.ndarray:
        self.recompute()
        return self._m.copy()

    def _terms(self, x: ArrayLike):
        xv, j0, j1, scalar = self._find(x)
        h = self._x[j1] - self._x[j0]
        t = (xv - self._x[j0]) / h
        return j0, j1, h, t, scalar

    def q(self, x: ArrayLike):
        j0, j1, h, t, scalar = self._terms(x)
        y, m = self._y, self._m
        v = (
            (2.0 * t ** 3 - 3.0 * t ** 2 + 1.0) * y[j0]
            + (t ** 3 - 2.0 * t ** 2 + t) * h * m[j0]
            + (3.0 * t ** 2 - 2.0 * t ** 3) * y[j1]
            + (t ** 3 - t ** 2) * h * m[j1]
        )
        return self._out(v, scalar)

    def qp(self, x: ArrayLike):
        j0, j1, h, t, scalar = self._terms(x)
        y, m = self._y, self._m
        v = (
            (6.0 * t ** 2 - 6.0 * t) * y[j0]
            + (3.0 * t ** 2 - 4.0 * t + 1.0) * h * m[j0]
            + (6.0 * t - 6.0 * t ** 2) * y[j1]
            + (3.0 * t ** 2 - 2.0 * t) * h * m[j1]
        ) / h
        return self._out(v, scalar)

    def qpp(self, x: ArrayLike):
        j0, j1, h, t, scalar = self._terms(x)
        y, m = self._y, self._m
        v = (
            (12.0 * t - 6.0) * y[j0]
            + (6.0 * t - 4.0) * h * m[j0]
            + (6.0 - 12.0 * t) * y[j1]
            + (6.0 * t - 2.0) * h * m[j1]
        ) / (h ** 2)
        return self._out(v, scalar)


class MonotonicHermiteSpline(CubicHermiteSpline):
    """
    Hermite spline with Fritsch-Carlson limited slopes.

    For each interval with secant d, a non-positive secant (flat or falling
    data) or a slope of the wrong sign zeroes both end slopes. Otherwise each
    ratio m/d is clipped to 3, which keeps the cubic inside the monotone
    region. Flat stretches are allowed (non-strict monotonicity).
    """

    def _gradients(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        d = self._secants(x, y)
        m = super()._gradients(x, y)

        for j in range(len(d)):
            if d[j] <= 0.0:
                m[j] = m[j + 1] = 0.0
                continue

            a = m[j] / d[j]
            b = m[j + 1] / d[j]
            if a < 0.0 or b < 0.0:
                m[j] = m[j + 1] = 0.0
                continue

            if a > 3.0:
                m[j] = 3.0 * d[j]
            if b > 3.0:
                m[j + 1] = 3.0 * d[j]
        return m
