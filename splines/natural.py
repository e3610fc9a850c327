"""
Natural cubic spline.

Second derivatives at each knot come from the classical tridiagonal system
(Press et al., Numerical Recipes, section 3.3): forward elimination followed by
back-substitution. Each end is either natural (q'' = 0) or clamped to a caller
supplied first derivative.

With the second derivatives M cached, on an interval [x_lo, x_hi] of width h,
using A = (x_hi - x)/h and B = (x - x_lo)/h:

    q(x)   = A*y_lo + B*y_hi + ((A^3 - A)*M_lo + (B^3 - B)*M_hi) * h^2/6
    q'(x)  = (y_hi - y_lo)/h - (3A^2 - 1)*h*M_lo/6 + (3B^2 - 1)*h*M_hi/6
    q''(x) = A*M_lo + B*M_hi
"""

from __future__ import annotations

import numpy as np

from .base import ArrayLike, SplineEngine


class NaturalCubicSpline(SplineEngine):

    @property
    def ypp(self) -> np.ndarray:
        """Second derivative at every knot."""
        self.recompute()
        return self._ypp.copy()

    def _fit(self) -> None:
        x, y = self._x, self._y
        n = len(y)
        ypp = np.zeros(n)
        u = np.zeros(n)

        if self._yp_lower is not None:
            # clamped lower end
            ypp[0] = -0.5
            u[0] = (3.0 / (x[1] - x[0])) * ((y[1] - y[0]) / (x[1] - x[0]) - self._yp_lower)

        # forward elimination
        for j in range(1, n - 1):
            sig = (x[j] - x[j - 1]) / (x[j + 1] - x[j - 1])
            p = sig * ypp[j - 1] + 2.0
            ypp[j] = (sig - 1.0) / p
            t = (y[j + 1] - y[j]) / (x[j + 1] - x[j]) - (y[j] - y[j - 1]) / (x[j] - x[j - 1])
            u[j] = (6.0 * t / (x[j + 1] - x[j - 1]) - sig * u[j - 1]) / p

        qn = 0.0
        if self._yp_upper is not None:
            qn = 0.5
            u[n - 1] = (3.0 / (x[n - 1] - x[n - 2])) * (
                self._yp_upper - (y[n - 1] - y[n - 2]) / (x[n - 1] - x[n - 2])
            )

        # back-substitution
        ypp[n - 1] = (u[n - 1] - qn * u[n - 2]) / (qn * ypp[n - 2] + 1.0)
        for j in range(n - 2, -1, -1):
            ypp[j] = ypp[j] * ypp[j + 1] + u[j]

        self._ypp = ypp

    def _terms(self, x: ArrayLike):
        xv, jlo, jhi, scalar = self._find(x)
        h = self._x[jhi] - self._x[jlo]
        a = (self._x[jhi] - xv) / h
        b = (xv - self._x[jlo]) / h
        return jlo, jhi, h, a, b, scalar

    def q(self, x: ArrayLike):
        jlo, jhi, h, a, b, scalar = self._terms(x)
        y, ypp = self._y, self._ypp
        v = a * y[jlo] + b * y[jhi] + ((a ** 3 - a) * ypp[jlo] + (b ** 3 - b) * ypp[jhi]) * (h ** 2) / 6.0
        return self._out(v, scalar)

    def qp(self, x: ArrayLike):
        jlo, jhi, h, a, b, scalar = self._terms(x)
        y, ypp = self._y, self._ypp
        v = (
            (y[jhi] - y[jlo]) / h
            - (3.0 * a ** 2 - 1.0) * h * ypp[jlo] / 6.0
            + (3.0 * b ** 2 - 1.0) * h * ypp[jhi] / 6.0
        )
        return self._out(v, scalar)

    def qpp(self, x: ArrayLike):
        jlo, jhi, _, a, b, scalar = self._terms(x)
        v = a * self._ypp[jlo] + b * self._ypp[jhi]
        return self._out(v, scalar)
