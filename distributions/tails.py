"""
Exponential CDF tails for AutoInfinite bounds.

Outside the spline's domain the CDF continues as

    lower:  F(x) = exp(a*x + b)            f(x) = a*exp(a*x + b)
    upper:  F(x) = 1 - exp(b - a*x)        f(x) = a*exp(b - a*x)

with a, b chosen so F and f match the spline value y and slope y' at the
junction knot x0:

    lower:  a = y'/y        b = ln(y) - a*x0
    upper:  a = y'/(1 - y)  b = ln(1 - y) + a*x0

Both CDF and PDF are therefore continuous across the junction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Tuple

import numpy as np

from core.errors import LogicError


@dataclass(frozen=True)
class ExponentialTail:
    side: Literal["lower", "upper"]
    rate: float        # a, always > 0
    intercept: float   # b
    junction: float    # x0, the spline knot the tail attaches to

    @classmethod
    def fit(cls, side: Literal["lower", "upper"], x0: float, y: float, yp: float) -> "ExponentialTail":
        if not 0.0 < y < 1.0:
            raise LogicError(f"{side} tail junction value {y:.6g} at x={x0:.6g} is outside (0, 1)")
        if not yp > 0.0:
            raise LogicError(f"non-positive derivative {yp:.6g} at {side} tail junction x={x0:.6g}")

        if side == "lower":
            a = yp / y
            b = math.log(y) - a * x0
        else:
            a = yp / (1.0 - y)
            b = math.log(1.0 - y) + a * x0

        if not (a > 0.0 and math.isfinite(a) and math.isfinite(b)):
            raise LogicError(f"degenerate {side} tail decay rate {a!r} at x={x0:.6g}")
        return cls(side=side, rate=a, intercept=b, junction=float(x0))

    def cdf(self, x):
        if self.side == "lower":
            return np.exp(self.rate * x + self.intercept)
        return 1.0 - np.exp(self.intercept - self.rate * x)

    def pdf(self, x):
        if self.side == "lower":
            return self.rate * np.exp(self.rate * x + self.intercept)
        return self.rate * np.exp(self.intercept - self.rate * x)

    def moments(self) -> Tuple[float, float, float]:
        """
        Closed-form (mass, E-part, E2-part) of the tail.

        Returns the integrals of f, x*f and x^2*f over the tail's half line.
        """
        a, x0 = self.rate, self.junction
        if self.side == "lower":
            mass = math.exp(a * x0 + self.intercept)
            return (
                mass,
                mass * (x0 - 1.0 / a),
                mass * (x0 ** 2 - 2.0 * x0 / a + 2.0 / a ** 2),
            )
        mass = math.exp(self.intercept - a * x0)
        return (
            mass,
            mass * (x0 + 1.0 / a),
            mass * (x0 ** 2 + 2.0 * x0 / a + 2.0 / a ** 2),
        )
