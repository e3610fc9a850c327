"""
Closed-form moments of a spline CDF.

On each knot interval the CDF is a cubic, so the PDF is a quadratic. Writing
the cubic in Hermite form over t in [0, 1] (width h, end values Y0, Y1, end
slopes m0, m1):

    C(t) = c0 + c1*t + c2*t^2 + c3*t^3
    c1 = h*m0
    c2 = 3(Y1 - Y0) - 2h*m0 - h*m1
    c3 = 2(Y0 - Y1) + h*m0 + h*m1

and x = x0 + h*t, dF = C'(t) dt. With I_k = integral of t^k * C'(t) over [0, 1]
= c1/(k+1) + 2*c2/(k+2) + 3*c3/(k+3), each interval contributes

    mass = I_0
    E    = x0*I_0 + h*I_1
    E2   = x0^2*I_0 + 2*x0*h*I_1 + h^2*I_2
"""

from __future__ import annotations

from typing import Tuple

import numpy as np


def segment_moments(x: np.ndarray, y: np.ndarray, m: np.ndarray) -> Tuple[float, float, float]:
    """
    Integrate f, x*f and x^2*f over a Hermite-form spline's domain.

    Parameters
    ----------
    x, y : np.ndarray
        Knots (strictly increasing x)
    m : np.ndarray
        Spline first derivative at each knot

    Returns
    -------
    (mass, first, second) summed over all intervals
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    m = np.asarray(m, dtype=float)

    x0 = x[:-1]
    h = np.diff(x)
    y0, y1 = y[:-1], y[1:]
    d0, d1 = h * m[:-1], h * m[1:]

    c1 = d0
    c2 = 3.0 * (y1 - y0) - 2.0 * d0 - d1
    c3 = 2.0 * (y0 - y1) + d0 + d1

    i0 = c1 + c2 + c3
    i1 = c1 / 2.0 + 2.0 * c2 / 3.0 + 3.0 * c3 / 4.0
    i2 = c1 / 3.0 + c2 / 2.0 + 3.0 * c3 / 5.0

    mass = i0
    first = x0 * i0 + h * i1
    second = x0 ** 2 * i0 + 2.0 * x0 * h * i1 + h ** 2 * i2
    return float(mass.sum()), float(first.sum()), float(second.sum())
