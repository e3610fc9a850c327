"""
Quantized empirical CDF: the knots the spline is fitted through.

Given sorted samples v_1 <= ... <= v_N, a distinct value v is assigned the
fraction of samples <= v divided by (N + 1). The extra 1 reserves unsampled
mass for the tails, so the largest sample never gets CDF = 1.

Knots are thinned to roughly one per `quantile` of probability mass: a value
is kept once its fraction reaches the next unconsumed multiple of `quantile`,
then the threshold jumps to the first multiple strictly above that fraction.
The largest value is always kept. Knot count is O(1/quantile) regardless of N.
"""

from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np


def sampled_cdf(data: np.ndarray, quantile: float) -> Tuple[List[float], List[float]]:
    """
    Build empirical CDF knots from sorted data.

    Parameters
    ----------
    data : np.ndarray
        Samples sorted ascending (duplicates allowed)
    quantile : float
        Knot resolution in (0, 1)

    Returns
    -------
    (xs, ys) lists, xs strictly increasing, ys in (0, 1)
    """
    n = len(data)
    if n < 1:
        return [], []

    values, counts = np.unique(data, return_counts=True)
    z = 1.0 + n
    frac = np.cumsum(counts) / z   # fraction of samples <= values[i]

    xs: List[float] = []
    ys: List[float] = []

    # every distinct value but the last competes for a quantile slot
    last = len(values) - 1
    qcur = 0.0
    while True:
        i = int(np.searchsorted(frac[:last], qcur, side="left"))
        if i >= last:
            break
        q = float(frac[i])
        xs.append(float(values[i]))
        ys.append(q)
        qcur = (math.floor(q / quantile) + 1) * quantile
        while qcur <= q:
            qcur += quantile

    xs.append(float(values[last]))
    ys.append(float(frac[last]))
    return xs, ys
