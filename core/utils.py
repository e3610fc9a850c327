from __future__ import annotations

import numbers
from typing import Any

import numpy as np

from .errors import InvalidArgument


def _holds_non_number(data: Any) -> bool:
    """True if data is, or contains, a bool or a string."""
    if isinstance(data, (bool, np.bool_, str, bytes)):
        return True
    if isinstance(data, np.ndarray):
        if data.dtype.kind in "bUS":
            return True
        return data.dtype == object and any(map(_holds_non_number, data.ravel()))
    if isinstance(data, (list, tuple)):
        return any(map(_holds_non_number, data))
    return False


def as_float_vector(data: Any) -> np.ndarray:
    """
    Coerce a scalar or a flat sequence of reals into a 1-D float array.

    Raises InvalidArgument if any element cannot be read as a finite float.
    Booleans and strings are rejected even where numpy would convert them.
    """
    if _holds_non_number(data):
        raise InvalidArgument(f"failed to acquire data as floating point vector: {data!r}")
    try:
        arr = np.asarray(data, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"failed to acquire data as floating point vector: {exc}") from exc

    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise InvalidArgument(f"expected a scalar or flat sequence, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgument("samples must be finite floating point values")
    return arr


def is_real(v: Any) -> bool:
    """True for int/float/numpy reals, False for bool."""
    return isinstance(v, numbers.Real) and not isinstance(v, bool)
