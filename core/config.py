"""
Estimator configuration.

Each CDF bound is one of three modes, kept as a tagged variant rather than
overloading the numeric bound with sentinel values:

  AutoSpline(): extrapolate a boundary knot from the first-pass spline fit
  AutoInfinite(): attach an exponential tail, support extends to +/- infinity
  Fixed(value): clamp the CDF to 0 (lower) or 1 (upper) at this exact value

The string tokens "spline" / "inf" and +/-math.inf are accepted as shorthand
when configuring, and any finite real becomes Fixed(value).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Literal, Union

import numpy as np

from .errors import InvalidArgument
from .utils import is_real


@dataclass(frozen=True)
class AutoSpline:
    pass


@dataclass(frozen=True)
class AutoInfinite:
    pass


@dataclass(frozen=True)
class Fixed:
    value: float


BoundMode = Union[AutoSpline, AutoInfinite, Fixed]

SPLINE = AutoSpline()
INF = AutoInfinite()

SPLINE_ENGINES = ("natural", "monotonic")


def parse_bound(v: Any) -> BoundMode:
    """Canonicalize a user-supplied bound token into a BoundMode."""
    if isinstance(v, (AutoSpline, AutoInfinite)):
        return v
    if isinstance(v, Fixed):
        if not is_real(v.value) or not math.isfinite(v.value):
            raise InvalidArgument(f"Fixed bound requires a finite value, got {v.value!r}")
        return Fixed(float(v.value))
    if isinstance(v, str):
        token = v.strip().lower()
        if token == "spline":
            return SPLINE
        if token == "inf":
            return INF
    elif is_real(v):
        if math.isinf(v):
            return INF
        if not math.isnan(v):
            return Fixed(float(v))
    raise InvalidArgument(
        "bounds argument expects AutoSpline(), AutoInfinite(), 'spline', 'inf', "
        f"+/-inf, or a finite numeric value; got {v!r}"
    )


@dataclass(frozen=True)
class DistributionConfig:
    cdf_lb: BoundMode = SPLINE
    cdf_ub: BoundMode = SPLINE

    # pin the CDF slope to 0 at a clamped boundary knot (pdf continuity at the edge)
    cdf_smooth_lb: bool = True
    cdf_smooth_ub: bool = True

    # empirical-knot resolution, knots are emitted roughly every `cdf_quantile` of mass
    cdf_quantile: float = 0.05

    spline: Literal["natural", "monotonic"] = "natural"

    def merged(self, **options: Any) -> "DistributionConfig":
        """
        Return a validated copy of this config with `options` applied.

        Nothing is modified if any option is rejected.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidArgument(f"Unknown configuration options: {unknown}")

        updates = dict(options)
        for key in ("cdf_lb", "cdf_ub"):
            if key in updates:
                updates[key] = parse_bound(updates[key])
        for key in ("cdf_smooth_lb", "cdf_smooth_ub"):
            if key in updates:
                flag = updates[key]
                if not isinstance(flag, (bool, np.bool_)):
                    raise InvalidArgument(f"{key} expects True or False, got {flag!r}")
                updates[key] = bool(flag)

        if "cdf_quantile" in updates:
            q = updates["cdf_quantile"]
            try:
                q = float(q)
            except (TypeError, ValueError) as exc:
                raise InvalidArgument("cdf_quantile expects numeric > 0 and < 1") from exc
            if not 0.0 < q < 1.0:
                raise InvalidArgument("cdf_quantile expects numeric > 0 and < 1")
            updates["cdf_quantile"] = q

        if "spline" in updates and updates["spline"] not in SPLINE_ENGINES:
            raise InvalidArgument(
                f"spline expects one of {SPLINE_ENGINES}, got {updates['spline']!r}"
            )

        cfg = replace(self, **updates)
        if isinstance(cfg.cdf_lb, Fixed) and isinstance(cfg.cdf_ub, Fixed):
            if cfg.cdf_lb.value >= cfg.cdf_ub.value:
                raise InvalidArgument(
                    f"Fixed lower bound {cfg.cdf_lb.value} must be below "
                    f"Fixed upper bound {cfg.cdf_ub.value}"
                )
        return cfg
