from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

FloatArray = NDArray[np.floating[Any]]

FIT_DECIMALS: int = 3
MSE_DECIMALS: int = 2


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float
    true_y: float
    id: int


@dataclass(frozen=True, slots=True)
class FitResult:
    slope: float = 0.0
    intercept: float = 0.0
    r2: float = 0.0
    degenerate: bool = False

    def __post_init__(self) -> None:
        if not (0.0 <= self.r2 <= 1.0):
            raise ValueError(f"r2 must be in [0, 1], got {self.r2}")


DEGENERATE_FIT = FitResult(degenerate=True)


def _as_arrays(points: Sequence[Point]) -> tuple[FloatArray, FloatArray]:
    x = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    y = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    return x, y


def predict(slope: float, intercept: float, x: float) -> float:
    return slope * x + intercept


def fit_least_squares(points: Sequence[Point]) -> FitResult:
    """Ordinary least squares line through *points*.

    Uses the closed-form sums:
        slope     = (n*Sxy - Sx*Sy) / (n*Sxx - Sx^2)
        intercept = (Sy - slope*Sx) / n
    R^2 is clamped below at 0. Fewer than two points, or no spread in x,
    give a degenerate zero result instead of a non-finite one.
    """
    n = len(points)
    if n < 2:
        return DEGENERATE_FIT

    x, y = _as_arrays(points)
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_x2 = float(np.sum(x * x))

    denom = n * sum_x2 - sum_x * sum_x
    # n*Sxx - Sx^2 == n^2 * var(x); compare against the data scale
    if np.ptp(x) == 0 or abs(denom) <= 1e-12 * max(1.0, n * sum_x2):
        logger.warning("Least-squares fit undefined: all %d points share x=%s", n, x[0])
        return DEGENERATE_FIT

    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n

    y_pred = slope * x + intercept
    ss_res = float(np.sum((y - y_pred) ** 2))
    ss_tot = float(np.sum((y - sum_y / n) ** 2))
    # values like 0.1 leave ~1e-33 of rounding in both sums, so compare to the y scale
    tol = 1e-12 * max(1.0, float(np.sum(y * y)))
    if ss_tot > tol:
        r2 = 1.0 - ss_res / ss_tot
    else:
        # flat y: the fitted horizontal line explains everything there is
        r2 = 1.0 if ss_res <= tol else 0.0

    return FitResult(
        slope=round(float(slope), FIT_DECIMALS),
        intercept=round(float(intercept), FIT_DECIMALS),
        r2=round(min(1.0, max(0.0, r2)), FIT_DECIMALS),
    )


def fit_within_bounds(
    points: Sequence[Point],
    slope_bounds: tuple[float, float],
    intercept_bounds: tuple[float, float],
) -> Optional[tuple[float, float]]:
    """Least-squares (slope, intercept) restricted to a box of allowed values.

    Inside the box this is the ordinary fit. Otherwise the squared error is a
    convex bowl whose lowest point in the box lies on one of its four edges,
    so each edge is solved in one variable and the best candidate wins.
    Returns None when the points do not define a fit.
    """
    if len(points) < 2:
        return None
    x, y = _as_arrays(points)
    n = len(x)
    s_lo, s_hi = slope_bounds
    b_lo, b_hi = intercept_bounds

    sum_x, sum_y = float(np.sum(x)), float(np.sum(y))
    sum_x2 = float(np.sum(x * x))
    denom = n * sum_x2 - sum_x * sum_x
    if np.ptp(x) == 0 or abs(denom) <= 1e-12 * max(1.0, n * sum_x2):
        return None

    slope = (n * float(np.sum(x * y)) - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    if s_lo <= slope <= s_hi and b_lo <= intercept <= b_hi:
        return round(slope, FIT_DECIMALS), round(intercept, FIT_DECIMALS)

    def sse(m: float, b: float) -> float:
        return float(np.sum((y - (m * x + b)) ** 2))

    candidates: list[tuple[float, float]] = []
    for b in (b_lo, b_hi):
        m = float(np.sum(x * (y - b))) / sum_x2 if sum_x2 > 0 else 0.0
        candidates.append((min(s_hi, max(s_lo, m)), b))
    for m in (s_lo, s_hi):
        b = float(np.mean(y - m * x))
        candidates.append((m, min(b_hi, max(b_lo, b))))

    m, b = min(candidates, key=lambda c: sse(*c))
    return round(m, FIT_DECIMALS), round(b, FIT_DECIMALS)


def mean_squared_error(points: Sequence[Point], slope: float, intercept: float) -> float:
    if not points:
        return 0.0
    x, y = _as_arrays(points)
    mse = float(np.mean((y - (slope * x + intercept)) ** 2))
    return round(mse, MSE_DECIMALS)


def line_endpoints(
    points: Sequence[Point], slope: float, intercept: float
) -> tuple[tuple[float, float], ...]:
    """Two points spanning the data's x-range on the line y = slope*x + intercept."""
    if not points:
        return ()
    x, _ = _as_arrays(points)
    x_min, x_max = float(np.min(x)), float(np.max(x))
    return (
        (x_min, predict(slope, intercept, x_min)),
        (x_max, predict(slope, intercept, x_max)),
    )
