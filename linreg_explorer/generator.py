from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from linreg_explorer.fitting import Point

logger = logging.getLogger(__name__)

DEFAULT_POINT_COUNT: int = 50
DEFAULT_X_SPAN: float = 20.0
POINT_DECIMALS: int = 2


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def generate_points(
    count: int = DEFAULT_POINT_COUNT,
    slope: float = 2.0,
    intercept: float = 10.0,
    noise: float = 5.0,
    rng: Optional[np.random.Generator] = None,
    x_span: float = DEFAULT_X_SPAN,
) -> tuple[Point, ...]:
    """Sample *count* noisy points around y = slope*x + intercept.

    x is uniform on [0, x_span), the noise is uniform on [-noise, noise].
    Values are rounded to two decimals and the result is sorted by x; each
    point keeps the index it was drawn with as its id.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if noise < 0:
        raise ValueError(f"noise must be non-negative, got {noise}")
    if x_span <= 0:
        raise ValueError(f"x_span must be positive, got {x_span}")

    rng = rng if rng is not None else make_rng()
    x = rng.random(count) * x_span
    true_y = slope * x + intercept
    y = true_y + (rng.random(count) - 0.5) * noise * 2

    x_r = np.round(x, POINT_DECIMALS)
    # rounding can push a draw just below x_span up onto it
    step = 10.0 ** -POINT_DECIMALS
    x_r = np.where(x_r >= x_span, np.round(x_r - step, POINT_DECIMALS), x_r)
    y_r = np.round(y, POINT_DECIMALS)
    true_r = np.round(true_y, POINT_DECIMALS)

    points = [
        Point(x=float(xi), y=float(yi), true_y=float(ti), id=i)
        for i, (xi, yi, ti) in enumerate(zip(x_r, y_r, true_r))
    ]
    points.sort(key=lambda p: p.x)
    logger.debug("Generated %d points (slope=%s, intercept=%s, noise=%s)",
                 count, slope, intercept, noise)
    return tuple(points)
