from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

from linreg_explorer.animation import perturb
from linreg_explorer.fitting import (
    FitResult,
    Point,
    fit_least_squares,
    fit_within_bounds,
    line_endpoints,
    mean_squared_error,
)
from linreg_explorer.generator import generate_points, make_rng
from linreg_explorer.latex_gen import format_equation
from linreg_explorer.params import INTERCEPT_SLIDER, SLOPE_SLIDER, DemoSettings, Parameters

logger = logging.getLogger(__name__)

BEST_FIT_UNDEFINED = "Best fit undefined"


class RegressionState:
    """Everything the window shows, recomputed synchronously on each change.

    The best fit depends only on the point set and is cached against
    ``version``, which is bumped every time the points are regenerated.
    MSE is recomputed from the current parameters on demand.
    """

    def __init__(
        self,
        settings: Optional[DemoSettings] = None,
        params: Optional[Parameters] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._settings = settings or DemoSettings()
        self._rng = rng if rng is not None else make_rng(self._settings.seed)
        self._params = params or Parameters()
        self._points: tuple[Point, ...] = ()
        self._version = 0
        self._fit_cache: Optional[tuple[int, FitResult]] = None
        self.animating = False
        self.show_best_fit = True
        self._regenerate()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def settings(self) -> DemoSettings:
        return self._settings

    @property
    def params(self) -> Parameters:
        return self._params

    @property
    def points(self) -> tuple[Point, ...]:
        return self._points

    @property
    def version(self) -> int:
        return self._version

    @property
    def fit(self) -> FitResult:
        if self._fit_cache is None or self._fit_cache[0] != self._version:
            self._fit_cache = (self._version, fit_least_squares(self._points))
        return self._fit_cache[1]

    @property
    def mse(self) -> float:
        return mean_squared_error(self._points, self._params.slope, self._params.intercept)

    def user_line(self) -> tuple[tuple[float, float], ...]:
        return line_endpoints(self._points, self._params.slope, self._params.intercept)

    def best_fit_line(self) -> tuple[tuple[float, float], ...]:
        fit = self.fit
        if fit.degenerate:
            return ()
        return line_endpoints(self._points, fit.slope, fit.intercept)

    def summary(self) -> dict[str, Any]:
        fit = self.fit
        return {
            "user_equation": format_equation(self._params.slope, self._params.intercept, 2),
            "best_fit_equation": (
                BEST_FIT_UNDEFINED if fit.degenerate
                else format_equation(fit.slope, fit.intercept)
            ),
            "r2": fit.r2,
            "mse": self.mse,
            "count": len(self._points),
            "degenerate": fit.degenerate,
        }

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def set_slope(self, value: float) -> None:
        self._params = self._params.with_slope(value)

    def set_intercept(self, value: float) -> None:
        self._params = self._params.with_intercept(value)

    def set_noise(self, value: float) -> None:
        self._params = self._params.with_noise(value)

    def set_params(self, params: Parameters) -> None:
        self._params = params

    def set_show_best_fit(self, show: bool) -> None:
        self.show_best_fit = bool(show)

    def new_data(self) -> None:
        self.animating = False
        self._regenerate()

    def snap_to_best_fit(self) -> None:
        fit = self.fit
        self.animating = False
        if fit.degenerate:
            logger.warning("Snap to best fit ignored: no fit for %d points", len(self._points))
            return
        # the slider box can exclude the free optimum; snap to the best line inside it
        slope, intercept = fit_within_bounds(
            self._points,
            (SLOPE_SLIDER.minimum, SLOPE_SLIDER.maximum),
            (INTERCEPT_SLIDER.minimum, INTERCEPT_SLIDER.maximum),
        ) or (fit.slope, fit.intercept)
        self._params = Parameters.clamped(slope, intercept, self._params.noise)
        logger.info("Snapped to best fit: slope=%s intercept=%s", slope, intercept)

    def set_animating(self, animating: bool) -> None:
        self.animating = bool(animating)

    def toggle_animation(self) -> bool:
        self.animating = not self.animating
        return self.animating

    def step_animation(self) -> None:
        if not self.animating:
            return
        self._params = perturb(
            self._params,
            self._rng,
            slope_step=self._settings.slope_step,
            intercept_step=self._settings.intercept_step,
        )

    def apply_settings(self, settings: DemoSettings) -> None:
        """Swap in new settings; a changed seed, count or span regenerates the data."""
        old = self._settings
        self._settings = settings
        if settings.seed != old.seed:
            self._rng = make_rng(settings.seed)
        if (settings.point_count, settings.x_span, settings.seed) != (
            old.point_count, old.x_span, old.seed
        ):
            self.new_data()

    def _regenerate(self) -> None:
        self._points = generate_points(
            count=self._settings.point_count,
            slope=self._params.slope,
            intercept=self._params.intercept,
            noise=self._params.noise,
            rng=self._rng,
            x_span=self._settings.x_span,
        )
        self._version += 1
        logger.debug("Point set regenerated (version %d)", self._version)
