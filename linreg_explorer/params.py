from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional


# ===========================================================================
# Slider ranges
# ===========================================================================

@dataclass(frozen=True, slots=True)
class SliderSpec:
    minimum: float
    maximum: float
    step: float

    def __post_init__(self) -> None:
        if self.minimum >= self.maximum:
            raise ValueError(f"minimum ({self.minimum}) must be < maximum ({self.maximum})")
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")

    @property
    def tick_count(self) -> int:
        """Number of step intervals between minimum and maximum."""
        return int(round((self.maximum - self.minimum) / self.step))

    def clamp(self, value: float) -> float:
        if math.isnan(value):
            raise ValueError("value must be a number, got NaN")
        return min(self.maximum, max(self.minimum, float(value)))

    def snap(self, value: float) -> float:
        """Clamp *value* and move it onto the nearest step."""
        ticks = round((self.clamp(value) - self.minimum) / self.step)
        return self.from_ticks(ticks)

    def to_ticks(self, value: float) -> int:
        return int(round((self.clamp(value) - self.minimum) / self.step))

    def from_ticks(self, ticks: int) -> float:
        ticks = min(self.tick_count, max(0, int(ticks)))
        return round(self.minimum + ticks * self.step, 6)


SLOPE_SLIDER = SliderSpec(-5.0, 5.0, 0.1)
INTERCEPT_SLIDER = SliderSpec(0.0, 50.0, 0.5)
NOISE_SLIDER = SliderSpec(0.0, 15.0, 0.5)


# ===========================================================================
# User-tunable line parameters
# ===========================================================================

@dataclass(frozen=True, slots=True)
class Parameters:
    slope: float = 2.0
    intercept: float = 10.0
    noise: float = 5.0

    def __post_init__(self) -> None:
        for name, spec in (("slope", SLOPE_SLIDER),
                           ("intercept", INTERCEPT_SLIDER),
                           ("noise", NOISE_SLIDER)):
            value = getattr(self, name)
            if not (spec.minimum <= value <= spec.maximum):
                raise ValueError(
                    f"{name} must be in [{spec.minimum}, {spec.maximum}], got {value}"
                )

    @classmethod
    def clamped(cls, slope: float, intercept: float, noise: float) -> Parameters:
        return cls(
            slope=SLOPE_SLIDER.clamp(slope),
            intercept=INTERCEPT_SLIDER.clamp(intercept),
            noise=NOISE_SLIDER.clamp(noise),
        )

    def with_slope(self, value: float) -> Parameters:
        return replace(self, slope=SLOPE_SLIDER.snap(value))

    def with_intercept(self, value: float) -> Parameters:
        return replace(self, intercept=INTERCEPT_SLIDER.snap(value))

    def with_noise(self, value: float) -> Parameters:
        return replace(self, noise=NOISE_SLIDER.snap(value))


# ===========================================================================
# Application settings
# ===========================================================================

@dataclass(frozen=True, slots=True)
class DemoSettings:
    point_count: int = 50
    x_span: float = 20.0
    interval_ms: int = 200          # animation tick period
    slope_step: float = 0.2         # full width of the random slope nudge
    intercept_step: float = 2.0     # full width of the random intercept nudge
    seed: Optional[int] = None
    latex_decimals: int = 3

    def __post_init__(self) -> None:
        if not (2 <= self.point_count <= 1000):
            raise ValueError(f"point_count must be in [2, 1000], got {self.point_count}")
        if self.x_span <= 0:
            raise ValueError(f"x_span must be positive, got {self.x_span}")
        if not (10 <= self.interval_ms <= 5000):
            raise ValueError(f"interval_ms must be in [10, 5000], got {self.interval_ms}")
        if self.slope_step < 0:
            raise ValueError(f"slope_step cannot be negative: {self.slope_step}")
        if self.intercept_step < 0:
            raise ValueError(f"intercept_step cannot be negative: {self.intercept_step}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed cannot be negative: {self.seed}")
        if not (0 <= self.latex_decimals <= 10):
            raise ValueError(f"latex_decimals must be in [0, 10], got {self.latex_decimals}")
