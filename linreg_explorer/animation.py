from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from PySide6.QtCore import QObject, QTimer, Signal

from linreg_explorer.params import Parameters

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS: int = 200


def perturb(
    params: Parameters,
    rng: np.random.Generator,
    slope_step: float = 0.2,
    intercept_step: float = 2.0,
) -> Parameters:
    """Nudge slope and intercept by uniform deltas in [-step/2, step/2).

    The result is clamped to the slider ranges; noise is left alone.
    """
    d_slope, d_intercept = rng.random(2) - 0.5
    return Parameters.clamped(
        slope=params.slope + float(d_slope) * slope_step,
        intercept=params.intercept + float(d_intercept) * intercept_step,
        noise=params.noise,
    )


class PeriodicTask(QObject):
    """Repeating timer with an explicit start/stop lifecycle.

    Emits ``tick`` every ``interval_ms`` while running. ``set_running`` ties
    the task to a boolean flag so callers never hold a raw timer handle.
    """

    tick: Signal = Signal()

    def __init__(self, interval_ms: int = DEFAULT_INTERVAL_MS,
                 parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick.emit)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @interval_ms.setter
    def interval_ms(self, value: int) -> None:
        if value <= 0:
            raise ValueError(f"interval_ms must be positive, got {value}")
        self._timer.setInterval(value)

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if not self._timer.isActive():
            logger.debug("Starting periodic task every %d ms", self._timer.interval())
            self._timer.start()

    def stop(self) -> None:
        if self._timer.isActive():
            logger.debug("Stopping periodic task")
            self._timer.stop()

    def set_running(self, running: bool) -> None:
        if running:
            self.start()
        else:
            self.stop()
