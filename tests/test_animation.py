"""Tests for the random perturbation step and the periodic task lifecycle."""

import pytest
from PySide6.QtCore import QEventLoop, QTimer

from linreg_explorer.animation import PeriodicTask, perturb
from linreg_explorer.params import Parameters


def _spin(ms):
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


def test_perturb_moves_within_step(rng):
    start = Parameters(slope=0.0, intercept=25.0, noise=3.0)
    for _ in range(100):
        nxt = perturb(start, rng, slope_step=0.2, intercept_step=2.0)
        assert abs(nxt.slope - start.slope) <= 0.1
        assert abs(nxt.intercept - start.intercept) <= 1.0
        assert nxt.noise == 3.0


def test_perturb_stays_in_bounds(rng):
    params = Parameters(slope=5.0, intercept=0.0, noise=0.0)
    for _ in range(500):
        params = perturb(params, rng, slope_step=3.0, intercept_step=20.0)
        assert -5.0 <= params.slope <= 5.0
        assert 0.0 <= params.intercept <= 50.0


def test_perturb_zero_step_is_identity(rng):
    params = Parameters(slope=1.5, intercept=7.0)
    assert perturb(params, rng, 0.0, 0.0) == params


def test_periodic_task_ticks_and_stops(qcore_app):
    task = PeriodicTask(interval_ms=5)
    ticks = []
    task.tick.connect(lambda: ticks.append(1))

    task.start()
    assert task.is_running
    _spin(150)
    assert ticks

    task.stop()
    assert not task.is_running
    seen = len(ticks)
    _spin(60)
    assert len(ticks) == seen


def test_set_running_follows_flag(qcore_app):
    task = PeriodicTask(interval_ms=50)
    task.set_running(True)
    task.set_running(True)
    assert task.is_running
    task.set_running(False)
    assert not task.is_running


def test_interval_validation(qcore_app):
    with pytest.raises(ValueError):
        PeriodicTask(interval_ms=0)
    task = PeriodicTask(interval_ms=100)
    task.interval_ms = 250
    assert task.interval_ms == 250
    with pytest.raises(ValueError):
        task.interval_ms = -1
