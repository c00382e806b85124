"""Tests for the explorer window, built offscreen."""

import logging

import pytest

from linreg_explorer.main import RegressionWindow, _log_level
from linreg_explorer.params import SLOPE_SLIDER, DemoSettings


@pytest.fixture
def window(qapp):
    win = RegressionWindow(DemoSettings(seed=11))
    win.show()
    yield win
    win.close()
    win.deleteLater()


def test_animate_button_starts_timer(window):
    assert not window.animation.is_running
    window.toggle_animation()
    assert window.state.animating
    assert window.animation.is_running
    window.toggle_animation()
    assert not window.animation.is_running


def test_close_stops_timer(window):
    window.toggle_animation()
    assert window.animation.is_running
    window.close()
    assert not window.animation.is_running
    assert not window.state.animating


def test_slider_updates_params(window):
    slider, _, spec = window._sliders["slope"]
    slider.setValue(spec.to_ticks(-1.5))
    assert window.state.params.slope == -1.5
    assert slider.value() == SLOPE_SLIDER.to_ticks(-1.5)


def test_snap_stops_animation(window):
    window.toggle_animation()
    window.snap_to_best_fit()
    assert not window.state.animating
    assert not window.animation.is_running
    assert window._status_lbl.text() == "Snapped to best fit"


def test_new_data_regenerates_and_stops(window):
    version = window.state.version
    window.toggle_animation()
    window.new_data()
    assert window.state.version == version + 1
    assert not window.animation.is_running


def test_best_fit_toggle_hides_curve(window):
    window.toggle_best_fit(False)
    assert not window._fit_curve.isVisible()
    window.toggle_best_fit(True)
    assert window._fit_curve.isVisible()


def test_degenerate_data_hides_best_fit(qapp):
    # every x rounds to 0.00
    win = RegressionWindow(DemoSettings(seed=1, x_span=0.001))
    try:
        assert win.state.fit.degenerate
        assert not win._fit_curve.isVisible()
        assert win._stat_labels["best_fit_equation"].text() == "Best fit undefined"
    finally:
        win.close()
        win.deleteLater()


@pytest.mark.parametrize("value,expected", [
    ("debug", logging.DEBUG),
    (" INFO ", logging.INFO),
    ("chatty", logging.WARNING),
    ("", logging.WARNING),
])
def test_log_level_from_env(monkeypatch, value, expected):
    monkeypatch.setenv("LINREG_LOG_LEVEL", value)
    assert _log_level() == expected


def test_log_level_default(monkeypatch):
    monkeypatch.delenv("LINREG_LOG_LEVEL", raising=False)
    assert _log_level() == logging.WARNING
