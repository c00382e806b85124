"""Tests for slider ranges, parameter clamping and settings validation."""

import pytest

from linreg_explorer.params import (
    INTERCEPT_SLIDER,
    NOISE_SLIDER,
    SLOPE_SLIDER,
    DemoSettings,
    Parameters,
    SliderSpec,
)


def test_default_parameters():
    params = Parameters()
    assert (params.slope, params.intercept, params.noise) == (2.0, 10.0, 5.0)


@pytest.mark.parametrize("value,expected", [(-7.3, -5.0), (12, 5.0), (2.13, 2.1), (-0.04, 0.0)])
def test_slope_clamped_and_snapped(value, expected):
    assert Parameters().with_slope(value).slope == expected


def test_intercept_and_noise_steps():
    params = Parameters().with_intercept(12.3).with_noise(99)
    assert params.intercept == 12.5
    assert params.noise == 15.0
    assert Parameters().with_intercept(-4).intercept == 0.0


def test_out_of_range_constructor_rejected():
    with pytest.raises(ValueError):
        Parameters(slope=5.5)
    with pytest.raises(ValueError):
        Parameters(noise=-1)


def test_clamped_keeps_off_step_values():
    params = Parameters.clamped(2.345, 60.0, 5.0)
    assert params.slope == 2.345
    assert params.intercept == 50.0


def test_tick_mapping_round_trips_bounds():
    assert SLOPE_SLIDER.tick_count == 100
    assert INTERCEPT_SLIDER.tick_count == 100
    assert NOISE_SLIDER.tick_count == 30
    assert SLOPE_SLIDER.to_ticks(-5) == 0
    assert SLOPE_SLIDER.from_ticks(100) == 5.0
    assert SLOPE_SLIDER.from_ticks(71) == 2.1
    assert SLOPE_SLIDER.from_ticks(500) == 5.0


def test_clamp_rejects_nan():
    with pytest.raises(ValueError):
        SLOPE_SLIDER.clamp(float("nan"))


def test_slider_spec_validation():
    with pytest.raises(ValueError):
        SliderSpec(1.0, 1.0, 0.1)
    with pytest.raises(ValueError):
        SliderSpec(0.0, 1.0, 0.0)


def test_settings_defaults():
    s = DemoSettings()
    assert s.point_count == 50
    assert s.interval_ms == 200
    assert s.seed is None


@pytest.mark.parametrize("kwargs", [
    {"point_count": 1},
    {"x_span": 0.0},
    {"interval_ms": 5},
    {"slope_step": -0.1},
    {"intercept_step": -1.0},
    {"seed": -3},
    {"latex_decimals": 11},
])
def test_settings_validation(kwargs):
    with pytest.raises(ValueError):
        DemoSettings(**kwargs)
