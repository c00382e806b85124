"""Tests for equation readouts."""

import pytest

from linreg_explorer.latex_gen import LaTeXGenerator, format_equation


@pytest.mark.parametrize("slope,intercept,decimals,expected", [
    (2, 10, 2, "y = 2.00x + 10.00"),
    (-1.5, 0.25, 1, "y = -1.5x + 0.2"),
    (0.5, -3.0, 2, "y = 0.50x - 3.00"),
    (2.0, 10.0, None, "y = 2.0x + 10.0"),
])
def test_format_equation(slope, intercept, decimals, expected):
    assert format_equation(slope, intercept, decimals) == expected


def test_latex_approx():
    out = LaTeXGenerator(decimals=3).generate(2.5, 10.0)
    assert out.startswith("$$y = ")
    assert out.endswith("$$")
    assert "x" in out
    assert "10.0" in out


def test_latex_exact_fraction():
    out = LaTeXGenerator(approx=False).generate(2.5, 10.0)
    assert "\\frac{5 x}{2}" in out
    assert "10" in out


def test_reconfigure_clamps_decimals():
    gen = LaTeXGenerator()
    gen.reconfigure(True, 42)
    assert gen.decimals == 10
    gen.reconfigure(False, -1)
    assert gen.decimals == 0
    assert not gen.approx
