from __future__ import annotations

from typing import Optional

import sympy as sp


def format_equation(slope: float, intercept: float, decimals: Optional[int] = None) -> str:
    """Plain-text readout such as ``y = 2.00x + 10.00``.

    With *decimals* None the numbers are printed as-is (the best-fit readout,
    whose values are already rounded).
    """
    def fmt(v: float) -> str:
        return f"{v:.{decimals}f}" if decimals is not None else f"{v}"

    sign = "-" if intercept < 0 else "+"
    return f"y = {fmt(slope)}x {sign} {fmt(abs(intercept))}"


class LaTeXGenerator:
    """Renders a line y = m*x + b as display-math LaTeX.

    Parameters
    ----------
    approx : bool
        When True (default) coefficients are rounded decimals with
        *decimals* digits after the point. When False, exact rational
        fractions are used.
    decimals : int
        Number of digits after the decimal point in approximate mode.
    """

    def __init__(self, approx: bool = True, decimals: int = 3) -> None:
        self.approx = approx
        self.decimals = max(0, min(10, int(decimals)))
        self._x = sp.Symbol("x")

    def reconfigure(self, approx: bool, decimals: int) -> None:
        self.approx = approx
        self.decimals = max(0, min(10, int(decimals)))

    def generate(self, slope: float, intercept: float) -> str:
        try:
            expr = self._n(slope) * self._x + self._n(intercept)
            return f"$$y = {sp.latex(expr)}$$"
        except (TypeError, ValueError, ArithmeticError):
            return self._fallback(slope, intercept)

    def _n(self, v: float) -> sp.Expr:
        """Approx mode gives an sp.Float at self.decimals places, exact mode a
        sp.Rational with denominator <= 1000."""
        if self.approx:
            return sp.Float(f"{v:.{self.decimals}f}")
        return sp.Rational(v).limit_denominator(1000)

    def _fallback(self, slope: float, intercept: float) -> str:
        return f"$$\\text{{{format_equation(slope, intercept, self.decimals)}}}$$"
