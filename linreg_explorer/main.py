"""
Linear Regression Explorer.

Scattered points around a line, sliders for the user's slope and intercept,
and the least-squares line drawn against it.

Statistics
----------
Best fit     closed-form ordinary least squares over the current points
R^2          1 - SS_res/SS_tot, clamped below at 0
MSE          mean squared residual of the user's line

The points are regenerated with "New Data"; the fit only changes then.
"Animate" nudges the user's line by small random steps on a timer.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QDialog,
    QDoubleSpinBox,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSlider,
    QSpinBox,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from linreg_explorer.animation import PeriodicTask
from linreg_explorer.fitting import predict
from linreg_explorer.latex_gen import LaTeXGenerator
from linreg_explorer.params import (
    INTERCEPT_SLIDER,
    NOISE_SLIDER,
    SLOPE_SLIDER,
    DemoSettings,
    SliderSpec,
)
from linreg_explorer.state import RegressionState

logger = logging.getLogger(__name__)

POINT_COLOR: tuple[int, int, int] = (96, 165, 250)
USER_LINE_COLOR: tuple[int, int, int] = (239, 68, 68)
FIT_LINE_COLOR: tuple[int, int, int] = (16, 185, 129)


# ===========================================================================
# Settings dialog
# ===========================================================================

class SettingsDialog(QDialog):

    def __init__(self, settings: DemoSettings, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Explorer Settings")
        self._settings = settings
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QGridLayout(self)

        self._count_sb = QSpinBox()
        self._count_sb.setRange(2, 1000)
        self._count_sb.setValue(self._settings.point_count)

        self._span_sb = QDoubleSpinBox()
        self._span_sb.setRange(0.5, 1000.0)
        self._span_sb.setDecimals(1)
        self._span_sb.setValue(self._settings.x_span)

        self._interval_sb = QSpinBox()
        self._interval_sb.setRange(10, 5000)
        self._interval_sb.setSuffix(" ms")
        self._interval_sb.setValue(self._settings.interval_ms)

        self._slope_step_sb = QDoubleSpinBox()
        self._slope_step_sb.setRange(0.0, 5.0)
        self._slope_step_sb.setSingleStep(0.05)
        self._slope_step_sb.setValue(self._settings.slope_step)

        self._intercept_step_sb = QDoubleSpinBox()
        self._intercept_step_sb.setRange(0.0, 50.0)
        self._intercept_step_sb.setSingleStep(0.5)
        self._intercept_step_sb.setValue(self._settings.intercept_step)

        # empty means a fresh random seed
        self._seed_edit = QLineEdit("" if self._settings.seed is None else str(self._settings.seed))
        self._seed_edit.setPlaceholderText("random")

        self._decimals_sb = QSpinBox()
        self._decimals_sb.setRange(0, 10)
        self._decimals_sb.setValue(self._settings.latex_decimals)

        fields: list[tuple[str, QWidget]] = [
            ("Point count:", self._count_sb),
            ("X span:", self._span_sb),
            ("Animation interval:", self._interval_sb),
            ("Slope nudge:", self._slope_step_sb),
            ("Intercept nudge:", self._intercept_step_sb),
            ("Random seed:", self._seed_edit),
            ("LaTeX decimals:", self._decimals_sb),
        ]
        for row, (label, widget) in enumerate(fields):
            layout.addWidget(QLabel(label), row, 0)
            layout.addWidget(widget, row, 1)

        btn_row = QHBoxLayout()
        ok_btn = QPushButton("OK")
        cancel_btn = QPushButton("Cancel")
        ok_btn.clicked.connect(self.accept)
        cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(ok_btn)
        btn_row.addWidget(cancel_btn)
        layout.addLayout(btn_row, len(fields), 0, 1, 2)

    def get_settings(self) -> Optional[DemoSettings]:
        seed_text = self._seed_edit.text().strip()
        try:
            return DemoSettings(
                point_count=int(self._count_sb.value()),
                x_span=float(self._span_sb.value()),
                interval_ms=int(self._interval_sb.value()),
                slope_step=float(self._slope_step_sb.value()),
                intercept_step=float(self._intercept_step_sb.value()),
                seed=int(seed_text) if seed_text else None,
                latex_decimals=int(self._decimals_sb.value()),
            )
        except (ValueError, TypeError):
            return None


# ===========================================================================
# Main window
# ===========================================================================

class RegressionWindow(QMainWindow):

    def __init__(self, settings: Optional[DemoSettings] = None) -> None:
        super().__init__()
        self.setWindowTitle("Interactive Linear Regression")
        self.setGeometry(100, 100, 1300, 760)

        self._state = RegressionState(settings)
        self._latex_gen = LaTeXGenerator(decimals=self._state.settings.latex_decimals)
        self._animation = PeriodicTask(self._state.settings.interval_ms, self)
        self._animation.tick.connect(self._on_tick)

        self._sliders: dict[str, tuple[QSlider, QLabel, SliderSpec]] = {}
        self._scatter: Optional[pg.ScatterPlotItem] = None
        self._user_curve: Optional[Any] = None
        self._fit_curve: Optional[Any] = None

        self._build_ui()
        self._configure_plot()
        self._refresh_points()
        self._refresh()

    @property
    def state(self) -> RegressionState:
        return self._state

    @property
    def animation(self) -> PeriodicTask:
        return self._animation

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)

        left = QVBoxLayout()
        self._plot_widget = pg.PlotWidget()
        self._plot_widget.addLegend(offset=(10, 10))
        left.addWidget(self._plot_widget)

        btn_row = QHBoxLayout()
        self._animate_btn = QPushButton("Animate")
        self._new_data_btn = QPushButton("New Data")
        self._settings_btn = QPushButton("Settings")
        self._status_lbl = QLabel("Ready")
        self._status_lbl.setStyleSheet("color: gray; font-style: italic;")

        self._animate_btn.clicked.connect(self.toggle_animation)
        self._new_data_btn.clicked.connect(self.new_data)
        self._settings_btn.clicked.connect(self.show_settings)

        for widget in (self._animate_btn, self._new_data_btn,
                       self._settings_btn, self._status_lbl):
            btn_row.addWidget(widget)
        left.addLayout(btn_row)
        root.addLayout(left, 3)

        right = QVBoxLayout()

        # ── parameter sliders ──────────────────────────────────────────
        params_group = QGroupBox("Parameters")
        params_layout = QGridLayout()
        params = self._state.params
        rows = (
            ("slope", "Slope (m)", SLOPE_SLIDER, params.slope),
            ("intercept", "Intercept (b)", INTERCEPT_SLIDER, params.intercept),
            ("noise", "Noise Level", NOISE_SLIDER, params.noise),
        )
        for row, (key, label, spec, value) in enumerate(rows):
            slider = QSlider(Qt.Orientation.Horizontal)
            slider.setRange(0, spec.tick_count)
            slider.setValue(spec.to_ticks(value))
            slider.valueChanged.connect(lambda ticks, k=key: self._on_slider(k, ticks))
            value_lbl = QLabel()
            value_lbl.setStyleSheet("font-family: monospace;")
            params_layout.addWidget(QLabel(label), 2 * row, 0)
            params_layout.addWidget(value_lbl, 2 * row, 1, Qt.AlignmentFlag.AlignRight)
            params_layout.addWidget(slider, 2 * row + 1, 0, 1, 2)
            self._sliders[key] = (slider, value_lbl, spec)

        self._snap_btn = QPushButton("Snap to Best Fit")
        self._snap_btn.clicked.connect(self.snap_to_best_fit)
        params_layout.addWidget(self._snap_btn, 2 * len(rows), 0, 1, 2)
        params_group.setLayout(params_layout)
        right.addWidget(params_group)

        self._show_fit_cb = QCheckBox("Show best fit line")
        self._show_fit_cb.setChecked(self._state.show_best_fit)
        self._show_fit_cb.toggled.connect(self.toggle_best_fit)
        right.addWidget(self._show_fit_cb)

        # ── statistics ─────────────────────────────────────────────────
        stats_group = QGroupBox("Statistics")
        stats_layout = QGridLayout()
        self._stat_labels: dict[str, QLabel] = {}
        stat_rows = (
            ("user_equation", "Your Equation:", USER_LINE_COLOR),
            ("best_fit_equation", "Best Fit:", FIT_LINE_COLOR),
            ("r2", "R² Score:", (96, 165, 250)),
            ("mse", "Mean Squared Error:", (248, 113, 113)),
            ("count", "Data Points:", (251, 146, 60)),
        )
        for row, (key, label, (r, g, b)) in enumerate(stat_rows):
            value_lbl = QLabel()
            value_lbl.setStyleSheet(f"color: rgb({r},{g},{b}); font-family: monospace;")
            stats_layout.addWidget(QLabel(label), row, 0)
            stats_layout.addWidget(value_lbl, row, 1, Qt.AlignmentFlag.AlignRight)
            self._stat_labels[key] = value_lbl
        stats_group.setLayout(stats_layout)
        right.addWidget(stats_group)

        right.addWidget(QLabel("LaTeX:"))
        self._latex_output = QTextEdit()
        self._latex_output.setReadOnly(True)
        self._latex_output.setFontFamily("Courier New")
        right.addWidget(self._latex_output)

        tip = QLabel("Tip: the closer the red dashed line is to the green one, "
                     "the better your model fits. Try to minimize the MSE!")
        tip.setWordWrap(True)
        tip.setStyleSheet("color: gray; font-size: 10px;")
        right.addWidget(tip)
        root.addLayout(right, 1)

    def _configure_plot(self) -> None:
        self._plot_widget.setLabel("left", "y")
        self._plot_widget.setLabel("bottom", "x")
        self._plot_widget.showGrid(x=True, y=True, alpha=0.3)

        self._scatter = pg.ScatterPlotItem(
            size=8,
            pen=pg.mkPen((59, 130, 246), width=2),
            brush=pg.mkBrush(*POINT_COLOR, 204),
            hoverable=True,
            tip=self._point_tip,
            name="Data Points",
        )
        self._plot_widget.addItem(self._scatter)
        self._user_curve = self._plot_widget.plot(
            [], [], name="Your Line",
            pen=pg.mkPen(USER_LINE_COLOR, width=3, style=Qt.PenStyle.DashLine),
        )
        self._fit_curve = self._plot_widget.plot(
            [], [], name="Best Fit Line", pen=pg.mkPen(FIT_LINE_COLOR, width=3),
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _point_tip(self, x: float, y: float, data: Any) -> str:
        params = self._state.params
        return (f"X: {x:.2f}\nY: {y:.2f}\n"
                f"Predicted: {predict(params.slope, params.intercept, x):.2f}")

    def _refresh_points(self) -> None:
        """Redraw the scatter and fit line; only needed when the point set changes."""
        points = self._state.points
        if self._scatter is not None:
            self._scatter.setData(
                x=np.asarray([p.x for p in points], dtype=np.float64),
                y=np.asarray([p.y for p in points], dtype=np.float64),
                data=[p.id for p in points],
            )
        self._set_curve(self._fit_curve, self._state.best_fit_line())
        fit = self._state.fit
        if fit.degenerate:
            self._status_lbl.setText("Best fit undefined for this data")
            self._status_lbl.setStyleSheet("color: orange; font-style: italic;")
        self._plot_widget.enableAutoRange()

    @staticmethod
    def _set_curve(curve: Optional[Any], line: tuple[tuple[float, float], ...]) -> None:
        if curve is None:
            return
        if line:
            xs, ys = zip(*line)
            curve.setData(np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64))
        else:
            curve.setData([], [])

    def _refresh(self) -> None:
        """Sync sliders, user line and the statistics panel with the state."""
        params = self._state.params
        for key, value, fmt in (("slope", params.slope, "{:.2f}"),
                                ("intercept", params.intercept, "{:.2f}"),
                                ("noise", params.noise, "{:.1f}")):
            slider, value_lbl, spec = self._sliders[key]
            slider.blockSignals(True)
            slider.setValue(spec.to_ticks(value))
            slider.blockSignals(False)
            value_lbl.setText(fmt.format(value))

        self._set_curve(self._user_curve, self._state.user_line())
        if self._fit_curve is not None:
            self._fit_curve.setVisible(
                self._state.show_best_fit and not self._state.fit.degenerate
            )

        summary = self._state.summary()
        for key, lbl in self._stat_labels.items():
            lbl.setText(str(summary[key]))

        fit = self._state.fit
        parts = [f"Your line:  {self._latex_gen.generate(params.slope, params.intercept)}"]
        if not fit.degenerate:
            parts.append(f"Best fit:   {self._latex_gen.generate(fit.slope, fit.intercept)}")
        self._latex_output.setPlainText("\n".join(parts))

        self._animate_btn.setText("Pause" if self._state.animating else "Animate")
        self._animation.set_running(self._state.animating)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def _on_slider(self, key: str, ticks: int) -> None:
        _, _, spec = self._sliders[key]
        value = spec.from_ticks(ticks)
        if key == "slope":
            self._state.set_slope(value)
        elif key == "intercept":
            self._state.set_intercept(value)
        else:
            self._state.set_noise(value)
        self._refresh()

    def _on_tick(self) -> None:
        self._state.step_animation()
        self._refresh()

    def toggle_animation(self) -> None:
        animating = self._state.toggle_animation()
        self._status_lbl.setText("Animating..." if animating else "Paused")
        self._status_lbl.setStyleSheet(
            f"color: {'orange' if animating else 'gray'}; font-style: italic;"
        )
        self._refresh()

    def new_data(self) -> None:
        self._state.new_data()
        self._status_lbl.setText("New data")
        self._status_lbl.setStyleSheet("color: gray; font-style: italic;")
        self._refresh_points()
        self._refresh()

    def snap_to_best_fit(self) -> None:
        if self._state.fit.degenerate:
            QMessageBox.warning(self, "No Best Fit",
                                "The current points do not define a best-fit line.")
            self._state.snap_to_best_fit()
            self._status_lbl.setText("No best fit to snap to")
            self._status_lbl.setStyleSheet("color: orange; font-style: italic;")
            self._refresh()
            return
        self._state.snap_to_best_fit()
        self._status_lbl.setText("Snapped to best fit")
        self._status_lbl.setStyleSheet("color: green; font-style: italic;")
        self._refresh()

    def toggle_best_fit(self, checked: bool) -> None:
        self._state.set_show_best_fit(checked)
        self._refresh()

    def show_settings(self) -> None:
        dlg = SettingsDialog(self._state.settings, self)
        if dlg.exec():
            new_s = dlg.get_settings()
            if new_s is None:
                QMessageBox.critical(self, "Invalid Settings",
                                     "One or more values are invalid.")
                return
            old_version = self._state.version
            self._state.apply_settings(new_s)
            self._animation.interval_ms = new_s.interval_ms
            self._latex_gen.reconfigure(self._latex_gen.approx, new_s.latex_decimals)
            if self._state.version != old_version:
                self._refresh_points()
            self._refresh()

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        self._state.set_animating(False)
        self._animation.stop()
        super().closeEvent(event)


# ===========================================================================
# Entry point
# ===========================================================================

def _log_level() -> int:
    """Level named by LINREG_LOG_LEVEL, WARNING when unset or unknown."""
    name = os.environ.get("LINREG_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def main() -> None:
    logging.basicConfig(
        level=_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    window = RegressionWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
