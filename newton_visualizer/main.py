"""
Newton Polynomial Visualizer — interactive divided-differences workbench.

Interaction
-----------
Left click on the plot              add a point (ignored on top of an existing one)
Right click on the plot             remove the nearest point
Play / Reset                        progressive reveal of the x-sorted points
Presets / Random / Import           replace the point set
Show Lagrange comparison            overlay the Lagrange form on the Newton curve

Panels: the divided-differences table (coefficients in row 0), the Newton
formula in plain, notation and LaTeX form, and diagnostics warnings.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from typing import Any, Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import QEvent, Qt, QTimer
from PySide6.QtGui import QColor, QMouseEvent
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QDialog,
    QDoubleSpinBox,
    QFileDialog,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QTableWidget,
    QTableWidgetItem,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from newton_visualizer.diagnostics import diagnose
from newton_visualizer.interpolation import (
    EvaluatorKind,
    build_divided_difference_table,
    sample_curve,
)
from newton_visualizer.latex_gen import (
    NewtonLaTeXGenerator,
    divided_difference_notation,
    format_newton_formula,
    table_cell_metadata,
)
from newton_visualizer.points import Point, make_points, sort_points, visible_points
from newton_visualizer.points_io import PointImportError, load_points, save_points
from newton_visualizer.presets import PRESET_FUNCTIONS, get_preset, random_points
from newton_visualizer.settings import PlotSettings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Animation: progress += PROGRESS_STEP * speed every TICK_MS milliseconds
# ---------------------------------------------------------------------------

TICK_MS: int = 50
PROGRESS_STEP: float = 0.02

# Clicks closer than this (in both x and y) hit an existing point.
HIT_RADIUS: float = 0.1

INITIAL_POINTS: tuple[tuple[float, float], ...] = ((-2, 4), (-1, 1), (0, 0), (1, 1), (2, 4))


def advance_progress(progress: float, speed: float) -> tuple[float, bool]:
    """One animation tick.  Returns (new progress, finished)."""
    nxt = progress + PROGRESS_STEP * speed
    if nxt >= 1.0:
        return 1.0, True
    return nxt, False


# ===========================================================================
# Settings dialog
# ===========================================================================

class SettingsDialog(QDialog):

    def __init__(self, settings: PlotSettings, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Plot Settings")
        self._settings = settings
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QGridLayout(self)

        self._x_min_edit = QLineEdit(str(self._settings.x_min))
        self._x_max_edit = QLineEdit(str(self._settings.x_max))
        self._y_min_edit = QLineEdit(str(self._settings.y_min))
        self._y_max_edit = QLineEdit(str(self._settings.y_max))

        self._samples_sb = QSpinBox()
        self._samples_sb.setRange(2, 5000)
        self._samples_sb.setValue(self._settings.curve_samples)

        self._coef_decimals_sb = QSpinBox()
        self._coef_decimals_sb.setRange(0, 10)
        self._coef_decimals_sb.setValue(self._settings.coefficient_decimals)

        self._node_decimals_sb = QSpinBox()
        self._node_decimals_sb.setRange(0, 10)
        self._node_decimals_sb.setValue(self._settings.node_decimals)

        # ── LaTeX format controls ──────────────────────────────────────
        self._latex_approx_cb = QCheckBox("Approximate coefficients (decimals)")
        self._latex_approx_cb.setChecked(self._settings.latex_approx)
        self._latex_approx_cb.setToolTip(
            "ON  — coefficients shown as rounded decimals, e.g. 0.3333\n"
            "OFF — exact rational fractions, e.g. 1/3"
        )

        self._latex_decimals_sb = QSpinBox()
        self._latex_decimals_sb.setRange(0, 10)
        self._latex_decimals_sb.setValue(self._settings.latex_decimals)
        self._latex_approx_cb.toggled.connect(self._latex_decimals_sb.setEnabled)
        self._latex_decimals_sb.setEnabled(self._settings.latex_approx)

        fields: list[tuple[str, QWidget]] = [
            ("X Min:", self._x_min_edit),
            ("X Max:", self._x_max_edit),
            ("Y Min:", self._y_min_edit),
            ("Y Max:", self._y_max_edit),
            ("Curve Samples:", self._samples_sb),
            ("Coefficient Decimals:", self._coef_decimals_sb),
            ("Node Decimals:", self._node_decimals_sb),
        ]
        for row, (label, widget) in enumerate(fields):
            layout.addWidget(QLabel(label), row, 0)
            layout.addWidget(widget, row, 1)

        sep_row = len(fields)
        sep = QLabel("─── LaTeX Output Format ───")
        sep.setStyleSheet("color: gray; font-size: 10px;")
        layout.addWidget(sep, sep_row, 0, 1, 2)

        layout.addWidget(self._latex_approx_cb, sep_row + 1, 0, 1, 2)
        layout.addWidget(QLabel("Digits after decimal point:"), sep_row + 2, 0)
        layout.addWidget(self._latex_decimals_sb, sep_row + 2, 1)

        btn_row = QHBoxLayout()
        ok_btn = QPushButton("OK")
        cancel_btn = QPushButton("Cancel")
        ok_btn.clicked.connect(self.accept)
        cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(ok_btn)
        btn_row.addWidget(cancel_btn)
        layout.addLayout(btn_row, sep_row + 3, 0, 1, 2)

    def get_settings(self) -> Optional[PlotSettings]:
        try:
            return replace(
                self._settings,
                x_min=float(self._x_min_edit.text()),
                x_max=float(self._x_max_edit.text()),
                y_min=float(self._y_min_edit.text()),
                y_max=float(self._y_max_edit.text()),
                curve_samples=int(self._samples_sb.value()),
                coefficient_decimals=int(self._coef_decimals_sb.value()),
                node_decimals=int(self._node_decimals_sb.value()),
                latex_approx=bool(self._latex_approx_cb.isChecked()),
                latex_decimals=int(self._latex_decimals_sb.value()),
            )
        except (ValueError, TypeError):
            return None


# ===========================================================================
# Main window
# ===========================================================================

class NewtonVisualizerApp(QMainWindow):

    # One colour per divided-difference level, cycled for deep tables.
    _LEVEL_COLORS: tuple[tuple[int, int, int], ...] = (
        (59, 130, 246),     # blue
        (168, 85, 247),     # purple
        (236, 72, 153),     # pink
        (239, 68, 68),      # red
        (249, 115, 22),     # orange
        (234, 179, 8),      # yellow
        (34, 197, 94),      # green
    )
    _NEWTON_COLOR = (59, 130, 246)
    _LAGRANGE_COLOR = (236, 72, 153)
    _POINT_COLOR = (16, 185, 129)

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Newton Polynomial Visualizer")
        self.setGeometry(100, 100, 1450, 860)

        self._points: list[Point] = make_points(INITIAL_POINTS, prefix="init")
        self._settings = PlotSettings().fit_to(self._points)
        self._latex_gen = NewtonLaTeXGenerator(
            approx=self._settings.latex_approx,
            decimals=self._settings.latex_decimals,
        )
        self._rng = np.random.default_rng()

        self._progress = 1.0
        self._playing = False
        self._timer = QTimer(self)
        self._timer.setInterval(TICK_MS)
        self._timer.timeout.connect(self._on_tick)

        self._newton_curve: Optional[Any] = None
        self._lagrange_curve: Optional[Any] = None
        self._scatter: Optional[Any] = None
        self._latex_text = ""

        self._build_ui()
        self._configure_plot()
        self.refresh()

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
        left.addWidget(self._plot_widget, 3)

        btn_row = QHBoxLayout()
        self._play_btn = QPushButton("Play")
        self._reset_btn = QPushButton("Reset")
        self._clear_btn = QPushButton("Clear")
        self._import_btn = QPushButton("Import")
        self._export_btn = QPushButton("Export")
        self._copy_btn = QPushButton("Copy LaTeX")
        self._settings_btn = QPushButton("Settings")
        self._status_lbl = QLabel("Ready")
        self._status_lbl.setStyleSheet("color: gray; font-style: italic;")

        self._play_btn.clicked.connect(self.toggle_play)
        self._reset_btn.clicked.connect(self.reset_animation)
        self._clear_btn.clicked.connect(self.clear_points)
        self._import_btn.clicked.connect(self.import_points)
        self._export_btn.clicked.connect(self.export_points)
        self._copy_btn.clicked.connect(self.copy_latex)
        self._settings_btn.clicked.connect(self.show_settings)

        for widget in (self._play_btn, self._reset_btn, self._clear_btn, self._import_btn,
                       self._export_btn, self._copy_btn, self._settings_btn, self._status_lbl):
            btn_row.addWidget(widget)
        left.addLayout(btn_row)

        table_group = QGroupBox("Divided Differences Table")
        table_layout = QVBoxLayout()
        self._table_widget = QTableWidget()
        self._table_widget.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        table_layout.addWidget(self._table_widget)
        table_group.setLayout(table_layout)
        left.addWidget(table_group, 2)
        root.addLayout(left, 3)

        right = QVBoxLayout()

        self._warning_lbl = QLabel("")
        self._warning_lbl.setWordWrap(True)
        self._warning_lbl.setStyleSheet("color: rgb(202, 138, 4); font-weight: bold;")
        right.addWidget(self._warning_lbl)

        # ── presets ────────────────────────────────────────────────────
        preset_group = QGroupBox("Preset Functions")
        preset_layout = QVBoxLayout()
        self._preset_combo = QComboBox()
        for preset in PRESET_FUNCTIONS:
            self._preset_combo.addItem(preset.name)
            self._preset_combo.setItemData(
                self._preset_combo.count() - 1, preset.description, Qt.ItemDataRole.ToolTipRole
            )
        load_row = QHBoxLayout()
        load_btn = QPushButton("Load Preset")
        random_btn = QPushButton("Random Points")
        load_btn.clicked.connect(self.load_preset)
        random_btn.clicked.connect(self.load_random)
        load_row.addWidget(load_btn)
        load_row.addWidget(random_btn)
        preset_layout.addWidget(self._preset_combo)
        preset_layout.addLayout(load_row)
        preset_group.setLayout(preset_layout)
        right.addWidget(preset_group)

        # ── display options ────────────────────────────────────────────
        opts_group = QGroupBox("Display Options")
        opts_layout = QGridLayout()
        self._lagrange_cb = QCheckBox("Show Lagrange comparison")
        self._lagrange_cb.setChecked(self._settings.show_lagrange)
        self._lagrange_cb.toggled.connect(self._on_lagrange_toggled)
        self._speed_sb = QDoubleSpinBox()
        self._speed_sb.setRange(0.5, 3.0)
        self._speed_sb.setSingleStep(0.1)
        self._speed_sb.setDecimals(1)
        self._speed_sb.setSuffix("x")
        self._speed_sb.setValue(self._settings.animation_speed)
        self._speed_sb.valueChanged.connect(self._on_speed_changed)
        opts_layout.addWidget(self._lagrange_cb, 0, 0, 1, 2)
        opts_layout.addWidget(QLabel("Animation Speed:"), 1, 0)
        opts_layout.addWidget(self._speed_sb, 1, 1)
        opts_group.setLayout(opts_layout)
        right.addWidget(opts_group)

        # ── formulas ───────────────────────────────────────────────────
        right.addWidget(QLabel("Newton Polynomial:"))
        self._formula_output = QTextEdit()
        self._formula_output.setReadOnly(True)
        self._formula_output.setFontFamily("Courier New")
        right.addWidget(self._formula_output)
        root.addLayout(right, 2)

        vb = self._plot_widget.plotItem.vb
        vb.setMenuEnabled(False)
        self._plot_widget.viewport().installEventFilter(self)

    def _configure_plot(self) -> None:
        self._plot_widget.setLabel("left", "y")
        self._plot_widget.setLabel("bottom", "x")
        self._plot_widget.showGrid(x=True, y=True, alpha=0.3)
        vb = self._plot_widget.plotItem.vb
        vb.disableAutoRange()
        self._plot_widget.setXRange(self._settings.x_min, self._settings.x_max, padding=0)
        self._plot_widget.setYRange(self._settings.y_min, self._settings.y_max, padding=0)

    # ------------------------------------------------------------------
    # Mouse editing
    # ------------------------------------------------------------------

    def eventFilter(self, obj: Any, event: QEvent) -> bool:  # noqa: N802
        if obj is not self._plot_widget.viewport() or not isinstance(event, QMouseEvent):
            return super().eventFilter(obj, event)
        if event.type() != QEvent.Type.MouseButtonPress:
            return super().eventFilter(obj, event)

        vp = self._plot_widget.plotItem.vb.mapSceneToView(event.position())
        x, y = float(vp.x()), float(vp.y())
        if event.button() == Qt.MouseButton.LeftButton:
            self.add_point(x, y)
            return True
        if event.button() == Qt.MouseButton.RightButton:
            self.remove_point_near(x, y)
            return True
        return super().eventFilter(obj, event)

    def _hit(self, x: float, y: float) -> Optional[Point]:
        hits = [p for p in self._points
                if abs(p.x - x) < HIT_RADIUS and abs(p.y - y) < HIT_RADIUS]
        if not hits:
            return None
        return min(hits, key=lambda p: (p.x - x) ** 2 + (p.y - y) ** 2)

    def add_point(self, x: float, y: float) -> None:
        if self._hit(x, y) is not None:
            return
        self._points = [*self._points, Point(x, y)]
        logger.debug("added point (%.4f, %.4f)", x, y)
        self._refit()

    def remove_point_near(self, x: float, y: float) -> None:
        if not self._points:
            return
        target = self._hit(x, y)
        if target is None:
            target = min(self._points, key=lambda p: (p.x - x) ** 2 + (p.y - y) ** 2)
        self._points = [p for p in self._points if p.id != target.id]
        logger.debug("removed point %s", target.id)
        self._refit()

    # ------------------------------------------------------------------
    # Point-set replacement
    # ------------------------------------------------------------------

    def _refit(self) -> None:
        self._settings = self._settings.fit_to(self._points)
        self._configure_plot()
        self.refresh()

    def _replace_points(self, points: list[Point], status: str) -> None:
        self._points = points
        self._progress = 1.0
        self._stop()
        self._refit()
        self._set_status(status, "green")

    def load_preset(self) -> None:
        preset = get_preset(self._preset_combo.currentText())
        self._replace_points(preset.points(), f"Loaded {preset.name}")

    def load_random(self) -> None:
        count = int(self._rng.integers(4, 9))
        self._replace_points(random_points(count, rng=self._rng), f"{count} random points")

    def clear_points(self) -> None:
        self._replace_points([], "Ready")

    def import_points(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Import Points", "", "JSON (*.json)")
        if not path:
            return
        try:
            points = load_points(path)
        except (PointImportError, OSError) as exc:
            QMessageBox.critical(self, "Import Error", str(exc))
            return
        self._replace_points(points, f"Imported {len(points)} points")

    def export_points(self) -> None:
        if not self._points:
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Points", "newton-polynomial-points.json", "JSON (*.json)"
        )
        if not path:
            return
        try:
            save_points(path, self._points)
        except OSError as exc:
            QMessageBox.critical(self, "Export Error", str(exc))
            return
        self._set_status(f"Exported {len(self._points)} points", "green")

    # ------------------------------------------------------------------
    # Animation
    # ------------------------------------------------------------------

    def toggle_play(self) -> None:
        if not self._points:
            return
        if self._progress >= 1.0:
            self._progress = 0.0
            self._start()
        elif self._playing:
            self._stop()
        else:
            self._start()
        self.refresh()

    def reset_animation(self) -> None:
        self._progress = 0.0
        self._stop()
        self.refresh()

    def _start(self) -> None:
        self._playing = True
        self._play_btn.setText("Pause")
        self._timer.start()

    def _stop(self) -> None:
        self._playing = False
        self._play_btn.setText("Play")
        self._timer.stop()

    def _on_tick(self) -> None:
        self._progress, finished = advance_progress(self._progress, self._settings.animation_speed)
        if finished:
            self._stop()
        self.refresh()

    def _on_speed_changed(self, value: float) -> None:
        self._settings = replace(self._settings, animation_speed=float(value))

    def _on_lagrange_toggled(self, checked: bool) -> None:
        self._settings = replace(self._settings, show_lagrange=bool(checked))
        self.refresh()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _set_status(self, text: str, color: str = "gray") -> None:
        self._status_lbl.setText(text)
        self._status_lbl.setStyleSheet(f"color: {color}; font-style: italic;")

    def _remove_item(self, item: Optional[Any]) -> None:
        if item is not None:
            self._plot_widget.removeItem(item)

    def refresh(self) -> None:
        """Recompute every derived view from the current points and progress."""
        visible = visible_points(self._points, self._progress)
        table = build_divided_difference_table(visible)

        report = diagnose(self._points)
        self._warning_lbl.setText("\n".join(report.warnings))

        self._draw_plot(visible)
        self._fill_table(visible, table)
        self._fill_formulas(visible, table)

    def _draw_plot(self, visible: list[Point]) -> None:
        for item in (self._newton_curve, self._lagrange_curve, self._scatter):
            self._remove_item(item)
        self._newton_curve = self._lagrange_curve = self._scatter = None

        s = self._settings
        if len(visible) >= 2:
            try:
                newton = sample_curve(visible, EvaluatorKind.NEWTON, s.x_min, s.x_max, s.curve_samples)
                self._newton_curve = self._plot_widget.plot(
                    newton.x, newton.y,
                    pen=pg.mkPen(self._NEWTON_COLOR, width=3),
                    name="Newton Polynomial",
                )
                if s.show_lagrange:
                    lagrange = sample_curve(visible, EvaluatorKind.LAGRANGE, s.x_min, s.x_max,
                                            s.curve_samples)
                    self._lagrange_curve = self._plot_widget.plot(
                        lagrange.x, lagrange.y,
                        pen=pg.mkPen(self._LAGRANGE_COLOR, width=2, style=Qt.PenStyle.DashLine),
                        name="Lagrange Polynomial",
                    )
            except ValueError as exc:
                logger.warning("could not sample curve: %s", exc)

        self._scatter = pg.ScatterPlotItem(
            [p.x for p in visible], [p.y for p in visible],
            size=12, brush=pg.mkBrush(self._POINT_COLOR), pen=pg.mkPen("w", width=2),
            name="Interpolation Points",
        )
        self._plot_widget.addItem(self._scatter)

    def _fill_table(self, visible: list[Point], table: Any) -> None:
        cells = table_cell_metadata(visible, table=table)
        n = len(cells)
        self._table_widget.clear()
        self._table_widget.setRowCount(n)
        self._table_widget.setColumnCount(n + 1 if n else 0)
        headers = ["x_i"] + ["f[x_i]" if j == 0 else f"f[...,x_{{i+{j}}}]" for j in range(n)]
        self._table_widget.setHorizontalHeaderLabels(headers if n else [])

        for i, p in enumerate(sort_points(visible)):
            self._table_widget.setItem(i, 0, QTableWidgetItem(f"{p.x:.3f}"))
        for row in cells:
            for cell in row:
                item = QTableWidgetItem(f"{cell.value:.4f}")
                item.setToolTip(cell.tooltip())
                r, g, b = self._LEVEL_COLORS[cell.level % len(self._LEVEL_COLORS)]
                item.setBackground(QColor(r, g, b, 60))
                if cell.is_coefficient:
                    font = item.font()
                    font.setBold(True)
                    item.setFont(font)
                self._table_widget.setItem(cell.row, cell.level + 1, item)
        self._table_widget.resizeColumnsToContents()

    def _fill_formulas(self, visible: list[Point], table: Any) -> None:
        s = self._settings
        if not visible:
            self._latex_text = ""
            self._formula_output.setPlainText("Add points to see the mathematical formulas")
            return

        formula = format_newton_formula(
            visible, decimals=s.coefficient_decimals, x_decimals=s.node_decimals, table=table
        )
        self._latex_text = self._latex_gen.generate(visible, table=table)
        coefficients = "\n".join(
            f"    a_{k} = {c:.6f}" for k, c in enumerate(table.coefficients)
        )
        degree = len(visible) - 1
        self._formula_output.setPlainText(
            f"─── Newton's Divided Difference Formula\n"
            f"    {divided_difference_notation(len(visible))}\n\n"
            f"─── Newton Polynomial\n"
            f"    {formula}\n\n"
            f"─── LaTeX\n"
            f"    {self._latex_text}\n\n"
            f"─── Newton Coefficients\n{coefficients}\n\n"
            f"    Degree : {degree}\n"
            f"    Points : {len(visible)} of {len(self._points)}\n"
        )

    # ------------------------------------------------------------------
    # Misc actions
    # ------------------------------------------------------------------

    def copy_latex(self) -> None:
        if self._latex_text:
            QApplication.clipboard().setText(self._latex_text)
            QMessageBox.information(self, "Copied", "LaTeX copied to clipboard.")

    def show_settings(self) -> None:
        dlg = SettingsDialog(self._settings, self)
        if dlg.exec():
            new_s = dlg.get_settings()
            if new_s is None:
                QMessageBox.critical(self, "Invalid Settings",
                                     "One or more values are invalid.")
                return
            self._settings = new_s
            self._latex_gen.reconfigure(new_s.latex_approx, new_s.latex_decimals)
            self._configure_plot()
            self.refresh()


# ===========================================================================
# Entry point
# ===========================================================================

def main() -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    app = QApplication(sys.argv)
    window = NewtonVisualizerApp()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
