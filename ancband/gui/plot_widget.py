import matplotlib
matplotlib.use('QtAgg')
from PySide6.QtWidgets import (QWidget, QVBoxLayout, QDialog, QCheckBox,
                               QDoubleSpinBox, QHBoxLayout, QPushButton,
                               QFormLayout, QToolButton)
from PySide6.QtGui import QFont
from PySide6.QtCore import Qt, Signal
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.backends.backend_qtagg import NavigationToolbar2QT as NavigationToolbar
from matplotlib.figure import Figure

from .plot_manager import ResultPlotter, surface_size

class PlotSettingsDialog(QDialog):
    """Dialog to set the level axis limits of the response chart."""
    def __init__(self, autoscale, ymin, ymax, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Plot Scaling")
        self.resize(300, 150)

        layout = QVBoxLayout(self)

        self.chk_auto = QCheckBox("Autoscale Level Axis")
        self.chk_auto.setChecked(autoscale)
        self.chk_auto.toggled.connect(self._toggle_inputs)
        layout.addWidget(self.chk_auto)

        form = QFormLayout()
        self.spin_min = QDoubleSpinBox()
        self.spin_min.setRange(-200, 200)
        self.spin_min.setValue(ymin)
        form.addRow("Min dB:", self.spin_min)

        self.spin_max = QDoubleSpinBox()
        self.spin_max.setRange(-200, 200)
        self.spin_max.setValue(ymax)
        form.addRow("Max dB:", self.spin_max)
        layout.addLayout(form)

        btns = QHBoxLayout()
        ok = QPushButton("OK")
        ok.clicked.connect(self.accept)
        cancel = QPushButton("Cancel")
        cancel.clicked.connect(self.reject)
        btns.addWidget(ok)
        btns.addWidget(cancel)
        layout.addLayout(btns)

        self._toggle_inputs(autoscale)

    def _toggle_inputs(self, checked):
        self.spin_min.setEnabled(not checked)
        self.spin_max.setEnabled(not checked)

    def get_values(self):
        return self.chk_auto.isChecked(), self.spin_min.value(), self.spin_max.value()

class CustomToolbar(NavigationToolbar):
    """
    Save-only toolbar with a Scaling button. Pan/zoom are left out because
    the chart axes are drawn in fixed surface pixels.
    """
    toolitems = [t for t in NavigationToolbar.toolitems if t[0] == 'Save']
    sig_open_scaling = Signal()

    def __init__(self, canvas, parent=None):
        super().__init__(canvas, parent, coordinates=False)

        self.btn_scale = QToolButton(self)
        self.btn_scale.setToolTip("Configure Plot Scaling (Min/Max)")
        self.btn_scale.setText("⇕")
        font = self.btn_scale.font()
        font.setWeight(QFont.Weight.Black)
        font.setPointSize(18)
        self.btn_scale.setFont(font)
        self.btn_scale.clicked.connect(self.sig_open_scaling.emit)

        self.addSeparator()
        self.addWidget(self.btn_scale)

class MatplotlibWidget(QWidget):
    """
    Chart surface. Translates canvas mouse events into pointer events for the
    controller's SelectionController and redraws from the controller state.
    """
    # Emits (autoscale, ymin, ymax) when user changes settings in the dialog
    sig_scaling_changed = Signal(bool, float, float)

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)

        self.figure = Figure(facecolor='white')
        self.canvas = FigureCanvas(self.figure)
        self.canvas.setMouseTracking(True)

        self.toolbar = CustomToolbar(self.canvas, self)
        self.toolbar.sig_open_scaling.connect(self.open_scaling_dialog)

        layout.addWidget(self.toolbar)
        layout.addWidget(self.canvas)

        self.ax_main, self.ax_diff = ResultPlotter.setup_axes(self.figure)

        self.canvas.mpl_connect('button_press_event', self._on_press)
        self.canvas.mpl_connect('motion_notify_event', self._on_motion)
        self.canvas.mpl_connect('button_release_event', self._on_release)
        self.canvas.mpl_connect('figure_leave_event', self._on_leave)
        self.canvas.mpl_connect('axes_leave_event', self._on_axes_leave)
        self.canvas.mpl_connect('resize_event', self._on_resize)

    # --- Pointer dispatch ---

    def _surface_x(self, event) -> float:
        return event.x - self.ax_main.get_window_extent().x0

    def _on_press(self, event):
        if event.inaxes is not self.ax_main or event.button != 1:
            return
        width, _ = surface_size(self.ax_main)
        settings = self.controller.settings
        if self.controller.selection.pointer_down_at(self._surface_x(event), width,
                                                     settings.handle_grab_px):
            self.controller.clear_hover()
            self.canvas.setCursor(Qt.SizeHorCursor)

    def _on_motion(self, event):
        selection = self.controller.selection
        if event.inaxes is not self.ax_main:
            if selection.is_dragging or self.controller.hover is not None:
                self._on_leave(event)
            return
        width, _ = surface_size(self.ax_main)
        x = self._surface_x(event)
        freq = selection.pointer_move(x, width)
        if not selection.is_dragging:
            self.controller.update_hover(freq, max(0.0, min(width, x)))

    def _on_release(self, event):
        self.controller.selection.pointer_up()
        self.canvas.unsetCursor()

    def _on_leave(self, event):
        self.controller.pointer_left_surface()
        self.canvas.unsetCursor()

    def _on_axes_leave(self, event):
        if event.inaxes is self.ax_main:
            self._on_leave(event)

    def _on_resize(self, event):
        self.redraw()

    # --- Drawing ---

    def redraw(self, *args):
        c = self.controller
        s = c.settings
        self.ax_main, self.ax_diff = ResultPlotter.plot(
            self.figure,
            c.before,
            c.after,
            c.freq_range,
            c.difference,
            c.hover,
            s.plot_autoscale, s.plot_ymin, s.plot_ymax,
            s.diff_min_db, s.diff_max_db,
        )
        self.canvas.draw_idle()

    def open_scaling_dialog(self):
        s = self.controller.settings
        dlg = PlotSettingsDialog(s.plot_autoscale, s.plot_ymin, s.plot_ymax, self)
        if dlg.exec():
            auto, ymin, ymax = dlg.get_values()
            self.sig_scaling_changed.emit(auto, ymin, ymax)
