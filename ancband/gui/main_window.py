from pathlib import Path
from PySide6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout,
                               QHBoxLayout, QPushButton, QLabel, QGroupBox,
                               QFileDialog, QMessageBox, QFrame, QGridLayout,
                               QDoubleSpinBox)
from PySide6.QtGui import QAction
from PySide6.QtCore import Slot

from .about_dialog import AboutDialog
from .plot_widget import MatplotlibWidget
from ..band_analyzer import format_metric
from ..constants import APP_NAME, SeriesSlot
from ..controller import ANCController

# Entry fields accept anything the analysis tolerates, not only the plot domain
RANGE_ENTRY_LIMITS = (1.0, 96000.0)

class SlotPanel(QWidget):
    """File status and Load/Remove buttons for one measurement slot."""
    def __init__(self, title, color, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        lbl_title = QLabel(f"<b>{title}</b> <span style='color:{color};'>&#9679;</span>")
        layout.addWidget(lbl_title)

        self.lbl_file = QLabel()
        self.lbl_file.setFrameStyle(QFrame.StyledPanel | QFrame.Sunken)
        self.lbl_file.setWordWrap(True)
        layout.addWidget(self.lbl_file)

        btns = QHBoxLayout()
        self.btn_load = QPushButton("Load...")
        self.btn_remove = QPushButton("Remove")
        btns.addWidget(self.btn_load)
        btns.addWidget(self.btn_remove)
        layout.addLayout(btns)

        self.set_measurement(None)

    def set_measurement(self, measurement):
        if measurement is None:
            self.lbl_file.setText("No file\n.txt or .csv (REW export)")
            self.btn_remove.setEnabled(False)
        else:
            self.lbl_file.setText(f"{measurement.name}\n{len(measurement)} data points")
            self.btn_remove.setEnabled(True)

class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(1200, 800)

        self.controller = ANCController()

        self._init_menu_bar()
        self._init_ui()

        self._connect_controller_signals()
        self._apply_settings_to_ui()

        self.status_bar = self.statusBar()
        self.status_bar.showMessage("Ready. Load a before and an after measurement to begin.")

    def _connect_controller_signals(self):
        self.controller.sig_series_changed.connect(self.on_series_changed)
        self.controller.sig_range_changed.connect(self.on_range_changed)
        self.controller.sig_analysis_updated.connect(self.on_analysis_updated)
        self.controller.sig_difference_updated.connect(self.plot_panel.redraw)
        self.controller.sig_hover_changed.connect(self.plot_panel.redraw)
        self.controller.sig_error.connect(self.on_error_message)
        self.controller.sig_status_message.connect(self.update_status_bar)
        self.controller.sig_export_finished.connect(self.on_export_success)

    def _init_menu_bar(self):
        menu_bar = self.menuBar()
        menu_file = menu_bar.addMenu("File")

        act_before = QAction("Load Before ANC...", self)
        act_before.triggered.connect(lambda: self.on_load_slot(SeriesSlot.BEFORE))
        menu_file.addAction(act_before)

        act_after = QAction("Load After ANC...", self)
        act_after.triggered.connect(lambda: self.on_load_slot(SeriesSlot.AFTER))
        menu_file.addAction(act_after)

        act_demo = QAction("Load Demo Data", self)
        act_demo.triggered.connect(self.on_load_demo)
        menu_file.addAction(act_demo)

        menu_file.addSeparator()
        menu_settings = menu_file.addMenu("Settings")
        act_load_sets = QAction("Load Settings...", self)
        act_load_sets.triggered.connect(self.on_action_load_settings)
        menu_settings.addAction(act_load_sets)

        act_save_sets = QAction("Save Settings...", self)
        act_save_sets.triggered.connect(self.on_action_save_settings)
        menu_settings.addAction(act_save_sets)

        menu_file.addSeparator()
        act_quit = QAction("Quit", self)
        act_quit.setShortcut("Ctrl+Q")
        act_quit.triggered.connect(self.close)
        menu_file.addAction(act_quit)

        self.menu_export = menu_bar.addMenu("Export")
        self.menu_export.setEnabled(False)

        act_export_csv = QAction("Export Report (CSV)...", self)
        act_export_csv.triggered.connect(self.on_export_csv)
        self.menu_export.addAction(act_export_csv)

        act_save_fig = QAction("Save Plot Figure...", self)
        act_save_fig.triggered.connect(self.on_action_save_figure)
        self.menu_export.addAction(act_save_fig)

        menu_help = menu_bar.addMenu("Help")
        act_about = QAction(f"About {APP_NAME}", self)
        act_about.triggered.connect(self.on_about)
        menu_help.addAction(act_about)

    def _init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)

        left_panel = QWidget()
        left_panel.setFixedWidth(300)
        left_layout = QVBoxLayout(left_panel)

        # --- 1. Data Sources ---
        grp_data = QGroupBox("Data Sources")
        layout_data = QVBoxLayout()

        self.slot_panels = {
            SeriesSlot.BEFORE: SlotPanel("Before ANC", "#64748b"),
            SeriesSlot.AFTER: SlotPanel("After ANC", "#2563eb"),
        }
        for slot, panel in self.slot_panels.items():
            panel.btn_load.clicked.connect(lambda _=False, s=slot: self.on_load_slot(s))
            panel.btn_remove.clicked.connect(lambda _=False, s=slot: self.controller.clear_slot(s))
            layout_data.addWidget(panel)

        self.btn_demo = QPushButton("Load Demo Data")
        self.btn_demo.clicked.connect(self.on_load_demo)
        layout_data.addWidget(self.btn_demo)

        grp_data.setLayout(layout_data)
        left_layout.addWidget(grp_data)

        # --- 2. Band Selection ---
        grp_band = QGroupBox("Band Selection")
        layout_band = QGridLayout()

        self.spin_start = QDoubleSpinBox()
        self.spin_end = QDoubleSpinBox()
        for spin in (self.spin_start, self.spin_end):
            spin.setRange(*RANGE_ENTRY_LIMITS)
            spin.setDecimals(0)
            spin.setSuffix(" Hz")
            spin.setKeyboardTracking(False)
        self.spin_start.editingFinished.connect(self.on_range_entry)
        self.spin_end.editingFinished.connect(self.on_range_entry)

        layout_band.addWidget(QLabel("Start"), 0, 0)
        layout_band.addWidget(QLabel("End"), 0, 1)
        layout_band.addWidget(self.spin_start, 1, 0)
        layout_band.addWidget(self.spin_end, 1, 1)

        lbl_hint = QLabel("Drag the yellow handles on the chart or enter values above "
                          "to isolate the noise reduction zone.")
        lbl_hint.setWordWrap(True)
        lbl_hint.setStyleSheet("color: #94a3b8; font-size: 11px;")
        layout_band.addWidget(lbl_hint, 2, 0, 1, 2)

        grp_band.setLayout(layout_band)
        left_layout.addWidget(grp_band)
        left_layout.addStretch()

        main_layout.addWidget(left_panel)

        # --- Right Panel (Metrics + Chart) ---
        right_panel = QWidget()
        right_layout = QVBoxLayout(right_panel)

        metrics = QHBoxLayout()
        self.lbl_avg_before = self._metric_card(metrics, "AVG SPL (BEFORE)", "#334155")
        self.lbl_avg_after = self._metric_card(metrics, "AVG SPL (AFTER)", "#2563eb")
        self.lbl_delta = self._metric_card(metrics, "REDUCTION", "#1d4ed8")
        self.lbl_power = self._metric_card(metrics, "POWER REDUCED", "#059669")

        self.lbl_delta_caption = QLabel("")
        self.lbl_delta_caption.setStyleSheet("font-size: 11px; color: #64748b;")
        self.lbl_delta.parentWidget().layout().addWidget(self.lbl_delta_caption)
        right_layout.addLayout(metrics)

        self.plot_panel = MatplotlibWidget(self.controller)
        self.plot_panel.sig_scaling_changed.connect(self.on_scaling_changed)
        right_layout.addWidget(self.plot_panel, stretch=1)

        main_layout.addWidget(right_panel, stretch=1)

    def _metric_card(self, parent_layout, title, color):
        frame = QFrame()
        frame.setFrameStyle(QFrame.StyledPanel)
        lay = QVBoxLayout(frame)
        lbl_title = QLabel(title)
        lbl_title.setStyleSheet("font-size: 10px; font-weight: bold; color: #94a3b8;")
        lbl_value = QLabel("--")
        lbl_value.setStyleSheet(f"font-size: 22px; font-weight: bold; font-family: monospace; color: {color};")
        lay.addWidget(lbl_title)
        lay.addWidget(lbl_value)
        parent_layout.addWidget(frame)
        return lbl_value

    def _apply_settings_to_ui(self):
        self.on_range_changed(self.controller.freq_range)
        self.plot_panel.redraw()

    # --- Data Sources ---

    def on_load_slot(self, slot: SeriesSlot):
        start_dir = self.controller.settings.last_directory
        fname, _ = QFileDialog.getOpenFileName(
            self, f"Open {slot.value.capitalize()} Measurement", start_dir,
            "Measurement Files (*.txt *.csv);;All Files (*)")
        if fname:
            self.controller.load_file(slot, fname)

    def on_load_demo(self):
        self.controller.load_demo()

    @Slot(object, object)
    def on_series_changed(self, slot, measurement):
        self.slot_panels[slot].set_measurement(measurement)
        self.menu_export.setEnabled(self.controller.has_data)

    # --- Band Selection ---

    def on_range_entry(self):
        current = self.controller.freq_range
        start = self.spin_start.value()
        end = self.spin_end.value()
        # The fields show rounded values; untouched fields keep the exact edge
        if abs(start - current.start) < 0.5:
            start = current.start
        if abs(end - current.end) < 0.5:
            end = current.end
        self.controller.set_range(start, end)

    @Slot(object)
    def on_range_changed(self, freq_range):
        for spin, value in ((self.spin_start, freq_range.start), (self.spin_end, freq_range.end)):
            spin.blockSignals(True)
            spin.setValue(value)
            spin.blockSignals(False)

    # --- Metrics ---

    @Slot(object)
    def on_analysis_updated(self, result):
        if result is None:
            self.lbl_avg_before.setText("-- dB")
            self.lbl_avg_after.setText("-- dB")
            self.lbl_delta.setText("-- dB")
            self.lbl_power.setText("-- %")
            self.lbl_delta_caption.setText("")
            return

        self.lbl_avg_before.setText(f"{format_metric(result.avg_before)} dB")
        self.lbl_avg_after.setText(f"{format_metric(result.avg_after)} dB")
        self.lbl_delta.setText(f"{format_metric(result.delta_db)} dB")
        self.lbl_power.setText(f"{format_metric(result.reduction_percent, '.0f')} %")

        direction = "lower" if result.delta_db <= 0 else "higher"
        self.lbl_delta_caption.setText(f"{abs(result.delta_db):.1f} dB {direction}")

    # --- Export ---

    def on_export_csv(self):
        if not self.controller.has_data: return

        path_str, _ = QFileDialog.getSaveFileName(self, "Export Report", "anc_report.csv", "CSV Files (*.csv)")
        if not path_str: return

        self.controller.export_results(Path(path_str))

    def on_action_save_figure(self):
        self.plot_panel.toolbar.save_figure()

    def on_scaling_changed(self, auto, ymin, ymax):
        if self.controller.update_plot_scaling(auto, ymin, ymax):
            self.plot_panel.redraw()

    # --- Settings ---

    def on_action_save_settings(self):
        fname, _ = QFileDialog.getSaveFileName(self, "Save Settings", self.controller.settings.last_directory, "YAML Files (*.yaml)")
        if fname:
            self.controller.save_settings(Path(fname))

    def on_action_load_settings(self):
        fname, _ = QFileDialog.getOpenFileName(self, "Load Settings", self.controller.settings.last_directory, "YAML Files (*.yaml);;All Files (*)")
        if fname:
            self.controller.load_settings(Path(fname))
            self.plot_panel.redraw()

    def on_about(self):
        AboutDialog(self).exec()

    # --- Messages ---

    @Slot(str)
    def on_error_message(self, msg):
        QMessageBox.critical(self, "Error", msg)

    @Slot(str)
    def update_status_bar(self, msg):
        self.status_bar.showMessage(msg)

    @Slot()
    def on_export_success(self):
        QMessageBox.information(self, "Export", "Report exported successfully.")

    def closeEvent(self, event):
        self.controller.shutdown()
        event.accept()
