import logging
from pathlib import Path
from pydantic import ValidationError
from PySide6.QtCore import QObject, Signal

from .settings_manager import SettingsManager, AppSettings
from .selection_controller import SelectionController
from .measurement_parser import load_measurement_file
from .series_matcher import build_difference, nearest_sample
from .band_analyzer import analyze_band
from .demo_data import generate_demo_series
from .result_exporter import ResultsExporter
from .models import FrequencyRange, HoverReadout, MeasurementSlot
from .constants import DEMO_NAMES, SeriesSlot

logger = logging.getLogger(__name__)

class ANCController(QObject):
    """
    Owns the before/after measurement slots and the band selection.

    Every mutation (series loaded or cleared, range changed, tolerance
    changed) triggers a full recomputation of the analysis result and the
    difference curve from the current values, so nothing downstream can
    observe a stale combination.
    """
    sig_series_changed = Signal(object, object)  # (SeriesSlot, MeasurementSlot | None)
    sig_range_changed = Signal(object)           # FrequencyRange
    sig_analysis_updated = Signal(object)        # AnalysisResult | None
    sig_difference_updated = Signal(list)        # list[DifferenceSample]
    sig_hover_changed = Signal(object)           # HoverReadout | None
    sig_error = Signal(str)
    sig_status_message = Signal(str)
    sig_export_finished = Signal()

    def __init__(self, settings_mgr: SettingsManager | None = None):
        super().__init__()
        self.settings_mgr = settings_mgr or SettingsManager()
        self.settings = self.settings_mgr.load()

        self.slots: dict[SeriesSlot, MeasurementSlot | None] = {
            SeriesSlot.BEFORE: None,
            SeriesSlot.AFTER: None,
        }
        self.selection = SelectionController(
            self.settings.default_range_start,
            self.settings.default_range_end,
            self.settings.min_separation_hz,
        )
        self.selection.add_listener(self._on_range_changed)

        self.analysis = None
        self.difference = []
        self.hover: HoverReadout | None = None

    # --- Read access ---

    @property
    def before(self) -> MeasurementSlot | None:
        return self.slots[SeriesSlot.BEFORE]

    @property
    def after(self) -> MeasurementSlot | None:
        return self.slots[SeriesSlot.AFTER]

    @property
    def has_data(self) -> bool:
        return self.before is not None and self.after is not None

    @property
    def freq_range(self) -> FrequencyRange:
        return self.selection.range

    # --- Series slots ---

    def load_file(self, slot: SeriesSlot, filepath: str):
        path = Path(filepath)
        try:
            measurement = load_measurement_file(path)
        except OSError as e:
            logger.exception("Failed to load %s", path)
            self.sig_error.emit(f"Failed to load file: {e}")
            return

        self.settings.last_directory = str(path.parent)
        self._set_slot(slot, measurement)
        if len(measurement) == 0:
            self.sig_status_message.emit(f"{path.name}: no data points found.")
        else:
            self.sig_status_message.emit(f"Loaded {path.name} ({len(measurement)} points).")

    def load_demo(self, seed: int | None = None):
        before, after = generate_demo_series(seed)
        self.slots[SeriesSlot.BEFORE] = MeasurementSlot(DEMO_NAMES[SeriesSlot.BEFORE], before)
        self.slots[SeriesSlot.AFTER] = MeasurementSlot(DEMO_NAMES[SeriesSlot.AFTER], after)
        for slot in SeriesSlot:
            self.sig_series_changed.emit(slot, self.slots[slot])
        self.clear_hover()
        self._recompute()
        self.sig_status_message.emit("Demo data loaded.")

    def clear_slot(self, slot: SeriesSlot):
        self._set_slot(slot, None)
        self.sig_status_message.emit(f"{slot.value.capitalize()} measurement removed.")

    def _set_slot(self, slot: SeriesSlot, measurement: MeasurementSlot | None):
        self.slots[slot] = measurement
        self.clear_hover()
        self.sig_series_changed.emit(slot, measurement)
        self._recompute()

    # --- Band selection ---

    def set_range(self, start: float, end: float):
        """Numeric entry path; the selection applies the clamp rule."""
        previous = self.selection.range
        self.selection.set_range(start, end)
        # Entry fields still need the current values when nothing changed
        if self.selection.range == previous:
            self.sig_range_changed.emit(previous)

    def _on_range_changed(self, freq_range: FrequencyRange):
        self.sig_range_changed.emit(freq_range)
        self._recompute()

    def pointer_left_surface(self):
        """Pointer left the response chart: any drag ends and the readout goes."""
        self.selection.pointer_leave()
        self.clear_hover()

    # --- Hover readout ---

    def update_hover(self, frequency: float, x: float):
        if not self.has_data:
            return
        closest_before = nearest_sample(self.before.series, frequency)
        closest_after = nearest_sample(self.after.series, frequency)
        if closest_before is None or closest_after is None:
            self.clear_hover()
            return
        self.hover = HoverReadout(
            frequency=closest_before.frequency,
            before=closest_before.level,
            after=closest_after.level,
            x=x,
        )
        self.sig_hover_changed.emit(self.hover)

    def clear_hover(self):
        if self.hover is None:
            return
        self.hover = None
        self.sig_hover_changed.emit(None)

    # --- Analysis ---

    def _recompute(self):
        if self.has_data:
            before = self.before.series
            after = self.after.series
            self.analysis = analyze_band(before, after, self.selection.range)
            self.difference = build_difference(before, after, self.settings.match_tolerance_ratio)
        else:
            self.analysis = None
            self.difference = []
        self.sig_analysis_updated.emit(self.analysis)
        self.sig_difference_updated.emit(self.difference)

    # --- Export & Settings ---

    def export_results(self, path: Path):
        if not self.has_data:
            return
        try:
            ResultsExporter.export_report(
                path,
                self.before,
                self.after,
                self.selection.range,
                self.analysis,
                self.difference,
            )
            self.sig_export_finished.emit()
            self.sig_status_message.emit(f"Exported to {path.name}")
        except OSError as e:
            logger.exception("Export to %s failed", path)
            self.sig_error.emit(f"Export failed: {e}")

    def update_plot_scaling(self, autoscale: bool, ymin: float, ymax: float) -> bool:
        data = self.settings.model_dump()
        data.update(plot_autoscale=autoscale, plot_ymin=ymin, plot_ymax=ymax)
        try:
            self.settings = AppSettings.model_validate(data)
        except ValidationError as e:
            self.sig_error.emit(f"Invalid plot scaling: {e.errors()[0]['msg']}")
            return False
        return True

    def save_settings(self, path: Path):
        if self.settings_mgr.save(self.settings, path):
            self.sig_status_message.emit("Settings saved.")
        else:
            self.sig_error.emit(f"Could not save settings to {path}")

    def load_settings(self, path: Path):
        new_settings = self.settings_mgr.load(path)
        if new_settings is None:
            self.sig_error.emit(f"Could not load settings from {path}")
            return
        self.settings = new_settings
        self.selection.min_separation_hz = self.settings.min_separation_hz
        self._recompute()
        self.sig_status_message.emit(f"Settings loaded from {path.name}")

    def shutdown(self):
        self.settings_mgr.save(self.settings)
