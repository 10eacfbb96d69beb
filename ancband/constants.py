from enum import StrEnum

class DragState(StrEnum):
    NONE = "none"
    DRAGGING_START = "dragging_start"
    DRAGGING_END = "dragging_end"

class Handle(StrEnum):
    START = "start"
    END = "end"

class SeriesSlot(StrEnum):
    BEFORE = "before"
    AFTER = "after"

# Plotting domain of the logarithmic frequency axis (Hz)
MIN_FREQ_PLOT = 20.0
MAX_FREQ_PLOT = 20000.0

DEFAULT_RANGE = (200.0, 1000.0)
MIN_SEPARATION_HZ = 10.0

# Relative tolerance used when pairing before/after samples
MATCH_TOLERANCE_RATIO = 0.05

# Fixed window of the difference chart (dB)
DIFF_MIN_DB = -30.0
DIFF_MAX_DB = 10.0

# Labelled ticks of the frequency axis
FREQUENCY_GRID_HZ = (20, 50, 100, 200, 500, 1000, 2000, 5000, 10000, 20000)

DEMO_NAMES = {
    SeriesSlot.BEFORE: "Demo_Measurement_Before.txt",
    SeriesSlot.AFTER: "Demo_Measurement_After.txt",
}

APP_NAME = "ANC Band Analyzer"
APP_VERSION = "1.0.0"
