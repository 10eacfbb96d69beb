import math

import numpy as np

from .constants import FREQUENCY_GRID_HZ, MAX_FREQ_PLOT, MIN_FREQ_PLOT
from .models import Series

_MIN_LOG = math.log10(MIN_FREQ_PLOT)
_MAX_LOG = math.log10(MAX_FREQ_PLOT)
_LOG_SPAN = _MAX_LOG - _MIN_LOG

# --- Frequency axis (logarithmic, fixed 20 Hz - 20 kHz domain) ---

def freq_to_x(freq: float, width: float) -> float:
    """Frequencies below the plot domain are pinned to the left edge."""
    freq_log = math.log10(max(freq, MIN_FREQ_PLOT))
    return (freq_log - _MIN_LOG) / _LOG_SPAN * width

def x_to_freq(x: float, width: float) -> float:
    """Exact inverse of freq_to_x. No clamping; see clamp_x."""
    freq_log = (x / width) * _LOG_SPAN + _MIN_LOG
    return 10.0 ** freq_log

def clamp_x(x: float, width: float) -> float:
    return max(0.0, min(width, x))

# --- Level axis (linear, caller-supplied window, top = max_db) ---

def db_to_y(db: float, height: float, min_db: float, max_db: float) -> float:
    return height - (db - min_db) / (max_db - min_db) * height

def y_to_db(y: float, height: float, min_db: float, max_db: float) -> float:
    return min_db + (height - y) / height * (max_db - min_db)

# --- Chart helpers ---

def level_axis_bounds(levels) -> tuple[float, float]:
    """
    Rounds the data extent outward to the next 10 dB and pads by 5 dB,
    e.g. levels spanning 43..87 dB give (35, 95).
    """
    levels = np.asarray(list(levels), dtype=float)
    if levels.size == 0:
        return 0.0, 100.0
    min_db = math.floor(levels.min() / 10.0) * 10.0 - 5.0
    max_db = math.ceil(levels.max() / 10.0) * 10.0 + 5.0
    return min_db, max_db

def level_grid(min_db: float, max_db: float, step: float = 10.0) -> list[float]:
    ticks = []
    db = min_db
    while db <= max_db:
        ticks.append(db)
        db += step
    return ticks

def format_frequency_tick(freq: float) -> str:
    if freq >= 1000:
        return f"{freq / 1000:g}k"
    return f"{freq:g}"

def frequency_grid(width: float) -> list[tuple[float, str]]:
    """Pixel positions and labels of the fixed frequency ticks."""
    return [(freq_to_x(f, width), format_frequency_tick(f)) for f in FREQUENCY_GRID_HZ]

def series_to_points(series: Series, width: float, height: float,
                     min_db: float, max_db: float) -> tuple[np.ndarray, np.ndarray]:
    """Vectorised pixel-space path data (x, y) for a series."""
    if not series:
        return np.array([]), np.array([])
    freqs = np.array([s.frequency for s in series], dtype=float)
    levels = np.array([s.level for s in series], dtype=float)
    xs = (np.log10(np.maximum(freqs, MIN_FREQ_PLOT)) - _MIN_LOG) / _LOG_SPAN * width
    ys = height - (levels - min_db) / (max_db - min_db) * height
    return xs, ys
