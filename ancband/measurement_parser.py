import logging
import math
import re
from pathlib import Path

from .models import MeasurementSlot, Sample, Series

logger = logging.getLogger(__name__)

# REW exports are "Freq(Hz) SPL(dB) Phase(deg)", either comma or space separated
_FIELD_SPLIT = re.compile(r"[,\s]+")
_COMMENT_MARKERS = ("*", "#")

def _parse_float(token: str) -> float | None:
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None

def _parse_line(line: str) -> Sample | None:
    line = line.strip()
    if not line or line.startswith(_COMMENT_MARKERS):
        return None
    # Fast header reject: only lines starting with a digit can hold data.
    # A header whose first character is a digit slips through (known limitation).
    if not ("0" <= line[0] <= "9"):
        return None

    fields = [f for f in _FIELD_SPLIT.split(line) if f]
    if len(fields) < 2:
        return None

    freq = _parse_float(fields[0])
    level = _parse_float(fields[1])
    if freq is None or level is None or freq <= 0:
        return None
    return Sample(frequency=freq, level=level)

def parse_measurement_text(text: str) -> Series:
    """
    Parses a REW-style text/CSV export into a frequency-sorted series.

    Never raises: comment, header and malformed lines are skipped. Trailing
    fields after the level (e.g. phase) are ignored. The sort is stable, so
    samples sharing a frequency keep their file order.
    """
    samples = []
    skipped = 0
    for line in text.splitlines():
        sample = _parse_line(line)
        if sample is None:
            if line.strip():
                skipped += 1
            continue
        samples.append(sample)

    if skipped:
        logger.debug("Skipped %d non-data lines", skipped)

    samples.sort(key=lambda s: s.frequency)
    return tuple(samples)

def load_measurement_file(filepath: str | Path) -> MeasurementSlot:
    """Reads and parses a measurement file. I/O errors propagate to the caller."""
    path = Path(filepath)
    text = path.read_text(encoding="utf-8", errors="replace")
    series = parse_measurement_text(text)
    logger.info("Parsed %d samples from %s", len(series), path.name)
    return MeasurementSlot(name=path.name, series=series)
