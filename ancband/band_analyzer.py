import numpy as np
from dataclasses import dataclass

from .models import FrequencyRange, Series

@dataclass(frozen=True)
class AnalysisResult:
    avg_before: float
    avg_after: float
    delta_db: float
    power_ratio: float
    reduction_percent: float
    n_before: int
    n_after: int

def band_samples(series: Series, freq_range: FrequencyRange) -> Series:
    """Samples with start <= frequency <= end (both ends inclusive)."""
    return tuple(s for s in series if freq_range.contains(s.frequency))

def analyze_band(before: Series, after: Series, freq_range: FrequencyRange) -> AnalysisResult | None:
    """
    Computes the noise reduction inside a frequency band.

    Returns None when either series has no samples in the band. Callers must
    show that as "no data", never as a zero reduction.

    Averages are the arithmetic mean of the dB values. The delta is turned
    into an acoustic power ratio with 10**(delta/10). The reduction
    percentage keeps its sign: a level increase gives a negative reduction.
    """
    in_before = band_samples(before, freq_range)
    in_after = band_samples(after, freq_range)
    if not in_before or not in_after:
        return None

    avg_before = float(np.mean([s.level for s in in_before]))
    avg_after = float(np.mean([s.level for s in in_after]))
    delta_db = avg_after - avg_before

    power_ratio = 10.0 ** (delta_db / 10.0)
    reduction_percent = (1.0 - power_ratio) * 100.0

    return AnalysisResult(
        avg_before=avg_before,
        avg_after=avg_after,
        delta_db=delta_db,
        power_ratio=power_ratio,
        reduction_percent=reduction_percent,
        n_before=len(in_before),
        n_after=len(in_after),
    )

def format_metric(value: float | None, fmt: str = ".1f") -> str:
    if value is None:
        return "--"
    return format(value, fmt)
