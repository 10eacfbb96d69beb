from .constants import MATCH_TOLERANCE_RATIO
from .models import DifferenceSample, Sample, Series

def build_difference(before: Series, after: Series,
                     tolerance_ratio: float = MATCH_TOLERANCE_RATIO) -> list[DifferenceSample]:
    """
    Pairs each 'before' sample with its nearest 'after' sample and returns
    the after - before level difference at the before frequency.

    Both series MUST already be sorted by frequency (the parser guarantees
    this). The 'after' cursor only moves forward, so the walk is O(n + m).
    A pair is accepted only when the frequencies differ by less than
    `frequency * tolerance_ratio`; otherwise the before sample is dropped.
    No values are interpolated.
    """
    diffs = []
    if not before or not after:
        return diffs

    j = 0
    last = len(after) - 1
    for b in before:
        while j < last and abs(after[j + 1].frequency - b.frequency) < abs(after[j].frequency - b.frequency):
            j += 1
        a = after[j]
        if abs(a.frequency - b.frequency) < b.frequency * tolerance_ratio:
            diffs.append(DifferenceSample(frequency=b.frequency, diff=a.level - b.level))
    return diffs

def nearest_sample(series: Series, frequency: float) -> Sample | None:
    """Closest sample by absolute frequency distance; the first one wins ties."""
    if not series:
        return None
    return min(series, key=lambda s: abs(s.frequency - frequency))
