from dataclasses import dataclass

@dataclass(frozen=True)
class Sample:
    """One point of a frequency response: frequency in Hz, level in dB."""
    frequency: float
    level: float

# A Series is an immutable, frequency-sorted tuple of samples
Series = tuple[Sample, ...]

@dataclass(frozen=True)
class FrequencyRange:
    start: float
    end: float

    def contains(self, frequency: float) -> bool:
        return self.start <= frequency <= self.end

@dataclass(frozen=True)
class DifferenceSample:
    frequency: float
    diff: float

@dataclass(frozen=True)
class MeasurementSlot:
    """A loaded measurement: display name plus its parsed series."""
    name: str
    series: Series

    def __len__(self):
        return len(self.series)

@dataclass(frozen=True)
class HoverReadout:
    frequency: float
    before: float
    after: float
    x: float

    @property
    def diff(self) -> float:
        return self.after - self.before
