import numpy as np

from .constants import MAX_FREQ_PLOT, MIN_FREQ_PLOT
from .models import Sample, Series

def generate_demo_series(seed: int | None = None, step_ratio: float = 1.05) -> tuple[Series, Series]:
    """
    Synthesises a (before, after) pair of log-spaced responses.

    'Before' is a falling noise floor with a broad hump around 400 Hz plus
    +/-1 dB of noise. 'After' applies a half-sine reduction of up to 15 dB
    between 100 Hz and 2 kHz, as a working ANC system would.
    """
    n_points = int(np.floor(np.log(MAX_FREQ_PLOT / MIN_FREQ_PLOT) / np.log(step_ratio))) + 1
    freqs = MIN_FREQ_PLOT * step_ratio ** np.arange(n_points)
    freqs = freqs[freqs <= MAX_FREQ_PLOT]

    rng = np.random.default_rng(seed)
    log_f = np.log10(freqs)

    base_noise = 60 - 10 * np.log10(freqs / MIN_FREQ_PLOT)
    hump = 30 * np.exp(-((log_f - np.log10(400)) ** 2) / 0.1)
    jitter = (rng.random(freqs.size) - 0.5) * 2
    before = base_noise + hump + jitter + 20

    band = (freqs > 100) & (freqs < 2000)
    reduction = np.zeros_like(freqs)
    reduction[band] = 15 * np.sin(
        np.pi * (log_f[band] - np.log10(100)) / (np.log10(2000) - np.log10(100))
    )
    after = before - np.maximum(0, reduction)

    before_series = tuple(Sample(float(f), float(l)) for f, l in zip(freqs, before))
    after_series = tuple(Sample(float(f), float(l)) for f, l in zip(freqs, after))
    return before_series, after_series
