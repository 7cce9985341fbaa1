"""Pitch clarity — periodicity confidence from normalized autocorrelation.

Independent of the YIN pipeline: the score is the strongest autocorrelation
peak inside the detection band, normalized by the zero-lag energy.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from pitch_detector.pitch.constants import MAX_FREQUENCY, MIN_FREQUENCY, NO_CLARITY
from pitch_detector.pitch.energy import as_samples

_EPSILON = float(np.finfo(np.float64).eps)


def _lag_in_samples(sample_rate: float, frequency: float, limit: int) -> int:
    """Period of ``frequency`` in whole samples, truncated into [0, limit]."""
    lag = sample_rate / frequency
    if not lag > 0:
        return 0
    return int(min(lag, limit))


def lag_search_bounds(sample_rate: float, half: int) -> tuple[int, int]:
    """Return the [min_tau, max_tau) lag range covering the detection band."""
    min_tau = _lag_in_samples(sample_rate, MAX_FREQUENCY, half)
    max_tau = _lag_in_samples(sample_rate, MIN_FREQUENCY, half)
    return min_tau, max_tau


def get_pitch_clarity(samples: Sequence[float] | np.ndarray, sample_rate: float) -> float:
    """Estimate how strongly periodic a buffer is.

    Args:
        samples: Mono audio samples.
        sample_rate: Sample rate of the buffer in Hz.

    Returns:
        Confidence in [0, 1]; 0.0 when the buffer has negligible energy
        or non-finite samples in its first half.
    """
    audio = as_samples(samples)
    if len(audio) < 2:
        return NO_CLARITY

    half = len(audio) // 2
    head = audio[:half]
    zero_lag = float(np.dot(head, head))
    # NaN or inf samples leave nothing to normalize against
    if not np.isfinite(zero_lag) or zero_lag < _EPSILON:
        return NO_CLARITY

    min_tau, max_tau = lag_search_bounds(sample_rate, half)

    max_correlation = 0.0
    for tau in range(min_tau, max_tau):
        correlation = float(np.dot(audio[:half - tau], audio[tau:half]))
        if correlation > max_correlation:
            max_correlation = correlation

    return min(max(max_correlation / zero_lag, 0.0), 1.0)
