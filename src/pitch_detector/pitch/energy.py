"""Signal energy — RMS level and the silence gate in front of pitch detection."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from pitch_detector.pitch.constants import NOISE_GATE_RMS


def as_samples(samples: Sequence[float] | np.ndarray) -> np.ndarray:
    """Convert a mono sample buffer to a float64 numpy array.

    Raises:
        ValueError: If the buffer has more than one dimension.
    """
    audio = np.asarray(samples, dtype=np.float64)
    if audio.ndim == 0:
        audio = audio.reshape(1)
    if audio.ndim != 1:
        raise ValueError(f"Expected a mono (1-D) buffer, got shape {audio.shape}")
    return audio


def calculate_rms(samples: Sequence[float] | np.ndarray) -> float:
    """Return the root-mean-square amplitude, or 0.0 for an empty buffer."""
    audio = as_samples(samples)
    if audio.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(audio * audio)))


def has_sufficient_energy(samples: np.ndarray) -> bool:
    """True if the buffer is long enough and loud enough to analyze."""
    if len(samples) < 2:
        return False
    return calculate_rms(samples) >= NOISE_GATE_RMS
