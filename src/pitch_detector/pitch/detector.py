"""Pitch detection — estimate F0 of a single mono buffer with the YIN algorithm.

Pipeline: energy gate -> difference function -> cumulative mean normalized
difference (CMNDF) -> absolute threshold -> parabolic interpolation ->
frequency range check.

Reference:
    de Cheveigné, A., & Kawahara, H. (2002). YIN, a fundamental frequency
    estimator for speech and music. JASA 111(4), 1917-1930.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from pitch_detector.pitch.constants import (
    DEFAULT_THRESHOLD,
    MAX_FREQUENCY,
    MIN_FREQUENCY,
    NO_PITCH,
)
from pitch_detector.pitch.energy import as_samples, has_sufficient_energy

# Lags 0 and 1 are never candidates
_MIN_TAU = 2

_EPSILON = float(np.finfo(np.float64).eps)


@dataclass
class YinEstimate:
    """A successful YIN detection for one buffer."""

    frequency_hz: float
    tau: int  # integer lag at the bottom of the dip
    refined_tau: float  # lag after parabolic interpolation
    aperiodicity: float  # CMNDF value at tau (0.0 = perfectly periodic)


def difference_function(samples: np.ndarray) -> np.ndarray:
    """Squared difference d(τ) = Σ (x[i] - x[i+τ])² over the first half of the buffer.

    Returns an array of length ⌊N/2⌋, one value per lag.
    """
    half = len(samples) // 2
    head = samples[:half]
    difference = np.zeros(half, dtype=np.float64)
    for tau in range(half):
        delta = head - samples[tau:tau + half]
        difference[tau] = np.dot(delta, delta)
    return difference


def cumulative_mean_normalized_difference(difference: np.ndarray) -> np.ndarray:
    """Normalize d(τ) by its running mean: d'(τ) = d(τ)·τ / Σ_{j=1..τ} d(j).

    d'(0) is fixed at 1.0, and lags whose running sum is not positive
    also fall back to 1.0.
    """
    cmndf = np.ones_like(difference)
    weighted = difference[1:] * np.arange(1, len(difference))
    running_sum = np.cumsum(difference[1:])
    np.divide(weighted, running_sum, out=cmndf[1:], where=running_sum > 0)
    return cmndf


def absolute_threshold(cmndf: np.ndarray, threshold: float) -> int | None:
    """Find the first lag >= 2 whose CMNDF dips below ``threshold``.

    From that lag, walk forward while the CMNDF keeps strictly decreasing
    so the estimate lands at the bottom of the dip.

    Returns:
        The integer lag, or None if no lag crosses the threshold.
    """
    crossings = np.flatnonzero(cmndf[_MIN_TAU:] < threshold)
    if crossings.size == 0:
        return None

    tau = int(crossings[0]) + _MIN_TAU
    while tau + 1 < len(cmndf) and cmndf[tau + 1] < cmndf[tau]:
        tau += 1
    return tau


def parabolic_interpolation(cmndf: np.ndarray, tau: int) -> float:
    """Refine an integer lag with a parabola through its two neighbours.

    Lags on the array boundary, and flat neighbourhoods where the curvature
    is within machine epsilon, are returned unchanged.
    """
    if not 0 < tau < len(cmndf) - 1:
        return float(tau)

    s0 = cmndf[tau - 1]
    s1 = cmndf[tau]
    s2 = cmndf[tau + 1]
    denominator = 2.0 * s1 - s2 - s0
    if abs(denominator) > _EPSILON:
        return float(tau + (s2 - s0) / (2.0 * denominator))
    return float(tau)


def lag_to_frequency(sample_rate: float, tau: float) -> float | None:
    """Convert a lag in samples to Hz, or None if outside the detection band."""
    frequency = sample_rate / tau
    if frequency < MIN_FREQUENCY or frequency > MAX_FREQUENCY:
        return None
    return float(frequency)


def estimate_pitch(
    samples: Sequence[float] | np.ndarray,
    sample_rate: float,
    threshold: float = DEFAULT_THRESHOLD,
) -> YinEstimate | None:
    """Run the full YIN pipeline on one buffer.

    Args:
        samples: Mono audio samples, nominally in [-1, 1].
        sample_rate: Sample rate of the buffer in Hz.
        threshold: CMNDF threshold in (0, 1); lower is stricter.

    Returns:
        YinEstimate, or None if the buffer is too short, too quiet,
        aperiodic, or resolves outside the detection band.
    """
    audio = as_samples(samples)
    if not has_sufficient_energy(audio):
        return None

    cmndf = cumulative_mean_normalized_difference(difference_function(audio))

    tau = absolute_threshold(cmndf, threshold)
    if tau is None:
        return None

    refined_tau = parabolic_interpolation(cmndf, tau)
    frequency = lag_to_frequency(sample_rate, refined_tau)
    if frequency is None:
        return None

    return YinEstimate(
        frequency_hz=frequency,
        tau=tau,
        refined_tau=refined_tau,
        aperiodicity=float(cmndf[tau]),
    )


def detect_pitch_with_threshold(
    samples: Sequence[float] | np.ndarray,
    sample_rate: float,
    threshold: float,
) -> float:
    """Detect pitch with a caller-supplied threshold.

    Returns:
        Frequency in Hz, or -1.0 if no pitch was detected.
    """
    estimate = estimate_pitch(samples, sample_rate, threshold)
    if estimate is None:
        return NO_PITCH
    return estimate.frequency_hz


def detect_pitch(samples: Sequence[float] | np.ndarray, sample_rate: float) -> float:
    """Detect pitch with the default threshold.

    This is the main entry point for pitch detection.
    """
    return detect_pitch_with_threshold(samples, sample_rate, DEFAULT_THRESHOLD)
