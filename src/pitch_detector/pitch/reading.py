"""Pitch reading — one buffer's frequency, clarity, level, and nearest note."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from pitch_detector.notes.mapper import (
    DEFAULT_TUNING,
    Accidental,
    Notation,
    NoteReading,
    TuningOptions,
    describe_frequency,
)
from pitch_detector.pitch.clarity import get_pitch_clarity
from pitch_detector.pitch.constants import DEFAULT_THRESHOLD
from pitch_detector.pitch.detector import estimate_pitch
from pitch_detector.pitch.energy import as_samples, calculate_rms


@dataclass
class PitchReading:
    """Analysis of a single buffer.

    ``frequency_hz`` and ``note`` are None when no pitch was detected.
    """

    frequency_hz: float | None
    clarity: float
    rms: float
    note: NoteReading | None

    @property
    def detected(self) -> bool:
        return self.frequency_hz is not None


def read_pitch(
    samples: Sequence[float] | np.ndarray,
    sample_rate: float,
    threshold: float = DEFAULT_THRESHOLD,
    notation: Notation = Notation.LETTER,
    accidental: Accidental = Accidental.SHARP,
    tuning: TuningOptions = DEFAULT_TUNING,
) -> PitchReading:
    """Detect pitch and clarity for a buffer and name the nearest note."""
    audio = as_samples(samples)
    estimate = estimate_pitch(audio, sample_rate, threshold)

    frequency = estimate.frequency_hz if estimate is not None else None
    note = None
    if frequency is not None:
        note = describe_frequency(frequency, notation, accidental, tuning)

    return PitchReading(
        frequency_hz=frequency,
        clarity=get_pitch_clarity(audio, sample_rate),
        rms=calculate_rms(audio),
        note=note,
    )
