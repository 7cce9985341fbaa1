"""Tests for combined per-buffer pitch readings."""

import numpy as np

from pitch_detector.notes.mapper import Accidental, Notation, TuningOptions
from pitch_detector.pitch.reading import PitchReading, read_pitch

SR = 44100


def _generate_sine(freq_hz: float, n_samples: int = 2048, amplitude: float = 0.5) -> np.ndarray:
    t = np.arange(n_samples) / SR
    return (amplitude * np.sin(2 * np.pi * freq_hz * t)).astype(np.float32)


class TestReadPitch:
    def test_a4_reading(self):
        reading = read_pitch(_generate_sine(440.0), SR)
        assert isinstance(reading, PitchReading)
        assert reading.detected
        assert abs(reading.frequency_hz - 440.0) < 5.0
        assert reading.note is not None
        assert reading.note.name == "A4"
        assert abs(reading.note.cents) <= 5
        assert reading.clarity > 0.8
        assert abs(reading.rms - 0.5 / np.sqrt(2)) < 0.01

    def test_silence_reading(self):
        reading = read_pitch(np.zeros(2048), SR)
        assert not reading.detected
        assert reading.frequency_hz is None
        assert reading.note is None
        assert reading.clarity == 0.0
        assert reading.rms == 0.0

    def test_naming_options_pass_through(self):
        reading = read_pitch(
            _generate_sine(466.16),
            SR,
            notation=Notation.SOLFEGE,
            accidental=Accidental.FLAT,
            tuning=TuningOptions(reference_frequency=440.0),
        )
        assert reading.note is not None
        assert reading.note.pitch_class == "シ♭"

    def test_undetected_pitch_still_reports_level(self):
        quiet = _generate_sine(440.0, amplitude=0.005)
        reading = read_pitch(quiet, SR)
        assert not reading.detected
        assert reading.rms > 0.0
        assert 0.0 <= reading.clarity <= 1.0
