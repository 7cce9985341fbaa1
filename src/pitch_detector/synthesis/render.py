"""Reference tone synthesis — steady tones for tuning against, and WAV export.

Waveforms:
  - sine: pure tone
  - square: odd harmonics, hollow
  - sawtooth: all harmonics, bright
  - triangle: odd harmonics rolling off fast, soft

Every tone gets a short linear fade in and out so playback does not click.
"""

from __future__ import annotations

import io
from enum import Enum
from pathlib import Path

import numpy as np

from pitch_detector.pitch.constants import DEFAULT_SAMPLE_RATE

_FADE_S = 0.05


class Waveform(Enum):
    """Available reference tone waveforms."""

    SINE = "sine"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"


def _phase(freq_hz: float, duration_s: float, sr: int) -> np.ndarray:
    """Cycle position in [0, 1) for every sample."""
    t = np.arange(int(sr * duration_s)) / sr
    return np.mod(freq_hz * t, 1.0)


def _generate_sine(freq_hz: float, duration_s: float, sr: int) -> np.ndarray:
    return np.sin(2 * np.pi * _phase(freq_hz, duration_s, sr))


def _generate_square(freq_hz: float, duration_s: float, sr: int) -> np.ndarray:
    return np.where(_phase(freq_hz, duration_s, sr) < 0.5, 1.0, -1.0)


def _generate_sawtooth(freq_hz: float, duration_s: float, sr: int) -> np.ndarray:
    return 2.0 * _phase(freq_hz, duration_s, sr) - 1.0


def _generate_triangle(freq_hz: float, duration_s: float, sr: int) -> np.ndarray:
    return 1.0 - 4.0 * np.abs(_phase(freq_hz, duration_s, sr) - 0.5)


_TONE_GENERATORS = {
    Waveform.SINE: _generate_sine,
    Waveform.SQUARE: _generate_square,
    Waveform.SAWTOOTH: _generate_sawtooth,
    Waveform.TRIANGLE: _generate_triangle,
}


def apply_fade(signal: np.ndarray, sr: int, fade_s: float = _FADE_S) -> np.ndarray:
    """Ramp the first and last ``fade_s`` seconds linearly from/to silence."""
    fade_len = min(int(sr * fade_s), len(signal) // 2)
    if fade_len == 0:
        return signal

    faded = signal.copy()
    faded[:fade_len] *= np.linspace(0, 1, fade_len)
    faded[-fade_len:] *= np.linspace(1, 0, fade_len)
    return faded


def generate_reference_tone(
    freq_hz: float = 440.0,
    duration_s: float = 1.0,
    sr: int = DEFAULT_SAMPLE_RATE,
    waveform: Waveform = Waveform.SINE,
    volume: float = 0.3,
) -> np.ndarray:
    """Generate a steady reference tone.

    Args:
        freq_hz: Tone frequency in Hz.
        duration_s: Duration in seconds.
        sr: Sample rate.
        waveform: Which waveform to use.
        volume: Peak amplitude in [0, 1].

    Returns:
        Audio samples as float32 numpy array.
    """
    if freq_hz <= 0:
        raise ValueError(f"freq_hz must be positive, got {freq_hz}")
    if duration_s < 0:
        raise ValueError(f"duration_s must be non-negative, got {duration_s}")
    if not 0.0 <= volume <= 1.0:
        raise ValueError(f"volume must be in [0, 1], got {volume}")

    signal = _TONE_GENERATORS[waveform](freq_hz, duration_s, sr)
    signal = apply_fade(signal, sr)
    return (signal * volume).astype(np.float32)


def tone_to_wav_bytes(audio: np.ndarray, sr: int = DEFAULT_SAMPLE_RATE) -> bytes:
    """Encode audio as an in-memory 32-bit float WAV file."""
    import soundfile as sf

    buf = io.BytesIO()
    sf.write(buf, audio, sr, format="WAV", subtype="FLOAT")
    return buf.getvalue()


def save_wav(
    audio: np.ndarray,
    path: str | Path,
    sr: int = DEFAULT_SAMPLE_RATE,
) -> None:
    """Save audio to a WAV file.

    Args:
        audio: Audio samples as float32 numpy array.
        path: Output file path.
        sr: Sample rate.
    """
    import soundfile as sf

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sf.write(str(path), audio, sr, subtype="FLOAT")
