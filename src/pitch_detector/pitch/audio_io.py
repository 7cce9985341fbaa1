"""Audio I/O — load audio files, cut analysis buffers, and read configuration."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from pitch_detector.pitch.constants import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_THRESHOLD,
)

logger = logging.getLogger(__name__)

# Default config path
_CONFIGS_DIR = Path(__file__).resolve().parents[3] / "configs"


def load_config(config_name: str = "detector.json") -> dict:
    """Load a JSON config file from the configs/ directory."""
    config_path = _CONFIGS_DIR / config_name
    with open(config_path) as f:
        return json.load(f)


@dataclass(frozen=True)
class DetectorSettings:
    """Analysis defaults used by the HTTP layer and scripts."""

    sample_rate: int = DEFAULT_SAMPLE_RATE
    buffer_size: int = DEFAULT_BUFFER_SIZE
    threshold: float = DEFAULT_THRESHOLD
    max_file_size_bytes: int = 10 * 1024 * 1024
    max_duration_s: float = 60.0
    max_buffer_size: int = 16384

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.buffer_size < 2:
            raise ValueError(f"buffer_size must be at least 2, got {self.buffer_size}")
        if self.max_buffer_size < self.buffer_size:
            raise ValueError(
                f"max_buffer_size ({self.max_buffer_size}) is smaller than "
                f"buffer_size ({self.buffer_size})"
            )
        if not 0 < self.threshold < 1:
            raise ValueError(f"threshold must be in (0, 1), got {self.threshold}")


def get_detector_settings(config: dict | None = None) -> DetectorSettings:
    """Resolve detector settings from environment variables (preferred) or config file."""
    if config is None:
        config = load_config("detector.json")

    return DetectorSettings(
        sample_rate=int(os.environ.get("PITCH_DETECTOR_SAMPLE_RATE", config["sample_rate"])),
        buffer_size=int(os.environ.get("PITCH_DETECTOR_BUFFER_SIZE", config["buffer_size"])),
        threshold=float(os.environ.get("PITCH_DETECTOR_THRESHOLD", config["threshold"])),
        max_file_size_bytes=int(config["max_file_size_bytes"]),
        max_duration_s=float(config["max_duration_s"]),
        max_buffer_size=int(config.get("max_buffer_size", 16384)),
    )


def _load_via_pydub(
    file_path: Path, fmt: str, target_sr: int,
) -> tuple[np.ndarray, int]:
    """Load audio via pydub (requires ffmpeg). Works for MP3, M4A, AAC, OGG, etc."""
    import io

    import librosa
    import soundfile as sf
    from pydub import AudioSegment

    seg = AudioSegment.from_file(str(file_path), format=fmt)
    seg = seg.set_channels(1)  # mono
    buf = io.BytesIO()
    seg.export(buf, format="wav")
    buf.seek(0)
    audio, sr_native = sf.read(buf, dtype="float32")
    if target_sr and target_sr != sr_native:
        audio = librosa.resample(audio, orig_sr=sr_native, target_sr=target_sr)
        sr_native = target_sr
    return audio.astype(np.float32), sr_native


# Formats that need pydub/ffmpeg conversion
_PYDUB_FORMATS: dict[str, str] = {
    ".mp3": "mp3",
    ".m4a": "m4a",
    ".aac": "aac",
    ".ogg": "ogg",
    ".webm": "webm",
}

SUPPORTED_EXTENSIONS = frozenset(_PYDUB_FORMATS) | {".wav", ".flac"}


class AudioDecodeError(ValueError):
    """Raised when a supported file type holds content no backend can decode."""


def load_audio(
    file_path: str | Path, target_sr: int = DEFAULT_SAMPLE_RATE,
) -> tuple[np.ndarray, int]:
    """Load an audio file and return (samples, sample_rate).

    Handles WAV, FLAC, MP3, M4A, AAC, OGG, WebM. Converts to mono and
    resamples to target_sr.

    Args:
        file_path: Path to the audio file.
        target_sr: Target sample rate in Hz.

    Returns:
        Tuple of (audio_samples as float32 numpy array, sample_rate).

    Raises:
        FileNotFoundError: If the path does not exist.
        AudioDecodeError: If the content cannot be decoded.
    """
    import audioread
    import librosa
    import soundfile as sf
    from pydub.exceptions import CouldntDecodeError

    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Audio file not found: {file_path}")

    suffix = file_path.suffix.lower()

    try:
        if suffix in _PYDUB_FORMATS:
            audio, sr = _load_via_pydub(file_path, _PYDUB_FORMATS[suffix], target_sr)
        else:
            # WAV, FLAC: librosa handles natively via soundfile
            audio, sr = librosa.load(str(file_path), sr=target_sr, mono=True)
            audio = audio.astype(np.float32)
    except (
        sf.SoundFileError,
        audioread.exceptions.DecodeError,
        CouldntDecodeError,
        EOFError,
    ) as e:
        raise AudioDecodeError(f"Could not decode audio from {file_path.name}: {e}") from e

    logger.debug("Loaded %s: %d samples at %d Hz", file_path.name, len(audio), sr)
    return audio, sr


def get_duration(audio: np.ndarray, sr: int) -> float:
    """Return audio duration in seconds."""
    return len(audio) / sr


def extract_window(
    audio: np.ndarray,
    sr: int,
    offset_s: float = 0.0,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> np.ndarray:
    """Cut one analysis buffer of ``buffer_size`` samples starting at ``offset_s``.

    Raises:
        ValueError: If the offset is negative or fewer than ``buffer_size``
            samples remain after it.
    """
    if offset_s < 0:
        raise ValueError(f"offset_s must be non-negative, got {offset_s}")

    start = int(round(offset_s * sr))
    end = start + buffer_size
    if end > len(audio):
        raise ValueError(
            f"Need {buffer_size} samples from {offset_s:.3f}s, "
            f"but audio has only {max(len(audio) - start, 0)} left"
        )
    return audio[start:end]
