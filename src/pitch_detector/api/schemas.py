"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from pitch_detector.notes.mapper import Accidental, Notation, Temperament, Transposition
from pitch_detector.pitch.constants import DEFAULT_SAMPLE_RATE


class WaveformChoice(StrEnum):
    sine = "sine"
    square = "square"
    sawtooth = "sawtooth"
    triangle = "triangle"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TuningIn(BaseModel):
    """Note naming options shared by /detect and /analyze.

    Tuning fields left unset fall back to the ``default`` block of
    ``configs/tuning.json``.
    """

    notation: Notation = Notation.LETTER
    accidental: Accidental = Accidental.SHARP
    reference_frequency: float | None = Field(None, gt=0)
    temperament: Temperament | None = None
    transposition: Transposition | None = None


class DetectRequest(TuningIn):
    samples: list[float]
    sample_rate: float = Field(DEFAULT_SAMPLE_RATE, gt=0)
    threshold: float | None = Field(None, gt=0, lt=1)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class NoteOut(BaseModel):
    name: str
    pitch_class: str
    octave: int
    midi: float
    cents: int


class PitchReadingOut(BaseModel):
    """Result of analysing one buffer.

    ``frequency_hz`` is -1.0 when no pitch was detected.
    """

    frequency_hz: float
    detected: bool
    clarity: float
    rms: float
    threshold: float
    note: NoteOut | None = None


class AnalysisResponse(PitchReadingOut):
    """Pitch reading for one window of an uploaded file."""

    status: str = "success"
    duration_s: float
    sample_rate: int
    offset_s: float
    buffer_size: int


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    algorithms: list[str]
    min_frequency_hz: float
    max_frequency_hz: float
    default_threshold: float


class TuningPresetOut(BaseModel):
    id: str
    description: str
    reference_frequency: float
