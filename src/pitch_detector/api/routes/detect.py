"""POST /api/v1/detect — analyse one buffer of raw samples sent as JSON."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from pitch_detector.api.schemas import DetectRequest, NoteOut, PitchReadingOut
from pitch_detector.notes.mapper import Temperament, Transposition, TuningOptions
from pitch_detector.pitch.constants import NO_PITCH
from pitch_detector.pitch.reading import PitchReading

logger = logging.getLogger(__name__)

router = APIRouter()


def resolve_tuning(
    defaults: dict,
    reference_frequency: float | None = None,
    temperament: Temperament | None = None,
    transposition: Transposition | None = None,
) -> TuningOptions:
    """Build TuningOptions, taking unset fields from the configured default tuning."""
    if reference_frequency is None:
        reference_frequency = float(defaults["reference_frequency"])
    if temperament is None:
        temperament = Temperament(defaults["temperament"])
    if transposition is None:
        transposition = Transposition(defaults["transposition"])
    return TuningOptions(
        reference_frequency=reference_frequency,
        temperament=temperament,
        transposition=transposition,
    )


def check_buffer_size(n_samples: int, max_buffer_size: int) -> None:
    """Reject buffers longer than the configured maximum with 413."""
    if n_samples > max_buffer_size:
        logger.warning("Rejected buffer of %d samples", n_samples)
        raise HTTPException(
            413,
            f"Buffer too large ({n_samples} samples). Maximum: {max_buffer_size}.",
        )


def build_reading_out(reading: PitchReading, threshold: float) -> dict:
    """Flatten a PitchReading into response fields, with the -1.0 sentinel."""
    note_out = None
    if reading.note is not None:
        note_out = NoteOut(
            name=reading.note.name,
            pitch_class=reading.note.pitch_class,
            octave=reading.note.octave,
            midi=round(reading.note.midi, 3),
            cents=reading.note.cents,
        )

    return {
        "frequency_hz": (
            reading.frequency_hz if reading.frequency_hz is not None else NO_PITCH
        ),
        "detected": reading.detected,
        "clarity": reading.clarity,
        "rms": reading.rms,
        "threshold": threshold,
        "note": note_out,
    }


@router.post("/detect", response_model=PitchReadingOut)
async def detect_buffer(request: Request, body: DetectRequest) -> PitchReadingOut:
    """Run YIN detection and clarity estimation on the posted samples."""
    from pitch_detector.pitch.reading import read_pitch

    settings = request.app.state.settings
    check_buffer_size(len(body.samples), settings.max_buffer_size)

    threshold = body.threshold
    if threshold is None:
        threshold = settings.threshold

    reading = read_pitch(
        body.samples,
        body.sample_rate,
        threshold=threshold,
        notation=body.notation,
        accidental=body.accidental,
        tuning=resolve_tuning(
            request.app.state.tuning["default"],
            body.reference_frequency,
            body.temperament,
            body.transposition,
        ),
    )
    logger.debug(
        "Detected %s Hz in %d samples (clarity=%.3f)",
        reading.frequency_hz, len(body.samples), reading.clarity,
    )

    return PitchReadingOut(**build_reading_out(reading, threshold))
