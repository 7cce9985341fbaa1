"""POST /api/v1/analyze — upload audio, detect pitch in one window, return the reading."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile

from pitch_detector.api.routes.detect import (
    build_reading_out,
    check_buffer_size,
    resolve_tuning,
)
from pitch_detector.api.schemas import AnalysisResponse
from pitch_detector.notes.mapper import Accidental, Notation, Temperament, Transposition
from pitch_detector.pitch.audio_io import SUPPORTED_EXTENSIONS, AudioDecodeError

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate_upload(file: UploadFile, content: bytes, max_bytes: int) -> str:
    """Validate file size and extension. Return the file suffix."""
    if len(content) > max_bytes:
        logger.warning("Rejected upload %s: %d bytes", file.filename, len(content))
        raise HTTPException(
            413,
            f"File too large ({len(content)} bytes). Maximum: {max_bytes}.",
        )

    filename = file.filename or "recording.wav"
    suffix = Path(filename).suffix.lower()
    if not suffix:
        suffix = ".wav"

    if suffix not in SUPPORTED_EXTENSIONS:
        logger.warning("Rejected upload %s: unsupported format", filename)
        raise HTTPException(
            400,
            f"Unsupported format: {suffix}. Allowed: {sorted(SUPPORTED_EXTENSIONS)}",
        )

    return suffix


_FILE_PARAM = File(..., description="Audio file (WAV, FLAC, MP3, M4A, OGG, WebM)")
_OFFSET_PARAM = Form(0.0, ge=0, description="Start of the analysis window in seconds")
_BUFFER_PARAM = Form(None, ge=2, description="Window length in samples")
_THRESHOLD_PARAM = Form(None, gt=0, lt=1, description="YIN threshold")
_NOTATION_PARAM = Form(Notation.LETTER, description="Note name notation")
_ACCIDENTAL_PARAM = Form(Accidental.SHARP, description="Sharp or flat spelling")
_A4_PARAM = Form(None, gt=0, description="A4 reference frequency in Hz")
_TEMPERAMENT_PARAM = Form(None, description="Temperament for cents")
_TRANSPOSITION_PARAM = Form(None, description="Instrument transposition")


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_audio(
    request: Request,
    file: UploadFile = _FILE_PARAM,
    offset_s: float = _OFFSET_PARAM,
    buffer_size: int | None = _BUFFER_PARAM,
    threshold: float | None = _THRESHOLD_PARAM,
    notation: Notation = _NOTATION_PARAM,
    accidental: Accidental = _ACCIDENTAL_PARAM,
    reference_frequency: float | None = _A4_PARAM,
    temperament: Temperament | None = _TEMPERAMENT_PARAM,
    transposition: Transposition | None = _TRANSPOSITION_PARAM,
) -> AnalysisResponse:
    """Run pitch detection on a single window of an uploaded recording.

    Pipeline: load audio -> cut window -> detect pitch and clarity ->
    name the nearest note.
    """
    from pitch_detector.pitch.audio_io import extract_window, get_duration, load_audio
    from pitch_detector.pitch.reading import read_pitch

    settings = request.app.state.settings
    if buffer_size is None:
        buffer_size = settings.buffer_size
    if threshold is None:
        threshold = settings.threshold
    check_buffer_size(buffer_size, settings.max_buffer_size)

    # --- 1. Read and validate upload ---
    content = await file.read()
    suffix = _validate_upload(file, content, settings.max_file_size_bytes)

    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp.write(content)
        tmp_path = tmp.name

    try:
        audio, sr = load_audio(tmp_path, target_sr=settings.sample_rate)
    except AudioDecodeError as e:
        logger.warning("Rejected upload %s: %s", file.filename, e)
        raise HTTPException(400, f"Could not decode audio: {file.filename}") from e
    finally:
        Path(tmp_path).unlink(missing_ok=True)

    duration_s = get_duration(audio, sr)
    if duration_s > settings.max_duration_s:
        raise HTTPException(
            400,
            f"Audio too long ({duration_s:.1f}s). Maximum: {settings.max_duration_s}s.",
        )
    if len(audio) < buffer_size:
        raise HTTPException(
            400,
            f"Audio too short ({len(audio)} samples). Need at least {buffer_size}.",
        )

    # --- 2. Cut the analysis window ---
    try:
        window = extract_window(audio, sr, offset_s=offset_s, buffer_size=buffer_size)
    except ValueError as e:
        raise HTTPException(400, str(e)) from e

    # --- 3. Pitch detection ---
    tuning = resolve_tuning(
        request.app.state.tuning["default"],
        reference_frequency,
        temperament,
        transposition,
    )
    reading = read_pitch(
        window,
        sr,
        threshold=threshold,
        notation=notation,
        accidental=accidental,
        tuning=tuning,
    )
    logger.debug(
        "Analyzed %s at %.3fs: %s Hz", file.filename, offset_s, reading.frequency_hz,
    )

    return AnalysisResponse(
        duration_s=round(duration_s, 3),
        sample_rate=sr,
        offset_s=offset_s,
        buffer_size=buffer_size,
        **build_reading_out(reading, threshold),
    )
