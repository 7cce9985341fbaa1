"""GET endpoints for reference data (note names, tuning presets, reference tones, clicks)."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request, Response

from pitch_detector.api.schemas import TuningPresetOut, WaveformChoice
from pitch_detector.notes.mapper import Accidental, Notation, get_note_names

router = APIRouter()


@router.get("/notes", response_model=list[str])
async def get_notes(
    notation: Notation = Notation.LETTER,
    accidental: Accidental = Accidental.SHARP,
) -> list[str]:
    """Return the 12 chromatic note names starting from C."""
    return get_note_names(notation, accidental)


@router.get("/tuning-presets", response_model=list[TuningPresetOut])
async def get_tuning_presets(request: Request) -> list[TuningPresetOut]:
    """Return available A4 reference presets."""
    return [
        TuningPresetOut(
            id=pid,
            description=p["description"],
            reference_frequency=p["reference_frequency"],
        )
        for pid, p in request.app.state.tuning["presets"].items()
    ]


@router.get("/reference-tone")
async def get_reference_tone(
    request: Request,
    frequency_hz: float = Query(440.0, gt=0, le=20000),
    duration_s: float = Query(1.0, gt=0, le=10),
    waveform: WaveformChoice = WaveformChoice.sine,
    volume: float = Query(0.3, ge=0, le=1),
) -> Response:
    """Render a reference tone as a WAV file."""
    from pitch_detector.synthesis.render import (
        Waveform,
        generate_reference_tone,
        tone_to_wav_bytes,
    )

    sr = request.app.state.settings.sample_rate
    if frequency_hz >= sr / 2:
        raise HTTPException(400, f"frequency_hz must be below Nyquist ({sr / 2} Hz)")

    audio = generate_reference_tone(
        frequency_hz,
        duration_s=duration_s,
        sr=sr,
        waveform=Waveform(waveform.value),
        volume=volume,
    )
    return Response(content=tone_to_wav_bytes(audio, sr), media_type="audio/wav")


@router.get("/click-track")
async def get_click_track(
    request: Request,
    bpm: float = Query(120.0, ge=20, le=999),
    beats: int = Query(4, ge=1, le=64),
    volume: float = Query(0.5, ge=0, le=1),
) -> Response:
    """Render a metronome click track as a WAV file."""
    from pitch_detector.synthesis.metronome import generate_click_track
    from pitch_detector.synthesis.render import tone_to_wav_bytes

    sr = request.app.state.settings.sample_rate
    audio = generate_click_track(bpm, beats=beats, sr=sr, volume=volume)
    return Response(content=tone_to_wav_bytes(audio, sr), media_type="audio/wav")
