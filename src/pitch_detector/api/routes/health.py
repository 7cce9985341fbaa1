"""GET /api/v1/health — server health check."""

from __future__ import annotations

from fastapi import APIRouter

from pitch_detector import __version__
from pitch_detector.api.schemas import HealthResponse
from pitch_detector.pitch.constants import DEFAULT_THRESHOLD, MAX_FREQUENCY, MIN_FREQUENCY

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        algorithms=["yin"],
        min_frequency_hz=MIN_FREQUENCY,
        max_frequency_hz=MAX_FREQUENCY,
        default_threshold=DEFAULT_THRESHOLD,
    )
