"""pitch-detector — FastAPI application exposing buffer and file pitch analysis."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pitch_detector import __version__
from pitch_detector.api.routes import analyze, detect, health, reference

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load configuration once on startup."""
    from pitch_detector.pitch.audio_io import get_detector_settings, load_config

    app.state.settings = get_detector_settings()
    app.state.tuning = load_config("tuning.json")
    logger.info(
        "Detector ready: sr=%d buffer=%d threshold=%.3f",
        app.state.settings.sample_rate,
        app.state.settings.buffer_size,
        app.state.settings.threshold,
    )
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="pitch-detector",
        description="YIN pitch detection and clarity estimation API",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(detect.router, prefix="/api/v1", tags=["detect"])
    app.include_router(analyze.router, prefix="/api/v1", tags=["analyze"])
    app.include_router(reference.router, prefix="/api/v1", tags=["reference"])

    return app


app = create_app()
