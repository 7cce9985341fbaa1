"""pitch-detector — YIN fundamental frequency and clarity estimation for mono buffers."""

from pitch_detector.pitch import (
    DEFAULT_THRESHOLD,
    MAX_FREQUENCY,
    MIN_FREQUENCY,
    calculate_rms,
    detect_pitch,
    detect_pitch_with_threshold,
    get_pitch_clarity,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_THRESHOLD",
    "MAX_FREQUENCY",
    "MIN_FREQUENCY",
    "__version__",
    "calculate_rms",
    "detect_pitch",
    "detect_pitch_with_threshold",
    "get_pitch_clarity",
]
