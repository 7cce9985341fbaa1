"""YIN pitch detection, clarity estimation, and signal level modules."""

from pitch_detector.pitch.clarity import get_pitch_clarity
from pitch_detector.pitch.constants import (
    DEFAULT_THRESHOLD,
    MAX_FREQUENCY,
    MIN_FREQUENCY,
)
from pitch_detector.pitch.detector import (
    YinEstimate,
    detect_pitch,
    detect_pitch_with_threshold,
    estimate_pitch,
)
from pitch_detector.pitch.energy import calculate_rms
from pitch_detector.pitch.reading import PitchReading, read_pitch

__all__ = [
    "DEFAULT_THRESHOLD",
    "MAX_FREQUENCY",
    "MIN_FREQUENCY",
    "PitchReading",
    "YinEstimate",
    "calculate_rms",
    "detect_pitch",
    "detect_pitch_with_threshold",
    "estimate_pitch",
    "get_pitch_clarity",
    "read_pitch",
]
