"""Audio synthesis — reference tones, metronome clicks, and WAV export."""

from pitch_detector.synthesis.metronome import (
    adjust_bpm,
    generate_click,
    generate_click_track,
    is_valid_bpm,
)
from pitch_detector.synthesis.render import (
    Waveform,
    apply_fade,
    generate_reference_tone,
    save_wav,
    tone_to_wav_bytes,
)

__all__ = [
    "Waveform",
    "adjust_bpm",
    "apply_fade",
    "generate_click",
    "generate_click_track",
    "generate_reference_tone",
    "is_valid_bpm",
    "save_wav",
    "tone_to_wav_bytes",
]
