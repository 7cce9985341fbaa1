#!/usr/bin/env python3
"""Generate reference tones with known frequencies and check the detector against them."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from pitch_detector import detect_pitch, get_pitch_clarity  # noqa: E402
from pitch_detector.notes.mapper import frequency_to_note_name  # noqa: E402
from pitch_detector.pitch.audio_io import extract_window, get_detector_settings  # noqa: E402
from pitch_detector.synthesis.render import Waveform, generate_reference_tone, save_wav  # noqa: E402

OUTPUT_DIR = Path(__file__).resolve().parents[1] / "data" / "test-audio"

# Low E guitar string up to a high soprano note
TEST_FREQUENCIES = [82.41, 110.0, 196.0, 261.63, 440.0, 880.0, 1318.51]


def main():
    settings = get_detector_settings()
    sr = settings.sample_rate
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    for waveform in Waveform:
        for freq in TEST_FREQUENCIES:
            tone = generate_reference_tone(freq, duration_s=1.0, sr=sr, waveform=waveform)
            path = OUTPUT_DIR / f"{waveform.value}_{freq:g}hz.wav"
            save_wav(tone, path, sr)

            window = extract_window(tone, sr, offset_s=0.5, buffer_size=settings.buffer_size)
            detected = detect_pitch(window, sr)
            clarity = get_pitch_clarity(window, sr)
            name = frequency_to_note_name(detected) if detected > 0 else "—"
            print(
                f"  {waveform.value:<8} {freq:>8.2f} Hz -> {detected:>8.2f} Hz "
                f"{name:<4} clarity={clarity:.2f}"
            )

    print(f"\nAll test files in: {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
