"""Frequency-to-note mapping with tuning, temperament, and transposition."""

from pitch_detector.notes.mapper import (
    Accidental,
    Notation,
    NoteReading,
    Temperament,
    Transposition,
    TuningOptions,
    describe_frequency,
    frequency_to_cents,
    frequency_to_midi,
    frequency_to_note_name,
    frequency_to_octave,
    get_note_names,
    midi_to_frequency,
)

__all__ = [
    "Accidental",
    "Notation",
    "NoteReading",
    "Temperament",
    "Transposition",
    "TuningOptions",
    "describe_frequency",
    "frequency_to_cents",
    "frequency_to_midi",
    "frequency_to_note_name",
    "frequency_to_octave",
    "get_note_names",
    "midi_to_frequency",
]
