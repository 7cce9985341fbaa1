"""Note mapping — convert detected frequencies to note names, octaves, and cents."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum


class Notation(StrEnum):
    LETTER = "letter"
    SOLFEGE = "solfege"


class Accidental(StrEnum):
    SHARP = "sharp"
    FLAT = "flat"


class Temperament(StrEnum):
    EQUAL = "equal"
    JUST = "just"


class Transposition(StrEnum):
    """Instrument key; written notes are shifted up by the given semitones."""

    C = "C"
    B_FLAT = "Bb"
    E_FLAT = "Eb"
    F = "F"


TRANSPOSITION_SEMITONES: dict[Transposition, int] = {
    Transposition.C: 0,
    Transposition.B_FLAT: 2,
    Transposition.E_FLAT: 9,
    Transposition.F: 7,
}

# Note names in chromatic order starting from C
_LETTER_SHARP = ["C", "C♯", "D", "D♯", "E", "F", "F♯", "G", "G♯", "A", "A♯", "B"]
_LETTER_FLAT = ["C", "D♭", "D", "E♭", "E", "F", "G♭", "G", "A♭", "A", "B♭", "B"]
_SOLFEGE_SHARP = ["ド", "ド♯", "レ", "レ♯", "ミ", "ファ", "ファ♯", "ソ", "ソ♯", "ラ", "ラ♯", "シ"]
_SOLFEGE_FLAT = ["ド", "レ♭", "レ", "ミ♭", "ミ", "ファ", "ソ♭", "ソ", "ラ♭", "ラ", "シ♭", "シ"]

# Just intonation (C major) positions in cents above C
_JUST_INTONATION_CENTS = [
    0.0,      # C     1/1
    111.73,   # C#/Db 16/15
    203.91,   # D     9/8
    315.64,   # D#/Eb 6/5
    386.31,   # E     5/4
    498.04,   # F     4/3
    590.22,   # F#/Gb 45/32
    701.96,   # G     3/2
    813.69,   # G#/Ab 8/5
    884.36,   # A     5/3
    1017.6,   # A#/Bb 9/5
    1088.27,  # B     15/8
]

A4_MIDI = 69


@dataclass(frozen=True)
class TuningOptions:
    """Reference pitch, temperament, and instrument transposition.

    Attributes:
        reference_frequency: Frequency of A4 in Hz.
        temperament: Equal or just (C major) intonation for cents readings.
        transposition: Instrument key used for note names and octaves.
    """

    reference_frequency: float = 440.0
    temperament: Temperament = Temperament.EQUAL
    transposition: Transposition = Transposition.C

    def __post_init__(self) -> None:
        if not self.reference_frequency > 0:
            raise ValueError(
                f"reference_frequency must be positive, got {self.reference_frequency}"
            )


DEFAULT_TUNING = TuningOptions()


@dataclass
class NoteReading:
    """The nearest note to a frequency."""

    name: str  # includes octave, e.g. "A4"
    pitch_class: str  # name without octave
    octave: int
    midi: float  # fractional MIDI number
    cents: int  # deviation from the nearest note
    frequency_hz: float


def frequency_to_midi(frequency: float, options: TuningOptions = DEFAULT_TUNING) -> float:
    """Fractional MIDI note number of a frequency."""
    return 12 * math.log2(frequency / options.reference_frequency) + A4_MIDI


def midi_to_frequency(midi: float, options: TuningOptions = DEFAULT_TUNING) -> float:
    return options.reference_frequency * 2 ** ((midi - A4_MIDI) / 12)


def _transposition_offset(options: TuningOptions) -> int:
    return TRANSPOSITION_SEMITONES[options.transposition]


def frequency_to_note_index(
    frequency: float, options: TuningOptions = DEFAULT_TUNING,
) -> int:
    """Chromatic index (0 = C) of the nearest note, after transposition."""
    midi = frequency_to_midi(frequency, options)
    return (round(midi) + _transposition_offset(options)) % 12


def frequency_to_cents(frequency: float, options: TuningOptions = DEFAULT_TUNING) -> int:
    """Deviation from the nearest note in whole cents.

    Under just temperament the deviation is measured against the just
    position of the (concert pitch) note instead of the tempered one.
    """
    midi = frequency_to_midi(frequency, options)
    nearest_midi = round(midi)
    cents = round((midi - nearest_midi) * 100)

    if options.temperament == Temperament.JUST:
        note_index = nearest_midi % 12
        just_adjustment = _JUST_INTONATION_CENTS[note_index] - note_index * 100
        cents = round(cents - just_adjustment)

    return cents


def frequency_to_octave(frequency: float, options: TuningOptions = DEFAULT_TUNING) -> int:
    """Scientific pitch octave of the nearest note (A4 = 440 Hz is octave 4)."""
    midi = frequency_to_midi(frequency, options)
    transposed_midi = round(midi) + _transposition_offset(options)
    return transposed_midi // 12 - 1


def get_note_names(
    notation: Notation = Notation.LETTER,
    accidental: Accidental = Accidental.SHARP,
) -> list[str]:
    """Return the 12 chromatic note names for a notation and spelling."""
    if notation == Notation.LETTER:
        names = _LETTER_SHARP if accidental == Accidental.SHARP else _LETTER_FLAT
    else:
        names = _SOLFEGE_SHARP if accidental == Accidental.SHARP else _SOLFEGE_FLAT
    return list(names)


def note_name_without_octave(
    frequency: float,
    notation: Notation = Notation.LETTER,
    accidental: Accidental = Accidental.SHARP,
    options: TuningOptions = DEFAULT_TUNING,
) -> str:
    names = get_note_names(notation, accidental)
    return names[frequency_to_note_index(frequency, options)]


def frequency_to_note_name(
    frequency: float,
    notation: Notation = Notation.LETTER,
    accidental: Accidental = Accidental.SHARP,
    options: TuningOptions = DEFAULT_TUNING,
) -> str:
    """Note name with octave, e.g. ``"A4"`` or ``"ラ4"``."""
    pitch_class = note_name_without_octave(frequency, notation, accidental, options)
    return f"{pitch_class}{frequency_to_octave(frequency, options)}"


def describe_frequency(
    frequency: float,
    notation: Notation = Notation.LETTER,
    accidental: Accidental = Accidental.SHARP,
    options: TuningOptions = DEFAULT_TUNING,
) -> NoteReading | None:
    """Convert a frequency to the nearest note.

    Args:
        frequency: Frequency in Hz.
        notation: Letter names or solfege.
        accidental: Sharp or flat spelling.
        options: Tuning reference, temperament, and transposition.

    Returns:
        NoteReading, or None for non-positive frequencies.
    """
    if frequency <= 0:
        return None

    pitch_class = note_name_without_octave(frequency, notation, accidental, options)
    octave = frequency_to_octave(frequency, options)

    return NoteReading(
        name=f"{pitch_class}{octave}",
        pitch_class=pitch_class,
        octave=octave,
        midi=frequency_to_midi(frequency, options),
        cents=frequency_to_cents(frequency, options),
        frequency_hz=frequency,
    )
