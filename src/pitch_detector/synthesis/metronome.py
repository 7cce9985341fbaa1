"""Metronome — tempo helpers and click-track rendering.

Each beat is a short 1 kHz sine click: a 1 ms linear attack up to the
click volume, then an exponential decay to 0.001 by 50 ms.
"""

from __future__ import annotations

import math

import numpy as np

from pitch_detector.pitch.constants import DEFAULT_SAMPLE_RATE

BPM_MIN = 20.0
BPM_MAX = 999.0
BPM_DEFAULT = 120.0

CLICK_FREQUENCY_HZ = 1000.0
CLICK_ATTACK_S = 0.001
CLICK_DECAY_S = 0.05
_CLICK_FLOOR = 0.001


def adjust_bpm(current: float, delta: float) -> float:
    """Shift a tempo by ``delta``, clamped to [BPM_MIN, BPM_MAX] and rounded to 2 decimals."""
    clamped = max(BPM_MIN, min(BPM_MAX, current + delta))
    return round(clamped * 100) / 100


def is_valid_bpm(bpm: float) -> bool:
    return not math.isnan(bpm) and BPM_MIN <= bpm <= BPM_MAX


def generate_click(sr: int = DEFAULT_SAMPLE_RATE, volume: float = 0.5) -> np.ndarray:
    """Render one metronome click as float32 samples."""
    if not 0.0 <= volume <= 1.0:
        raise ValueError(f"volume must be in [0, 1], got {volume}")

    n = int(sr * CLICK_DECAY_S)
    t = np.arange(n) / sr
    if volume == 0.0:
        return np.zeros(n, dtype=np.float32)

    attack = volume * t / CLICK_ATTACK_S
    decay_pos = (t - CLICK_ATTACK_S) / (CLICK_DECAY_S - CLICK_ATTACK_S)
    decay = volume * (_CLICK_FLOOR / volume) ** decay_pos
    envelope = np.where(t < CLICK_ATTACK_S, attack, decay)

    click = envelope * np.sin(2 * np.pi * CLICK_FREQUENCY_HZ * t)
    return click.astype(np.float32)


def generate_click_track(
    bpm: float = BPM_DEFAULT,
    beats: int = 4,
    sr: int = DEFAULT_SAMPLE_RATE,
    volume: float = 0.5,
) -> np.ndarray:
    """Render ``beats`` evenly spaced clicks at ``bpm``.

    Args:
        bpm: Tempo in beats per minute, within [BPM_MIN, BPM_MAX].
        beats: Number of clicks.
        sr: Sample rate.
        volume: Click peak amplitude in [0, 1].

    Returns:
        Audio samples as float32 numpy array, ``beats`` beat periods long.
    """
    if not is_valid_bpm(bpm):
        raise ValueError(f"bpm must be in [{BPM_MIN:g}, {BPM_MAX:g}], got {bpm}")
    if beats < 1:
        raise ValueError(f"beats must be at least 1, got {beats}")

    click = generate_click(sr, volume)
    seconds_per_beat = 60.0 / bpm
    track = np.zeros(int(round(beats * seconds_per_beat * sr)), dtype=np.float32)

    for beat in range(beats):
        start = int(round(beat * seconds_per_beat * sr))
        end = min(start + len(click), len(track))
        track[start:end] += click[:end - start]

    return track
