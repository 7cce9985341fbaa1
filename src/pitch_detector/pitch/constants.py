"""Detection band, thresholds, and sentinel values shared by the pitch modules."""

MIN_FREQUENCY = 60.0  # Hz
MAX_FREQUENCY = 2000.0  # Hz
DEFAULT_THRESHOLD = 0.1

# Buffers quieter than this RMS are treated as silence
NOISE_GATE_RMS = 0.01

# Public-boundary sentinels
NO_PITCH = -1.0
NO_CLARITY = 0.0

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_BUFFER_SIZE = 2048
