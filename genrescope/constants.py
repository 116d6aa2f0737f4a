"""Shared constants for genrescope."""

LABELS: tuple[str, ...] = ("rock", "classical", "hiphop", "jazz")
"""Genre taxonomy. Order is the index contract for external model outputs."""

FRAME_SIZE = 2048
"""Analysis frame length (samples)."""

HOP_LENGTH = 1024
"""Distance between consecutive frame starts (samples)."""

MAX_FRAMES = 61
"""Number of frames analyzed per waveform before iteration stops."""

CENTROID_EPSILON = 1e-9
"""Added to the spectral energy so silent frames keep a finite centroid."""

NORMALIZE_EPSILON = 1e-9
"""Added to the score total before normalizing heuristic scores."""
