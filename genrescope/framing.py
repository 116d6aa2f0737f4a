"""Frame slicing and windowing.

Frames are copied out of the waveform before windowing, so the caller's
samples are never modified.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from .constants import FRAME_SIZE, HOP_LENGTH
from .errors import InvalidInputError
from .types import Waveform


def hann_window(size: int) -> np.ndarray:
    """Symmetric Hann window: 0.5 * (1 - cos(2*pi*n / (size - 1)))."""
    if size < 2:
        raise InvalidInputError(f"Window size must be at least 2, got {size}")
    n = np.arange(size)
    return 0.5 * (1.0 - np.cos(2.0 * np.pi * n / (size - 1)))


class Framer:
    """Slice a waveform into overlapping Hann-windowed frames.

    Iteration is lazy and restartable: every call to frames() returns a
    fresh generator over the same waveform.
    """

    def __init__(self, frame_size: int = FRAME_SIZE, hop: int = HOP_LENGTH):
        """Initialize framer.

        Args:
            frame_size: Frame length in samples
            hop: Distance between consecutive frame starts in samples
        """
        if frame_size < 2:
            raise InvalidInputError(f"frame_size must be at least 2, got {frame_size}")
        if hop < 1:
            raise InvalidInputError(f"hop must be positive, got {hop}")

        self.frame_size = frame_size
        self.hop = hop
        self._window = hann_window(frame_size)

    def offsets(self, n_samples: int) -> range:
        """Start offsets of every complete frame in n_samples samples."""
        if n_samples < self.frame_size:
            return range(0)
        return range(0, n_samples - self.frame_size + 1, self.hop)

    def count(self, n_samples: int) -> int:
        """Number of complete frames available in n_samples samples."""
        return len(self.offsets(n_samples))

    def frames(self, waveform: Waveform) -> Iterator[np.ndarray]:
        """Yield windowed frame copies in order of their start offset."""
        samples = waveform.samples
        for offset in self.offsets(len(samples)):
            frame = samples[offset:offset + self.frame_size].copy()
            frame *= self._window
            yield frame

    __call__ = frames
