"""Data types flowing through the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .constants import LABELS
from .errors import InvalidInputError

__all__ = ["LABELS", "PredictionResult", "SummaryFeatures", "Waveform"]


@dataclass(frozen=True, eq=False)
class Waveform:
    """A single channel of decoded audio.

    Attributes:
        samples: Read-only float64 copy of the channel samples
        sample_rate: Sample rate in Hz
    """

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        if self.samples is None:
            raise InvalidInputError("Waveform has no samples")

        try:
            samples = np.array(self.samples, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Waveform samples are not numeric: {e}") from e

        if samples.ndim != 1:
            raise InvalidInputError(
                f"Waveform must be one channel (1-D), got shape {samples.shape}; "
                "use Waveform.from_array() for multi-channel data"
            )
        if samples.size == 0:
            raise InvalidInputError("Waveform has no samples")
        if not np.all(np.isfinite(samples)):
            raise InvalidInputError("Waveform contains NaN or infinite samples")

        if isinstance(self.sample_rate, bool) or not isinstance(self.sample_rate, (int, np.integer)):
            raise InvalidInputError(f"Sample rate must be an integer, got {self.sample_rate!r}")
        if self.sample_rate <= 0:
            raise InvalidInputError(f"Sample rate must be positive, got {self.sample_rate}")

        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "sample_rate", int(self.sample_rate))

    @classmethod
    def from_array(cls, data: Any, sample_rate: int) -> Waveform:
        """Build a waveform from decoder output.

        Multi-channel data shaped (channels, samples) is reduced to its
        first channel; the other channels are ignored.

        Args:
            data: 1-D samples or 2-D (channels, samples) array
            sample_rate: Sample rate in Hz

        Returns:
            Waveform for channel 0
        """
        if data is None:
            raise InvalidInputError("Waveform has no samples")
        arr = np.asarray(data)
        if arr.ndim == 2:
            if arr.shape[0] == 0:
                raise InvalidInputError("Waveform has no channels")
            arr = arr[0]
        return cls(arr, sample_rate)

    def __len__(self) -> int:
        return int(self.samples.size)

    @property
    def duration(self) -> float:
        """Length in seconds."""
        return len(self) / self.sample_rate

    @property
    def nyquist(self) -> float:
        """Highest representable frequency (Hz)."""
        return self.sample_rate / 2


@dataclass(frozen=True, slots=True)
class SummaryFeatures:
    """Per-waveform features averaged over the analyzed frames.

    Attributes:
        centroid_hz: Mean spectral centroid in Hz
        centroid: Mean centroid divided by Nyquist, clamped to 1
        rms: Mean frame RMS
        zcr: Mean frame zero-crossing rate
        frames_analyzed: Number of frames that went into the means
    """

    centroid_hz: float
    centroid: float
    rms: float
    zcr: float
    frames_analyzed: int = 1

    def as_vector(self) -> list[float]:
        """Model input vector: [centroid, rms, zcr]."""
        return [self.centroid, self.rms, self.zcr]

    def to_dict(self) -> dict[str, float | int]:
        return {
            "centroid_hz": self.centroid_hz,
            "centroid": self.centroid,
            "rms": self.rms,
            "zcr": self.zcr,
            "frames_analyzed": self.frames_analyzed,
        }


@dataclass(frozen=True)
class PredictionResult:
    """Best label plus the full probability distribution.

    Attributes:
        best: Winning label
        probs: Label -> probability, in LABELS order, summing to ~1
        source: "heuristic" or "model", whichever produced the result
    """

    best: str
    probs: dict[str, float] = field(default_factory=dict)
    source: str = "heuristic"

    @property
    def confidence(self) -> float:
        """Probability assigned to the best label."""
        return self.probs[self.best]

    def ranked(self) -> list[tuple[str, float]]:
        """Labels sorted by probability, highest first (stable on ties)."""
        return sorted(self.probs.items(), key=lambda item: item[1], reverse=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "best": self.best,
            "probs": dict(self.probs),
            "source": self.source,
        }
