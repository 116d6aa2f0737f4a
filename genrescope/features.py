"""Per-frame RMS / zero-crossing rate and waveform-level aggregation."""

from __future__ import annotations

import logging

import numpy as np

from .config import AnalysisConfig
from .errors import InvalidInputError
from .framing import Framer
from .spectral import magnitude_spectrum, spectral_centroid
from .types import SummaryFeatures, Waveform

logger = logging.getLogger(__name__)


def frame_rms(frame: np.ndarray) -> float:
    """Root-mean-square amplitude of a frame."""
    x = np.asarray(frame, dtype=np.float64)
    if x.size == 0:
        raise InvalidInputError("Cannot compute RMS of an empty frame")
    return float(np.sqrt(np.mean(x * x)))


def zero_crossing_rate(frame: np.ndarray) -> float:
    """Fraction of adjacent sample pairs with strictly opposite signs.

    The count is divided by the frame length (not length - 1), so a signal
    alternating sign on every sample scores (N - 1) / N. Zeros never count
    as a crossing.
    """
    x = np.asarray(frame, dtype=np.float64)
    if x.size == 0:
        raise InvalidInputError("Cannot compute ZCR of an empty frame")
    crossings = np.count_nonzero(x[1:] * x[:-1] < 0)
    return crossings / x.size


class FrameFeatureExtractor:
    """Compute SummaryFeatures for a waveform.

    Frames are produced by a Framer and analyzed one at a time until the
    frame budget (max_frames) is spent or the waveform runs out.
    """

    def __init__(self, config: AnalysisConfig | None = None):
        self.config = config or AnalysisConfig()
        self.framer = Framer(self.config.frame_size, self.config.hop)

    def extract(self, waveform: Waveform) -> SummaryFeatures:
        """Analyze a waveform.

        Args:
            waveform: Mono waveform

        Returns:
            Features averaged over the analyzed frames

        Raises:
            InvalidInputError: If the waveform is missing or shorter than one frame
        """
        if waveform is None:
            raise InvalidInputError("No waveform to analyze")

        frame_size = self.config.frame_size
        sample_rate = waveform.sample_rate

        centroid_sum = 0.0
        rms_sum = 0.0
        zcr_sum = 0.0
        frames = 0

        for frame in self.framer.frames(waveform):
            rms_sum += frame_rms(frame)
            zcr_sum += zero_crossing_rate(frame)

            mags = magnitude_spectrum(frame, self.config.spectrum_method)
            centroid_sum += spectral_centroid(mags, sample_rate, frame_size)

            frames += 1
            if frames >= self.config.max_frames:
                break

        if frames == 0:
            raise InvalidInputError(
                f"Waveform too short to analyze: {len(waveform)} samples, "
                f"need at least {frame_size}"
            )

        centroid_hz = centroid_sum / frames
        features = SummaryFeatures(
            centroid_hz=centroid_hz,
            centroid=min(1.0, centroid_hz / waveform.nyquist),
            rms=rms_sum / frames,
            zcr=zcr_sum / frames,
            frames_analyzed=frames,
        )
        logger.debug(
            "Analyzed %d frames: centroid=%.1f Hz rms=%.4f zcr=%.4f",
            frames, features.centroid_hz, features.rms, features.zcr,
        )
        return features
