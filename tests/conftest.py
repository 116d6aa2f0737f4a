"""Pytest configuration and fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from genrescope.config import AnalysisConfig, GenrescopeConfig, LoggingConfig, ModelConfig
from genrescope.types import SummaryFeatures, Waveform

SAMPLE_RATE = 22050


def sine(freq: float, n_samples: int, sr: int = SAMPLE_RATE, amplitude: float = 0.5) -> np.ndarray:
    """Generate a sine wave of n_samples samples."""
    t = np.arange(n_samples) / sr
    return amplitude * np.sin(2 * np.pi * freq * t)


@pytest.fixture
def test_config() -> GenrescopeConfig:
    """Provide test configuration (small frames keep the DFT path fast)."""
    return GenrescopeConfig(
        analysis=AnalysisConfig(frame_size=256, hop=128, max_frames=8, spectrum_method="fft"),
        model=ModelConfig(),
        logging=LoggingConfig(level="DEBUG"),
    )


@pytest.fixture
def sine_waveform() -> Waveform:
    """Provide a two-second 440 Hz sine waveform."""
    return Waveform(sine(440.0, 2 * SAMPLE_RATE), SAMPLE_RATE)


@pytest.fixture
def noise_waveform() -> Waveform:
    """Provide one second of seeded white noise."""
    rng = np.random.default_rng(1234)
    return Waveform(rng.uniform(-0.5, 0.5, SAMPLE_RATE), SAMPLE_RATE)


@pytest.fixture
def features() -> SummaryFeatures:
    """Provide typical summary features."""
    return SummaryFeatures(centroid_hz=2205.0, centroid=0.2, rms=0.15, zcr=0.08, frames_analyzed=61)
