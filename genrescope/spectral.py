"""Magnitude spectrum and spectral centroid of a single frame."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

import numpy as np

from .constants import CENTROID_EPSILON
from .errors import InvalidInputError

SpectrumMethod = Literal["fft", "dft"]


def _as_frame(frame: np.ndarray) -> np.ndarray:
    arr = np.asarray(frame, dtype=np.float64)
    if arr.ndim != 1 or arr.size == 0:
        raise InvalidInputError(f"Frame must be a non-empty 1-D array, got shape {arr.shape}")
    return arr


@lru_cache(maxsize=4)
def dft_basis(n_samples: int) -> tuple[np.ndarray, np.ndarray]:
    """Read-only (cos, sin) matrices of shape (N/2, N) for the direct transform."""
    k = np.arange(n_samples // 2)[:, np.newaxis]
    n = np.arange(n_samples)[np.newaxis, :]
    phi = 2.0 * np.pi * k * n / n_samples

    cos, sin = np.cos(phi), np.sin(phi)
    cos.setflags(write=False)
    sin.setflags(write=False)
    return cos, sin


def dft_magnitudes(frame: np.ndarray) -> np.ndarray:
    """Direct O(N^2) discrete Fourier transform magnitudes.

    For each bin k in [0, N/2):
        re = sum(x[n] * cos(2*pi*k*n / N))
        im = -sum(x[n] * sin(2*pi*k*n / N))

    Kept as the reference the fast path is checked against.
    """
    x = _as_frame(frame)
    cos, sin = dft_basis(x.size)

    re = cos @ x
    im = -(sin @ x)
    return np.sqrt(re * re + im * im)


def fft_magnitudes(frame: np.ndarray) -> np.ndarray:
    """Same bins as dft_magnitudes(), computed with numpy's real FFT."""
    x = _as_frame(frame)
    spectrum = np.fft.rfft(x)[: x.size // 2]
    return np.abs(spectrum)


def magnitude_spectrum(frame: np.ndarray, method: SpectrumMethod = "fft") -> np.ndarray:
    """Magnitude spectrum of a (pre-windowed) frame.

    Args:
        frame: 1-D frame of N samples
        method: "fft" (fast) or "dft" (direct reference transform)

    Returns:
        N/2 non-negative magnitudes indexed by frequency bin
    """
    if method == "fft":
        return fft_magnitudes(frame)
    if method == "dft":
        return dft_magnitudes(frame)
    raise ValueError(f"Unknown spectrum method: {method!r}")


def centroid_bin(spectrum: np.ndarray) -> float:
    """Magnitude-weighted mean bin index of a spectrum."""
    mags = np.asarray(spectrum, dtype=np.float64)
    bins = np.arange(mags.size)
    num = float(np.dot(bins, mags))
    den = CENTROID_EPSILON + float(mags.sum())
    return num / den


def spectral_centroid(spectrum: np.ndarray, sample_rate: int, frame_size: int) -> float:
    """Spectral centroid in Hz.

    A silent frame yields 0 Hz rather than dividing by zero.

    Args:
        spectrum: Magnitudes from magnitude_spectrum()
        sample_rate: Sample rate of the source waveform (Hz)
        frame_size: Length of the frame the spectrum came from

    Returns:
        Centroid frequency in Hz
    """
    return centroid_bin(spectrum) * (sample_rate / frame_size)
