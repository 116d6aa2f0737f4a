"""Genrescope - lightweight genre guessing from decoded audio.

Extracts a handful of summary features from a mono waveform (spectral
centroid, RMS energy, zero-crossing rate) and maps them onto a small fixed
genre taxonomy, either with a built-in heuristic scorer or with an external
prediction model supplied by the caller.

Callers apply a configuration with:

    config = load_config()
    setup_logging(config.logging)
    result, features = analyze(waveform, config=config)
"""

__version__ = "0.1.0"

from .config import GenrescopeConfig, load_config
from .errors import GenrescopeError, InvalidInputError, ModelUnavailableError
from .external_model import ExternalModelAdapter, PickleModelProvider
from .features import FrameFeatureExtractor
from .framing import Framer
from .heuristic import HeuristicClassifier
from .logger import setup_logging
from .pipeline import analyze, analyze_async, classify, classify_async, extract_features
from .types import LABELS, PredictionResult, SummaryFeatures, Waveform

__all__ = [
    "LABELS",
    "ExternalModelAdapter",
    "FrameFeatureExtractor",
    "Framer",
    "GenrescopeConfig",
    "GenrescopeError",
    "HeuristicClassifier",
    "InvalidInputError",
    "ModelUnavailableError",
    "PickleModelProvider",
    "PredictionResult",
    "SummaryFeatures",
    "Waveform",
    "analyze",
    "analyze_async",
    "classify",
    "classify_async",
    "extract_features",
    "load_config",
    "setup_logging",
]
