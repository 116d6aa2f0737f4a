"""End-to-end analysis: waveform -> features -> prediction.

The external model path is tried first when a provider and handle are
given; if it fails for any reason the heuristic result is returned instead.
"""

from __future__ import annotations

import asyncio
import logging

from .config import AnalysisConfig, GenrescopeConfig
from .errors import InvalidInputError, ModelUnavailableError
from .external_model import ExternalModelAdapter
from .features import FrameFeatureExtractor
from .heuristic import HeuristicClassifier
from .protocols import ModelProvider
from .types import PredictionResult, SummaryFeatures, Waveform

logger = logging.getLogger(__name__)


def extract_features(waveform: Waveform, config: AnalysisConfig | None = None) -> SummaryFeatures:
    """Compute summary features for a waveform.

    Raises:
        InvalidInputError: If the waveform is missing or too short
    """
    return FrameFeatureExtractor(config).extract(waveform)


def _adapter_for(
    provider: ModelProvider | None,
    model_handle: str | None,
) -> ExternalModelAdapter | None:
    if provider is None or not model_handle:
        return None
    return ExternalModelAdapter.from_provider(provider, model_handle)


def classify(
    features: SummaryFeatures,
    model: ExternalModelAdapter | None = None,
) -> PredictionResult:
    """Classify features, preferring the external model when given.

    Args:
        features: Summary features
        model: Optional adapter around a loaded external model

    Returns:
        The model's prediction, or the heuristic's if the model fails
    """
    if features is None:
        raise InvalidInputError("No features to classify")

    if model is not None:
        try:
            return model.predict(features)
        except ModelUnavailableError as e:
            logger.warning("External model failed, using heuristic: %s", e)

    return HeuristicClassifier().predict(features)


def _classify_with_provider(
    features: SummaryFeatures,
    provider: ModelProvider | None,
    model_handle: str | None,
) -> PredictionResult:
    try:
        adapter = _adapter_for(provider, model_handle)
    except ModelUnavailableError as e:
        logger.warning("External model unavailable, using heuristic: %s", e)
        adapter = None
    return classify(features, adapter)


def analyze(
    waveform: Waveform,
    provider: ModelProvider | None = None,
    model_handle: str | None = None,
    config: GenrescopeConfig | None = None,
) -> tuple[PredictionResult, SummaryFeatures]:
    """Extract features and classify them.

    Args:
        waveform: Mono waveform
        provider: Model provider used to resolve model_handle
        model_handle: External model handle; falls back to config.model.handle
        config: Configuration (defaults used when None)

    Returns:
        (prediction, features) tuple; features are returned for display

    Raises:
        InvalidInputError: If the waveform cannot be analyzed
    """
    config = config or GenrescopeConfig()
    features = extract_features(waveform, config.analysis)
    handle = model_handle or config.model.handle
    return _classify_with_provider(features, provider, handle), features


async def classify_async(
    features: SummaryFeatures,
    provider: ModelProvider | None = None,
    model_handle: str | None = None,
) -> PredictionResult:
    """Load the model and classify on a worker thread.

    No timeout is applied; wrap in asyncio.wait_for() if latency matters.
    """
    if features is None:
        raise InvalidInputError("No features to classify")
    return await asyncio.to_thread(_classify_with_provider, features, provider, model_handle)


async def analyze_async(
    waveform: Waveform,
    provider: ModelProvider | None = None,
    model_handle: str | None = None,
    config: GenrescopeConfig | None = None,
) -> tuple[PredictionResult, SummaryFeatures]:
    """Async variant of analyze(); the model step runs on a worker thread."""
    config = config or GenrescopeConfig()
    features = extract_features(waveform, config.analysis)
    handle = model_handle or config.model.handle
    return await classify_async(features, provider, handle), features
