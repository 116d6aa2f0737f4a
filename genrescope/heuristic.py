"""Fixed linear scorer mapping summary features to genre probabilities.

The weights are illustrative, not tuned. Each label gets a linear score over
the normalized centroid, RMS and ZCR; scores are shifted to be non-negative
if needed, then normalized to sum to ~1.
"""

from __future__ import annotations

from .constants import LABELS, NORMALIZE_EPSILON
from .types import PredictionResult, SummaryFeatures


def score(features: SummaryFeatures) -> dict[str, float]:
    """Raw (unshifted, unnormalized) score per label, in LABELS order."""
    c = features.centroid
    rms = features.rms
    zcr = features.zcr

    return {
        "rock": 1.0 * c + 1.5 * rms + 0.8 * zcr,
        "classical": 1.2 * (1 - c) + 1.0 * (1 - zcr) + 0.6 * rms,
        "hiphop": 0.6 * c + 2.0 * rms + 1.2 * zcr,
        "jazz": 0.3 * (1 - c) + 0.9 * rms + 0.6 * zcr,
    }


def shift_non_negative(scores: dict[str, float]) -> dict[str, float]:
    """Raise every score by |min| when the minimum is negative."""
    lowest = min(scores.values())
    if lowest >= 0:
        return dict(scores)
    return {label: value - lowest for label, value in scores.items()}


def normalize(scores: dict[str, float]) -> dict[str, float]:
    """Divide each score by (total + epsilon)."""
    total = sum(scores.values()) + NORMALIZE_EPSILON
    return {label: value / total for label, value in scores.items()}


def best_label(probs: dict[str, float]) -> str:
    """Highest-probability label; the earliest label wins a tie."""
    best = None
    best_value = float("-inf")
    for label, value in probs.items():
        if value > best_value:
            best, best_value = label, value
    return best


class HeuristicClassifier:
    """Default classifier used when no external model is available."""

    labels = LABELS

    def predict(self, features: SummaryFeatures) -> PredictionResult:
        """Classify summary features.

        Args:
            features: Output of FrameFeatureExtractor.extract()

        Returns:
            PredictionResult with source "heuristic"
        """
        probs = normalize(shift_non_negative(score(features)))
        return PredictionResult(best=best_label(probs), probs=probs, source="heuristic")

    __call__ = predict
