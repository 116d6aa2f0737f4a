"""Adapter turning an external model's raw output into a PredictionResult.

The model is an opaque capability exposing predict(vector) -> vector. Any
failure along the way (loading, invoking, unexpected output) surfaces as
ModelUnavailableError so the caller can fall back to the heuristic.
"""

from __future__ import annotations

import asyncio
import logging
import pickle
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np

from .constants import LABELS
from .errors import ModelUnavailableError
from .protocols import GenreModel, ModelProvider
from .types import PredictionResult, SummaryFeatures

logger = logging.getLogger(__name__)


class ExternalModelAdapter:
    """Normalize a GenreModel's output over a fixed label ordering."""

    def __init__(self, model: GenreModel, labels: Sequence[str] = LABELS):
        """Initialize adapter.

        Args:
            model: Loaded model; its output index i scores labels[i]
            labels: Label ordering the model was trained with
        """
        self.model = model
        self.labels = tuple(labels)

    @classmethod
    def from_provider(
        cls,
        provider: ModelProvider,
        handle: str,
        labels: Sequence[str] = LABELS,
    ) -> ExternalModelAdapter:
        """Load a model through a provider.

        Raises:
            ModelUnavailableError: If the provider fails to load the handle
        """
        try:
            model = provider.load(handle)
        except ModelUnavailableError:
            raise
        except Exception as e:
            raise ModelUnavailableError(f"Failed to load model {handle!r}: {e}") from e

        if model is None or not callable(getattr(model, "predict", None)):
            raise ModelUnavailableError(f"Provider returned no usable model for {handle!r}")

        logger.info("Model loaded from %s", handle)
        return cls(model, labels)

    def raw_output(self, features: SummaryFeatures) -> np.ndarray:
        """Invoke the model and validate its output shape.

        Returns:
            1-D float array of len(labels) entries
        """
        vector = features.as_vector()
        try:
            output = self.model.predict(vector)
        except Exception as e:
            raise ModelUnavailableError(f"Model prediction failed: {e}") from e

        try:
            values = np.asarray(output, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ModelUnavailableError(f"Model returned non-numeric output: {e}") from e

        # Accept a (1, n) batch of one
        if values.ndim == 2 and values.shape[0] == 1:
            values = values[0]

        if values.shape != (len(self.labels),):
            raise ModelUnavailableError(
                f"Model output shape {values.shape} does not match {len(self.labels)} labels"
            )
        if not np.all(np.isfinite(values)):
            raise ModelUnavailableError("Model returned NaN or infinite scores")
        if np.any(values < 0):
            raise ModelUnavailableError(f"Model returned negative scores: {values.tolist()}")

        return values

    def predict(self, features: SummaryFeatures) -> PredictionResult:
        """Score features with the model.

        Args:
            features: Summary features (not modified)

        Returns:
            PredictionResult with source "model"

        Raises:
            ModelUnavailableError: On model failure or unusable output
        """
        values = self.raw_output(features)

        total = float(values.sum())
        if total <= 0:
            raise ModelUnavailableError(f"Model scores sum to {total}, cannot normalize")

        best_idx = int(np.argmax(values))
        probs = {label: float(v) / total for label, v in zip(self.labels, values)}
        return PredictionResult(best=self.labels[best_idx], probs=probs, source="model")

    async def predict_async(self, features: SummaryFeatures) -> PredictionResult:
        """predict() on a worker thread."""
        return await asyncio.to_thread(self.predict, features)


class EstimatorModel:
    """Wrap a scikit-learn style estimator as a GenreModel.

    predict_proba() columns follow the estimator's classes (or the label
    list pickled alongside it) and are reordered into label order.
    Estimators without predict_proba() score 1.0 on the predicted label.
    Integer classes are read as indexes into the label list.
    """

    def __init__(
        self,
        estimator: Any,
        classes: Sequence[Any] | None = None,
        labels: Sequence[str] = LABELS,
    ):
        """Initialize wrapper.

        Args:
            estimator: Fitted estimator with predict() and optionally predict_proba()
            classes: Class of each predict_proba() column; defaults to estimator.classes_
            labels: Output label ordering

        Raises:
            ValueError: If the estimator's classes are not exactly the labels
        """
        self.estimator = estimator
        self.labels = tuple(labels)

        if classes is None:
            classes = getattr(estimator, "classes_", None)
        self.classes: list[str] | None = None
        self._order: list[int] | None = None

        if classes is not None:
            self.classes = [self._as_label(c) for c in classes]
            if sorted(self.classes) != sorted(self.labels):
                raise ValueError(
                    f"Model classes {self.classes} do not match labels {list(self.labels)}"
                )
            self._order = [self.classes.index(label) for label in self.labels]

    def _as_label(self, value: Any) -> str:
        if isinstance(value, (str, np.str_)):
            return str(value)
        if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            if 0 <= value < len(self.labels):
                return self.labels[int(value)]
        raise ValueError(f"Cannot map class {value!r} to a genre label")

    def predict(self, vector: Sequence[float]) -> np.ndarray:
        X = np.asarray([list(vector)], dtype=np.float64)

        if hasattr(self.estimator, "predict_proba"):
            proba = np.asarray(self.estimator.predict_proba(X))[0]
            if self._order is None:
                return proba
            if proba.shape != (len(self._order),):
                raise ValueError(f"predict_proba returned shape {proba.shape}")
            return proba[self._order]

        predicted = np.asarray(self.estimator.predict(X))[0]
        if self.classes is not None and isinstance(predicted, (int, np.integer)):
            label = self.classes[int(predicted)]
        else:
            label = self._as_label(predicted)
        if label not in self.labels:
            raise ValueError(f"Model predicted unknown label {label!r}")
        return np.array([1.0 if candidate == label else 0.0 for candidate in self.labels])


class PickleModelProvider:
    """Load models pickled to disk.

    The handle is a file path. The pickle may hold a GenreModel directly,
    a fitted estimator (wrapped in EstimatorModel), or a dict with the
    estimator under "model" and optionally its column labels under "labels".
    """

    def load(self, handle: str) -> GenreModel:
        path = Path(handle).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Model file not found: {path}")

        with open(path, "rb") as f:
            data = pickle.load(f)

        classes = None
        if isinstance(data, dict):
            if "model" not in data:
                raise ValueError(f"Model file {path} has no 'model' entry")
            classes = data.get("labels")
            data = data["model"]

        if hasattr(data, "predict_proba") or (hasattr(data, "fit") and hasattr(data, "predict")):
            return EstimatorModel(data, classes)
        if isinstance(data, GenreModel):
            return data
        raise TypeError(f"Unpickled object of type {type(data).__name__} has no predict()")
