"""Protocol definitions for pluggable prediction models.

Using Protocol (structural subtyping) lets callers hand in any object with
the right methods, whatever runtime backs it.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class GenreModel(Protocol):
    """A loaded model scoring one [centroid, rms, zcr] vector.

    The output is aligned to LABELS order.
    """

    def predict(self, vector: Sequence[float]) -> Sequence[float]: ...


@runtime_checkable
class ModelProvider(Protocol):
    """Resolves a model handle (path, URL, registry key) to a GenreModel."""

    def load(self, handle: str) -> GenreModel: ...
