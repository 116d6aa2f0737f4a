"""Exceptions raised by genrescope."""


class GenrescopeError(Exception):
    """Base class for all genrescope errors."""


class InvalidInputError(GenrescopeError, ValueError):
    """The waveform (or a frame derived from it) cannot be analyzed.

    Raised for missing or empty sample data, a non-positive sample rate,
    and waveforms too short to yield a single analysis frame.
    """


class ModelUnavailableError(GenrescopeError, RuntimeError):
    """The external prediction model could not be loaded or invoked.

    Also raised when the model answers with an output of unexpected shape.
    Callers recover by falling back to the heuristic classifier.
    """
