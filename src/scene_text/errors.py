"""Exceptions raised by the scene text pipeline."""

from typing import Optional


class SceneTextError(Exception):
    """Base class for every error surfaced to callers of the pipeline."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class InputError(SceneTextError):
    """Empty path, or an image that is empty or failed to decode."""
    pass


class DetectorInitError(SceneTextError):
    """Classifier files missing/malformed or ER filters could not be built."""
    pass


class DetectorRuntimeError(SceneTextError):
    """Failure inside channel decomposition, filtering or grouping."""
    pass


class RecognizerInitError(SceneTextError):
    """The OCR engine or its language model could not be initialized."""
    pass


class RegionRecognitionError(SceneTextError):
    """A single prepared region yielded no usable text.

    The pipeline catches this and skips the region.
    """
    pass
