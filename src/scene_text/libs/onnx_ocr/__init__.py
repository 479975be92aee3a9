"""CTC text recognition on onnxruntime, used by the ``onnx`` OCR backend."""

from .config import RecognizerConfig
from .session import open_session, select_providers
from .text_recognizer import TextRecognizer

__all__ = ["RecognizerConfig", "TextRecognizer", "open_session", "select_providers"]
