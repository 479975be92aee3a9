from .normalizer import ALLOWED_CHARS, dedupe_words, filter_text, join_fragments
from .recognizer import (
    CharacterRecognizer,
    OnnxRecognizer,
    TesseractRecognizer,
    create_recognizer,
)

__all__ = [
    "ALLOWED_CHARS",
    "CharacterRecognizer",
    "OnnxRecognizer",
    "TesseractRecognizer",
    "create_recognizer",
    "dedupe_words",
    "filter_text",
    "join_fragments",
]
