"""
Scene Text Recognition Library
Finds text regions in images, cleans up the candidate rectangles and reads
them with an OCR engine
"""

from .config import DetectorConfig
from .errors import (
    DetectorInitError,
    DetectorRuntimeError,
    InputError,
    RecognizerInitError,
    RegionRecognitionError,
    SceneTextError,
)
from .geometry import Rect
from .modules.detection import RegionDetector, remove_duplicates
from .modules.regions import create_text_areas
from .modules.text import (
    CharacterRecognizer,
    OnnxRecognizer,
    TesseractRecognizer,
    dedupe_words,
    filter_text,
)
from .pipeline import ReadResult, RegionResult, SceneTextPipeline, get_text

__version__ = "0.1.0"
__all__ = [
    'SceneTextPipeline',
    'ReadResult',
    'RegionResult',
    'get_text',
    'DetectorConfig',
    'Rect',
    'RegionDetector',
    'remove_duplicates',
    'create_text_areas',
    'CharacterRecognizer',
    'TesseractRecognizer',
    'OnnxRecognizer',
    'filter_text',
    'dedupe_words',
    'SceneTextError',
    'InputError',
    'DetectorInitError',
    'DetectorRuntimeError',
    'RecognizerInitError',
    'RegionRecognitionError',
]
