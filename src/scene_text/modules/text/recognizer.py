"""
Text Recognition Module
OCR backends that turn one prepared region image into raw text
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
import pytesseract
from onnxruntime.capi.onnxruntime_pybind11_state import Fail, InvalidArgument

from scene_text.errors import RecognizerInitError, RegionRecognitionError
from scene_text.libs.onnx_ocr import RecognizerConfig, TextRecognizer
from scene_text.models import WeightStore, weights

logger = logging.getLogger(__name__)


class CharacterRecognizer(ABC):
    """
    Interface for OCR engines used by the pipeline

    Lifecycle: ``init()`` once before the first region, ``recognize()`` and
    ``clear()`` for every region, ``end()`` after the last one.
    """

    @abstractmethod
    def init(self) -> None:
        """Load the language model; raise RecognizerInitError on failure."""
        raise NotImplementedError

    @abstractmethod
    def recognize(self, area: np.ndarray) -> str:
        """Return raw text for one region; raise RegionRecognitionError on failure."""
        raise NotImplementedError

    def clear(self) -> None:
        """Reset per-region state."""

    def end(self) -> None:
        """Release resources."""


class TesseractRecognizer(CharacterRecognizer):
    """
    Tesseract OCR via pytesseract

    The engine is stateless between calls, so ``clear()`` has nothing to
    reset.
    """

    def __init__(
        self,
        language: str = "eng",
        psm: Optional[int] = None,
        oem: Optional[int] = None,
        timeout: float = 0,
    ):
        """
        Args:
            language: Tesseract language code(s), e.g. "eng" or "eng+deu"
            psm: Page segmentation mode (engine default if None)
            oem: OCR engine mode (engine default if None)
            timeout: Seconds per region, 0 for no limit
        """
        self.language = language
        self.psm = psm
        self.oem = oem
        self.timeout = timeout
        self._ready = False

    @property
    def tesseract_config(self) -> str:
        parts = []
        if self.psm is not None:
            parts.append(f"--psm {self.psm}")
        if self.oem is not None:
            parts.append(f"--oem {self.oem}")
        return " ".join(parts)

    def init(self) -> None:
        try:
            version = pytesseract.get_tesseract_version()
            available = pytesseract.get_languages(config="")
        except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError) as e:
            raise RecognizerInitError(f"could not initialize tesseract ocr: {e}", cause=e) from e

        missing = [lang for lang in self.language.split("+") if lang not in available]
        if missing:
            raise RecognizerInitError(
                f"could not initialize tesseract ocr: language(s) not installed: {', '.join(missing)}"
            )

        logger.debug("Tesseract %s ready (lang=%s)", version, self.language)
        self._ready = True

    def recognize(self, area: np.ndarray) -> str:
        if not self._ready:
            raise RecognizerInitError("tesseract recognizer used before init()")
        if area.size == 0:
            return ""

        try:
            return pytesseract.image_to_string(
                area,
                lang=self.language,
                config=self.tesseract_config,
                timeout=self.timeout,
            )
        except (pytesseract.TesseractError, RuntimeError) as e:
            # pytesseract signals a timeout with RuntimeError
            raise RegionRecognitionError(f"tesseract failed on region: {e}", cause=e) from e

    def end(self) -> None:
        self._ready = False

    def __repr__(self):
        return f"TesseractRecognizer(lang={self.language})"


class OnnxRecognizer(CharacterRecognizer):
    """
    CTC recognizer on ONNX Runtime

    Weights come from the HuggingFace weight store unless explicit paths are
    given.
    """

    def __init__(
        self,
        model_path: Optional[Union[str, Path]] = None,
        char_dict_path: Optional[Union[str, Path]] = None,
        config: Optional[RecognizerConfig] = None,
        weight_store: Optional[WeightStore] = None,
        weight_set: str = "ppocr_v5",
    ):
        self.model_path = model_path
        self.char_dict_path = char_dict_path
        self.config = config or RecognizerConfig()
        self.weight_store = weight_store or weights
        self.weight_set = weight_set
        self._recognizer: Optional[TextRecognizer] = None

    def init(self) -> None:
        model_path, char_dict_path = self.model_path, self.char_dict_path
        try:
            if model_path is None:
                paths = self.weight_store.fetch(self.weight_set)
                model_path = paths["model"]
                char_dict_path = char_dict_path or paths["dictionary"]
            self._recognizer = TextRecognizer(model_path, char_dict_path, self.config)
        except (OSError, KeyError, Fail, InvalidArgument) as e:
            raise RecognizerInitError(f"could not initialize onnx recognizer: {e}", cause=e) from e
        logger.debug("ONNX recognizer ready: %s", self._recognizer)

    def recognize(self, area: np.ndarray) -> str:
        if self._recognizer is None:
            raise RecognizerInitError("onnx recognizer used before init()")

        try:
            text, _ = self._recognizer(area)
        except (Fail, InvalidArgument, cv2.error) as e:
            raise RegionRecognitionError(f"onnx inference failed on region: {e}", cause=e) from e
        return text

    def end(self) -> None:
        self._recognizer = None

    def __repr__(self):
        return f"OnnxRecognizer(model={self.model_path or self.weight_set})"


BACKENDS = {
    "tesseract": TesseractRecognizer,
    "onnx": OnnxRecognizer,
}


def create_recognizer(backend: str = "tesseract", **kwargs) -> CharacterRecognizer:
    """Instantiate a recognizer backend by name."""
    if backend not in BACKENDS:
        raise ValueError(f"Unknown recognizer backend: {backend}. Available: {list(BACKENDS)}")
    return BACKENDS[backend](**kwargs)
