"""
Main Pipeline for Scene Text Recognition
Orchestrates region detection, deduplication, region preparation, OCR and
text normalization
"""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import cv2
import numpy as np
from PIL import Image

from .config import DetectorConfig
from .errors import InputError, RegionRecognitionError
from .geometry import Rect
from .modules.detection import RegionDetector, remove_duplicates
from .modules.regions import covers_most_of, create_text_areas
from .modules.text import (
    CharacterRecognizer,
    create_recognizer,
    dedupe_words,
    filter_text,
    join_fragments,
)

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, np.ndarray, Image.Image]

# Detectors are cached per configuration and shared between pipelines
_model_lock = threading.Lock()
_detectors = {}


def get_detector(config: DetectorConfig) -> RegionDetector:
    """Return the cached detector for ``config``, creating it on first use."""
    with _model_lock:
        if config not in _detectors:
            logger.info("Loading region detector...")
            _detectors[config] = RegionDetector(config)
        return _detectors[config]


@dataclass
class RegionResult:
    """Outcome of recognizing one prepared region."""
    index: int
    rect: Optional[Rect]  # None when the whole image was recognized
    raw_text: str = ""
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ReadResult:
    """Everything produced by one recognition call."""
    text: str
    rects: List[Rect] = field(default_factory=list)
    regions: List[RegionResult] = field(default_factory=list)
    whole_image: bool = False
    raw_rect_count: int = 0


class SceneTextPipeline:
    """
    Complete pipeline for reading text from a photo or scan

    Workflow:
    1. Region Detection (ER filters) - candidate text rectangles
    2. Deduplication - drop nested and overlapping rectangles
    3. Region preparation - Otsu-binarized crops, or the whole image in
       grayscale when the rectangles cover most of it
    4. Recognition (Tesseract or ONNX) - raw text per region
    5. Normalization - filter characters, collapse whitespace, join
    """

    def __init__(
        self,
        detector_config: Optional[DetectorConfig] = None,
        recognizer: Optional[CharacterRecognizer] = None,
        backend: str = "tesseract",
        unique_words: bool = False,
        detector: Optional[RegionDetector] = None,
    ):
        """
        Initialize pipeline

        Args:
            detector_config: Classifier paths and ER filter parameters
            recognizer: OCR engine; built from ``backend`` if None
            backend: Recognizer backend name (tesseract, onnx)
            unique_words: Collapse repeated words in the final text
            detector: Pre-built detector, bypasses the shared cache
        """
        self.detector_config = detector_config or DetectorConfig()
        self.recognizer = recognizer or create_recognizer(backend)
        self.unique_words = unique_words
        self._detector = detector

    @property
    def detector(self) -> RegionDetector:
        if self._detector is None:
            self._detector = get_detector(self.detector_config)
        return self._detector

    @staticmethod
    def load_image(source: ImageSource) -> np.ndarray:
        """
        Decode ``source`` into a BGR (or grayscale) ndarray

        Raises:
            InputError: Empty path, or an empty/undecodable image
        """
        if isinstance(source, (str, Path)):
            # Path("") normalizes to "."
            if not str(source) or Path(source) == Path("."):
                raise InputError("bad file name")
            image = cv2.imread(str(source))
        elif isinstance(source, Image.Image):
            image = np.array(source.convert("RGB"))
            image = image[:, :, ::-1].copy()  # RGB to BGR
        else:
            image = source

        if not isinstance(image, np.ndarray) or image.size == 0:
            raise InputError("failed to load image")
        return image

    def read(self, source: ImageSource) -> ReadResult:
        """
        Recognize text in an image

        Args:
            source: Image path, BGR ndarray or PIL Image

        Returns:
            ReadResult with the final text and per-region details
        """
        image = self.load_image(source)

        # Step 1: Detect candidate rectangles
        raw_rects = self.detector.detect(image)
        if not raw_rects:
            return ReadResult(text="")

        # Step 2: Remove nested and overlapping rectangles
        rects = remove_duplicates(raw_rects)
        logger.info("Kept %d of %d rectangles after deduplication", len(rects), len(raw_rects))

        # Step 3: Prepare images for recognition
        whole_image = covers_most_of(image, rects)
        areas = create_text_areas(image, rects)
        area_rects = [None] if whole_image else list(rects)

        # Step 4 + 5: Recognize and normalize
        regions = self._recognize_areas(areas, area_rects)
        text = join_fragments(region.text for region in regions)
        if self.unique_words:
            text = dedupe_words(text)

        return ReadResult(
            text=text,
            rects=rects,
            regions=regions,
            whole_image=whole_image,
            raw_rect_count=len(raw_rects),
        )

    def get_text(self, source: ImageSource) -> str:
        """Recognized text, empty string when nothing was found."""
        return self.read(source).text

    def _recognize_areas(self, areas: List[np.ndarray], rects: List[Optional[Rect]]) -> List[RegionResult]:
        ocr = self.recognizer
        ocr.init()

        results = []
        try:
            for index, (area, rect) in enumerate(zip(areas, rects)):
                try:
                    raw_text = ocr.recognize(area)
                except RegionRecognitionError as e:
                    logger.debug("Region %d skipped: %s", index, e)
                    results.append(RegionResult(index=index, rect=rect, error=str(e)))
                else:
                    results.append(RegionResult(
                        index=index,
                        rect=rect,
                        raw_text=raw_text,
                        text=filter_text(raw_text),
                    ))
                ocr.clear()
        finally:
            ocr.end()

        return results

    def __repr__(self):
        return (
            f"SceneTextPipeline(\n"
            f"  detector={self._detector or self.detector_config},\n"
            f"  recognizer={self.recognizer},\n"
            f"  unique_words={self.unique_words}\n"
            f")"
        )


def get_text(source: ImageSource, **kwargs) -> str:
    """One-shot helper: build a pipeline with ``kwargs`` and read ``source``."""
    return SceneTextPipeline(**kwargs).get_text(source)
