"""
Region Materializer
Turns the deduplicated rectangles into single-channel images for the OCR engine
"""

import logging
from typing import List, Sequence

import cv2
import numpy as np

from scene_text.geometry import Rect, total_area

logger = logging.getLogger(__name__)

MAX_CHANNEL = 255
# Ignored by THRESH_OTSU, which computes its own threshold
_OTSU_SEED = 127.5


def to_grayscale(image: np.ndarray) -> np.ndarray:
    if image.size == 0:
        return np.zeros(image.shape[:2], dtype=np.uint8)
    if image.ndim == 2:
        return image.copy()
    if image.shape[2] == 1:
        return image[:, :, 0].copy()
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def binarize(gray: np.ndarray) -> np.ndarray:
    """Global Otsu threshold against the maximum channel value."""
    if gray.size == 0:
        return gray
    _, bw = cv2.threshold(gray, _OTSU_SEED, MAX_CHANNEL, cv2.THRESH_OTSU)
    return bw


def covers_most_of(image: np.ndarray, rects: Sequence[Rect]) -> bool:
    """True when the rectangles sum to at least half the image area."""
    height, width = image.shape[:2]
    return total_area(rects) >= (width * height) // 2


def crop(image: np.ndarray, rect: Rect) -> np.ndarray:
    height, width = image.shape[:2]
    r = rect.clip(width, height)
    return image[r.y:r.y2, r.x:r.x2]


def create_text_areas(image: np.ndarray, rects: Sequence[Rect]) -> List[np.ndarray]:
    """
    Create prepared images for recognition

    When the rectangles cover most of the image a single grayscale copy of
    the whole image is returned; otherwise each rectangle is cropped,
    converted to grayscale and binarized.

    Args:
        image: Source image (BGR, BGRA or grayscale)
        rects: Deduplicated rectangles

    Returns:
        List of single-channel uint8 images
    """
    if covers_most_of(image, rects):
        logger.info("Rectangles cover most of the image, recognizing it whole")
        return [to_grayscale(image)]

    return [binarize(to_grayscale(crop(image, rect))) for rect in rects]
