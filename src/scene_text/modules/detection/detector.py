"""
Region Detection Module
Finds candidate text rectangles with OpenCV's Neumann-Matas ER filters
(opencv-contrib ``cv2.text``)
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import numpy as np

from scene_text.config import DetectorConfig
from scene_text.errors import DetectorInitError, DetectorRuntimeError
from scene_text.geometry import Rect

logger = logging.getLogger(__name__)


class RegionDetector:
    """
    Text region detection using the two-stage ER cascade and erGrouping

    Each channel (the NM channels plus their inverted copies) is filtered
    and grouped independently; the per-channel rectangles are flattened in
    channel order.
    """

    def __init__(self, config: Optional[DetectorConfig] = None):
        """
        Initialize region detector

        Args:
            config: Classifier locations and filter parameters

        Raises:
            DetectorInitError: If a classifier file does not exist
        """
        self.config = config or DetectorConfig()

        for name, path in self.config.classifier_paths.items():
            if not Path(path).is_file():
                raise DetectorInitError(f"Classifier not found ({name}): {path}")

    def detect(self, image: np.ndarray) -> List[Rect]:
        """
        Detect text rectangles in image

        Args:
            image: BGR (or BGRA / grayscale) uint8 image

        Returns:
            Rectangles from every channel, possibly overlapping; empty
            when the image has no text
        """
        image = _as_bgr(image)
        channels = self.compute_channels(image)

        if self.config.parallel and len(channels) > 1:
            # ER filters are stateful, so every worker builds its own pair
            with ThreadPoolExecutor() as executor:
                per_channel = list(executor.map(
                    lambda channel: self._detect_channel(image, channel, self._create_filters()),
                    channels,
                ))
        else:
            filters = self._create_filters()
            per_channel = [self._detect_channel(image, channel, filters) for channel in channels]

        rects = [rect for group in per_channel for rect in group]
        logger.info("Detected %d candidate rectangles in %d channels", len(rects), len(channels))
        return rects

    def compute_channels(self, image: np.ndarray) -> List[np.ndarray]:
        """NM channels plus inverted copies of all but the last one."""
        try:
            channels = list(cv2.text.computeNMChannels(image))
        except cv2.error as e:
            raise DetectorRuntimeError(f"channel decomposition failed: {e}", cause=e) from e

        max_channel = self.config.max_channel
        for c in range(len(channels) - 1):
            channels.append(max_channel - channels[c])
        return channels

    def _create_filters(self) -> Tuple[object, object]:
        cfg = self.config
        try:
            er_filter1 = cv2.text.createERFilterNM1(
                cv2.text.loadClassifierNM1(cfg.classifier_nm1),
                cfg.threshold_delta,
                cfg.min_area,
                cfg.max_area,
                cfg.min_probability,
                cfg.non_max_suppression,
                cfg.min_probability_diff,
            )
            er_filter2 = cv2.text.createERFilterNM2(
                cv2.text.loadClassifierNM2(cfg.classifier_nm2),
                cfg.min_probability_nm2,
            )
        except cv2.error as e:
            raise DetectorInitError(f"could not create external region filters: {e}", cause=e) from e

        if er_filter1 is None or er_filter2 is None:
            raise DetectorInitError("could not create external region filters")
        return er_filter1, er_filter2

    def _detect_channel(self, image: np.ndarray, channel: np.ndarray, filters) -> List[Rect]:
        er_filter1, er_filter2 = filters
        try:
            regions = cv2.text.detectRegions(channel, er_filter1, er_filter2)
            if len(regions) == 0:
                return []
            groups = cv2.text.erGrouping(
                image,
                channel,
                [r.tolist() for r in regions],
                cv2.text.ERGROUPING_ORIENTATION_ANY,
                self.config.classifier_grouping,
                self.config.grouping_min_probability,
            )
        except cv2.error as e:
            raise DetectorRuntimeError(f"region detection failed: {e}", cause=e) from e

        return [Rect.from_xywh(r) for r in np.asarray(groups).reshape(-1, 4)]

    def __repr__(self):
        return f"RegionDetector(classifiers={self.config.classifier_nm1}, parallel={self.config.parallel})"


def _as_bgr(image: np.ndarray) -> np.ndarray:
    """computeNMChannels expects a 3-channel image."""
    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image
