"""
Single-region text recognition with a CTC model (PP-OCR / SVTR family)
"""

import math
from pathlib import Path
from typing import Optional, Tuple, Union

import cv2
import numpy as np

from .config import RecognizerConfig
from .postprocess import CTCLabelDecode
from .session import open_session


class TextRecognizer:
    """Runs one prepared region image through the network and decodes it."""

    def __init__(
        self,
        model_path: Union[str, Path],
        char_dict_path: Optional[Union[str, Path]] = None,
        config: Optional[RecognizerConfig] = None,
    ):
        """
        Args:
            model_path: Recognition ONNX graph
            char_dict_path: Character dictionary, one entry per line
            config: Input shape and execution providers
        """
        self.config = config or RecognizerConfig()
        self.model_path = Path(model_path)
        self.session = open_session(
            self.model_path,
            use_gpu=self.config.use_gpu,
            use_tensorrt=self.config.use_tensorrt,
        )
        self.input_name = self.session.get_inputs()[0].name
        self.decoder = CTCLabelDecode(
            character_dict_path=char_dict_path,
            use_space_char=self.config.use_space_char,
        )

    def prepare(self, area: np.ndarray) -> np.ndarray:
        """Scale ``area`` to the network height and normalize to [-1, 1].

        Binarized and grayscale regions are expanded to three channels. The
        result is right-padded with zeros to at least the configured width.
        """
        channels, height, min_width = self.config.input_shape
        if area.ndim == 2:
            area = cv2.cvtColor(area, cv2.COLOR_GRAY2BGR)

        h, w = area.shape[:2]
        scaled_w = max(1, int(math.ceil(height * w / float(h))))
        width = max(min_width, scaled_w)

        scaled = cv2.resize(area, (scaled_w, height)).astype(np.float32)
        scaled = scaled.transpose((2, 0, 1)) / 127.5 - 1.0

        tensor = np.zeros((channels, height, width), dtype=np.float32)
        tensor[:, :, :scaled_w] = scaled
        return tensor

    def __call__(self, area: np.ndarray) -> Tuple[str, float]:
        """Return ``(text, confidence)``; an empty area yields ``("", 0.0)``."""
        if area.size == 0:
            return "", 0.0

        batch = self.prepare(area)[np.newaxis]
        logits = self.session.run(None, {self.input_name: batch})[0]
        return self.decoder(logits)[0]

    def __repr__(self):
        return f"TextRecognizer(model={self.model_path.name})"
