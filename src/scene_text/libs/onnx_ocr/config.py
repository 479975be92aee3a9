"""Settings for the ONNX CTC recognizer."""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class RecognizerConfig:
    # channels, height, minimum width of the network input
    input_shape: Tuple[int, int, int] = (3, 48, 320)
    use_space_char: bool = True
    use_gpu: bool = False
    use_tensorrt: bool = False
