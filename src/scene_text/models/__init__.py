"""Weight management for the ONNX recognizer backend."""

from .weights import PPOCR_V5, WEIGHT_SETS, WEIGHTS_REPO, WeightSet, WeightStore, weights

__all__ = ["WeightStore", "WeightSet", "weights", "PPOCR_V5", "WEIGHT_SETS", "WEIGHTS_REPO"]
