"""onnxruntime session construction."""

import logging
from pathlib import Path
from typing import List, Union

import onnxruntime

logger = logging.getLogger(__name__)


def select_providers(use_gpu: bool = False, use_tensorrt: bool = False) -> List:
    """Execution providers in preference order; CPU is always last."""
    available = set(onnxruntime.get_available_providers())
    wanted = []
    if use_tensorrt:
        wanted.append(("TensorrtExecutionProvider", {}))
    if use_gpu:
        wanted.append(("CUDAExecutionProvider", {"cudnn_conv_algo_search": "DEFAULT"}))

    providers = [p for p in wanted if p[0] in available]
    if len(providers) < len(wanted):
        logger.warning("Requested accelerator not available, falling back to CPU")
    return providers + ["CPUExecutionProvider"]


def open_session(model_path: Union[str, Path], use_gpu: bool = False,
                 use_tensorrt: bool = False) -> onnxruntime.InferenceSession:
    model_path = Path(model_path)
    if not model_path.is_file():
        raise FileNotFoundError(f"ONNX model not found: {model_path}")
    return onnxruntime.InferenceSession(
        str(model_path),
        providers=select_providers(use_gpu, use_tensorrt),
    )
