"""CTC decoding for the ONNX text recognizer."""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np


class CTCLabelDecode:
    """Greedy CTC decoder over a character dictionary."""

    def __init__(self, character_dict_path: Optional[Union[str, Path]] = None, use_space_char: bool = False):
        """Initialize CTC decoder.

        Args:
            character_dict_path: One character per line; lowercase
                alphanumerics when None
            use_space_char: Append space to the vocabulary
        """
        if character_dict_path is None:
            characters = list("0123456789abcdefghijklmnopqrstuvwxyz")
        else:
            text = Path(character_dict_path).read_text(encoding="utf-8")
            characters = [line.rstrip("\r") for line in text.split("\n") if line.rstrip("\r")]
            if use_space_char:
                characters.append(" ")

        # Index 0 is the CTC blank
        self.character = ["blank"] + characters

    def __call__(self, preds: np.ndarray) -> List[Tuple[str, float]]:
        """Decode predictions of shape [batch, time, num_classes]."""
        if isinstance(preds, (tuple, list)):
            preds = preds[-1]
        return self.decode(preds.argmax(axis=2), preds.max(axis=2))

    def decode(self, text_index: np.ndarray, text_prob: np.ndarray) -> List[Tuple[str, float]]:
        results = []
        for indices, probs in zip(text_index, text_prob):
            selection = np.ones(len(indices), dtype=bool)
            selection[1:] = indices[1:] != indices[:-1]
            selection &= indices != 0

            text = "".join(self.character[i] for i in indices[selection])
            conf = probs[selection]
            results.append((text, float(np.mean(conf)) if len(conf) else 0.0))
        return results
