"""
Recognizer weights fetched on demand from the HuggingFace hub.

The ER classifiers used by the region detector are not managed here; they
are local files configured through ``DetectorConfig``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

WEIGHTS_REPO = "hpllduck/PaperStructure"


@dataclass(frozen=True)
class WeightSet:
    """Files that together make up one ONNX recognizer."""
    name: str
    model: str       # ONNX graph, path inside the repo
    dictionary: str  # one character per line

    def files(self) -> Dict[str, str]:
        return {"model": self.model, "dictionary": self.dictionary}


PPOCR_V5 = WeightSet(
    name="ppocr_v5",
    model="paddle_ocr/rec.onnx",
    dictionary="paddle_ocr/ppocrv5_dict.txt",
)

WEIGHT_SETS: Dict[str, WeightSet] = {PPOCR_V5.name: PPOCR_V5}


class WeightStore:
    """Maps a weight set name to local file paths, downloading missing files."""

    def __init__(self, repo_id: str = WEIGHTS_REPO, weight_sets: Optional[Dict[str, WeightSet]] = None):
        self.repo_id = repo_id
        self.weight_sets = WEIGHT_SETS if weight_sets is None else weight_sets

    def lookup(self, name: str) -> WeightSet:
        try:
            return self.weight_sets[name]
        except KeyError:
            known = ", ".join(sorted(self.weight_sets))
            raise KeyError(f"Unknown weight set '{name}'. Known: {known}") from None

    def fetch(self, name: str) -> Dict[str, Path]:
        """Local paths for every file of ``name``; downloads on a cache miss."""
        from huggingface_hub import hf_hub_download

        paths = {}
        for role, filename in self.lookup(name).files().items():
            logger.debug("Fetching %s from %s", filename, self.repo_id)
            paths[role] = Path(hf_hub_download(self.repo_id, filename))
        return paths

    def is_cached(self, name: str) -> bool:
        """True when every file of ``name`` is already in the local hub cache."""
        from huggingface_hub import try_to_load_from_cache

        return all(
            isinstance(try_to_load_from_cache(self.repo_id, filename), str)
            for filename in self.lookup(name).files().values()
        )


weights = WeightStore()
