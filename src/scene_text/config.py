"""Configuration classes for the region detection stage."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Union


DEFAULT_CLASSIFIER_NM1 = "trained_classifierNM1.xml"
DEFAULT_CLASSIFIER_NM2 = "trained_classifierNM2.xml"
DEFAULT_CLASSIFIER_GROUPING = "trained_classifier_erGrouping.xml"

# Directory holding the three classifier files; read by DetectorConfig.from_env()
CLASSIFIER_DIR_ENV = "SCENE_TEXT_CLASSIFIER_DIR"


@dataclass(frozen=True)
class DetectorConfig:
    """Configuration for the Neumann-Matas region detector.

    Classifier paths default to fixed file names resolved against the
    current working directory.
    """
    classifier_nm1: str = DEFAULT_CLASSIFIER_NM1  # stage 1 ER classifier
    classifier_nm2: str = DEFAULT_CLASSIFIER_NM2  # stage 2 ER classifier
    classifier_grouping: str = DEFAULT_CLASSIFIER_GROUPING  # erGrouping classifier
    threshold_delta: int = 16
    min_area: float = 0.00015
    max_area: float = 0.13
    min_probability: float = 0.2
    non_max_suppression: bool = True
    min_probability_diff: float = 0.1
    min_probability_nm2: float = 0.5
    grouping_min_probability: float = 0.5
    max_channel: int = 255  # used for polarity inversion of channels
    parallel: bool = False  # run channels on a thread pool

    @classmethod
    def from_directory(cls, directory: Union[str, Path], **kwargs) -> "DetectorConfig":
        """Build a config whose three classifiers live in ``directory``."""
        directory = Path(directory)
        return cls(
            classifier_nm1=str(directory / DEFAULT_CLASSIFIER_NM1),
            classifier_nm2=str(directory / DEFAULT_CLASSIFIER_NM2),
            classifier_grouping=str(directory / DEFAULT_CLASSIFIER_GROUPING),
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "DetectorConfig":
        """Use ``SCENE_TEXT_CLASSIFIER_DIR`` if set, else the defaults."""
        directory = os.environ.get(CLASSIFIER_DIR_ENV)
        if directory:
            return cls.from_directory(directory, **kwargs)
        return cls(**kwargs)

    def with_classifiers(self, nm1: str, nm2: str, grouping: str) -> "DetectorConfig":
        return replace(
            self,
            classifier_nm1=nm1,
            classifier_nm2=nm2,
            classifier_grouping=grouping,
        )

    @property
    def classifier_paths(self):
        return {
            "classifier_nm1": self.classifier_nm1,
            "classifier_nm2": self.classifier_nm2,
            "classifier_grouping": self.classifier_grouping,
        }
