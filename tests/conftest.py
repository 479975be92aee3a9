"""Shared fakes for the external collaborators (detector, OCR engine)."""

import numpy as np
import pytest

from scene_text.errors import RegionRecognitionError
from scene_text.modules.text import CharacterRecognizer


class FakeDetector:
    """Returns a fixed rectangle list and records every call."""

    def __init__(self, rects=None, error=None):
        self.rects = list(rects or [])
        self.error = error
        self.calls = []

    def detect(self, image):
        self.calls.append(image)
        if self.error is not None:
            raise self.error
        return list(self.rects)


class FakeRecognizer(CharacterRecognizer):
    """Returns queued outputs; an exception instance in the queue is raised."""

    def __init__(self, outputs=None, init_error=None):
        self.outputs = list(outputs or [])
        self.init_error = init_error
        self.areas = []
        self.init_calls = 0
        self.clear_calls = 0
        self.end_calls = 0

    def init(self):
        self.init_calls += 1
        if self.init_error is not None:
            raise self.init_error

    def recognize(self, area):
        self.areas.append(area)
        output = self.outputs.pop(0) if self.outputs else ""
        if isinstance(output, Exception):
            raise output
        return output

    def clear(self):
        self.clear_calls += 1

    def end(self):
        self.end_calls += 1


@pytest.fixture
def blank_image():
    """100x100 BGR image."""
    return np.zeros((100, 100, 3), dtype=np.uint8)


@pytest.fixture
def region_failure():
    return RegionRecognitionError("engine returned an error")
