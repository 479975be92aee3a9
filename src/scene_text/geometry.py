"""
Axis-aligned rectangle geometry used by the detection and cropping stages.

Coordinates follow OpenCV's ``cv::Rect`` conventions: ``(x, y)`` is the
top-left corner, ``br`` is one past the last pixel, and point containment is
half-open (``x <= px < x + width``).
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Rect:
    """Integer rectangle: top-left corner plus width/height."""
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative rectangle size: {self.width}x{self.height}")

    @classmethod
    def from_xywh(cls, xywh: Sequence[int]) -> "Rect":
        x, y, w, h = (int(v) for v in xywh)
        return cls(x, y, w, h)

    @classmethod
    def from_corners(cls, x1: int, y1: int, x2: int, y2: int) -> "Rect":
        return cls(int(x1), int(y1), int(x2) - int(x1), int(y2) - int(y1))

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    @property
    def tl(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def br(self) -> Tuple[int, int]:
        return (self.x2, self.y2)

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains_point(self, point: Tuple[int, int]) -> bool:
        px, py = point
        return self.x <= px < self.x2 and self.y <= py < self.y2

    def contains(self, other: "Rect") -> bool:
        """True when both corners of ``other`` lie inside this rectangle.

        Because ``br`` is exclusive, a rectangle never contains an exact
        copy of itself.
        """
        return self.contains_point(other.tl) and self.contains_point(other.br)

    def intersection(self, other: "Rect") -> Optional["Rect"]:
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.x2, other.x2)
        y2 = min(self.y2, other.y2)
        if x2 <= x1 or y2 <= y1:
            return None
        return Rect(x1, y1, x2 - x1, y2 - y1)

    def intersection_area(self, other: "Rect") -> int:
        inter = self.intersection(other)
        return 0 if inter is None else inter.area

    def clip(self, width: int, height: int) -> "Rect":
        """Clip to an image of the given size; may yield a zero-area rect."""
        x1 = min(max(self.x, 0), width)
        y1 = min(max(self.y, 0), height)
        x2 = min(max(self.x2, x1), width)
        y2 = min(max(self.y2, y1), height)
        return Rect(x1, y1, x2 - x1, y2 - y1)

    def as_xywh(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)

    def as_bbox(self) -> List[int]:
        """[x1, y1, x2, y2] form used for drawing."""
        return [self.x, self.y, self.x2, self.y2]


def total_area(rects: Iterable[Rect]) -> int:
    return sum(r.area for r in rects)
