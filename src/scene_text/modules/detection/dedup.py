"""
Rectangle deduplication.

Reduces the redundant rectangle set produced by the region detector to a set
with no nested and no overlapping rectangles. Both passes are order
dependent: which of two rectangles survives can depend on their position in
the input sequence.
"""

import logging
from typing import List, Sequence

from scene_text.geometry import Rect

logger = logging.getLogger(__name__)


def _compact(rects: Sequence[Rect], removed: List[bool]) -> List[Rect]:
    return [rect for rect, dead in zip(rects, removed) if not dead]


def remove_nested(rects: Sequence[Rect]) -> List[Rect]:
    """Drop every rectangle that lies fully inside another one.

    For each surviving outer rectangle A, later survivors B are scanned:
    if A contains B, B is dropped; if B contains A, A is dropped and the
    next survivor takes over as the outer rectangle.

    Args:
        rects: Rectangles in detector order

    Returns:
        New list, input order preserved
    """
    n = len(rects)
    removed = [False] * n

    for i in range(n):
        if removed[i]:
            continue
        outer = rects[i]
        for j in range(i + 1, n):
            if removed[j]:
                continue
            inner = rects[j]
            if outer.contains(inner):
                removed[j] = True
                continue
            if inner.contains(outer):
                removed[i] = True
                break

    return _compact(rects, removed)


def resolve_overlaps(rects: Sequence[Rect]) -> List[Rect]:
    """Resolve positive-area overlaps by keeping the larger rectangle.

    On equal area the earlier rectangle survives. When the outer rectangle
    loses, the next survivor becomes the outer one and scans its own
    successors.

    Args:
        rects: Rectangles in detector order

    Returns:
        New list, input order preserved
    """
    n = len(rects)
    removed = [False] * n

    for i in range(n):
        if removed[i]:
            continue
        outer = rects[i]
        for j in range(i + 1, n):
            if removed[j]:
                continue
            inner = rects[j]
            if outer.intersection_area(inner) == 0:
                continue
            if outer.area >= inner.area:
                removed[j] = True
            else:
                removed[i] = True
                break

    return _compact(rects, removed)


def remove_duplicates(rects: Sequence[Rect]) -> List[Rect]:
    """Containment removal followed by overlap resolution.

    The result has no rectangle contained in another and no two rectangles
    with positive-area overlap. Running it again on its own output is a
    no-op.
    """
    if len(rects) < 2:
        return list(rects)

    not_nested = remove_nested(rects)
    result = resolve_overlaps(not_nested)

    logger.debug(
        "Deduplicated rectangles: %d -> %d (nested pass) -> %d (overlap pass)",
        len(rects), len(not_nested), len(result),
    )
    return result
