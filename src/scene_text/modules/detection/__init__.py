from .dedup import remove_duplicates, remove_nested, resolve_overlaps
from .detector import RegionDetector

__all__ = [
    "RegionDetector",
    "remove_duplicates",
    "remove_nested",
    "resolve_overlaps",
]
