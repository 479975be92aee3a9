from .materializer import binarize, covers_most_of, create_text_areas, crop, to_grayscale

__all__ = [
    "binarize",
    "covers_most_of",
    "create_text_areas",
    "crop",
    "to_grayscale",
]
