"""
Preview image generator: draws the deduplicated rectangles and the text
recognized in each of them on top of the source image.

Built entirely with Pillow.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .geometry import Rect

logger = logging.getLogger(__name__)

_BOX_COLOR: Tuple[int, int, int] = (56, 142, 60)      # green
_FAILED_COLOR: Tuple[int, int, int] = (211, 47, 47)   # red
_FILL_ALPHA = 40
_BORDER_WIDTH = 2
_MAX_LABEL_CHARS = 40


def _truncate(text: str, max_chars: int = _MAX_LABEL_CHARS) -> str:
    text = text.replace("\n", " ").strip()
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def _load_font(size: int) -> ImageFont.ImageFont:
    """Try to load a reasonable font; fall back to default bitmap font."""
    candidates = [
        "/System/Library/Fonts/Helvetica.ttc",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/TTF/DejaVuSans.ttf",
    ]
    for path in candidates:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    return ImageFont.load_default()


def _to_pil(image: np.ndarray) -> Image.Image:
    if image.ndim == 2:
        return Image.fromarray(image).convert("RGB")
    return Image.fromarray(np.ascontiguousarray(image[:, :, 2::-1]))  # BGR(A) to RGB


def draw_rectangles(
    image: np.ndarray,
    rects: Sequence[Rect],
    texts: Optional[Sequence[Optional[str]]] = None,
) -> Image.Image:
    """Draw rectangles (and optional labels) on a copy of ``image``.

    Args:
        image: Source image as BGR or grayscale ndarray
        rects: Rectangles to outline
        texts: One label per rectangle; None marks a failed region

    Returns:
        Annotated RGB PIL image
    """
    base = _to_pil(image).convert("RGBA")
    overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    font = _load_font(14)

    for idx, rect in enumerate(rects):
        label = texts[idx] if texts is not None and idx < len(texts) else ""
        color = _FAILED_COLOR if label is None else _BOX_COLOR
        x1, y1, x2, y2 = rect.as_bbox()

        draw.rectangle([x1, y1, x2, y2], fill=(*color, _FILL_ALPHA))
        for i in range(_BORDER_WIDTH):
            draw.rectangle([x1 + i, y1 + i, x2 - i, y2 - i], outline=(*color, 220))

        if label:
            draw.text((x1 + 2, max(0, y1 - 16)), _truncate(label), fill=(*color, 255), font=font)

    return Image.alpha_composite(base, overlay).convert("RGB")


def save_preview(result, image: np.ndarray, output_path: str) -> None:
    """Write an annotated preview for a ``ReadResult``.

    When the whole image was recognized in one piece every rectangle is
    drawn without a label.
    """
    texts: Optional[List[Optional[str]]] = None
    if not result.whole_image:
        texts = [region.text if region.ok else None for region in result.regions]

    draw_rectangles(image, result.rects, texts).save(output_path)
    logger.info("Preview saved to: %s", output_path)
