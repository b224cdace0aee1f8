"""Glyph image builder: rasterized glyph bitmaps as white RGBA images."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from fontatlas import log
from fontatlas.charset import SPACE
from fontatlas.errors import GlyphRasterizationError
from fontatlas.image_data import ImageData

if TYPE_CHECKING:
    from fontatlas.freetype_service import FaceHandle, FontService


def build_glyph_images(
    font_service: "FontService",
    face: "FaceHandle",
    glyph_indices: Dict[str, int],
) -> Dict[str, ImageData]:
    """
    Create an image for every glyph that has a visual representation.

    The space character is skipped; it still gets metrics, just no image.
    A glyph the rasterizer fails on is logged and left out, so it ends up
    with empty atlas bounds.

    Args:
        font_service: Rasterizer adapter.
        face: Face to render with, size already set.
        glyph_indices: Glyph index per character.

    Returns:
        Image per character, in glyph_indices order.
    """
    result: Dict[str, ImageData] = {}

    for ch, index in glyph_indices.items():
        if ch == SPACE:
            continue

        try:
            pixel_data, width, height = font_service.create_glyph_image(face, ch, index)
            result[ch] = ImageData.from_grayscale(pixel_data, width, height)
        except (GlyphRasterizationError, ValueError) as e:
            log.warn(f"[GlyphImageBuilder] Skipping glyph {ch!r}: {e}")

    return result
