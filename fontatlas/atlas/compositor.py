"""Atlas compositor: places glyph images on the atlas grid and draws them."""

from __future__ import annotations

from typing import Dict, Mapping, Tuple

from fontatlas.atlas.layout import AtlasMetrics
from fontatlas.image_data import ImageData
from fontatlas.metrics import GlyphMetrics, Rect


def set_glyph_bounds(
    glyph_images: Mapping[str, ImageData],
    glyph_metrics: Mapping[str, GlyphMetrics],
    atlas: AtlasMetrics,
) -> Dict[str, GlyphMetrics]:
    """
    Assign every glyph image a grid cell and record it in the metrics.

    Cells are filled left to right, top to bottom, in glyph_images order.
    Images and metrics are joined by character: the image map has no entry
    for space (and for glyphs that failed to render) while the metrics do,
    so those keep their zero bounds.

    Returns:
        New metrics map with the same keys and order as glyph_metrics.
    """
    result = dict(glyph_metrics)

    cell_x = 0
    cell_y = 0
    for ch, image in glyph_images.items():
        bounds = Rect(
            cell_x * atlas.cell_width,
            cell_y * atlas.cell_height,
            image.width,
            image.height,
        )
        metric = result.get(ch)
        if metric is None:
            metric = GlyphMetrics(glyph=ch)
        result[ch] = metric.with_bounds(bounds)

        cell_x += 1
        if cell_x >= atlas.columns:
            cell_x = 0
            cell_y += 1

    return result


def composite(
    glyph_images: Mapping[str, ImageData],
    glyph_metrics: Mapping[str, GlyphMetrics],
    atlas: AtlasMetrics,
) -> Tuple[Dict[str, GlyphMetrics], ImageData]:
    """
    Build the atlas image.

    Glyph bounds use a top-left origin. The returned pixels are flipped
    vertically afterwards because OpenGL textures start at the bottom row:
    row 0 of the result is the bottom row of the laid out atlas.
    """
    metrics = set_glyph_bounds(glyph_images, glyph_metrics, atlas)

    canvas = ImageData.empty(atlas.width, atlas.height)
    for ch, image in glyph_images.items():
        bounds = metrics[ch].glyph_bounds
        canvas.draw(image, (bounds.x, bounds.y))

    return metrics, canvas.flipped_vertically()
