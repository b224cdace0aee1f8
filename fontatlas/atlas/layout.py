"""Atlas layout planner: grid size and image size of a font atlas."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from fontatlas.errors import AtlasConfigurationError
from fontatlas.image_data import ImageData

# Space added to the largest glyph size so that neighbouring glyphs
# do not bleed into each other under linear filtering.
ANTI_EDGE_CROPPING_MARGIN = 3

# Rows added on top of the near-square grid.
EXTRA_ATLAS_ROWS = 1


@dataclass(frozen=True)
class AtlasMetrics:
    width: int
    height: int
    rows: int
    columns: int
    cell_width: int
    cell_height: int

    @property
    def capacity(self) -> int:
        return self.rows * self.columns


def grid_size(glyph_count: int) -> int:
    """
    Rows (and columns) of the square grid for glyph_count glyphs.

    ceil(sqrt(count)), bumped to the next even number when odd, plus
    EXTRA_ATLAS_ROWS.
    """
    n = math.ceil(math.sqrt(glyph_count))
    if n % 2 != 0:
        n += 1
    return n + EXTRA_ATLAS_ROWS


def plan_atlas(glyph_images: Mapping[str, ImageData]) -> AtlasMetrics:
    """Compute the atlas grid and pixel size for the given glyph images."""
    if not glyph_images:
        raise AtlasConfigurationError(
            "Cannot plan a font atlas without glyph images; the rasterizer produced nothing usable."
        )

    cell_width = max(img.width for img in glyph_images.values()) + ANTI_EDGE_CROPPING_MARGIN
    cell_height = max(img.height for img in glyph_images.values()) + ANTI_EDGE_CROPPING_MARGIN

    rows = grid_size(len(glyph_images))
    columns = rows

    return AtlasMetrics(
        width=cell_width * columns,
        height=cell_height * rows,
        rows=rows,
        columns=columns,
        cell_width=cell_width,
        cell_height=cell_height,
    )
