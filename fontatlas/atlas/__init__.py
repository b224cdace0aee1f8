"""Font atlas building blocks."""

from fontatlas.atlas.builder import build_glyph_images
from fontatlas.atlas.compositor import composite, set_glyph_bounds
from fontatlas.atlas.layout import (
    ANTI_EDGE_CROPPING_MARGIN,
    EXTRA_ATLAS_ROWS,
    AtlasMetrics,
    grid_size,
    plan_atlas,
)

__all__ = [
    "ANTI_EDGE_CROPPING_MARGIN",
    "EXTRA_ATLAS_ROWS",
    "AtlasMetrics",
    "build_glyph_images",
    "composite",
    "grid_size",
    "plan_atlas",
    "set_glyph_bounds",
]
