"""
fontatlas - font atlas generation and text measurement.

Main modules:
- freetype_service - FreeType rasterizer adapter
- atlas - glyph images, atlas layout and compositing
- cache - atlas data and atlas texture caches
- font - text measurement over glyph metrics
- font_loader - loading pooled fonts from a content directory
- font_stats - installed styles of a font family
"""

from fontatlas.charset import AVAILABLE_GLYPH_CHARACTERS, INVALID_CHARACTER
from fontatlas.errors import (
    AtlasConfigurationError,
    GlyphRasterizationError,
    LoadFontException,
    PooledDisposalException,
)
from fontatlas.image_data import ImageData
from fontatlas.metrics import GlyphMetrics, Rect

__version__ = '0.1.0'

__all__ = [
    'AVAILABLE_GLYPH_CHARACTERS',
    'INVALID_CHARACTER',
    'AtlasConfigurationError',
    'GlyphRasterizationError',
    'LoadFontException',
    'PooledDisposalException',
    'ImageData',
    'GlyphMetrics',
    'Rect',
]
