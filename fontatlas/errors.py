"""Exception types raised by fontatlas."""

from __future__ import annotations


class LoadFontException(Exception):
    """A font could not be loaded (face creation failed, font not resolvable)."""


class GlyphRasterizationError(LoadFontException):
    """A single glyph could not be rendered by the rasterizer."""

    def __init__(self, glyph: str, message: str):
        super().__init__(f"Failed to rasterize glyph {glyph!r}: {message}")
        self.glyph = glyph


class AtlasConfigurationError(ValueError):
    """The atlas cannot be planned from the given glyph images."""


class PooledDisposalException(Exception):
    """Raised when a pooled (shared) object is disposed directly."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "The item is pooled and cannot be disposed. Unload it through the owning cache or loader."
        )
