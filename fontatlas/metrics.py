"""Glyph metrics and atlas rectangles."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Rect:
    """Axis-aligned integer rectangle with a top-left origin."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def intersects(self, other: "Rect") -> bool:
        """True if the two rectangles share any pixel."""
        if self.is_empty or other.is_empty:
            return False
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def contains(self, other: "Rect") -> bool:
        """True if other lies fully inside this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


@dataclass(frozen=True)
class GlyphMetrics:
    """
    Metrics of a single glyph for rendering purposes.

    All typographic values are whole pixels (26.6 rasterizer values shifted
    right by 6).

    Attributes:
        glyph: The character.
        char_index: Rasterizer glyph index. 0 means "undefined character code".
        glyph_bounds: Location of the glyph inside the atlas image, top-left
            origin. Zero until the atlas has been composited.
        horizontal_advance: Distance to move the pen after drawing the glyph.
        hori_bearing_x: Pen position to the left edge of the glyph bitmap.
        hori_bearing_y: Baseline to the top edge of the glyph bitmap.
        ascender: Face ascender at the current size.
        descender: Face descender at the current size (negative below baseline).
        glyph_width: Width of the glyph outline.
        glyph_height: Height of the glyph outline.
        x_min, x_max, y_min, y_max: Face bounding box.
    """

    glyph: str
    char_index: int = 0
    glyph_bounds: Rect = field(default_factory=Rect)
    horizontal_advance: int = 0
    hori_bearing_x: int = 0
    hori_bearing_y: int = 0
    ascender: int = 0
    descender: int = 0
    glyph_width: int = 0
    glyph_height: int = 0
    x_min: int = 0
    x_max: int = 0
    y_min: int = 0
    y_max: int = 0

    def with_bounds(self, bounds: Rect) -> "GlyphMetrics":
        """Return a copy placed at the given atlas bounds."""
        return replace(self, glyph_bounds=bounds)

    def to_dict(self) -> dict:
        b = self.glyph_bounds
        return {
            "glyph": self.glyph,
            "char_index": self.char_index,
            "bounds": [b.x, b.y, b.width, b.height],
            "horizontal_advance": self.horizontal_advance,
            "hori_bearing_x": self.hori_bearing_x,
            "hori_bearing_y": self.hori_bearing_y,
            "ascender": self.ascender,
            "descender": self.descender,
            "glyph_width": self.glyph_width,
            "glyph_height": self.glyph_height,
            "x_min": self.x_min,
            "x_max": self.x_max,
            "y_min": self.y_min,
            "y_max": self.y_max,
        }

    def __str__(self) -> str:
        return f"Name: {self.glyph} | Bounds: {self.glyph_bounds}"
