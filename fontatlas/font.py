"""Font - a font at one size, ready for text measurement and rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Sequence, Tuple

from fontatlas.charset import AVAILABLE_GLYPH_CHARACTERS, INVALID_CHARACTER
from fontatlas.errors import PooledDisposalException
from fontatlas.font_stats import ALL_STYLES
from fontatlas.freetype_service import FontStyle
from fontatlas.metrics import GlyphMetrics

if TYPE_CHECKING:
    from fontatlas.font_stats import FontStats, FontStatsService
    from fontatlas.freetype_service import FaceHandle, FontService
    from fontatlas.texture import Texture

# Stands in for characters the font does not have: no advance, no bounds.
_EMPTY_GLYPH = GlyphMetrics(glyph="")


class Font:
    """
    A font with a particular size that can be used to render text.

    Args:
        texture: Atlas texture holding the bitmaps of all available glyphs.
            None when the font is only used for measuring.
        font_service: Rasterizer adapter, used for kerning lookups.
        face: Face of the font file with the character size already set.
            The font releases it on dispose().
        glyph_metrics: Metrics of every glyph including its atlas bounds.
        name: Content name of the font.
        file_path: Path of the font file.
        size: Font size.
        font_stats_service: Looks up the other styles of the font's family.
            Without it only the font's own style is reported as available.
    """

    def __init__(
        self,
        texture: "Texture | None",
        font_service: "FontService",
        face: "FaceHandle",
        glyph_metrics: Iterable[GlyphMetrics],
        name: str,
        file_path: str,
        size: int,
        font_stats_service: "FontStatsService | None" = None,
    ):
        self.font_texture_atlas = texture
        self._font_service = font_service
        self._face = face
        self._metrics: Tuple[GlyphMetrics, ...] = tuple(glyph_metrics)
        self._metrics_by_glyph = {m.glyph: m for m in self._metrics}
        self._invalid_glyph = self._metrics_by_glyph.get(INVALID_CHARACTER) or GlyphMetrics(
            glyph=INVALID_CHARACTER
        )

        self.name = name
        self.file_path = file_path
        self.size = size
        self.family_name: str = font_service.get_family_name(face)
        self.style: FontStyle = font_service.get_font_style(face)
        self.line_spacing: float = font_service.get_font_scaled_line_spacing(face)
        self.has_kerning: bool = font_service.has_kerning(face)

        self._font_stats_service = font_stats_service
        self._family_stats: "Tuple[FontStats, ...] | None" = None

        self.is_pooled = False
        self._disposed = False

    @property
    def metrics(self) -> Tuple[GlyphMetrics, ...]:
        return self._metrics

    @property
    def family_stats(self) -> "Tuple[FontStats, ...]":
        """Font files of this font's family, looked up on first access."""
        if self._family_stats is None:
            if self._font_stats_service is None:
                self._family_stats = ()
            else:
                self._family_stats = self._font_stats_service.get_family_stats(self.family_name)
        return self._family_stats

    @property
    def available_styles(self) -> Tuple[FontStyle, ...]:
        """Styles installed for this font's family, the font's own style included."""
        styles = {s.style for s in self.family_stats}
        styles.add(self.style)
        return tuple(style for style in ALL_STYLES if style in styles)

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def get_available_glyph_characters(self) -> Tuple[str, ...]:
        return AVAILABLE_GLYPH_CHARACTERS

    def measure(self, text: str | None) -> Tuple[float, float]:
        """
        Size of the text when rendered with this font.

        Lines are separated by "\\n"; trailing line breaks are ignored. The
        width is the widest line. The height is one line spacing per line
        break plus the tallest glyph and the deepest descent of the last line.
        Characters the font does not have take no space.

        Returns:
            (width, height). (0, 0) for None or empty text.
        """
        if not text:
            return 0.0, 0.0

        lines = [line.rstrip("\r") for line in text.rstrip("\n").split("\n")]

        width = 0.0
        for line in lines:
            width = max(width, self._measure_line_width(self._line_glyphs(line)))

        last_glyphs = [self._metrics_by_glyph[ch] for ch in lines[-1] if ch in self._metrics_by_glyph]
        max_height = max((m.glyph_height for m in last_glyphs), default=0)
        max_descent = max((m.glyph_height - m.hori_bearing_y for m in last_glyphs), default=0)

        height = (len(lines) - 1) * self.line_spacing + max_height + max_descent
        return float(width), float(height)

    def to_glyph_metrics(self, text: str | None) -> List[GlyphMetrics]:
        """
        Metrics for every character of text.

        Characters the font does not have map to the invalid character glyph
        so a renderer always has something to draw.
        """
        if not text:
            return []
        return [self._metrics_by_glyph.get(ch, self._invalid_glyph) for ch in text]

    def get_kerning(self, left_glyph_index: int, right_glyph_index: int) -> float:
        """Kerning between two glyph indices; 0 without kerning or for index 0."""
        if not self.has_kerning or left_glyph_index == 0 or right_glyph_index == 0:
            return 0.0
        return self._font_service.get_kerning(self._face, left_glyph_index, right_glyph_index)

    def dispose(self) -> None:
        """
        Release the font face.

        Raises:
            PooledDisposalException: The font is pooled; unload it through
                the loader instead.
        """
        if self._disposed:
            return
        if self.is_pooled:
            raise PooledDisposalException(
                f"Font '{self.name}' is pooled and cannot be disposed; unload it through its loader."
            )
        self._font_service.done_face(self._face)
        self._disposed = True

    def _line_glyphs(self, line: str) -> List[GlyphMetrics]:
        return [self._metrics_by_glyph.get(ch, _EMPTY_GLYPH) for ch in line]

    def _measure_line_width(self, glyphs: Sequence[GlyphMetrics]) -> float:
        width = 0.0
        left_index = 0
        for glyph in glyphs:
            if self.has_kerning and left_index != 0 and glyph.char_index != 0:
                width += self._font_service.get_kerning(self._face, left_index, glyph.char_index)
            width += glyph.horizontal_advance
            left_index = glyph.char_index
        return width

    def __repr__(self) -> str:
        return f"Font({self.name!r}, size={self.size})"
