"""
FreeType glyph rasterizer adapter.

Wraps freetype-py behind the small set of operations the atlas builder and
the text measurement code need. All values handed out are whole pixels:
FreeType reports 26.6 fixed point numbers which are shifted right by 6.
"""

from __future__ import annotations

import threading
from ctypes import byref
from enum import IntFlag
from pathlib import Path
from typing import Dict, Iterable

import freetype
import numpy as np
from freetype.ft_errors import FT_Exception
from freetype.ft_structs import FT_Vector
from freetype.raw import FT_Get_Kerning

from fontatlas import log
from fontatlas.errors import GlyphRasterizationError, LoadFontException
from fontatlas.metrics import GlyphMetrics


class FontStyle(IntFlag):
    REGULAR = 0
    ITALIC = 1
    BOLD = 2


class FreeTypeLibrary:
    """
    Explicitly owned handle to the FreeType library.

    freetype-py keeps one library instance per process and creates faces
    against it. This object ties that instance to an owner so that face
    creation after shutdown() fails loudly.
    """

    def __init__(self):
        self._handle = freetype.get_handle()
        self._lock = threading.Lock()

    @property
    def is_shutdown(self) -> bool:
        return self._handle is None

    def ensure_alive(self) -> None:
        if self._handle is None:
            raise RuntimeError("The FreeType library has been shut down.")

    def shutdown(self) -> None:
        with self._lock:
            self._handle = None


class FaceHandle:
    """
    A loaded font face plus the lock that serializes access to it.

    FreeType faces are not thread safe; every operation that loads a glyph
    or changes the size takes the lock.
    """

    def __init__(self, face: "freetype.Face", file_path: str):
        self.face = face
        self.file_path = file_path
        self.lock = threading.RLock()

    @property
    def is_done(self) -> bool:
        return self.face is None

    def _require_face(self) -> "freetype.Face":
        if self.face is None:
            raise RuntimeError(f"The font face for '{self.file_path}' has been released.")
        return self.face

    def __repr__(self) -> str:
        return f"FaceHandle({self.file_path!r})"


class FontService:
    """
    Provides helpers over the FreeType library.

    Args:
        library: Library handle to create faces with. A new one is created
            (and owned) when omitted.
        dpi: Horizontal and vertical resolution used when setting the
            character size. At 72 dpi one point is one pixel.
    """

    def __init__(self, library: FreeTypeLibrary | None = None, dpi: int = 72):
        self._owns_library = library is None
        self._library = library or FreeTypeLibrary()
        self.dpi = dpi
        self._disposed = False

    @property
    def library(self) -> FreeTypeLibrary:
        return self._library

    def create_font_face(self, font_file_path: str | Path) -> FaceHandle:
        """Load the face stored in the given font file."""
        self._library.ensure_alive()
        path = str(font_file_path)
        try:
            face = freetype.Face(path)
        except (FT_Exception, OSError) as e:
            raise LoadFontException(f"Failed to create a font face from '{path}': {e}") from e
        return FaceHandle(face, path)

    def done_face(self, handle: FaceHandle) -> None:
        """Release the face. The handle becomes unusable."""
        with handle.lock:
            handle.face = None

    def set_font_size(self, handle: FaceHandle, size: int) -> None:
        if size <= 0:
            raise ValueError(f"The font size must be larger than 0, got {size}.")
        with handle.lock:
            face = handle._require_face()
            try:
                face.set_char_size(size << 6, size << 6, self.dpi, self.dpi)
            except FT_Exception as e:
                raise LoadFontException(
                    f"Failed to set size {size} for font '{handle.file_path}': {e}"
                ) from e

    def get_glyph_indices(self, handle: FaceHandle, glyph_chars: Iterable[str] | None) -> Dict[str, int]:
        """Map every character to its glyph index (0 when the face lacks it)."""
        if glyph_chars is None:
            return {}
        with handle.lock:
            face = handle._require_face()
            return {ch: int(face.get_char_index(ch)) for ch in glyph_chars}

    def create_glyph_image(self, handle: FaceHandle, glyph_char: str, glyph_index: int) -> tuple[bytes, int, int]:
        """
        Render one glyph.

        Returns:
            (pixel_data, width, height) where pixel_data is 8-bit grayscale
            coverage, top row first, width * height bytes.
        """
        with handle.lock:
            face = handle._require_face()
            try:
                face.load_glyph(glyph_index, freetype.FT_LOAD_RENDER)
            except FT_Exception as e:
                raise GlyphRasterizationError(glyph_char, str(e)) from e

            bitmap = face.glyph.bitmap
            width = int(bitmap.width)
            height = int(bitmap.rows)
            pitch = int(bitmap.pitch)
            buffer = bitmap.buffer

        if width == 0 or height == 0:
            return b"", width, height

        rows = np.array(buffer, dtype=np.uint8).reshape(height, abs(pitch))[:, :width]
        if pitch < 0:
            # Negative pitch: bitmap rows are stored bottom-up.
            rows = rows[::-1]
        return rows.tobytes(), width, height

    def create_glyph_metrics(self, handle: FaceHandle, glyph_indices: Dict[str, int]) -> Dict[str, GlyphMetrics]:
        """Collect the typographic metrics of every glyph at the current size."""
        result: Dict[str, GlyphMetrics] = {}
        with handle.lock:
            face = handle._require_face()
            size_metrics = face.size
            bbox = face.bbox
            for ch, index in glyph_indices.items():
                try:
                    face.load_glyph(index, freetype.FT_LOAD_DEFAULT)
                except FT_Exception as e:
                    log.warn(f"[FontService] No metrics for glyph {ch!r} in '{handle.file_path}': {e}")
                    result[ch] = GlyphMetrics(glyph=ch, char_index=index)
                    continue

                m = face.glyph.metrics
                result[ch] = GlyphMetrics(
                    glyph=ch,
                    char_index=index,
                    horizontal_advance=m.horiAdvance >> 6,
                    hori_bearing_x=m.horiBearingX >> 6,
                    hori_bearing_y=m.horiBearingY >> 6,
                    ascender=size_metrics.ascender >> 6,
                    descender=size_metrics.descender >> 6,
                    glyph_width=m.width >> 6,
                    glyph_height=m.height >> 6,
                    x_min=bbox.xMin >> 6,
                    x_max=bbox.xMax >> 6,
                    y_min=bbox.yMin >> 6,
                    y_max=bbox.yMax >> 6,
                )
        return result

    def has_kerning(self, handle: FaceHandle) -> bool:
        with handle.lock:
            return bool(handle._require_face().has_kerning)

    def get_kerning(self, handle: FaceHandle, left_glyph_index: int, right_glyph_index: int) -> float:
        """
        Horizontal kerning between two glyph indices in pixels.

        Returns 0 when the face has no kerning table, either index is 0 or
        FreeType reports an error (logged).
        See https://freetype.org/freetype2/docs/glyphs/glyphs-4.html#section-1
        """
        if left_glyph_index == 0 or right_glyph_index == 0:
            return 0.0
        with handle.lock:
            face = handle._require_face()
            if not face.has_kerning:
                return 0.0
            delta = FT_Vector(0, 0)
            error = FT_Get_Kerning(
                face._FT_Face,
                left_glyph_index,
                right_glyph_index,
                freetype.FT_KERNING_DEFAULT,
                byref(delta),
            )
            if error:
                log.warn(
                    f"[FontService] Kerning lookup ({left_glyph_index}, {right_glyph_index}) "
                    f"failed in '{handle.file_path}': {FT_Exception(error)}"
                )
                return 0.0
            return float(delta.x >> 6)

    def get_font_scaled_line_spacing(self, handle: FaceHandle) -> float:
        """Baseline-to-baseline distance at the current size."""
        with handle.lock:
            return handle._require_face().size.height / 64.0

    def get_family_name(self, handle: FaceHandle) -> str:
        with handle.lock:
            name = handle._require_face().family_name
        if isinstance(name, bytes):
            return name.decode("utf-8", errors="replace")
        return name or ""

    def get_font_style(self, handle: FaceHandle) -> FontStyle:
        with handle.lock:
            flags = int(handle._require_face().style_flags)
        return FontStyle(flags & (FontStyle.ITALIC | FontStyle.BOLD))

    def dispose(self) -> None:
        if self._disposed:
            return
        if self._owns_library:
            self._library.shutdown()
        self._disposed = True
