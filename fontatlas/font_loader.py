"""Loads font content for rendering text."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Tuple

from fontatlas import log
from fontatlas.cache.font_atlas_data_cache import FontAtlasDataCache, FontKey
from fontatlas.cache.texture_cache import FontTextureCache
from fontatlas.errors import LoadFontException
from fontatlas.font import Font
from fontatlas.font_spec import FontSpec
from fontatlas.font_stats import FontStatsService
from fontatlas.freetype_service import FontService
from fontatlas.path_resolver import FontPathResolver, find_system_font

if TYPE_CHECKING:
    from fontatlas.graphics.base import GraphicsBackend


def parse_font_name(name: str) -> Tuple[str, int | None]:
    """
    Split a load request into content name and size.

    "Roboto|18" -> ("Roboto", 18); "Roboto" -> ("Roboto", None). A size that
    is not a positive integer is ignored.
    """
    if "|" in name and not name.startswith("|") and not name.endswith("|"):
        content_name, size_text = name.split("|", 1)
        try:
            size = int(size_text)
        except ValueError:
            return content_name, None
        return content_name, size if size > 0 else None
    return name, None


class FontLoader:
    """
    Loads fonts from a content directory and pools them per (path, size).

    Fonts handed out are pooled: callers must not dispose them, they are
    released through unload() or dispose().
    """

    def __init__(
        self,
        font_service: FontService,
        atlas_data_cache: FontAtlasDataCache,
        texture_cache: FontTextureCache,
        path_resolver: FontPathResolver,
        use_system_fallback: bool = True,
        font_stats_service: FontStatsService | None = None,
    ):
        self._font_service = font_service
        self._atlas_data_cache = atlas_data_cache
        self._texture_cache = texture_cache
        self._path_resolver = path_resolver
        self._use_system_fallback = use_system_fallback
        self._font_stats_service = font_stats_service
        self._fonts: Dict[FontKey, Font] = {}
        self._lock = threading.Lock()
        self._owns_services = False
        self._disposed = False

    @classmethod
    def create(cls, content_dir: str | Path, graphics: "GraphicsBackend", dpi: int = 72) -> "FontLoader":
        """Build a loader together with the services and caches it owns."""
        font_service = FontService(dpi=dpi)
        atlas_data_cache = FontAtlasDataCache(font_service)
        texture_cache = FontTextureCache(atlas_data_cache, graphics)
        loader = cls(
            font_service,
            atlas_data_cache,
            texture_cache,
            FontPathResolver(content_dir),
            font_stats_service=FontStatsService(font_service, content_dir),
        )
        loader._owns_services = True
        return loader

    @property
    def total_loaded_fonts(self) -> int:
        with self._lock:
            return len(self._fonts)

    def load(self, name: str) -> Font:
        """
        Load a font by content name, optionally with a size: "Roboto|18".

        Without a size the one from the font's spec file is used.
        """
        if self._disposed:
            raise RuntimeError("FontLoader has been disposed.")

        content_name, size = parse_font_name(name)
        file_path = self._resolve_file_path(content_name)
        if size is None:
            size = FontSpec.for_font_file(file_path).size
        key: FontKey = (file_path, size)

        with self._lock:
            font = self._fonts.get(key)
            if font is not None and not font.is_disposed:
                return font

        font = self._create_font(content_name, key)

        with self._lock:
            existing = self._fonts.get(key)
            if existing is not None and not existing.is_disposed:
                # Another thread finished first.
                font.dispose()
                return existing
            font.is_pooled = True
            self._fonts[key] = font
        return font

    def unload(self, name: str) -> None:
        """
        Unload a font. Without a size every loaded size of the font goes.

        The atlas texture and atlas data of each unloaded size are released.
        """
        content_name, size = parse_font_name(name)
        try:
            file_path = self._resolve_file_path(content_name)
        except LoadFontException:
            return

        with self._lock:
            keys = [k for k in self._fonts if k[0] == file_path and (size is None or k[1] == size)]
            fonts = [(k, self._fonts.pop(k)) for k in keys]

        for key, font in fonts:
            self._release(key, font)

    def dispose(self) -> None:
        if self._disposed:
            return
        with self._lock:
            fonts = list(self._fonts.items())
            self._fonts.clear()
        for key, font in fonts:
            self._release(key, font)
        if self._owns_services:
            self._texture_cache.dispose()
            self._font_service.dispose()
        self._disposed = True

    def _release(self, key: FontKey, font: Font) -> None:
        font.is_pooled = False
        font.dispose()
        self._texture_cache.unload(key)
        log.debug(f"[FontLoader] Unloaded font '{font.name}' at size {font.size}")

    def _resolve_file_path(self, content_name: str) -> str:
        file_path = self._path_resolver.resolve_file_path(content_name)
        if file_path is not None:
            return file_path

        if self._use_system_fallback:
            system_font = find_system_font()
            if system_font is not None:
                log.info(f"[FontLoader] Font '{content_name}' not found, falling back to system font {system_font}")
                return os.path.abspath(system_font)

        raise LoadFontException(
            f"The font '{content_name}' could not be found in '{self._path_resolver.resolve_dir_path()}'."
        )

    def _create_font(self, content_name: str, key: FontKey) -> Font:
        file_path, size = key
        texture = self._texture_cache.get_item(key)
        _, metrics = self._atlas_data_cache.get_item(key)

        face = self._font_service.create_font_face(file_path)
        try:
            self._font_service.set_font_size(face, size)
            name = os.path.splitext(os.path.basename(content_name))[0]
            return Font(
                texture, self._font_service, face, metrics, name, file_path, size, self._font_stats_service
            )
        except BaseException:
            self._font_service.done_face(face)
            raise

    def loaded_fonts(self) -> List[Font]:
        with self._lock:
            return list(self._fonts.values())
