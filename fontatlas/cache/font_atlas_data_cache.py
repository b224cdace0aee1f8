"""
Font atlas data cache.

Rasterizes the supported characters of a font at a size, packs them into one
atlas image and keeps the result per (font file path, size).
"""

from __future__ import annotations

import os
import threading
from typing import TYPE_CHECKING, Dict, Tuple

from fontatlas import log
from fontatlas.atlas.builder import build_glyph_images
from fontatlas.atlas.compositor import composite
from fontatlas.atlas.layout import plan_atlas
from fontatlas.cache.item_cache import ItemCache
from fontatlas.charset import AVAILABLE_GLYPH_CHARACTERS
from fontatlas.image_data import ImageData
from fontatlas.metrics import GlyphMetrics

if TYPE_CHECKING:
    from fontatlas.freetype_service import FontService

FontKey = Tuple[str, int]
FontAtlasData = Tuple[ImageData, Tuple[GlyphMetrics, ...]]


class _Entry:
    __slots__ = ("lock", "value")

    def __init__(self):
        self.lock = threading.Lock()
        self.value: FontAtlasData | None = None


class FontAtlasDataCache(ItemCache[FontKey, FontAtlasData]):
    """
    Caches (atlas image, glyph metrics) per (font file path, size).

    The atlas for a key is built at most once, also when several threads ask
    for it at the same time: the first caller builds while the others wait on
    the entry lock and then read the stored result. Requests for different
    keys only share the short critical section that looks up the entry.

    unload() drops the in-memory data for the key; the next request rebuilds
    it. GPU textures made from the data belong to FontTextureCache.
    """

    def __init__(self, font_service: "FontService"):
        self._font_service = font_service
        self._entries: Dict[FontKey, _Entry] = {}
        self._lock = threading.Lock()

    @property
    def total_cached_items(self) -> int:
        with self._lock:
            return sum(1 for e in self._entries.values() if e.value is not None)

    def contains(self, cache_key: FontKey) -> bool:
        with self._lock:
            entry = self._entries.get(cache_key)
            return entry is not None and entry.value is not None

    def get_item(self, cache_key: FontKey) -> FontAtlasData:
        while True:
            with self._lock:
                entry = self._entries.get(cache_key)
                if entry is None:
                    entry = _Entry()
                    self._entries[cache_key] = entry

            with entry.lock:
                if entry.value is not None:
                    log.debug(f"[FontAtlasDataCache] Cache hit for {cache_key}")
                    return entry.value

                with self._lock:
                    current = self._entries.get(cache_key) is entry
                if not current:
                    # The previous builder failed or the key was unloaded
                    # while we waited; start over with the live entry.
                    continue

                try:
                    entry.value = self._create_atlas(cache_key)
                except BaseException:
                    with self._lock:
                        if self._entries.get(cache_key) is entry:
                            del self._entries[cache_key]
                    raise
                return entry.value

    def unload(self, cache_key: FontKey) -> None:
        with self._lock:
            entry = self._entries.pop(cache_key, None)
        if entry is not None:
            log.debug(f"[FontAtlasDataCache] Unloaded {cache_key}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _create_atlas(self, cache_key: FontKey) -> FontAtlasData:
        file_path, size = cache_key
        if not file_path:
            raise ValueError("The font file path argument must not be empty.")
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"The file '{file_path}' does not exist.")

        log.info(f"[FontAtlasDataCache] Building atlas for '{file_path}' at size {size}")

        service = self._font_service
        face = service.create_font_face(file_path)
        try:
            service.set_font_size(face, size)
            glyph_indices = service.get_glyph_indices(face, AVAILABLE_GLYPH_CHARACTERS)
            glyph_images = build_glyph_images(service, face, glyph_indices)
            glyph_metrics = service.create_glyph_metrics(face, glyph_indices)
        finally:
            service.done_face(face)

        atlas = plan_atlas(glyph_images)
        metrics, atlas_image = composite(glyph_images, glyph_metrics, atlas)

        log.info(
            f"[FontAtlasDataCache] Atlas for '{file_path}' at size {size}: "
            f"{atlas.width}x{atlas.height}, {atlas.rows}x{atlas.columns} cells, {len(glyph_images)} glyphs"
        )
        return atlas_image, tuple(metrics.values())
