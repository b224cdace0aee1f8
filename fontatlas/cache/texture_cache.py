"""GPU texture cache for font atlases."""

from __future__ import annotations

import os
import threading
from typing import TYPE_CHECKING, Dict

from fontatlas import log
from fontatlas.cache.font_atlas_data_cache import FontKey
from fontatlas.cache.item_cache import ItemCache
from fontatlas.texture import Texture

if TYPE_CHECKING:
    from fontatlas.cache.font_atlas_data_cache import FontAtlasDataCache
    from fontatlas.graphics.base import GraphicsBackend


class FontTextureCache(ItemCache[FontKey, Texture]):
    """
    Caches atlas textures per (font file path, size).

    Uses the same key as FontAtlasDataCache. Unloading a key disposes the
    texture and unloads the atlas data of that key as well.
    """

    def __init__(self, atlas_data_cache: "FontAtlasDataCache", graphics: "GraphicsBackend"):
        self._atlas_data_cache = atlas_data_cache
        self._graphics = graphics
        self._textures: Dict[FontKey, Texture] = {}
        self._lock = threading.RLock()
        self._disposed = False

    @property
    def total_cached_items(self) -> int:
        with self._lock:
            return len(self._textures)

    def get_item(self, cache_key: FontKey) -> Texture:
        if self._disposed:
            raise RuntimeError("FontTextureCache has been disposed.")

        with self._lock:
            texture = self._textures.get(cache_key)
            if texture is not None and not texture.is_disposed:
                return texture

        # Built outside the map lock; the atlas cache serializes per key.
        atlas_image, _ = self._atlas_data_cache.get_item(cache_key)

        with self._lock:
            texture = self._textures.get(cache_key)
            if texture is not None and not texture.is_disposed:
                return texture
            if texture is not None:
                # Disposed behind our back: build a fresh one.
                del self._textures[cache_key]

            file_path, size = cache_key
            handle = self._graphics.create_texture(
                atlas_image.pixels,
                atlas_image.size,
                channels=4,
                mipmap=False,
                clamp=True,
            )
            name = os.path.splitext(os.path.basename(file_path))[0]
            texture = Texture(
                name=f"{name}|{size}",
                file_path=file_path,
                width=atlas_image.width,
                height=atlas_image.height,
                handle=handle,
                is_pooled=True,
            )
            self._textures[cache_key] = texture
            return texture

    def unload(self, cache_key: FontKey) -> None:
        with self._lock:
            texture = self._textures.pop(cache_key, None)
        if texture is not None:
            texture.is_pooled = False
            texture.dispose()
        self._atlas_data_cache.unload(cache_key)
        log.debug(f"[FontTextureCache] Unloaded {cache_key}")

    def dispose(self) -> None:
        if self._disposed:
            return
        with self._lock:
            items = list(self._textures.items())
            self._textures.clear()
        for key, texture in items:
            texture.is_pooled = False
            texture.dispose()
            self._atlas_data_cache.unload(key)
        self._disposed = True
