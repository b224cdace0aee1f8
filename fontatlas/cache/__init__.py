"""Caches for font atlas data and atlas textures."""

from fontatlas.cache.item_cache import ItemCache
from fontatlas.cache.font_atlas_data_cache import FontAtlasData, FontAtlasDataCache, FontKey
from fontatlas.cache.texture_cache import FontTextureCache

__all__ = ["ItemCache", "FontAtlasData", "FontAtlasDataCache", "FontKey", "FontTextureCache"]
