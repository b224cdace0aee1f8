"""Tests for FontTextureCache and Texture."""

import threading

import pytest

from fakes import FakeFontService, FakeGraphicsBackend, FakeTextureHandle
from fontatlas.cache import FontAtlasDataCache, FontTextureCache
from fontatlas.errors import PooledDisposalException
from fontatlas.texture import Texture


@pytest.fixture
def caches():
    service = FakeFontService()
    data_cache = FontAtlasDataCache(service)
    graphics = FakeGraphicsBackend()
    return data_cache, FontTextureCache(data_cache, graphics), graphics


class TestTexture:
    def test_dispose_deletes_handle(self):
        handle = FakeTextureHandle(None, (1, 1))
        texture = Texture("t", "t.ttf", 1, 1, handle)

        texture.dispose()

        assert handle.deleted
        assert texture.is_disposed
        with pytest.raises(RuntimeError):
            texture.bind()

    def test_pooled_texture_refuses_dispose(self):
        handle = FakeTextureHandle(None, (1, 1))
        texture = Texture("t", "t.ttf", 1, 1, handle, is_pooled=True)

        with pytest.raises(PooledDisposalException):
            texture.dispose()
        assert not handle.deleted

    def test_bind_forwards_unit(self):
        handle = FakeTextureHandle(None, (1, 1))
        Texture("t", "t.ttf", 1, 1, handle).bind(3)
        assert handle.bound_unit == 3


class TestFontTextureCache:
    def test_creates_pooled_texture_from_atlas(self, caches, font_file):
        data_cache, cache, graphics = caches

        texture = cache.get_item((font_file, 12))
        image, _ = data_cache.get_item((font_file, 12))

        assert texture.is_pooled
        assert texture.name == "Fake|12"
        assert (texture.width, texture.height) == image.size
        assert len(graphics.created) == 1
        assert graphics.created[0].size == image.size

    def test_same_key_same_texture(self, caches, font_file):
        _, cache, graphics = caches
        assert cache.get_item((font_file, 12)) is cache.get_item((font_file, 12))
        assert len(graphics.created) == 1
        assert cache.total_cached_items == 1

    def test_unload_disposes_texture_and_atlas_data(self, caches, font_file):
        data_cache, cache, graphics = caches
        texture = cache.get_item((font_file, 12))

        cache.unload((font_file, 12))

        assert texture.is_disposed
        assert graphics.created[0].deleted
        assert cache.total_cached_items == 0
        assert not data_cache.contains((font_file, 12))

    def test_reload_after_unload(self, caches, font_file):
        _, cache, graphics = caches
        first = cache.get_item((font_file, 12))
        cache.unload((font_file, 12))

        second = cache.get_item((font_file, 12))

        assert second is not first
        assert not second.is_disposed
        assert len(graphics.created) == 2

    def test_dispose_releases_everything(self, caches, font_file):
        data_cache, cache, graphics = caches
        cache.get_item((font_file, 12))
        cache.get_item((font_file, 18))

        cache.dispose()

        assert all(h.deleted for h in graphics.created)
        assert data_cache.total_cached_items == 0
        with pytest.raises(RuntimeError):
            cache.get_item((font_file, 12))

    def test_building_one_font_does_not_block_another(self, tmp_path):
        slow = str(tmp_path / "Slow.ttf")
        fast = str(tmp_path / "Fast.ttf")
        for path in (slow, fast):
            with open(path, "wb") as f:
                f.write(b"x")

        service = FakeFontService()
        service.face_gates[slow] = threading.Event()
        service.face_entered[slow] = threading.Event()
        graphics = FakeGraphicsBackend()
        cache = FontTextureCache(FontAtlasDataCache(service), graphics)

        slow_textures = []
        thread = threading.Thread(target=lambda: slow_textures.append(cache.get_item((slow, 12))))
        thread.start()
        try:
            assert service.face_entered[slow].wait(5)

            fast_texture = cache.get_item((fast, 12))
            assert fast_texture.name == "Fast|12"
            assert cache.total_cached_items == 1
        finally:
            service.face_gates[slow].set()
            thread.join(5)

        assert slow_textures[0].name == "Slow|12"
        assert cache.total_cached_items == 2
        assert len(graphics.created) == 2
