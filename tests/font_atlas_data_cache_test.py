"""Tests for FontAtlasDataCache."""

import itertools
import threading
import time

import pytest

from fakes import FakeFontService, glyph_size
from fontatlas.cache.font_atlas_data_cache import FontAtlasDataCache
from fontatlas.charset import AVAILABLE_GLYPH_CHARACTERS
from fontatlas.errors import AtlasConfigurationError, LoadFontException
from fontatlas.metrics import Rect


class TestGetItem:
    def test_returns_image_and_metrics_for_every_character(self, font_file):
        cache = FontAtlasDataCache(FakeFontService())

        image, metrics = cache.get_item((font_file, 12))

        assert len(metrics) == len(AVAILABLE_GLYPH_CHARACTERS) == 95
        assert len({m.glyph for m in metrics}) == 95
        assert image.width > 0 and image.height > 0

    def test_second_request_returns_same_data(self, font_file):
        service = FakeFontService()
        cache = FontAtlasDataCache(service)

        first = cache.get_item((font_file, 12))
        second = cache.get_item((font_file, 12))

        assert first is second
        assert len(service.created_faces) == 1
        assert cache.total_cached_items == 1

    def test_face_is_released_after_building(self, font_file):
        service = FakeFontService()
        FontAtlasDataCache(service).get_item((font_file, 14))

        face = service.created_faces[0]
        assert face.done
        assert face.size == 14

    def test_space_has_metrics_but_no_bounds(self, font_file):
        _, metrics = FontAtlasDataCache(FakeFontService()).get_item((font_file, 12))
        space = next(m for m in metrics if m.glyph == " ")

        assert space.horizontal_advance == 4
        assert space.glyph_bounds.area == 0

    def test_bounds_are_packed_without_overlap(self, font_file):
        image, metrics = FontAtlasDataCache(FakeFontService()).get_item((font_file, 12))
        whole = Rect(0, 0, image.width, image.height)

        placed = [m for m in metrics if m.glyph != " "]
        for m in placed:
            assert (m.glyph_bounds.width, m.glyph_bounds.height) == glyph_size(m.glyph)
            assert whole.contains(m.glyph_bounds)
        for a, b in itertools.combinations(placed, 2):
            assert not a.glyph_bounds.intersects(b.glyph_bounds)

    def test_sizes_are_separate_entries(self, font_file):
        service = FakeFontService()
        cache = FontAtlasDataCache(service)

        cache.get_item((font_file, 12))
        cache.get_item((font_file, 24))

        assert cache.total_cached_items == 2
        assert [f.size for f in service.created_faces] == [12, 24]

    def test_failed_glyph_keeps_empty_bounds(self, font_file):
        _, metrics = FontAtlasDataCache(FakeFontService(failing_glyphs="Q")).get_item((font_file, 12))
        q = next(m for m in metrics if m.glyph == "Q")

        assert q.glyph_bounds == Rect()
        assert q.horizontal_advance > 0


class TestErrors:
    def test_empty_path_raises(self):
        cache = FontAtlasDataCache(FakeFontService())
        with pytest.raises(ValueError):
            cache.get_item(("", 12))

    def test_missing_file_raises(self, tmp_path):
        cache = FontAtlasDataCache(FakeFontService())
        with pytest.raises(FileNotFoundError):
            cache.get_item((str(tmp_path / "Nope.ttf"), 12))
        assert cache.total_cached_items == 0

    def test_no_renderable_glyph_leaves_no_entry(self, font_file):
        renderable = [ch for ch in AVAILABLE_GLYPH_CHARACTERS if ch != " "]
        service = FakeFontService(failing_glyphs=renderable)
        cache = FontAtlasDataCache(service)

        with pytest.raises(AtlasConfigurationError):
            cache.get_item((font_file, 12))

        assert not cache.contains((font_file, 12))
        assert service.created_faces[0].done

    def test_failure_is_retried_on_next_request(self, font_file):
        service = FakeFontService(failing_glyphs=AVAILABLE_GLYPH_CHARACTERS)
        cache = FontAtlasDataCache(service)
        with pytest.raises(AtlasConfigurationError):
            cache.get_item((font_file, 12))

        service.failing_glyphs = set()
        cache.get_item((font_file, 12))

        assert cache.contains((font_file, 12))
        assert len(service.created_faces) == 2


class TestUnload:
    def test_unload_then_rebuild(self, font_file):
        service = FakeFontService()
        cache = FontAtlasDataCache(service)
        first = cache.get_item((font_file, 12))

        cache.unload((font_file, 12))
        assert not cache.contains((font_file, 12))

        second = cache.get_item((font_file, 12))
        assert second is not first
        assert second[0] == first[0]
        assert second[1] == first[1]
        assert len(service.created_faces) == 2

    def test_unload_unknown_key_is_noop(self, font_file):
        cache = FontAtlasDataCache(FakeFontService())
        cache.unload((font_file, 99))
        assert cache.total_cached_items == 0

    def test_clear(self, font_file):
        cache = FontAtlasDataCache(FakeFontService())
        cache.get_item((font_file, 12))
        cache.clear()
        assert cache.total_cached_items == 0


class TestConcurrency:
    def test_concurrent_requests_build_once(self, font_file):
        service = FakeFontService(face_delay=0.05)
        cache = FontAtlasDataCache(service)
        barrier = threading.Barrier(8)
        results = [None] * 8
        errors = []

        def worker(i):
            try:
                barrier.wait()
                results[i] = cache.get_item((font_file, 16))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(service.created_faces) == 1
        assert all(r is results[0] for r in results)

    def test_other_keys_are_not_blocked(self, tmp_path):
        slow = tmp_path / "Slow.ttf"
        fast = tmp_path / "Fast.ttf"
        slow.write_bytes(b"x")
        fast.write_bytes(b"x")
        slow_path, fast_path = str(slow), str(fast)

        service = FakeFontService()
        service.face_gates[slow_path] = threading.Event()
        service.face_entered[slow_path] = threading.Event()
        cache = FontAtlasDataCache(service)

        slow_result = []
        thread = threading.Thread(target=lambda: slow_result.append(cache.get_item((slow_path, 12))))
        thread.start()
        try:
            assert service.face_entered[slow_path].wait(5)

            # The slow build is parked inside create_font_face.
            cache.get_item((fast_path, 12))
            assert cache.contains((fast_path, 12))
            assert not cache.contains((slow_path, 12))
        finally:
            service.face_gates[slow_path].set()
            thread.join(5)

        assert len(slow_result) == 1
        assert cache.total_cached_items == 2

    def test_waiter_after_failed_build_result_is_cached(self, font_file):
        service = FakeFontService()
        service.face_gates[font_file] = threading.Event()
        service.face_entered[font_file] = threading.Event()
        service.face_failures[font_file] = 1
        cache = FontAtlasDataCache(service)
        outcomes = {}

        def request(name):
            try:
                outcomes[name] = cache.get_item((font_file, 12))
            except LoadFontException as e:
                outcomes[name] = e

        first = threading.Thread(target=request, args=("first",))
        first.start()
        assert service.face_entered[font_file].wait(5)

        # The second request queues up behind the failing build.
        second = threading.Thread(target=request, args=("second",))
        second.start()
        time.sleep(0.1)
        service.face_gates[font_file].set()
        first.join(5)
        second.join(5)

        assert isinstance(outcomes["first"], LoadFontException)
        assert cache.get_item((font_file, 12)) is outcomes["second"]
        assert len(service.created_faces) == 1
        assert cache.total_cached_items == 1
