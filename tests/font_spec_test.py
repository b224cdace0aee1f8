"""Tests for FontSpec and FontPathResolver."""

import pytest

from fontatlas.font_spec import DEFAULT_FONT_SIZE, FontSpec
from fontatlas.path_resolver import FontPathResolver


class TestFontSpec:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert FontSpec.load(tmp_path / "none.meta").size == DEFAULT_FONT_SIZE

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "Font.ttf.meta"
        FontSpec(size=22).save(path)
        assert FontSpec.load(path).size == 22

    def test_broken_file_gives_defaults(self, tmp_path):
        path = tmp_path / "Font.ttf.meta"
        path.write_text("{not json", encoding="utf-8")
        assert FontSpec.load(path).size == DEFAULT_FONT_SIZE

    def test_meta_preferred_over_spec(self, tmp_path):
        font = tmp_path / "Font.ttf"
        FontSpec(size=10).save(str(font) + ".spec")
        assert FontSpec.for_font_file(font).size == 10

        FontSpec(size=40).save(str(font) + ".meta")
        assert FontSpec.for_font_file(font).size == 40


class TestFontPathResolver:
    def test_resolves_without_extension(self, tmp_path):
        (tmp_path / "Roboto.otf").write_bytes(b"x")
        resolver = FontPathResolver(tmp_path)
        assert resolver.resolve_file_path("Roboto") == str((tmp_path / "Roboto.otf").resolve())

    def test_ttf_before_otf(self, tmp_path):
        (tmp_path / "Roboto.otf").write_bytes(b"x")
        (tmp_path / "Roboto.ttf").write_bytes(b"x")
        resolver = FontPathResolver(tmp_path)
        assert resolver.resolve_file_path("Roboto").endswith("Roboto.ttf")

    def test_missing_font_is_none(self, tmp_path):
        assert FontPathResolver(tmp_path).resolve_file_path("Nope") is None

    def test_empty_name_raises(self, tmp_path):
        with pytest.raises(ValueError):
            FontPathResolver(tmp_path).resolve_file_path("")
