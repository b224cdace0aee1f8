"""Font family statistics: which styles of a family are installed where."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Set, Tuple

from fontatlas import log
from fontatlas.errors import LoadFontException
from fontatlas.freetype_service import FontStyle
from fontatlas.path_resolver import FONT_EXTENSIONS, find_system_font

if TYPE_CHECKING:
    from fontatlas.freetype_service import FontService

ALL_STYLES: Tuple[FontStyle, ...] = (
    FontStyle.REGULAR,
    FontStyle.BOLD,
    FontStyle.ITALIC,
    FontStyle.BOLD | FontStyle.ITALIC,
)


class FontSource(Enum):
    UNKNOWN = 0
    APP_CONTENT = 1
    SYSTEM = 2


@dataclass(frozen=True)
class FontStats:
    font_file_path: str
    family_name: str
    style: FontStyle
    source: FontSource


def _system_font_dir() -> str | None:
    path = find_system_font()
    return os.path.dirname(path) if path else None


class FontStatsService:
    """
    Collects family name and style of the font files in the content
    directory and in the system font directory.

    Results are cached per directory and family; a family is scanned once.

    Args:
        font_service: Rasterizer adapter used to open the font files.
        content_dir: Directory with the application's fonts.
        system_dir: Directory with system fonts. Defaults to the directory of
            find_system_font().
        use_system_fonts: False disables the system lookup.
    """

    def __init__(
        self,
        font_service: "FontService",
        content_dir: str | Path,
        system_dir: str | Path | None = None,
        use_system_fonts: bool = True,
    ):
        self._font_service = font_service
        self._content_dir = os.path.abspath(content_dir)
        if not use_system_fonts:
            system_dir = None
        elif system_dir is None:
            system_dir = _system_font_dir()
        self._system_dir = os.path.abspath(system_dir) if system_dir else None
        self._stats: Dict[str, Dict[str, FontStats]] = {}
        self._scanned: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()

    def get_content_stats_for_font_family(self, family_name: str) -> Tuple[FontStats, ...]:
        return self._stats_for_family(self._content_dir, family_name)

    def get_system_stats_for_font_family(self, family_name: str) -> Tuple[FontStats, ...]:
        if self._system_dir is None:
            return ()
        return self._stats_for_family(self._system_dir, family_name)

    def get_family_stats(self, family_name: str) -> Tuple[FontStats, ...]:
        """
        Font files of the family, content directory first.

        System fonts are only added for styles the content directory lacks.
        """
        stats = list(self.get_content_stats_for_font_family(family_name))
        found = {s.style for s in stats}
        if all(style in found for style in ALL_STYLES):
            return tuple(stats)

        for s in self.get_system_stats_for_font_family(family_name):
            if s.style not in found:
                stats.append(s)
        return tuple(stats)

    def get_available_styles(self, family_name: str) -> Tuple[FontStyle, ...]:
        """Styles of the family that exist somewhere, in ALL_STYLES order."""
        styles = {s.style for s in self.get_family_stats(family_name)}
        return tuple(style for style in ALL_STYLES if style in styles)

    def _stats_for_family(self, directory: str, family_name: str) -> Tuple[FontStats, ...]:
        with self._lock:
            cache = self._stats.setdefault(directory, {})
            scanned = self._scanned.setdefault(directory, set())
            if family_name not in scanned:
                for path in self._font_files(directory):
                    if path not in cache:
                        stats = self._read_stats(path)
                        if stats is not None:
                            cache[path] = stats
                scanned.add(family_name)
            return tuple(s for s in cache.values() if s.family_name == family_name)

    def _font_files(self, directory: str) -> List[str]:
        if not os.path.isdir(directory):
            return []
        return sorted(
            os.path.join(directory, name)
            for name in os.listdir(directory)
            if os.path.splitext(name)[1].lower() in FONT_EXTENSIONS
        )

    def _read_stats(self, path: str) -> FontStats | None:
        service = self._font_service
        try:
            face = service.create_font_face(path)
        except LoadFontException as e:
            log.warn(f"[FontStatsService] Skipping unreadable font '{path}': {e}")
            return None
        try:
            family = service.get_family_name(face)
            style = service.get_font_style(face)
        finally:
            service.done_face(face)
        return FontStats(path, family, style, self._source(path))

    def _source(self, path: str) -> FontSource:
        directory = os.path.normcase(os.path.dirname(path))
        if directory == os.path.normcase(self._content_dir):
            return FontSource.APP_CONTENT
        if self._system_dir is not None and directory == os.path.normcase(self._system_dir):
            return FontSource.SYSTEM
        return FontSource.UNKNOWN
