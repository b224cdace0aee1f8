"""Resolves font names to font files."""

from __future__ import annotations

import os
import sys
from pathlib import Path

FONT_EXTENSIONS = (".ttf", ".otf")


def find_system_font() -> str | None:
    """Find a system font file."""
    candidates = []

    if sys.platform == "win32":
        fonts_dir = os.path.join(os.environ.get("WINDIR", "C:\\Windows"), "Fonts")
        candidates = [
            os.path.join(fonts_dir, "segoeui.ttf"),
            os.path.join(fonts_dir, "arial.ttf"),
            os.path.join(fonts_dir, "tahoma.ttf"),
        ]
    elif sys.platform == "darwin":
        candidates = [
            "/System/Library/Fonts/SFNSText.ttf",
            "/System/Library/Fonts/Helvetica.ttc",
            "/Library/Fonts/Arial.ttf",
        ]
    else:  # Linux
        candidates = [
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
            "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
            "/usr/share/fonts/TTF/DejaVuSans.ttf",
        ]

    for path in candidates:
        if os.path.exists(path):
            return path
    return None


class FontPathResolver:
    """
    Resolves font content names inside a content directory.

    A name may carry an extension ("Roboto.ttf") or not ("Roboto"); without
    one, .ttf is tried before .otf.
    """

    def __init__(self, content_dir: str | Path):
        self._content_dir = Path(content_dir)

    @property
    def content_dir(self) -> Path:
        return self._content_dir

    def resolve_dir_path(self) -> str:
        return str(self._content_dir.resolve())

    def resolve_file_path(self, name: str) -> str | None:
        """Absolute path of the font file for name, or None when absent."""
        if not name:
            raise ValueError("The font content name must not be empty.")

        base = self._content_dir / name
        if base.suffix.lower() in FONT_EXTENSIONS:
            candidates = [base]
        else:
            candidates = [base.with_name(base.name + ext) for ext in FONT_EXTENSIONS]

        for candidate in candidates:
            if candidate.is_file():
                return str(candidate.resolve())
        return None
