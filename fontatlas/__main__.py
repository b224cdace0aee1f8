"""
Command-line entry point for fontatlas.

Usage:
    python -m fontatlas bake path/to/font.ttf --size 24 --out atlas.png --metrics atlas.json
    python -m fontatlas measure path/to/font.ttf --size 24 "Hello World"
"""

import argparse
import json
import logging
import os
import sys

from fontatlas.cache.font_atlas_data_cache import FontAtlasDataCache
from fontatlas.errors import LoadFontException
from fontatlas.font import Font
from fontatlas.freetype_service import FontService


def _bake(args) -> int:
    service = FontService(dpi=args.dpi)
    cache = FontAtlasDataCache(service)
    key = (os.path.abspath(args.font), args.size)
    image, metrics = cache.get_item(key)

    # Stored pixels start at the bottom row; flip back for a viewable PNG.
    image.flipped_vertically().save(args.out)
    print(f"Atlas: {args.out} ({image.width}x{image.height}, {len(metrics)} glyphs)")

    if args.metrics:
        data = {
            "font": key[0],
            "size": args.size,
            "width": image.width,
            "height": image.height,
            "glyphs": [m.to_dict() for m in metrics],
        }
        with open(args.metrics, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        print(f"Metrics: {args.metrics}")

    service.dispose()
    return 0


def _measure(args) -> int:
    service = FontService(dpi=args.dpi)
    cache = FontAtlasDataCache(service)
    file_path = os.path.abspath(args.font)
    _, metrics = cache.get_item((file_path, args.size))

    face = service.create_font_face(file_path)
    service.set_font_size(face, args.size)
    font = Font(None, service, face, metrics, os.path.basename(file_path), file_path, args.size)
    width, height = font.measure(args.text.replace("\\n", "\n"))
    print(f"{width:g} x {height:g}")

    font.dispose()
    service.dispose()
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Build font atlases and measure text"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print debug log messages",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    bake = sub.add_parser("bake", help="Write the atlas image (and metrics) of a font")
    bake.add_argument("font", type=str, help="Path to font file")
    bake.add_argument("--size", "-s", type=int, default=12, help="Font size (default: 12)")
    bake.add_argument("--dpi", type=int, default=72, help="Rasterizer resolution (default: 72)")
    bake.add_argument("--out", "-o", type=str, required=True, help="Output PNG path")
    bake.add_argument("--metrics", "-m", type=str, default=None, help="Output JSON path for glyph metrics")
    bake.set_defaults(func=_bake)

    measure = sub.add_parser("measure", help="Print the rendered size of a text")
    measure.add_argument("font", type=str, help="Path to font file")
    measure.add_argument("text", type=str, help="Text to measure (\\n starts a new line)")
    measure.add_argument("--size", "-s", type=int, default=12, help="Font size (default: 12)")
    measure.add_argument("--dpi", type=int, default=72, help="Rasterizer resolution (default: 72)")
    measure.set_defaults(func=_measure)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    try:
        sys.exit(args.func(args))
    except (FileNotFoundError, ValueError, LoadFontException) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
