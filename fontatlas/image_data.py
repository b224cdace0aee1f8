"""ImageData - raw RGBA pixel container."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np


class ImageData:
    """
    Raw RGBA image data.

    Holds CPU pixels without GPU knowledge. Pixels are stored as a numpy
    array of shape (height, width, 4) with uint8 values, row 0 first.

    Attributes:
        pixels: Numpy array of shape (height, width, 4).
        width: Image width in pixels.
        height: Image height in pixels.
    """

    __slots__ = ("pixels", "width", "height")

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected array of shape (height, width, 4), got shape {pixels.shape}")
        self.pixels = pixels.astype(np.uint8, copy=False)
        self.height, self.width = int(pixels.shape[0]), int(pixels.shape[1])

    @classmethod
    def empty(cls, width: int, height: int) -> "ImageData":
        """Create a fully transparent image."""
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @classmethod
    def from_grayscale(cls, pixel_data: bytes, width: int, height: int) -> "ImageData":
        """
        Convert 8-bit grayscale glyph coverage into a white RGBA image.

        Each byte becomes the alpha channel; red, green and blue are 255.
        The renderer tints the glyph by multiplying with a color.

        Args:
            pixel_data: width * height bytes, row by row, top row first.
            width: Bitmap width.
            height: Bitmap height.
        """
        coverage = np.frombuffer(bytes(pixel_data), dtype=np.uint8)
        if coverage.size != width * height:
            raise ValueError(
                f"Grayscale data has {coverage.size} bytes, expected {width * height} ({width}x{height})"
            )
        pixels = np.full((height, width, 4), 255, dtype=np.uint8)
        pixels[:, :, 3] = coverage.reshape(height, width)
        return cls(pixels)

    @classmethod
    def from_file(cls, path: str | Path) -> "ImageData":
        """Load an image file (PNG, JPG, etc.) as RGBA."""
        from PIL import Image

        with Image.open(path) as image:
            return cls(np.array(image.convert("RGBA"), dtype=np.uint8))

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """RGBA value at column x, row y."""
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def flipped_vertically(self) -> "ImageData":
        """Return a copy with the row order reversed."""
        return ImageData(self.pixels[::-1, :, :].copy())

    def draw(self, image: "ImageData", location: Tuple[int, int]) -> None:
        """
        Copy image onto this one with its top-left corner at location.

        Plain overwrite, no blending. Parts falling outside are clipped.
        """
        x, y = location
        x0, y0 = max(x, 0), max(y, 0)
        x1 = min(x + image.width, self.width)
        y1 = min(y + image.height, self.height)
        if x1 <= x0 or y1 <= y0:
            return
        self.pixels[y0:y1, x0:x1] = image.pixels[y0 - y:y1 - y, x0 - x:x1 - x]

    def copy(self) -> "ImageData":
        return ImageData(self.pixels.copy())

    def to_pil(self):
        """Convert to a PIL RGBA image."""
        from PIL import Image

        return Image.fromarray(np.ascontiguousarray(self.pixels))

    def save(self, path: str | Path) -> None:
        """Write the image to disk; the format follows the file extension."""
        self.to_pil().save(path)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ImageData):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    __hash__ = None

    def __repr__(self) -> str:
        return f"ImageData({self.width}x{self.height})"
