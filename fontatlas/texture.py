"""Texture - GPU texture created from atlas image data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fontatlas.errors import PooledDisposalException

if TYPE_CHECKING:
    from fontatlas.graphics.base import GPUTextureHandle


class Texture:
    """
    A texture uploaded through a graphics backend.

    Textures handed out by a cache are pooled: they are shared, and only the
    cache may dispose them (it clears is_pooled first).
    """

    def __init__(
        self,
        name: str,
        file_path: str,
        width: int,
        height: int,
        handle: "GPUTextureHandle",
        is_pooled: bool = False,
    ):
        self.name = name
        self.file_path = file_path
        self.width = width
        self.height = height
        self._handle: "GPUTextureHandle | None" = handle
        self.is_pooled = is_pooled
        self._disposed = False

    @property
    def handle(self) -> "GPUTextureHandle":
        if self._handle is None:
            raise RuntimeError(f"Texture '{self.name}' has been disposed.")
        return self._handle

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def bind(self, unit: int = 0) -> None:
        self.handle.bind(unit)

    def dispose(self) -> None:
        """Release the GPU texture. Pooled textures refuse to be disposed."""
        if self._disposed:
            return
        if self.is_pooled:
            raise PooledDisposalException(
                f"Texture '{self.name}' is pooled and cannot be disposed; unload it through its cache."
            )
        if self._handle is not None:
            self._handle.delete()
            self._handle = None
        self._disposed = True

    def __repr__(self) -> str:
        return f"Texture({self.name!r}, {self.width}x{self.height})"
