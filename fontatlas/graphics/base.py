"""Backend interfaces decoupling texture upload from a specific graphics library."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple


class GPUTextureHandle(ABC):
    """Backend-specific texture resource."""

    @abstractmethod
    def bind(self, unit: int = 0):
        ...

    @abstractmethod
    def delete(self):
        ...


class GraphicsBackend(ABC):
    """Abstract graphics backend (only the texture side is needed here)."""

    @abstractmethod
    def create_texture(
        self,
        image_data,
        size: Tuple[int, int],
        channels: int = 4,
        mipmap: bool = True,
        clamp: bool = False,
    ) -> GPUTextureHandle:
        """
        Upload pixels to the GPU.

        Args:
            image_data: uint8 array of shape (height, width, channels), first
                row is the bottom row of the texture.
            size: (width, height).
        """
        ...
