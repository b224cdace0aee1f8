"""Graphics backends used to upload atlas textures.

The OpenGL backend lives in fontatlas.graphics.opengl and is imported on
demand so that atlas building works without a GL installation.
"""

from fontatlas.graphics.base import GPUTextureHandle, GraphicsBackend

__all__ = ["GPUTextureHandle", "GraphicsBackend"]
