"""OpenGL texture backend built on PyOpenGL."""

from __future__ import annotations

from typing import Tuple

import numpy as np
import OpenGL.GL as gl

from fontatlas.graphics.base import GPUTextureHandle, GraphicsBackend

_FORMATS = {
    1: (gl.GL_R8, gl.GL_RED),
    3: (gl.GL_RGB8, gl.GL_RGB),
    4: (gl.GL_RGBA8, gl.GL_RGBA),
}


class OpenGLTextureHandle(GPUTextureHandle):
    """Owned 2D texture. delete() releases the GL object."""

    def __init__(self, tex_id: int, size: Tuple[int, int]):
        self._tex_id = tex_id
        self._size = size

    @property
    def tex_id(self) -> int:
        return self._tex_id

    def get_size(self) -> Tuple[int, int]:
        return self._size

    def bind(self, unit: int = 0):
        gl.glActiveTexture(gl.GL_TEXTURE0 + unit)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self._tex_id or 0)

    def delete(self):
        if self._tex_id:
            gl.glDeleteTextures([self._tex_id])
            self._tex_id = 0


class OpenGLGraphicsBackend(GraphicsBackend):
    """Creates textures in the current OpenGL context."""

    def create_texture(
        self,
        image_data,
        size: Tuple[int, int],
        channels: int = 4,
        mipmap: bool = True,
        clamp: bool = False,
    ) -> OpenGLTextureHandle:
        if channels not in _FORMATS:
            raise ValueError(f"Unsupported channel count: {channels}")
        internal_format, pixel_format = _FORMATS[channels]
        w, h = size
        data = np.ascontiguousarray(image_data, dtype=np.uint8)

        tex_id = gl.glGenTextures(1)
        gl.glBindTexture(gl.GL_TEXTURE_2D, tex_id)
        gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
        gl.glTexImage2D(
            gl.GL_TEXTURE_2D, 0, internal_format,
            w, h, 0, pixel_format, gl.GL_UNSIGNED_BYTE, data
        )

        wrap = gl.GL_CLAMP_TO_EDGE if clamp else gl.GL_REPEAT
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, wrap)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, wrap)
        if mipmap:
            gl.glGenerateMipmap(gl.GL_TEXTURE_2D)
            gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR)
        else:
            gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)

        return OpenGLTextureHandle(tex_id, (w, h))
