"""Tests for the OpenGL texture backend with the GL entry points mocked out."""

from unittest import mock

import numpy as np
import pytest

pytest.importorskip("OpenGL.GL")

from fontatlas.graphics import opengl  # noqa: E402


@pytest.fixture
def gl(monkeypatch):
    fake = mock.MagicMock()
    fake.glGenTextures.return_value = 7
    monkeypatch.setattr(opengl, "gl", fake)
    return fake


def test_atlas_upload_is_clamped_without_mipmaps(gl):
    pixels = np.zeros((6, 5, 4), dtype=np.uint8)

    handle = opengl.OpenGLGraphicsBackend().create_texture(pixels, (5, 6), channels=4, mipmap=False, clamp=True)

    assert handle.tex_id == 7
    assert handle.get_size() == (5, 6)
    args = gl.glTexImage2D.call_args[0]
    assert (args[3], args[4]) == (5, 6)
    gl.glGenerateMipmap.assert_not_called()
    gl.glTexParameteri.assert_any_call(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)


def test_mipmaps_are_generated_on_request(gl):
    opengl.OpenGLGraphicsBackend().create_texture(np.zeros((2, 2, 4), dtype=np.uint8), (2, 2))
    gl.glGenerateMipmap.assert_called_once()


def test_delete_releases_texture_once(gl):
    handle = opengl.OpenGLGraphicsBackend().create_texture(np.zeros((1, 1, 4), dtype=np.uint8), (1, 1))

    handle.delete()
    handle.delete()

    gl.glDeleteTextures.assert_called_once_with([7])
    assert handle.tex_id == 0


def test_unsupported_channel_count(gl):
    with pytest.raises(ValueError):
        opengl.OpenGLGraphicsBackend().create_texture(np.zeros((1, 1, 2), dtype=np.uint8), (1, 1), channels=2)
    gl.glGenTextures.assert_not_called()
