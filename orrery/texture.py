"""2D textures loaded from image files and uploaded to OpenGL on first use."""

from __future__ import annotations

import logging
import os
from typing import Optional, Tuple

log = logging.getLogger(__name__)

GL_TEXTURE_2D = 0x0DE1
GL_TEXTURE0 = 0x84C0
GL_REPEAT = 0x2901
GL_CLAMP_TO_EDGE = 0x812F
GL_LINEAR = 0x2601
GL_LINEAR_MIPMAP_LINEAR = 0x2703


class TextureError(RuntimeError):
    """Raised when a texture image cannot be opened or decoded."""


def _gl():
    from pyglet import gl

    return gl


def load_image_rgba(
    path: "str | os.PathLike[str]", flip: bool = True
) -> Tuple[int, int, bytes]:
    """Decode an image file into ``(width, height, rgba_bytes)``.

    With ``flip`` the bottom row comes first, as OpenGL expects; without it
    the rows are in file order, top row first.
    """
    name = os.fspath(path)
    if not os.path.isfile(name):
        raise TextureError(f"could not open texture file {name!r}")
    try:
        import pyglet.image

        image = pyglet.image.load(name).get_image_data()
    except Exception as exc:
        raise TextureError(f"could not decode texture file {name!r}: {exc}") from exc
    pitch = image.width * 4
    data = image.get_data("RGBA", pitch if flip else -pitch)
    return image.width, image.height, bytes(data)


class Texture:
    """A mipmapped 2D texture with repeat wrapping and trilinear filtering."""

    def __init__(self, file_name: "str | os.PathLike[str]") -> None:
        self.file_name = os.fspath(file_name)
        self.width, self.height, self._pixels = load_image_rgba(self.file_name)
        self.texture_id: Optional[int] = None
        self.wrap = (GL_REPEAT, GL_REPEAT)
        self.filters = (GL_LINEAR_MIPMAP_LINEAR, GL_LINEAR)

    def _upload(self) -> int:
        if self.texture_id is not None:
            return self.texture_id
        gl = _gl()
        handle = (gl.GLuint * 1)()
        gl.glGenTextures(1, handle)
        self.texture_id = int(handle[0])
        gl.glBindTexture(GL_TEXTURE_2D, self.texture_id)
        gl.glTexImage2D(
            GL_TEXTURE_2D, 0, gl.GL_RGBA, self.width, self.height, 0,
            gl.GL_RGBA, gl.GL_UNSIGNED_BYTE, self._pixels,
        )
        gl.glGenerateMipmap(GL_TEXTURE_2D)
        self._apply_parameters()
        return self.texture_id

    def _apply_parameters(self) -> None:
        gl = _gl()
        gl.glBindTexture(GL_TEXTURE_2D, self.texture_id)
        gl.glTexParameteri(GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, self.wrap[0])
        gl.glTexParameteri(GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, self.wrap[1])
        gl.glTexParameteri(GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, self.filters[0])
        gl.glTexParameteri(GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, self.filters[1])

    def bind(self, unit: int = GL_TEXTURE0) -> None:
        """Activate ``unit`` and bind this texture to it."""
        texture_id = self._upload()
        gl = _gl()
        gl.glActiveTexture(unit)
        gl.glBindTexture(GL_TEXTURE_2D, texture_id)

    def unbind(self) -> None:
        """Unbind any 2D texture from the active unit."""
        _gl().glBindTexture(GL_TEXTURE_2D, 0)

    def set_wrap_mode(self, wrap_s: int = GL_REPEAT, wrap_t: int = GL_REPEAT) -> None:
        """Set the wrap mode for the S and T coordinates."""
        self.wrap = (wrap_s, wrap_t)
        if self.texture_id is not None:
            self._apply_parameters()

    def set_filters(
        self, min_filter: int = GL_LINEAR_MIPMAP_LINEAR, mag_filter: int = GL_LINEAR
    ) -> None:
        """Set the minification and magnification filters."""
        self.filters = (min_filter, mag_filter)
        if self.texture_id is not None:
            self._apply_parameters()