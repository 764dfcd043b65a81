"""A cube-mapped skybox drawn behind the scene."""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Sequence, Tuple

import numpy as np

from orrery.geometry import skybox_vertices
from orrery.shader import FRAGMENT_SHADER, VERTEX_SHADER, _build_program
from orrery.texture import TextureError, load_image_rgba

log = logging.getLogger(__name__)

_VERTEX_SRC = """#version 330 core
layout (location = 0) in vec3 aPos;
out vec3 TexCoords;
uniform mat4 view;
uniform mat4 projection;
void main() {
    TexCoords = aPos;
    mat4 viewNoTrans = mat4(mat3(view));
    gl_Position = projection * viewNoTrans * vec4(aPos, 1.0);
}
"""

_FRAGMENT_SRC = """#version 330 core
in vec3 TexCoords;
out vec4 FragColor;
uniform samplerCube skybox;
void main() {
    FragColor = texture(skybox, TexCoords);
}
"""

_FACE_COUNT = 6


def _gl():
    from pyglet import gl

    return gl


def _matrix(gl, m):
    flat = np.asarray(m, dtype=np.float32).T.ravel()
    return (gl.GLfloat * 16)(*(float(v) for v in flat))


class Skybox:
    """Six face images (+X, -X, +Y, -Y, +Z, -Z) on a cube around the viewer."""

    def __init__(self, faces: Sequence["str | os.PathLike[str]"]) -> None:
        if len(faces) != _FACE_COUNT:
            raise ValueError(f"a skybox needs {_FACE_COUNT} faces, got {len(faces)}")
        self.faces = [os.fspath(f) for f in faces]
        self._images: List[Optional[Tuple[int, int, bytes]]] = []
        for index, face in enumerate(self.faces):
            try:
                image = load_image_rgba(face, flip=False)
            except TextureError as exc:
                log.warning("failed to load skybox face %d: %s (%s)", index, face, exc)
                image = None
            else:
                log.info("loaded skybox face %d: %s (%dx%d)", index, face, image[0], image[1])
            self._images.append(image)
        self.loaded = [image is not None for image in self._images]
        self.vertices = skybox_vertices()
        self._gl_objects: Optional[Tuple[int, int, int, int]] = None
        self._program = None

    def _setup(self) -> Tuple[int, int, int, int]:
        if self._gl_objects is not None:
            return self._gl_objects
        gl = _gl()
        tex = (gl.GLuint * 1)()
        gl.glGenTextures(1, tex)
        gl.glBindTexture(gl.GL_TEXTURE_CUBE_MAP, tex[0])
        for index, image in enumerate(self._images):
            if image is None:
                continue
            width, height, pixels = image
            gl.glTexImage2D(
                gl.GL_TEXTURE_CUBE_MAP_POSITIVE_X + index, 0, gl.GL_RGBA,
                width, height, 0, gl.GL_RGBA, gl.GL_UNSIGNED_BYTE, pixels,
            )
        target = gl.GL_TEXTURE_CUBE_MAP
        gl.glTexParameteri(target, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR)
        gl.glTexParameteri(target, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
        for wrap in (gl.GL_TEXTURE_WRAP_S, gl.GL_TEXTURE_WRAP_T, gl.GL_TEXTURE_WRAP_R):
            gl.glTexParameteri(target, wrap, gl.GL_CLAMP_TO_EDGE)
        gl.glBindTexture(target, 0)

        vao = (gl.GLuint * 1)()
        vbo = (gl.GLuint * 1)()
        gl.glGenVertexArrays(1, vao)
        gl.glGenBuffers(1, vbo)
        gl.glBindVertexArray(vao[0])
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo[0])
        data = np.ascontiguousarray(self.vertices, dtype=np.float32).tobytes()
        gl.glBufferData(gl.GL_ARRAY_BUFFER, len(data), data, gl.GL_STATIC_DRAW)
        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(0, 3, gl.GL_FLOAT, gl.GL_FALSE, 12, 0)
        gl.glBindVertexArray(0)

        self._program = _build_program(
            [(VERTEX_SHADER, _VERTEX_SRC), (FRAGMENT_SHADER, _FRAGMENT_SRC)],
            validate=False,
        )
        self._gl_objects = (int(tex[0]), int(vao[0]), int(vbo[0]), self._program.id)
        return self._gl_objects

    def render(self, view, projection) -> None:
        """Draw the skybox with the given view and projection matrices."""
        tex, vao, _, program = self._setup()
        gl = _gl()
        gl.glDepthFunc(gl.GL_LEQUAL)
        gl.glUseProgram(program)
        gl.glUniform1i(gl.glGetUniformLocation(program, b"skybox"), 0)
        gl.glUniformMatrix4fv(
            gl.glGetUniformLocation(program, b"view"), 1, gl.GL_FALSE, _matrix(gl, view)
        )
        gl.glUniformMatrix4fv(
            gl.glGetUniformLocation(program, b"projection"), 1, gl.GL_FALSE,
            _matrix(gl, projection),
        )
        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(gl.GL_TEXTURE_CUBE_MAP, tex)
        gl.glBindVertexArray(vao)
        gl.glDrawArrays(gl.GL_TRIANGLES, 0, len(self.vertices))
        gl.glBindVertexArray(0)
        gl.glUseProgram(0)
        gl.glDepthFunc(gl.GL_LESS)