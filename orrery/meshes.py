"""Drawable objects: the debug cube, loaded meshes and textured spheres.

GPU buffers are created on the first render, so objects can be built and
positioned before an OpenGL context exists.
"""

from __future__ import annotations

import os
from typing import Optional, Sequence, Tuple

import numpy as np

from orrery.geometry import MeshData, build_sphere, cube_mesh
from orrery.glmath import identity, pack_vertices, rotate, translate
from orrery.glmath import scale as scale_matrix
from orrery.objloader import load_obj
from orrery.texture import Texture

_STRIDE = 32
_NORMAL_OFFSET = 12
_TEXCOORD_OFFSET = 24


def _gl():
    from pyglet import gl

    return gl


class _MeshBuffers:
    """Vertex array, vertex buffer and index buffer for one mesh."""

    def __init__(self, mesh: MeshData) -> None:
        self.mesh = mesh
        self._ids: Optional[Tuple[int, int, int]] = None

    def _ensure(self) -> Tuple[int, int, int]:
        if self._ids is not None:
            return self._ids
        gl = _gl()
        vao, vb, ib = (gl.GLuint * 1)(), (gl.GLuint * 1)(), (gl.GLuint * 1)()
        gl.glGenVertexArrays(1, vao)
        gl.glBindVertexArray(vao[0])
        data = np.ascontiguousarray(pack_vertices(self.mesh.vertices)).tobytes()
        gl.glGenBuffers(1, vb)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vb[0])
        gl.glBufferData(gl.GL_ARRAY_BUFFER, len(data), data, gl.GL_STATIC_DRAW)
        indices = np.asarray(self.mesh.indices, dtype=np.uint32).tobytes()
        gl.glGenBuffers(1, ib)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ib[0])
        gl.glBufferData(gl.GL_ELEMENT_ARRAY_BUFFER, len(indices), indices, gl.GL_STATIC_DRAW)
        self._ids = (int(vao[0]), int(vb[0]), int(ib[0]))
        return self._ids

    def draw(self, attribs: Sequence[Tuple[int, int, int]], before_draw=None) -> None:
        """Draw with ``attribs`` given as (location, components, byte offset)."""
        if not self.mesh.indices:
            return
        vao, vb, ib = self._ensure()
        gl = _gl()
        active = [a for a in attribs if a[0] >= 0]
        gl.glBindVertexArray(vao)
        for loc, _, _ in active:
            gl.glEnableVertexAttribArray(loc)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vb)
        for loc, size, offset in active:
            gl.glVertexAttribPointer(loc, size, gl.GL_FLOAT, gl.GL_FALSE, _STRIDE, offset)
        if before_draw is not None:
            before_draw()
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ib)
        gl.glDrawElements(gl.GL_TRIANGLES, len(self.mesh.indices), gl.GL_UNSIGNED_INT, 0)
        for loc, _, _ in active:
            gl.glDisableVertexAttribArray(loc)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)


def _attribs(position: int, color: int, tc: int):
    return [(position, 3, 0), (color, 3, _NORMAL_OFFSET), (tc, 2, _TEXCOORD_OFFSET)]


def _set_has_texture(texture: Optional[Texture], loc: int) -> None:
    gl = _gl()
    if texture is not None:
        if loc >= 0:
            gl.glUniform1i(loc, 1)
        texture.bind()
    elif loc >= 0:
        gl.glUniform1i(loc, 0)


class Object:
    """The coloured cube placed at a pivot."""

    def __init__(self, pivot=(0.0, 0.0, 0.0)) -> None:
        self.pivot = np.asarray(pivot, dtype=np.float64)
        self.angle = 0.0
        self.model = translate(self.pivot)
        self.mesh = cube_mesh()
        self._buffers = _MeshBuffers(self.mesh)

    def update(self, model) -> None:
        """Replace the model matrix."""
        self.model = np.asarray(model, dtype=np.float64)

    def render(self, position_attrib: int, color_attrib: int, tc_attrib: int = -1) -> None:
        """Draw the cube with the given attribute locations."""
        self._buffers.draw(_attribs(position_attrib, color_attrib, tc_attrib))


class Mesh:
    """A model loaded from an OBJ file, optionally textured."""

    def __init__(
        self,
        pivot=(0.0, 0.0, 0.0),
        path: "str | os.PathLike[str] | None" = None,
        texture_path: "str | os.PathLike[str] | None" = None,
    ) -> None:
        self.pivot = np.asarray(pivot, dtype=np.float64)
        self.angle = 0.0
        self.model = translate(self.pivot)
        self.mesh = load_obj(path) if path is not None else MeshData()
        self.texture = Texture(texture_path) if texture_path is not None else None
        self._buffers = _MeshBuffers(self.mesh)

    @property
    def has_tex(self) -> bool:
        return self.texture is not None

    def update(self, model) -> None:
        """Replace the model matrix."""
        self.model = np.asarray(model, dtype=np.float64)

    def render(
        self,
        position_attrib: int,
        color_attrib: int,
        tc_attrib: int = -1,
        has_texture_loc: int = -1,
    ) -> None:
        """Draw the mesh, binding its texture when it has one."""
        self._buffers.draw(
            _attribs(position_attrib, color_attrib, tc_attrib),
            lambda: _set_has_texture(self.texture, has_texture_loc),
        )


class Sphere:
    """A UV sphere with optional texture and lighting parameters."""

    def __init__(
        self, precision: int = 48, texture_path: "str | os.PathLike[str] | None" = None
    ) -> None:
        self.geometry = build_sphere(precision)
        self.mesh = self.geometry.to_mesh()
        self.model = identity()
        self.pivot = np.zeros(3)
        self.light_pos = np.zeros(3)
        self.light_color = np.zeros(3)
        self.emissive = False
        self.texture = Texture(texture_path) if texture_path is not None else None
        self._buffers = _MeshBuffers(self.mesh)

    @property
    def has_tex(self) -> bool:
        return self.texture is not None

    @property
    def texture_id(self) -> Optional[int]:
        return self.texture.texture_id if self.texture is not None else None

    def set_lighting(self, light_pos, light_color, emissive: bool) -> None:
        """Store the light position, colour and whether the sphere glows."""
        self.light_pos = np.asarray(light_pos, dtype=np.float64)
        self.light_color = np.asarray(light_color, dtype=np.float64)
        self.emissive = bool(emissive)

    def setup_model_matrix(self, pivot, angle: float, scale: float) -> None:
        """Place the sphere at ``pivot``, turned ``angle`` radians about Y, uniformly scaled."""
        self.pivot = np.asarray(pivot, dtype=np.float64)
        self.model = (
            translate(self.pivot)
            @ rotate(angle, (0.0, 1.0, 0.0))
            @ scale_matrix((scale, scale, scale))
        )

    def update(self, model) -> None:
        """Replace the model matrix."""
        self.model = np.asarray(model, dtype=np.float64)

    def render(
        self,
        position_attrib: int,
        normal_attrib: int,
        tc_attrib: int = -1,
        has_texture_loc: int = -1,
        light_pos_loc: int = -1,
        light_color_loc: int = -1,
        emissive_loc: int = -1,
    ) -> None:
        """Draw the sphere, setting texture and lighting uniforms where located."""

        def uniforms() -> None:
            gl = _gl()
            _set_has_texture(self.texture, has_texture_loc)
            if emissive_loc >= 0:
                gl.glUniform1i(emissive_loc, int(self.emissive))
            if light_pos_loc >= 0:
                gl.glUniform3f(light_pos_loc, *(float(c) for c in self.light_pos))
            if light_color_loc >= 0:
                gl.glUniform3f(light_color_loc, *(float(c) for c in self.light_color))

        self._buffers.draw(_attribs(position_attrib, normal_attrib, tc_attrib), uniforms)
        if self.texture is not None:
            self.texture.unbind()


def create_sun(precision: int = 48) -> Sphere:
    """A sun at the origin, twice the unit size."""
    sun = Sphere(precision, "textures/sun.jpg")
    sun.setup_model_matrix((0.0, 0.0, 0.0), 0.0, 2.0)
    return sun


def create_planet(precision: int = 48, orbit_distance: float = 5.0) -> Sphere:
    """A planet placed ``orbit_distance`` along X."""
    planet = Sphere(precision, "textures/earth.jpg")
    planet.setup_model_matrix((orbit_distance, 0.0, 0.0), 0.0, 1.0)
    return planet


def create_moon(
    precision: int = 48, planet_position=(5.0, 0.0, 0.0), orbit_distance: float = 1.5
) -> Sphere:
    """A small moon placed ``orbit_distance`` along X from its planet."""
    moon = Sphere(precision, "textures/moon.jpg")
    position = np.asarray(planet_position, dtype=np.float64) + (orbit_distance, 0.0, 0.0)
    moon.setup_model_matrix(position, 0.0, 0.27)
    return moon