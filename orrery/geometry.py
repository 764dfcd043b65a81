"""Procedural geometry: spheres, the debug cube, Saturn's ring and the skybox cube."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from orrery.glmath import Vertex


@dataclass
class MeshData:
    """Vertices with an index list describing triangles."""

    vertices: List[Vertex] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)


@dataclass
class SphereGeometry:
    """A UV sphere of unit radius with per-vertex normals and texture coordinates."""

    precision: int
    vertices: np.ndarray
    tex_coords: np.ndarray
    normals: np.ndarray
    indices: np.ndarray

    def to_mesh(self) -> MeshData:
        """Return the sphere as a list of vertices and triangle indices."""
        verts = [
            Vertex(
                tuple(float(c) for c in pos),
                tuple(float(c) for c in norm),
                tuple(float(c) for c in tc),
            )
            for pos, norm, tc in zip(self.vertices, self.normals, self.tex_coords)
        ]
        return MeshData(verts, [int(i) for i in self.indices])


def _to_radians(degrees):
    # Deliberately uses the same coarse value of pi as the original geometry.
    return degrees * 2.0 * 3.14159 / 360.0


def build_sphere(precision: int) -> SphereGeometry:
    """Build a sphere with ``precision`` slices and stacks."""
    if precision < 1:
        raise ValueError("sphere precision must be at least 1")
    p = precision
    i, j = np.meshgrid(np.arange(p + 1), np.arange(p + 1), indexing="ij")
    y = np.cos(_to_radians(180.0 - i * 180.0 / p))
    ring = np.abs(np.cos(np.arcsin(np.clip(y, -1.0, 1.0))))
    x = -np.cos(_to_radians(j * 360.0 / p)) * ring
    z = np.sin(_to_radians(j * 360.0 / p)) * ring
    positions = np.stack([x, y, z], axis=-1).reshape(-1, 3).astype(np.float32)
    tex = np.stack([j / p, i / p], axis=-1).reshape(-1, 2).astype(np.float32)

    qi, qj = np.meshgrid(np.arange(p), np.arange(p), indexing="ij")
    base = (qi * (p + 1) + qj).ravel()
    row = p + 1
    indices = np.stack(
        [base, base + 1, base + row, base + 1, base + row + 1, base + row], axis=1
    ).ravel()
    return SphereGeometry(
        precision=p,
        vertices=positions,
        tex_coords=tex,
        normals=positions.copy(),
        indices=indices.astype(np.int64),
    )


_CUBE_VERTICES = [
    ((1.0, -1.0, -1.0), (0.0, 0.0, 0.0)),
    ((1.0, -1.0, 1.0), (1.0, 0.0, 0.0)),
    ((-1.0, -1.0, 1.0), (0.0, 1.0, 0.0)),
    ((-1.0, -1.0, -1.0), (0.0, 0.0, 1.0)),
    ((1.0, 1.0, -1.0), (1.0, 1.0, 0.0)),
    ((1.0, 1.0, 1.0), (1.0, 0.0, 1.0)),
    ((-1.0, 1.0, 1.0), (0.0, 1.0, 1.0)),
    ((-1.0, 1.0, -1.0), (1.0, 1.0, 1.0)),
]

# One-based triangle corners, as laid out in the cube's face table.
_CUBE_FACES = [
    2, 3, 4, 8, 7, 6, 1, 5, 6, 2, 6, 7, 7, 8, 4, 1, 4, 8,
    1, 2, 4, 5, 8, 6, 2, 1, 6, 3, 2, 7, 3, 7, 4, 5, 1, 8,
]


def cube_mesh() -> MeshData:
    """Return the coloured unit cube with zero-based indices."""
    verts = [Vertex(pos, color, (1.0, 0.0)) for pos, color in _CUBE_VERTICES]
    return MeshData(verts, [corner - 1 for corner in _CUBE_FACES])


def ring_geometry(
    segments: int = 128, inner_radius: float = 2.0, outer_radius: float = 3.5
) -> Tuple[np.ndarray, np.ndarray]:
    """Return positions (n, 3) and texture coordinates (n, 2) of a flat annulus.

    Vertices alternate outer and inner edge and suit a triangle strip.
    """
    if segments < 1:
        raise ValueError("ring needs at least one segment")
    positions = []
    tex = []
    for step in range(segments + 1):
        theta = 2.0 * math.pi * step / segments
        x = math.cos(theta)
        z = math.sin(theta)
        uv = (0.5 * (x + 1.0), 0.5 * (z + 1.0))
        for radius in (outer_radius, inner_radius):
            positions.append((radius * x, 0.0, radius * z))
            tex.append(uv)
    return np.array(positions, dtype=np.float32), np.array(tex, dtype=np.float32)


_SKYBOX = [
    -1.0, 1.0, -1.0, -1.0, -1.0, -1.0, 1.0, -1.0, -1.0,
    1.0, -1.0, -1.0, 1.0, 1.0, -1.0, -1.0, 1.0, -1.0,
    -1.0, -1.0, 1.0, -1.0, -1.0, -1.0, -1.0, 1.0, -1.0,
    -1.0, 1.0, -1.0, -1.0, 1.0, 1.0, -1.0, -1.0, 1.0,
    1.0, -1.0, -1.0, 1.0, -1.0, 1.0, 1.0, 1.0, 1.0,
    1.0, 1.0, 1.0, 1.0, 1.0, -1.0, 1.0, -1.0, -1.0,
    -1.0, -1.0, 1.0, -1.0, 1.0, 1.0, 1.0, 1.0, 1.0,
    1.0, 1.0, 1.0, 1.0, -1.0, 1.0, -1.0, -1.0, 1.0,
    -1.0, 1.0, -1.0, 1.0, 1.0, -1.0, 1.0, 1.0, 1.0,
    1.0, 1.0, 1.0, -1.0, 1.0, 1.0, -1.0, 1.0, -1.0,
    -1.0, -1.0, -1.0, -1.0, -1.0, 1.0, 1.0, -1.0, -1.0,
    1.0, -1.0, -1.0, -1.0, -1.0, 1.0, 1.0, -1.0, 1.0,
]


def skybox_vertices() -> np.ndarray:
    """Return the 36 positions of the skybox cube as a float32 (36, 3) array."""
    return np.array(_SKYBOX, dtype=np.float32).reshape(-1, 3)