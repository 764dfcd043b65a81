"""Small linear-algebra helpers for 4x4 transforms and vertex data.

Matrices are numpy arrays in ordinary mathematical layout: a point ``p`` is
transformed as ``m @ p`` and the translation sits in the last column.
Transpose before handing a matrix to OpenGL, which expects column-major data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np
from numpy.typing import ArrayLike


@dataclass(frozen=True)
class Vertex:
    """One vertex: position, normal (also used as colour) and texture coordinate."""

    position: Tuple[float, float, float]
    normal: Tuple[float, float, float]
    texcoord: Tuple[float, float]


def _vec3(v: ArrayLike) -> np.ndarray:
    arr = np.asarray(v, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


def identity() -> np.ndarray:
    """Return the 4x4 identity matrix."""
    return np.eye(4, dtype=np.float64)


def normalize(v: ArrayLike) -> np.ndarray:
    """Return ``v`` scaled to unit length."""
    arr = np.asarray(v, dtype=np.float64)
    length = float(np.linalg.norm(arr))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return arr / length


def translate(offset: ArrayLike) -> np.ndarray:
    """Return a matrix translating by ``offset``."""
    m = identity()
    m[:3, 3] = _vec3(offset)
    return m


def rotate(angle: float, axis: ArrayLike) -> np.ndarray:
    """Return a right-handed rotation by ``angle`` radians about ``axis``."""
    a = normalize(_vec3(axis))
    c = math.cos(angle)
    s = math.sin(angle)
    cross = np.array(
        [[0.0, -a[2], a[1]], [a[2], 0.0, -a[0]], [-a[1], a[0], 0.0]]
    )
    m = identity()
    m[:3, :3] = c * np.eye(3) + s * cross + (1.0 - c) * np.outer(a, a)
    return m


def scale(factors: ArrayLike) -> np.ndarray:
    """Return a matrix scaling each axis by the matching factor."""
    m = identity()
    m[0, 0], m[1, 1], m[2, 2] = _vec3(factors)
    return m


def look_at(eye: ArrayLike, center: ArrayLike, up: ArrayLike) -> np.ndarray:
    """Return a right-handed view matrix looking from ``eye`` towards ``center``."""
    eye_v = _vec3(eye)
    f = normalize(_vec3(center) - eye_v)
    s = normalize(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    m = identity()
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -float(np.dot(s, eye_v))
    m[1, 3] = -float(np.dot(u, eye_v))
    m[2, 3] = float(np.dot(f, eye_v))
    return m


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Return a perspective projection mapping depth into the [-1, 1] range."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must be non-zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def pack_vertices(vertices: Iterable[Vertex]) -> np.ndarray:
    """Interleave vertices into a float32 array of shape (n, 8)."""
    rows = [(*v.position, *v.normal, *v.texcoord) for v in vertices]
    return np.array(rows, dtype=np.float32).reshape(-1, 8)