"""Loader for Wavefront OBJ models, producing flat triangle meshes.

Each triangle corner becomes its own vertex, so the index list is simply
``0, 1, 2, ...``. Polygons with more than three corners are split into a fan
of triangles. Missing normals or texture coordinates are filled with zeros.
"""

from __future__ import annotations

import os
from typing import Iterable, List, Optional, Sequence, Tuple

from orrery.geometry import MeshData
from orrery.glmath import Vertex

_Vec3 = Tuple[float, float, float]
_Vec2 = Tuple[float, float]
_Corner = Tuple[int, Optional[int], Optional[int]]

_ZERO3: _Vec3 = (0.0, 0.0, 0.0)
_ZERO2: _Vec2 = (0.0, 0.0)


class ObjError(ValueError):
    """Raised when an OBJ model cannot be read or is malformed."""


def _floats(parts: Sequence[str], line_no: int) -> List[float]:
    try:
        return [float(p) for p in parts]
    except ValueError as exc:
        raise ObjError(f"line {line_no}: invalid number ({exc})") from None


def _resolve(token: str, count: int, kind: str, line_no: int) -> int:
    try:
        raw = int(token)
    except ValueError:
        raise ObjError(f"line {line_no}: invalid {kind} index {token!r}") from None
    if raw == 0:
        raise ObjError(f"line {line_no}: {kind} index 0 is not allowed")
    index = raw - 1 if raw > 0 else count + raw
    if not 0 <= index < count:
        raise ObjError(f"line {line_no}: {kind} index {raw} is out of range")
    return index


def _parse_corner(
    token: str, counts: Tuple[int, int, int], line_no: int
) -> _Corner:
    parts = token.split("/")
    if len(parts) > 3 or not parts[0]:
        raise ObjError(f"line {line_no}: malformed face corner {token!r}")
    n_pos, n_tex, n_norm = counts
    pos = _resolve(parts[0], n_pos, "vertex", line_no)
    tex = (
        _resolve(parts[1], n_tex, "texture", line_no)
        if len(parts) > 1 and parts[1]
        else None
    )
    norm = (
        _resolve(parts[2], n_norm, "normal", line_no)
        if len(parts) > 2 and parts[2]
        else None
    )
    return pos, tex, norm


def parse_obj(lines: Iterable[str]) -> MeshData:
    """Parse OBJ text lines into a triangulated mesh."""
    positions: List[_Vec3] = []
    tex_coords: List[_Vec2] = []
    normals: List[_Vec3] = []
    vertices: List[Vertex] = []

    for line_no, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        keyword, *args = line.split()
        if keyword == "v":
            if len(args) < 3:
                raise ObjError(f"line {line_no}: vertex needs three coordinates")
            x, y, z = _floats(args[:3], line_no)
            positions.append((x, y, z))
        elif keyword == "vt":
            if not args:
                raise ObjError(f"line {line_no}: texture coordinate is empty")
            values = _floats(args[:2], line_no)
            u = values[0]
            v = values[1] if len(values) > 1 else 0.0
            tex_coords.append((u, v))
        elif keyword == "vn":
            if len(args) < 3:
                raise ObjError(f"line {line_no}: normal needs three components")
            x, y, z = _floats(args[:3], line_no)
            normals.append((x, y, z))
        elif keyword == "f":
            if len(args) < 3:
                raise ObjError(f"line {line_no}: face needs at least three corners")
            counts = (len(positions), len(tex_coords), len(normals))
            corners = [_parse_corner(tok, counts, line_no) for tok in args]
            first = corners[0]
            for second, third in zip(corners[1:], corners[2:]):
                for pos, tex, norm in (first, second, third):
                    vertices.append(
                        Vertex(
                            positions[pos],
                            normals[norm] if norm is not None else _ZERO3,
                            tex_coords[tex] if tex is not None else _ZERO2,
                        )
                    )
        # Other statements (groups, materials, smoothing, lines) carry no geometry
        # that the renderer uses.

    return MeshData(vertices, list(range(len(vertices))))


def load_obj(path: "str | os.PathLike[str]") -> MeshData:
    """Read and parse the OBJ file at ``path``."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return parse_obj(handle)
    except OSError as exc:
        raise ObjError(f"couldn't open the .obj file {os.fspath(path)!r}: {exc}") from exc