"""The solar-system scene graph: orbits, spins and the circling starship."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import numpy as np

from orrery.glmath import identity, look_at, rotate, scale, translate

_Triple = Tuple[float, float, float]
_Spec = Union[float, Tuple[float, ...]]


def _triple(value: _Spec) -> _Triple:
    if isinstance(value, (int, float)):
        return (float(value),) * 3
    values = tuple(float(v) for v in value)
    if len(values) != 3:
        raise ValueError(f"expected one or three values, got {len(values)}")
    return values  # type: ignore[return-value]


@dataclass(frozen=True)
class Orbit:
    """Motion of one body relative to its parent.

    ``speed`` and ``distance`` give per-axis angular speed and radius of the
    orbit; ``rotation_speed`` spins the body about ``rotation_axis``.
    A single number for ``speed``, ``distance`` or ``size`` applies to all axes.
    """

    speed: _Spec
    distance: _Spec
    rotation_speed: float
    size: _Spec
    rotation_axis: _Triple = (0.0, 1.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "speed", _triple(self.speed))
        object.__setattr__(self, "distance", _triple(self.distance))
        object.__setattr__(self, "size", _triple(self.size))
        object.__setattr__(self, "rotation_axis", _triple(self.rotation_axis))


# (name, parent, orbit) in update order.
BODIES: Tuple[Tuple[str, Optional[str], Orbit], ...] = (
    ("sun", None, Orbit(0.0, 0.0, 0.1, 2.0)),
    ("earth", "sun", Orbit(0.5, (8.0, 0.0, 8.0), 1.0, 1.0)),
    ("moon", "earth", Orbit(2.0, (2.0, 1.0, 2.0), 1.0, 0.5)),
    ("mercury", "sun", Orbit(4.0, (3.8, 0.0, 0.0), 0.1, 0.4)),
    ("venus", "sun", Orbit(1.6, (7.2, 0.0, 0.0), 0.1, 0.9)),
    ("mars", "sun", Orbit(0.5, (15.0, 0.0, 0.0), 0.1, 0.5)),
    ("jupiter", "sun", Orbit(0.08, (52.0, 0.0, 0.0), 0.1, 4.0)),
    ("saturn", "sun", Orbit(0.03, (95.0, 0.0, 0.0), 0.1, 3.5)),
    (
        "uranus",
        "sun",
        Orbit(0.01, (192.0, 0.0, 0.0), 0.1, 1.4, (0.0, 0.1736, 0.9848)),
    ),
    ("neptune", "sun", Orbit(0.006, (301.0, 0.0, 0.0), 0.1, 1.4)),
)

SHIP_ORBIT = Orbit(1.0, (0.0, 5.0, 5.0), 0.0, 0.04)


def compute_transforms(
    time: float, orbit: Orbit
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return the translation, rotation and scale matrices of ``orbit`` at ``time``."""
    sx, sy, sz = orbit.speed
    dx, dy, dz = orbit.distance
    tmat = translate(
        (
            math.cos(sx * time) * dx,
            math.sin(sy * time) * dy,
            math.sin(sz * time) * dz,
        )
    )
    rmat = rotate(orbit.rotation_speed * time, orbit.rotation_axis)
    smat = scale(orbit.size)
    return tmat, rmat, smat


def ship_model(time: float) -> np.ndarray:
    """Return the starship's model matrix: it circles the sun and faces it."""
    tmat, _, smat = compute_transforms(time, SHIP_ORBIT)
    ship_pos = tmat[:3, 3]
    rmat = identity()
    # When the ship passes through the sun there is no direction to face.
    if np.linalg.norm(ship_pos) > 0.0:
        orient = np.linalg.inv(look_at(ship_pos, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)))
        rmat[:3, :3] = orient[:3, :3]
    rmat = rmat @ rotate(math.radians(-90.0), (0.0, 1.0, 0.0))
    return tmat @ rmat @ smat


def update_scene(time: float) -> Dict[str, np.ndarray]:
    """Return the model matrix of every body and of the ship at ``time``."""
    models: Dict[str, np.ndarray] = {}
    for name, parent, orbit in BODIES:
        tmat, rmat, smat = compute_transforms(time, orbit)
        parent_model = models[parent] if parent is not None else identity()
        models[name] = parent_model @ tmat @ rmat @ smat
    models["ship"] = ship_model(time)
    return models