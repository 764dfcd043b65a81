"""A free-flying camera driven by keyboard translation and mouse look."""

from __future__ import annotations

import enum
import math

import numpy as np

from orrery.glmath import identity, look_at, normalize, perspective

_WORLD_UP = np.array([0.0, 1.0, 0.0])
_START_POSITION = (0.0, 10.0, -16.0)
_PITCH_LIMIT = 89.0


class Direction(enum.Enum):
    """Direction of a linear camera movement."""

    FORWARD = enum.auto()
    BACKWARD = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()


def _front_from_angles(yaw: float, pitch: float) -> np.ndarray:
    y = math.radians(yaw)
    p = math.radians(pitch)
    return normalize(
        (math.cos(y) * math.cos(p), math.sin(p), math.sin(y) * math.cos(p))
    )


class Camera:
    """Holds view and projection matrices and moves through the scene."""

    def __init__(self) -> None:
        self.position = np.array(_START_POSITION, dtype=np.float64)
        self.world_up = _WORLD_UP.copy()
        self.yaw = 90.0  # looking along +z
        self.pitch = 0.0
        self.speed = 5.0
        self.sensitivity = 0.1
        self.view = identity()
        self.projection = identity()
        self.front = np.zeros(3)
        self.right = np.zeros(3)
        self.up = np.zeros(3)
        self.update_vectors()

    def initialize(self, width: int, height: int) -> None:
        """Set the initial view towards the origin and a projection for the window size."""
        if width <= 0 or height <= 0:
            raise ValueError("window dimensions must be positive")
        self.view = look_at(_START_POSITION, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        self.projection = perspective(
            math.radians(40.0), float(width) / float(height), 0.01, 100.0
        )

    def move(self, direction: Direction) -> None:
        """Translate the camera one step in ``direction``."""
        velocity = self.speed * 0.1
        front = _front_from_angles(self.yaw, self.pitch)
        right = normalize(np.cross(front, _WORLD_UP))
        if direction is Direction.FORWARD:
            self.position = self.position + front * velocity
        elif direction is Direction.BACKWARD:
            self.position = self.position - front * velocity
        elif direction is Direction.LEFT:
            self.position = self.position - right * velocity
        elif direction is Direction.RIGHT:
            self.position = self.position + right * velocity
        self.update_view()

    def rotate(self, mouse_x: float, mouse_y: float) -> None:
        """Turn the camera by a mouse offset; pitch is kept within ±89 degrees."""
        self.yaw += mouse_x * self.sensitivity
        self.pitch += mouse_y * self.sensitivity
        self.pitch = max(-_PITCH_LIMIT, min(_PITCH_LIMIT, self.pitch))
        self.update_vectors()
        self.update_view()

    def update_view(self) -> None:
        """Rebuild the view matrix from position, yaw and pitch."""
        front = _front_from_angles(self.yaw, self.pitch)
        self.view = look_at(self.position, self.position + front, _WORLD_UP)

    def update_vectors(self) -> None:
        """Recompute the front, right and up basis vectors."""
        self.front = _front_from_angles(self.yaw, self.pitch)
        self.right = normalize(np.cross(self.front, self.world_up))
        self.up = normalize(np.cross(self.right, self.front))