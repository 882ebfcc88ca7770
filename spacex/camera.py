"""Fly-through camera driven by keys, mouse motion and the wheel."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

import numpy as np

from spacex.transforms import look_at, normalize, perspective

__all__ = ["Button", "Camera", "MOVE_INTERVAL", "NEAR_PLANE", "FAR_PLANE"]

# Moves are applied at most this often while a key is held (seconds).
MOVE_INTERVAL = (1000 // 360) / 1000.0
NEAR_PLANE = 0.1
FAR_PLANE = 100.0
PITCH_LIMIT = 89.0
MAX_FOV = 180.0


class Button(enum.Enum):
    """Movement key currently held."""

    TAB = enum.auto()
    SPACE = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    NONE = enum.auto()


@dataclass(eq=False)
class Camera:
    """Position, orientation and field of view of the viewer."""

    position: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 3.0]))
    front: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, -1.0]))
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    yaw: float = -90.0
    pitch: float = 0.0
    speed: float = 0.05
    sensitivity: float = 0.1
    fov: float = 45.0
    pressed: Button = Button.NONE
    last_move: float = 0.0

    def look(self, dx, dy) -> None:
        """Turn the camera by a relative mouse motion."""
        self.yaw += dx * self.sensitivity
        self.pitch -= dy * self.sensitivity
        self.pitch = max(-PITCH_LIMIT, min(PITCH_LIMIT, self.pitch))

        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        self.front = normalize(
            [math.cos(yaw) * math.cos(pitch), math.sin(pitch), math.sin(yaw) * math.cos(pitch)]
        )

    def zoom(self, wheel_y) -> float:
        """Widen the view on a downward wheel step, narrow it otherwise; return the fov."""
        self.fov += 1.0 if wheel_y < 0 else -1.0
        if self.fov < 0.0000001:
            self.fov = 1.0
        if self.fov > MAX_FOV:
            self.fov = MAX_FOV
        return self.fov

    def press(self, button) -> None:
        """Start holding ``button``."""
        self.pressed = Button(button)

    def release(self) -> None:
        """Stop holding any movement key."""
        self.pressed = Button.NONE

    def move(self, button) -> None:
        """Take one step in the direction ``button`` stands for."""
        button = Button(button)
        if button is Button.TAB:
            self.position = self.position - self.up * 0 - np.array([0.0, self.speed, 0.0])
        elif button is Button.SPACE:
            self.position = self.position + np.array([0.0, self.speed, 0.0])
        elif button in (Button.LEFT, Button.RIGHT):
            right = normalize(np.cross(self.front, self.up)) * self.speed
            self.position = self.position - right if button is Button.LEFT else self.position + right
        elif button is Button.UP:
            self.position = self.position + self.front * self.speed
        elif button is Button.DOWN:
            self.position = self.position - self.front * self.speed

    def update(self, now) -> bool:
        """Step in the held direction if enough time has passed; return whether it moved."""
        if self.pressed is Button.NONE or now - self.last_move <= MOVE_INTERVAL:
            return False
        self.move(self.pressed)
        self.last_move = now
        return True

    def view_matrix(self) -> np.ndarray:
        """Return the view matrix for the current position and direction."""
        return look_at(self.position, self.position + self.front, self.up)

    def projection_matrix(self, width, height) -> np.ndarray:
        """Return the perspective projection for a viewport of the given size."""
        if height == 0:
            raise ValueError("viewport height must be non-zero")
        return perspective(math.radians(self.fov), width / float(height), NEAR_PLANE, FAR_PLANE)