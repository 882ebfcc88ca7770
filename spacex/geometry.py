"""Cube mesh data and per-object model matrices for the scene."""

from __future__ import annotations

import math

import numpy as np

from spacex.transforms import rotate, scale, translate

__all__ = [
    "CUBE_COUNT",
    "LIGHT_POSITION",
    "LIGHT_SCALE",
    "VERTEX_STRIDE",
    "cube_vertices",
    "cube_indices",
    "cube_positions",
    "cube_model",
    "light_model",
]

# position (3), normal (3), colour (3)
VERTEX_STRIDE = 9

LIGHT_POSITION = (1.2, 1.0, 2.0)
LIGHT_SCALE = 0.2

_ROTATION_AXIS = (0.5, 1.0, 0.0)
_ROTATION_STEP_DEGREES = 20.0

_VERTICES = (
    (-0.5, -0.5, -0.5, 0.0, 0.0, -1.0, 1.0, 0.0, 0.0),
    (0.5, -0.5, -0.5, 0.0, 0.0, -1.0, 0.0, 1.0, 0.0),
    (0.5, 0.5, -0.5, 0.0, 0.0, -1.0, 0.0, 0.0, 1.0),
    (-0.5, 0.5, -0.5, 0.0, 0.0, -1.0, 1.0, 1.0, 0.0),

    (-0.5, -0.5, 0.5, 0.0, 0.0, 1.0, 1.0, 0.0, 1.0),
    (0.5, -0.5, 0.5, 0.0, 0.0, 1.0, 0.0, 1.0, 1.0),
    (0.5, 0.5, 0.5, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0),
    (-0.5, 0.5, 0.5, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0),

    (-0.5, 0.5, 0.5, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0),
    (-0.5, 0.5, -0.5, -1.0, 0.0, 0.0, 1.0, 1.0, 0.0),
    (-0.5, -0.5, -0.5, -1.0, 0.0, 0.0, 1.0, 0.0, 0.0),
    (-0.5, -0.5, 0.5, -1.0, 0.0, 0.0, 1.0, 0.0, 1.0),

    (0.5, 0.5, 0.5, 1.0, 0.0, 0.0, 1.0, 1.0, 1.0),
    (0.5, 0.5, -0.5, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0),
    (0.5, -0.5, -0.5, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0),
    (0.5, -0.5, 0.5, 1.0, 0.0, 0.0, 0.0, 1.0, 1.0),

    (-0.5, -0.5, -0.5, 0.0, -1.0, 0.0, 1.0, 0.0, 0.0),
    (0.5, -0.5, -0.5, 0.0, -1.0, 0.0, 0.0, 1.0, 0.0),
    (0.5, -0.5, 0.5, 0.0, -1.0, 0.0, 0.0, 1.0, 1.0),
    (-0.5, -0.5, 0.5, 0.0, -1.0, 0.0, 1.0, 0.0, 1.0),

    (-0.5, 0.5, -0.5, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0),
    (0.5, 0.5, -0.5, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0),
    (0.5, 0.5, 0.5, 0.0, 1.0, 0.0, 1.0, 1.0, 1.0),
    (-0.5, 0.5, 0.5, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0),
)

_POSITIONS = (
    (0.0, 0.0, 0.0),
    (2.0, 5.0, -15.0),
    (-1.5, -2.2, -2.5),
    (-3.8, -2.0, -12.3),
    (2.4, -0.4, -3.5),
    (-1.7, 3.0, -7.5),
    (1.3, -2.0, -2.5),
    (1.5, 2.0, -2.5),
    (1.5, 0.2, -1.5),
    (-1.3, 1.0, -1.5),
    (0.0, 0.0, -1.5),
)

CUBE_COUNT = len(_POSITIONS)


def cube_vertices() -> np.ndarray:
    """Return the 24 cube vertices as a (24, 9) float32 array."""
    return np.array(_VERTICES, dtype=np.float32)


def cube_indices() -> np.ndarray:
    """Return the 36 triangle indices, two triangles per face."""
    face = (0, 1, 2, 2, 3, 0)
    return np.array(
        [corner + 4 * side for side in range(6) for corner in face], dtype=np.uint32
    )


def cube_positions() -> np.ndarray:
    """Return the centres of the scene's cubes as a (CUBE_COUNT, 3) array."""
    return np.array(_POSITIONS, dtype=np.float64)


def cube_model(index, rotation_angle) -> np.ndarray:
    """Return the model matrix of cube ``index`` at the given spin angle (radians).

    The last cube is a fixed, mirrored one that does not spin.
    """
    if not 0 <= index < CUBE_COUNT:
        raise IndexError(f"cube index {index} out of range 0..{CUBE_COUNT - 1}")
    if index == CUBE_COUNT - 1:
        return translate(scale(np.eye(4), (-0.5, -0.5, -0.5)), (4.0, -4.0, 0.0))
    model = translate(np.eye(4), _POSITIONS[index])
    angle = math.radians(_ROTATION_STEP_DEGREES * index) + rotation_angle
    return rotate(model, angle, _ROTATION_AXIS)


def light_model(position) -> np.ndarray:
    """Return the model matrix of the small light cube placed at ``position``."""
    model = translate(np.eye(4), position)
    return scale(model, (LIGHT_SCALE, LIGHT_SCALE, LIGHT_SCALE))