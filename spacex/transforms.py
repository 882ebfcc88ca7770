"""Vector and 4x4 matrix helpers for a right-handed camera.

Matrices are numpy arrays in mathematical (row, column) order and act on
column vectors: ``matrix @ point``. Convert with ``matrix.T`` before handing
one to a graphics API that expects column-major storage.
"""

from __future__ import annotations

import math

import numpy as np

__all__ = ["normalize", "look_at", "perspective", "translate", "scale", "rotate"]


def _vec3(value) -> np.ndarray:
    vector = np.asarray(value, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {vector.shape}")
    return vector


def _mat4(value) -> np.ndarray:
    matrix = np.asarray(value, dtype=np.float64)
    if matrix.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
    return matrix


def normalize(vector) -> np.ndarray:
    """Return ``vector`` scaled to unit length."""
    v = np.asarray(vector, dtype=np.float64)
    length = float(np.linalg.norm(v))
    if length == 0.0 or not math.isfinite(length):
        raise ValueError("cannot normalize a zero-length or non-finite vector")
    return v / length


def look_at(eye, center, up) -> np.ndarray:
    """Build a view matrix looking from ``eye`` towards ``center``."""
    eye = _vec3(eye)
    forward = normalize(_vec3(center) - eye)
    side = normalize(np.cross(forward, _vec3(up)))
    upward = np.cross(side, forward)

    view = np.eye(4)
    view[0, :3] = side
    view[1, :3] = upward
    view[2, :3] = -forward
    view[0, 3] = -side @ eye
    view[1, 3] = -upward @ eye
    view[2, 3] = forward @ eye
    return view


def perspective(fovy, aspect, near, far) -> np.ndarray:
    """Build a perspective projection mapping depth [-near, -far] to [-1, 1]."""
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    if tan_half == 0:
        raise ValueError("field of view must be non-zero")

    projection = np.zeros((4, 4))
    projection[0, 0] = 1.0 / (aspect * tan_half)
    projection[1, 1] = 1.0 / tan_half
    projection[2, 2] = -(far + near) / (far - near)
    projection[2, 3] = -(2.0 * far * near) / (far - near)
    projection[3, 2] = -1.0
    return projection


def translate(matrix, offset) -> np.ndarray:
    """Return ``matrix`` followed by a translation by ``offset``."""
    translation = np.eye(4)
    translation[:3, 3] = _vec3(offset)
    return _mat4(matrix) @ translation


def scale(matrix, factors) -> np.ndarray:
    """Return ``matrix`` followed by a per-axis scaling."""
    scaling = np.diag([*_vec3(factors), 1.0])
    return _mat4(matrix) @ scaling


def rotate(matrix, angle, axis) -> np.ndarray:
    """Return ``matrix`` followed by a rotation of ``angle`` radians about ``axis``."""
    x, y, z = a = normalize(_vec3(axis))
    c = math.cos(angle)
    s = math.sin(angle)
    cross = np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])
    rotation = np.eye(4)
    rotation[:3, :3] = c * np.eye(3) + (1.0 - c) * np.outer(a, a) + s * cross
    return _mat4(matrix) @ rotation