"""Vector and matrix helpers used by the scene graph and the solver.

Matrices are 4x4 ``numpy`` arrays that act on column vectors, so a point
``p`` is transformed as ``matrix @ (x, y, z, 1)``.  Angles passed to
``rotate`` and ``perspective`` are in radians; ``rotate_*_with_degree``
takes Euler angles in degrees.
"""

from __future__ import annotations

import math
import random as _random

import numpy as np

_PI = 3.1415926535


def _vec3(value) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


def _mat4(value) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {arr.shape}")
    return arr


def _normalize(value: np.ndarray) -> np.ndarray:
    with np.errstate(invalid="ignore", divide="ignore"):
        return value / np.linalg.norm(value)


def translate(matrix, offset) -> np.ndarray:
    """Return ``matrix`` multiplied by a translation by ``offset``."""
    t = np.identity(4)
    t[:3, 3] = _vec3(offset)
    return _mat4(matrix) @ t


def scale(matrix, factors) -> np.ndarray:
    """Return ``matrix`` multiplied by a non-uniform scale."""
    s = np.identity(4)
    s[0, 0], s[1, 1], s[2, 2] = _vec3(factors)
    return _mat4(matrix) @ s


def rotate(matrix, angle, axis) -> np.ndarray:
    """Return ``matrix`` multiplied by a rotation of ``angle`` radians about ``axis``."""
    x, y, z = _normalize(_vec3(axis))
    c = math.cos(angle)
    s = math.sin(angle)
    k = 1.0 - c
    r = np.identity(4)
    r[:3, :3] = [
        [c + k * x * x, k * x * y - s * z, k * x * z + s * y],
        [k * x * y + s * z, c + k * y * y, k * y * z - s * x],
        [k * x * z - s * y, k * y * z + s * x, c + k * z * z],
    ]
    return _mat4(matrix) @ r


def rotate_matrix_with_degree(matrix, rotation) -> np.ndarray:
    """Apply Euler angles in degrees, in the order yaw (y), roll (z), pitch (x)."""
    rx, ry, rz = _vec3(rotation)
    result = rotate(matrix, math.radians(ry), (0.0, 1.0, 0.0))
    result = rotate(result, math.radians(rz), (0.0, 0.0, 1.0))
    return rotate(result, math.radians(rx), (1.0, 0.0, 0.0))


def rotate_with_degree(vector, rotation) -> np.ndarray:
    """Rotate a direction by Euler angles in degrees and normalise it."""
    m = rotate_matrix_with_degree(np.identity(4), rotation)
    direction = m @ np.append(_vec3(vector), 0.0)
    return _normalize(direction[:3])


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = _vec3(eye)
    f = _normalize(_vec3(center) - eye)
    s = _normalize(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    result = np.identity(4)
    result[0, :3] = s
    result[1, :3] = u
    result[2, :3] = -f
    result[0, 3] = -np.dot(s, eye)
    result[1, 3] = -np.dot(u, eye)
    result[2, 3] = np.dot(f, eye)
    return result


def perspective(fovy, aspect, near, far) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    if far == near:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    result = np.zeros((4, 4))
    result[0, 0] = 1.0 / (aspect * tan_half)
    result[1, 1] = 1.0 / tan_half
    result[2, 2] = -(far + near) / (far - near)
    result[3, 2] = -1.0
    result[2, 3] = -(2.0 * far * near) / (far - near)
    return result


def random(min_value: float = 0.0, max_value: float = 1.0) -> float:
    """Uniform random number between ``min_value`` and ``max_value``."""
    return min_value + _random.random() * (max_value - min_value)


def random_unit_vector() -> np.ndarray:
    """Random direction built from two random angles."""
    phi = random(0.0, _PI * 2.0)
    theta = random(0.0, _PI * 2.0)
    sin_phi = math.sin(phi)
    return np.array([math.cos(theta) * sin_phi, math.cos(phi), math.sin(theta) * sin_phi])


def lerp(value1, value2, a):
    """Linear interpolation with ``a`` clamped to [0, 1]."""
    a = min(max(a, 0.0), 1.0)
    if isinstance(value1, (list, tuple)):
        value1 = np.asarray(value1, dtype=float)
    if isinstance(value2, (list, tuple)):
        value2 = np.asarray(value2, dtype=float)
    return a * value2 + (1.0 - a) * value1