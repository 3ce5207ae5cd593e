# src/freefall/core/vectors.py
"""
JIT-compiled 3D vector kernels.

All kernels take and return float64 arrays of shape (3,). They never modify
their inputs.
"""

import math
from typing import NamedTuple

import numpy as np
from numba import njit

__all__ = [
    "SpacetimePoint",
    "as_vector",
    "dot",
    "cross",
    "length",
    "normalize",
    "rotate_xy",
    "rotate_around_point_and_vector",
]


class SpacetimePoint(NamedTuple):
    """An event on a (time, radial distance) diagram; seconds and metres."""
    time: float
    radial: float


def as_vector(x, y=0.0, z=0.0) -> np.ndarray:
    """Build a float64 3-vector; accepts either three scalars or one sequence."""
    if np.ndim(x) > 0:
        v = np.asarray(x, dtype=np.float64)
        if v.shape != (3,):
            raise ValueError(f"Expected a 3-vector, got shape {v.shape}")
        return v.copy()
    return np.array([x, y, z], dtype=np.float64)


@njit(cache=True)
def dot(a: np.ndarray, b: np.ndarray) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@njit(cache=True)
def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    out = np.empty(3)
    out[0] = a[1] * b[2] - a[2] * b[1]
    out[1] = a[2] * b[0] - a[0] * b[2]
    out[2] = a[0] * b[1] - a[1] * b[0]
    return out


@njit(cache=True)
def length(a: np.ndarray) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


@njit(cache=True)
def normalize(a: np.ndarray) -> np.ndarray:
    """
    Returns the unit vector along `a`. The zero vector maps to itself.
    """
    n = math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])
    out = np.zeros(3)
    if n == 0.0:
        return out
    out[0] = a[0] / n
    out[1] = a[1] / n
    out[2] = a[2] / n
    return out


@njit(cache=True)
def rotate_xy(v: np.ndarray, angle: float) -> np.ndarray:
    """Rotate `v` by `angle` radians about the z axis."""
    c = math.cos(angle)
    s = math.sin(angle)
    out = np.empty(3)
    out[0] = c * v[0] - s * v[1]
    out[1] = s * v[0] + c * v[1]
    out[2] = v[2]
    return out


@njit(cache=True)
def rotate_around_point_and_vector(
    p: np.ndarray, centre: np.ndarray, axis: np.ndarray, angle: float
) -> np.ndarray:
    """
    Rotate point `p` by `angle` radians about the line through `centre` with
    unit direction `axis` (Rodrigues' formula, right-handed).
    """
    vx = p[0] - centre[0]
    vy = p[1] - centre[1]
    vz = p[2] - centre[2]
    c = math.cos(angle)
    s = math.sin(angle)
    k_dot_v = axis[0] * vx + axis[1] * vy + axis[2] * vz
    # k x v
    kx = axis[1] * vz - axis[2] * vy
    ky = axis[2] * vx - axis[0] * vz
    kz = axis[0] * vy - axis[1] * vx
    out = np.empty(3)
    out[0] = centre[0] + vx * c + kx * s + axis[0] * k_dot_v * (1.0 - c)
    out[1] = centre[1] + vy * c + ky * s + axis[1] * k_dot_v * (1.0 - c)
    out[2] = centre[2] + vz * c + kz * s + axis[2] * k_dot_v * (1.0 - c)
    return out
