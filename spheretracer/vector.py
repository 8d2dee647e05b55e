"""Vector math on numpy float64 arrays of shape (3,).

Every function returns a new array and never modifies its arguments, so a
vector can be shared freely between scene objects and rays.
"""
import math

import numpy as np
from numpy.typing import ArrayLike, NDArray


def vec(values: ArrayLike) -> NDArray[np.float64]:
    """Handy shorthand to make a read-only double-precision 3-vector."""
    v = np.array(values, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {v.shape}")
    v.setflags(write=False)
    return v


def scale(v: NDArray[np.float64], s: float) -> NDArray[np.float64]:
    return v * s


def dot(u: NDArray[np.float64], v: NDArray[np.float64]) -> float:
    return float(u[0] * v[0] + u[1] * v[1] + u[2] * v[2])


def add(u: NDArray[np.float64], v: NDArray[np.float64]) -> NDArray[np.float64]:
    return u + v


def sub(u: NDArray[np.float64], v: NDArray[np.float64]) -> NDArray[np.float64]:
    return u - v


def magnitude(v: NDArray[np.float64]) -> float:
    return math.sqrt(dot(v, v))


def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Return a unit vector in the direction of v.

    v must not be the zero vector; the reciprocal of a zero magnitude raises
    ZeroDivisionError.
    """
    return scale(v, 1.0 / magnitude(v))


def clamp(v: NDArray[np.float64], low: float, high: float) -> NDArray[np.float64]:
    return np.minimum(np.maximum(v, low), high)


def to_byte_color(v: NDArray[np.float64]) -> NDArray[np.uint8]:
    """Map each component to floor(c * 255) saturated to [0, 255].

    Overbright components stay white (1.5 becomes 255), negative ones and NaN
    become 0.
    """
    scaled = np.nan_to_num(np.floor(v * 255.0), nan=0.0)
    return np.clip(scaled, 0.0, 255.0).astype(np.uint8)
