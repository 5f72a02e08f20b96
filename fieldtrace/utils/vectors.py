# fieldtrace/utils/vectors.py
from __future__ import annotations
from typing import Sequence, Union
import numpy as np

from .config import get_config

Array = np.ndarray
PointLike = Union[Array, Sequence[float]]

# -------------------------
# Conversion
# -------------------------

def as_point(p: PointLike) -> Array:
    """Convert to a (2,) array in the configured dtype (copies)."""
    pt = np.array(p, dtype=get_config().np_dtype)
    if pt.shape != (2,):
        raise ValueError(f"Point must have shape (2,), got {pt.shape}")
    return pt

def as_points(pts: PointLike) -> Array:
    """Convert to an (..., 2) array in the configured dtype."""
    arr = np.asarray(pts, dtype=get_config().np_dtype)
    if arr.ndim == 0 or arr.shape[-1] != 2:
        raise ValueError(f"Points must have a trailing dimension of 2, got shape {arr.shape}")
    return arr

# -------------------------
# Vector helpers (broadcast over leading axes)
# -------------------------

def dot(a: Array, b: Array) -> Array:
    return np.sum(a * b, axis=-1)

def length_squared(v: Array) -> Array:
    return np.sum(v * v, axis=-1)

def length(v: Array) -> Array:
    return np.sqrt(length_squared(v))

def normalize(v: Array) -> Array:
    """Unit vector along ``v``; a zero vector gives NaN components."""
    return v / length(v)[..., None]

def perp(v: Array) -> Array:
    """Rotate by +90 degrees: (x, y) -> (-y, x)."""
    return np.stack([-v[..., 1], v[..., 0]], axis=-1)

def cross2d(a: Array, b: Array) -> Array:
    """z-component of the 3D cross product of two in-plane vectors."""
    return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]

def is_finite(v: Array) -> bool:
    return bool(np.all(np.isfinite(v)))

# -------------------------
# Transforms
# -------------------------

def rotation_matrix(theta: float) -> Array:
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s], [s, c]], dtype=float)

def rotate2d(pts: Array, R: Array) -> Array:
    """Apply a 2x2 rotation to (..., 2) points."""
    return pts @ R.T
