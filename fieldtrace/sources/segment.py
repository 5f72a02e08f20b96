# fieldtrace/sources/segment.py
"""
Finite, uniformly charged straight segment.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np

from ..utils.vectors import as_point, rotation_matrix, rotate2d
from .base import Array, Potential, scalar_or_array


@dataclass(eq=False)
class SegmentCharge:
    """
    Segment from ``start`` to ``end`` carrying total charge ``charge``.

    Evaluation happens in the segment's local frame (centre at the origin,
    segment along x, half-length d, density lambda), where

        Ex = -(lambda/2) ln(db^2 / da^2)
        Ey = lambda * theta,  theta = atan((d+x)/y) + atan((d-x)/y)
        V  = (lambda/2) ((x-d) ln db^2 - (x+d) ln da^2 - 2 y theta + 4 d)

    with da^2 = (x+d)^2 + y^2 and db^2 = (x-d)^2 + y^2, and the field is
    rotated back to the world frame. Only the end points are singular.
    Segments are immobile.
    """
    start: Array
    end: Array
    charge: float

    # Derived geometry
    center: Array = field(init=False)
    length: float = field(init=False)
    charge_density: float = field(init=False)
    rot: Array = field(init=False, repr=False)
    rot_inv: Array = field(init=False, repr=False)

    def __post_init__(self):
        self.start = as_point(self.start)
        self.end = as_point(self.end)

        delta = self.end - self.start
        theta = float(np.arctan2(delta[1], delta[0]))
        self.center = 0.5 * (self.start + self.end)
        self.length = float(np.hypot(delta[0], delta[1]))
        self.charge_density = self.charge / self.length
        self.rot = rotation_matrix(theta)
        self.rot_inv = rotation_matrix(-theta)

    def _local(self, point: Array):
        p = rotate2d(np.asarray(point, dtype=self.center.dtype) - self.center, self.rot_inv)
        x, y = p[..., 0], p[..., 1]
        d = 0.5 * self.length
        da_sq = (x + d) ** 2 + y ** 2
        db_sq = (x - d) ** 2 + y ** 2
        # atan(a/y) == sign(y) * atan2(a, |y|), finite on the line y == 0
        abs_y = np.abs(y)
        theta = np.copysign(np.arctan2(d + x, abs_y) + np.arctan2(d - x, abs_y), y)
        return x, y, d, da_sq, db_sq, theta

    def position(self) -> Array:
        return self.center.copy()

    def field_at(self, point: Array) -> Array:
        _, _, _, da_sq, db_sq, theta = self._local(point)
        local = self.charge_density * np.stack([-0.5 * np.log(db_sq / da_sq), theta], axis=-1)
        return rotate2d(local, self.rot)

    def potential_at(self, point: Array) -> Potential:
        x, y, d, da_sq, db_sq, theta = self._local(point)
        value = 0.5 * self.charge_density * (
            (x - d) * np.log(db_sq) - (x + d) * np.log(da_sq) - 2.0 * y * theta + 4.0 * d
        )
        return scalar_or_array(value)

    def advance(self, ambient_field: Array, dt: float) -> None:
        """Segments are fixed in place."""
