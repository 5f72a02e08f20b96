# fieldtrace/sources/dipole.py
"""
Ideal point dipole with rotational dynamics.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np

from ..utils.vectors import as_point, cross2d, dot, length_squared
from .base import Array, Potential, semi_implicit_step, scalar_or_array


@dataclass(eq=False)
class Dipole:
    """
    Point dipole of moment p = moment * (cos(angle), sin(angle)).

    E = (3 (p . r^) r^ - p) / |r|^3 and V = p . r / |r|^3 with
    r = point - pos. Singular at ``pos``.

    The dipole does not translate. Under an ambient field E it feels the
    torque p x E and its angle evolves with the same semi-implicit step as
    the translating charges, using ``inertia`` as moment of inertia.
    """
    moment: float
    inertia: float = 1.0
    pos: Array = field(default_factory=lambda: np.zeros(2))
    angle: float = 0.0
    angular_velocity: float = 0.0

    def __post_init__(self):
        self.pos = as_point(self.pos)
        self.angle = float(self.angle)
        self.angular_velocity = float(self.angular_velocity)

    def moment_vector(self) -> Array:
        return self.moment * np.array([np.cos(self.angle), np.sin(self.angle)], dtype=self.pos.dtype)

    def position(self) -> Array:
        return self.pos.copy()

    def field_at(self, point: Array) -> Array:
        p = self.moment_vector()
        r = np.asarray(point, dtype=self.pos.dtype) - self.pos
        r_sq = length_squared(r)[..., None]
        p_dot_r = dot(p, r)[..., None]
        return (3.0 * p_dot_r * r / r_sq - p) / r_sq ** 1.5

    def potential_at(self, point: Array) -> Potential:
        p = self.moment_vector()
        r = np.asarray(point, dtype=self.pos.dtype) - self.pos
        return scalar_or_array(dot(p, r) / length_squared(r) ** 1.5)

    def torque(self, ambient_field: Array) -> float:
        return float(cross2d(self.moment_vector(), np.asarray(ambient_field)))

    def advance(self, ambient_field: Array, dt: float) -> None:
        alpha = self.torque(ambient_field) / self.inertia
        self.angle, self.angular_velocity = semi_implicit_step(
            self.angle, self.angular_velocity, alpha, dt
        )
