# fieldtrace/sources/charges.py
"""
Movable point-like charges: the ideal point charge and the regularized
finite-radius charge whose field stays finite at its centre.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np

from ..utils.vectors import as_point, length_squared
from .base import Array, Potential, semi_implicit_step, scalar_or_array


def _zeros2() -> Array:
    return np.zeros(2)


@dataclass(eq=False)
class PointCharge:
    """
    Ideal point charge.

    E = q r / |r|^2 and V = -q ln|r| with r = point - pos. Both are singular
    at ``pos``; sampling exactly there yields non-finite values.

    Attributes
    ----------
    charge : float
        Signed charge
    mass : float
        Inertial mass (> 0, not validated)
    pos, vel : np.ndarray
        Position and velocity, shape (2,)
    """
    charge: float
    mass: float = 1.0
    pos: Array = field(default_factory=_zeros2)
    vel: Array = field(default_factory=_zeros2)

    def __post_init__(self):
        self.pos = as_point(self.pos)
        self.vel = as_point(self.vel)

    def position(self) -> Array:
        return self.pos.copy()

    def field_at(self, point: Array) -> Array:
        r = np.asarray(point, dtype=self.pos.dtype) - self.pos
        return r * (self.charge / length_squared(r))[..., None]

    def potential_at(self, point: Array) -> Potential:
        r = np.asarray(point, dtype=self.pos.dtype) - self.pos
        return scalar_or_array(-0.5 * self.charge * np.log(length_squared(r)))

    def advance(self, ambient_field: Array, dt: float) -> None:
        accel = np.asarray(ambient_field, dtype=self.pos.dtype) * (self.charge / self.mass)
        self.pos, self.vel = semi_implicit_step(self.pos, self.vel, accel, dt)


@dataclass(eq=False)
class RegularizedCharge:
    """
    Charge smeared uniformly over a disc of radius ``radius``.

    Outside the disc it matches a point charge. Inside, the field grows
    linearly from zero (E = q r / r0^2) and the potential is the matching
    parabola, so field and potential are continuous at the rim and finite
    everywhere:

        |r| >= r0:  E = q r / |r|^2,   V = -q ln|r|
        |r| <  r0:  E = q r / r0^2,    V = -(q/2) (ln r0^2 + |r|^2/r0^2 - 1)
    """
    charge: float
    mass: float = 1.0
    radius: float = 1.0
    pos: Array = field(default_factory=_zeros2)
    vel: Array = field(default_factory=_zeros2)

    def __post_init__(self):
        self.pos = as_point(self.pos)
        self.vel = as_point(self.vel)

    @property
    def radius_squared(self) -> float:
        return self.radius * self.radius

    def position(self) -> Array:
        return self.pos.copy()

    def contains(self, point: Array) -> Array:
        """True where ``point`` lies strictly inside the disc."""
        r = np.asarray(point, dtype=self.pos.dtype) - self.pos
        return length_squared(r) < self.radius_squared

    def field_at(self, point: Array) -> Array:
        r = np.asarray(point, dtype=self.pos.dtype) - self.pos
        denom = np.maximum(length_squared(r), self.radius_squared)
        return r * (self.charge / denom)[..., None]

    def potential_at(self, point: Array) -> Potential:
        r = np.asarray(point, dtype=self.pos.dtype) - self.pos
        r_sq = length_squared(r)
        r0_sq = self.radius_squared
        # Outside the parabolic term vanishes and the log term is ln|r|^2.
        inner = np.minimum(r_sq / r0_sq - 1.0, 0.0)
        value = -0.5 * self.charge * (np.log(np.maximum(r_sq, r0_sq)) + inner)
        return scalar_or_array(value)

    def advance(self, ambient_field: Array, dt: float) -> None:
        accel = np.asarray(ambient_field, dtype=self.pos.dtype) * (self.charge / self.mass)
        self.pos, self.vel = semi_implicit_step(self.pos, self.vel, accel, dt)
