# fieldtrace/sources/uniform.py
"""
Uniform background field.
"""

from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from ..utils.vectors import as_point, dot
from .base import Array, Potential, scalar_or_array


@dataclass(eq=False)
class UniformField:
    """Constant field E everywhere, with V = -point . E (zero at the origin)."""
    field: Array

    def __post_init__(self):
        self.field = as_point(self.field)

    def position(self) -> Array:
        # Nominal reference point
        return np.zeros(2, dtype=self.field.dtype)

    def field_at(self, point: Array) -> Array:
        point = np.asarray(point, dtype=self.field.dtype)
        return np.broadcast_to(self.field, point.shape).copy()

    def potential_at(self, point: Array) -> Potential:
        point = np.asarray(point, dtype=self.field.dtype)
        return scalar_or_array(-dot(point, self.field))

    def advance(self, ambient_field: Array, dt: float) -> None:
        """Background fields are immobile."""
