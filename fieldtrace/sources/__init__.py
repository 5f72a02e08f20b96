"""
fieldtrace field sources

Closed-form 2D electrostatic sources sharing the FieldSource protocol:

    position() -> (2,)
    field_at(points) -> (..., 2)
    potential_at(points) -> float or (...,)
    advance(ambient_field, dt) -> None

Primitives are combined by superposition with Composite.
"""

from .base import FieldSource, semi_implicit_step
from .charges import PointCharge, RegularizedCharge
from .dipole import Dipole
from .segment import SegmentCharge
from .uniform import UniformField
from .composite import Composite

__all__ = [
    "FieldSource",
    "semi_implicit_step",
    "PointCharge",
    "RegularizedCharge",
    "Dipole",
    "SegmentCharge",
    "UniformField",
    "Composite",
]
