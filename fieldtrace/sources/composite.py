# fieldtrace/sources/composite.py
"""
Superposition of field sources.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Optional
import numpy as np

from ..utils.vectors import as_points
from .base import Array, FieldSource, Potential, scalar_or_array


class Composite:
    """
    Ordered collection of field sources acting as one source.

    ``field_at`` and ``potential_at`` are the sums over the members and
    ``position`` is the mean member position (the origin when empty).
    ``advance`` hands the same ambient field to every member; resolving the
    interaction between members is up to the caller (see
    :func:`fieldtrace.scenes.step_sources`).

    The composite owns its members: add a source to one composite only.
    """

    def __init__(self, members: Optional[Iterable[FieldSource]] = None):
        self._members: List[FieldSource] = list(members) if members is not None else []

    # ---------- Container protocol ----------

    def add(self, member: FieldSource) -> None:
        self._members.append(member)

    def remove(self, member: FieldSource) -> None:
        """Remove ``member`` by identity; ValueError if it is not held."""
        for i, held in enumerate(self._members):
            if held is member:
                del self._members[i]
                return
        raise ValueError(f"{member!r} is not a member of this composite")

    @property
    def members(self) -> List[FieldSource]:
        return list(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[FieldSource]:
        return iter(self._members)

    def __getitem__(self, index: int) -> FieldSource:
        return self._members[index]

    def __repr__(self) -> str:
        return f"Composite({self._members!r})"

    # ---------- FieldSource ----------

    def position(self) -> Array:
        if not self._members:
            return np.zeros(2)
        return np.mean([m.position() for m in self._members], axis=0)

    def field_at(self, point: Array) -> Array:
        point = as_points(point)
        total = np.zeros_like(point)
        for member in self._members:
            total = total + member.field_at(point)
        return total

    def potential_at(self, point: Array) -> Potential:
        point = as_points(point)
        total = np.zeros(point.shape[:-1])
        for member in self._members:
            total = total + member.potential_at(point)
        return scalar_or_array(total)

    def advance(self, ambient_field: Array, dt: float) -> None:
        for member in self._members:
            member.advance(ambient_field, dt)
