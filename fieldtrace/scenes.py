# fieldtrace/scenes.py
"""
Scene helpers: the per-tick interaction step between movable sources and a
few preset arrangements used by the demo CLI and the tests.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Sequence
import numpy as np

from .sources import Composite, FieldSource, PointCharge, RegularizedCharge, SegmentCharge


def _field_from_others(sources: List[FieldSource], i: int) -> np.ndarray:
    pos = sources[i].position()
    total = np.zeros_like(pos)
    for j, other in enumerate(sources):
        if j != i:
            total = total + other.field_at(pos)
    return total


def interaction_fields(sources: Sequence[FieldSource]) -> List[np.ndarray]:
    """
    Field acting on each source from all the others.

    For source ``i`` this is the sum of ``field_at(sources[i].position())``
    over every ``j != i``; a source never acts on itself.
    """
    sources = list(sources)
    return [_field_from_others(sources, i) for i in range(len(sources))]


def step_sources(sources: Sequence[FieldSource], dt: float, simultaneous: bool = False) -> List[np.ndarray]:
    """
    Advance every source by one tick.

    By default sources are moved in order: source ``i`` is advanced under
    the field of all the others as they stand at that moment, so it already
    sees sources ``0 .. i-1`` at their new positions. With
    ``simultaneous=True`` every field is evaluated before any source moves
    and the result no longer depends on the order of ``sources``.

    ``sources`` may be a Composite, whose members are stepped against each
    other. Must not run while a trace over the same sources is in progress.

    Returns
    -------
    list of np.ndarray
        The ambient field each source was advanced with
    """
    sources = list(sources)
    if simultaneous:
        fields = interaction_fields(sources)
        for source, ambient in zip(sources, fields):
            source.advance(ambient, dt)
        return fields

    fields = []
    for i, source in enumerate(sources):
        ambient = _field_from_others(sources, i)
        source.advance(ambient, dt)
        fields.append(ambient)
    return fields


# ------------------------ Presets ------------------------

def default_scene() -> Composite:
    """
    Negatively charged rod along the x axis between two positive discs.

    Segment charge -100 from (-100, 0) to (100, 0), and regularized charges
    +50 of radius 20 at (0, 50) and (0, -50).
    """
    return Composite([
        SegmentCharge(start=(-100.0, 0.0), end=(100.0, 0.0), charge=-100.0),
        RegularizedCharge(charge=50.0, mass=1.0, radius=20.0, pos=(0.0, 50.0)),
        RegularizedCharge(charge=50.0, mass=1.0, radius=20.0, pos=(0.0, -50.0)),
    ])


def single_charge_scene() -> Composite:
    """Point charge +50 at the origin."""
    return Composite([PointCharge(charge=50.0, pos=(0.0, 0.0))])


def charge_pair_scene() -> Composite:
    """Opposite point charges +50 at (0, 50) and -50 at (0, -50)."""
    return Composite([
        PointCharge(charge=50.0, pos=(0.0, 50.0)),
        PointCharge(charge=-50.0, pos=(0.0, -50.0)),
    ])


SCENES: Dict[str, Callable[[], Composite]] = {
    "default": default_scene,
    "single": single_charge_scene,
    "pair": charge_pair_scene,
}


def get_scene(name: str) -> Composite:
    """Build a preset scene by name."""
    try:
        factory = SCENES[name]
    except KeyError:
        raise ValueError(f"Unknown scene '{name}'. Available: {sorted(SCENES)}") from None
    return factory()
