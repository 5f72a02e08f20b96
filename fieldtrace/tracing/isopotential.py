# fieldtrace/tracing/isopotential.py
"""
Isopotential (equipotential contour) tracing.

Level curves of the potential are everywhere perpendicular to the field, so
the tracer follows perp(E / |E|), always rotating the field by +90 degrees.
That walks counter-clockwise around a positive charge and clockwise around
a negative one.
"""

from __future__ import annotations
import numpy as np

from ..integrators import DirectionFn, StopFn, StopReason
from ..sources import FieldSource
from ..utils.vectors import as_point, length, normalize, perp
from .curves import ISOPOTENTIAL, TracedCurve, warn_if_truncated
from .options import ADAPTIVE, DEFAULT_MAX_POTENTIAL, TraceOptions


def isopotential_direction(source: FieldSource) -> DirectionFn:
    """Unit tangent of the level curve through a point."""
    def direction(point: np.ndarray) -> np.ndarray:
        return perp(normalize(source.field_at(point)))
    return direction


def loop_closure(seed: np.ndarray) -> StopFn:
    """Stop once a point comes within half the current step of ``seed``."""
    def stop(point: np.ndarray, h: float) -> bool:
        return bool(length(point - seed) < 0.5 * h)
    return stop


def trace_isopotential(
    source: FieldSource,
    seed: np.ndarray,
    min_step: float = 5e-3,
    max_step: float = 5.0,
    error_tolerance: float = 1e-3,
    max_steps: int = 1000,
    *,
    method: str = ADAPTIVE,
) -> TracedCurve:
    """
    Trace the isopotential of ``source`` through ``seed``.

    Parameters
    ----------
    source : FieldSource
        Field to trace; only read
    seed : (2,) start point
    min_step, max_step : step length bounds
    error_tolerance : tolerance on the RK4 error proxy
    max_steps : step budget
    method : 'adaptive' or a fixed stepper name

    Returns
    -------
    TracedCurve
        Points in tracing order, seed excluded. ``closed`` is True when
        the curve returned to within half a step of the seed; use
        ``as_polygon()`` for a closed vertex list.
    """
    options = TraceOptions(
        min_step=min_step,
        max_step=max_step,
        error_tolerance=error_tolerance,
        max_steps=max_steps,
        max_potential=DEFAULT_MAX_POTENTIAL,
        method=method,
    )
    return _trace_isopotential(source, seed, options)


def _trace_isopotential(source: FieldSource, seed: np.ndarray, options: TraceOptions) -> TracedCurve:
    seed = as_point(seed)
    path = options.trace(isopotential_direction(source), seed, loop_closure(seed))

    curve = TracedCurve(
        points=path.points,
        seed=seed,
        kind=ISOPOTENTIAL,
        closed=path.stop_reason is StopReason.STOP_CONDITION,
        stop_reasons=(path.stop_reason,),
        step_lengths=path.step_lengths,
        metadata={"options": options.as_dict()},
    )
    warn_if_truncated(curve)
    return curve
