# fieldtrace/tracing/field_lines.py
"""
Field-line tracing.

A field line is traced both ways from its seed: forward along E / |E|
(towards lower potential) and backward along -E / |E|. Each branch stops
once |V| exceeds a threshold, which happens close to point-like sources.
"""

from __future__ import annotations
import numpy as np

from ..integrators import DirectionFn, StopFn
from ..sources import FieldSource
from ..utils.vectors import as_point, normalize
from .curves import FIELD_LINE, TracedCurve, warn_if_truncated
from .options import ADAPTIVE, DEFAULT_MAX_POTENTIAL, TraceOptions


def field_direction(source: FieldSource, sign: float = 1.0) -> DirectionFn:
    """Unit field direction, reversed for ``sign < 0``."""
    def direction(point: np.ndarray) -> np.ndarray:
        return sign * normalize(source.field_at(point))
    return direction


def potential_exceeds(source: FieldSource, max_potential: float) -> StopFn:
    def stop(point: np.ndarray, h: float) -> bool:
        return bool(abs(source.potential_at(point)) > max_potential)
    return stop


def trace_field_line(
    source: FieldSource,
    seed: np.ndarray,
    min_step: float = 5e-3,
    max_step: float = 5.0,
    error_tolerance: float = 1e-3,
    max_steps: int = 1000,
    max_potential: float = DEFAULT_MAX_POTENTIAL,
    *,
    method: str = ADAPTIVE,
) -> TracedCurve:
    """
    Trace the field line of ``source`` through ``seed``.

    Parameters
    ----------
    source : FieldSource
        Field to trace; only read
    seed : (2,) point on the line
    min_step, max_step : step length bounds
    error_tolerance : tolerance on the RK4 error proxy
    max_steps : step budget per direction
    max_potential : a branch ends once |V| exceeds this
    method : 'adaptive' or a fixed stepper name

    Returns
    -------
    TracedCurve
        reverse(forward) + [seed] + backward: one polyline running from
        the low-potential end to the high-potential end, with the seed at
        ``metadata['seed_index']``. At most 2 * max_steps + 1 points.
    """
    options = TraceOptions(
        min_step=min_step,
        max_step=max_step,
        error_tolerance=error_tolerance,
        max_steps=max_steps,
        max_potential=max_potential,
        method=method,
    )
    return _trace_field_line(source, seed, options)


def _trace_field_line(source: FieldSource, seed: np.ndarray, options: TraceOptions) -> TracedCurve:
    seed = as_point(seed)
    stop = potential_exceeds(source, options.max_potential)

    forward = options.trace(field_direction(source, 1.0), seed, stop)
    backward = options.trace(field_direction(source, -1.0), seed, stop)

    points = np.vstack([forward.points[::-1], seed[None, :], backward.points])
    step_lengths = np.concatenate([forward.step_lengths[::-1], [np.nan], backward.step_lengths])

    curve = TracedCurve(
        points=points,
        seed=seed,
        kind=FIELD_LINE,
        stop_reasons=(forward.stop_reason, backward.stop_reason),
        step_lengths=step_lengths,
        metadata={
            "seed_index": len(forward),
            "n_forward": len(forward),
            "n_backward": len(backward),
            "options": options.as_dict(),
        },
    )
    warn_if_truncated(curve)
    return curve
