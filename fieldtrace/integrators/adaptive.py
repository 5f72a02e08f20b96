# fieldtrace/integrators/adaptive.py
"""
Step-size adaptive RK4 path tracing along a direction field.

The step length is doubled or halved from a local error proxy, with
hysteresis: within one step the length may only move in one direction, so
every step settles after a bounded number of retries and never oscillates
between two lengths.
"""

from __future__ import annotations
from typing import List
import numpy as np

from ..utils.vectors import as_point, is_finite
from .base import AdaptStep, DirectionFn, PathTrace, StopFn, StopReason, never_stop
from .rk4 import rk4_combine, rk4_error, rk4_stages


def trace_adaptive(
    direction_fn: DirectionFn,
    start: np.ndarray,
    min_step: float,
    max_step: float,
    error_tolerance: float,
    max_steps: int,
    stop_fn: StopFn = never_stop,
) -> PathTrace:
    """
    Follow the integral curve of ``direction_fn`` from ``start``.

    Per step, with ``err = |k1 - 4 k2 + 2 k3 + k4| / 6``:

    - err >= tol: halve the step (not below ``min_step``) and retry,
      unless this step was already lengthened; then accept as is.
    - err < tol / 10: double the step (not above ``max_step``) and retry,
      unless this step was already shortened; then accept as is.
    - otherwise accept.

    The step length starts at ``max_step`` and carries over between steps.
    A non-finite next point (singularity, zero field) is discarded and ends
    the trace; everything accepted so far is returned.

    Parameters
    ----------
    direction_fn : callable(point) -> direction
    start : (2,) start point (not included in the result)
    min_step, max_step : step length bounds, 0 < min_step <= max_step
    error_tolerance : tolerance on the error proxy
    max_steps : maximum number of accepted steps
    stop_fn : callable(point, step_length) -> bool, checked after every
        accepted point

    Returns
    -------
    PathTrace
    """
    x = as_point(start)
    h = float(max_step)
    tol = float(error_tolerance)

    points: List[np.ndarray] = []
    step_lengths: List[float] = []
    errors: List[float] = []
    adaptations: List[AdaptStep] = []
    stop_reason = StopReason.MAX_STEPS

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for _ in range(int(max_steps)):
            adapt = AdaptStep.NO_CHANGE

            while True:
                stages = rk4_stages(x, h, direction_fn)
                err = rk4_error(stages)

                if err >= tol:
                    if h > min_step and adapt is not AdaptStep.INCREASE:
                        h = max(0.5 * h, min_step)
                        adapt = AdaptStep.DECREASE
                        continue
                elif err < tol / 10.0:
                    if h < max_step and adapt is not AdaptStep.DECREASE:
                        h = min(2.0 * h, max_step)
                        adapt = AdaptStep.INCREASE
                        continue
                break

            x_next = rk4_combine(x, h, stages)
            if not is_finite(x_next):
                stop_reason = StopReason.NON_FINITE
                break

            x = x_next
            points.append(x)
            step_lengths.append(h)
            errors.append(err)
            adaptations.append(adapt)

            if stop_fn(x, h):
                stop_reason = StopReason.STOP_CONDITION
                break

    return PathTrace(
        points=np.array(points, dtype=x.dtype).reshape(-1, 2),
        step_lengths=step_lengths,
        errors=errors,
        adaptations=adaptations,
        stop_reason=stop_reason,
    )
