# fieldtrace/integrators/fixed.py
"""
Fixed step-length path tracing with a selectable stepper.
"""

from __future__ import annotations
from typing import List
import numpy as np

from ..utils.vectors import as_point, is_finite
from .base import (
    AdaptStep,
    DirectionFn,
    PathTrace,
    StepperFn,
    StepperRegistry,
    StopFn,
    StopReason,
    never_stop,
)
from .euler import euler_step
from .rk2 import rk2_step
from .rk4 import rk4_step

STEPPERS: StepperRegistry = {
    "euler": euler_step,
    "rk2": rk2_step,
    "rk4": rk4_step,
}


def get_stepper(name: str) -> StepperFn:
    """Look up a stepper by name ('euler', 'rk2', 'rk4')."""
    try:
        return STEPPERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown integrator '{name}'. Available: {sorted(STEPPERS)}") from None


def trace_fixed(
    direction_fn: DirectionFn,
    start: np.ndarray,
    step: float,
    max_steps: int,
    stop_fn: StopFn = never_stop,
    method: str = "rk4",
) -> PathTrace:
    """
    Follow the integral curve of ``direction_fn`` with a constant step.

    Same termination rules as :func:`trace_adaptive`: non-finite points are
    discarded and end the trace, ``stop_fn`` is checked after every point.

    Parameters
    ----------
    direction_fn : callable(point) -> direction
    start : (2,) start point (not included in the result)
    step : step length
    max_steps : maximum number of steps
    stop_fn : callable(point, step_length) -> bool
    method : stepper name, see ``STEPPERS``

    Returns
    -------
    PathTrace
    """
    stepper = get_stepper(method)
    x = as_point(start)
    h = float(step)

    points: List[np.ndarray] = []
    stop_reason = StopReason.MAX_STEPS

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for _ in range(int(max_steps)):
            x_next = stepper(x, h, direction_fn)
            if not is_finite(x_next):
                stop_reason = StopReason.NON_FINITE
                break

            x = x_next
            points.append(x)

            if stop_fn(x, h):
                stop_reason = StopReason.STOP_CONDITION
                break

    n = len(points)
    return PathTrace(
        points=np.array(points, dtype=x.dtype).reshape(-1, 2),
        step_lengths=np.full(n, h),
        errors=np.full(n, np.nan),
        adaptations=[AdaptStep.NO_CHANGE] * n,
        stop_reason=stop_reason,
    )
