"""
fieldtrace integrators

Path tracers along 2D direction fields. Fixed steppers share the signature

    x_next = step(x, h, direction_fn)

where:
- x: (2,) current point
- h: step length
- direction_fn: callable (2,) -> (2,)

trace_adaptive drives RK4 with a hysteresis-controlled step length;
trace_fixed drives any registered stepper with a constant one.
"""

from .base import (
    DirectionFn,
    StopFn,
    StepperFn,
    StopReason,
    AdaptStep,
    PathTrace,
    never_stop,
)
from .euler import euler_step
from .rk2 import rk2_step
from .rk4 import rk4_step, rk4_stages, rk4_error
from .adaptive import trace_adaptive
from .fixed import STEPPERS, get_stepper, trace_fixed

__all__ = [
    "DirectionFn",
    "StopFn",
    "StepperFn",
    "StopReason",
    "AdaptStep",
    "PathTrace",
    "never_stop",
    "euler_step",
    "rk2_step",
    "rk4_step",
    "rk4_stages",
    "rk4_error",
    "trace_adaptive",
    "STEPPERS",
    "get_stepper",
    "trace_fixed",
]
