# fieldtrace/tracing/options.py
"""
Trace configuration shared by the isopotential and field-line tracers.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict
import numpy as np

from ..integrators import (
    DirectionFn,
    PathTrace,
    StopFn,
    STEPPERS,
    never_stop,
    trace_adaptive,
    trace_fixed,
)

# Field lines end once |V| exceeds this, i.e. close to a point-like source.
DEFAULT_MAX_POTENTIAL = 300.0

ADAPTIVE = "adaptive"


@dataclass(frozen=True)
class TraceOptions:
    """
    Configuration options for curve tracing.

    Attributes
    ----------
    min_step, max_step : float
        Step length bounds, 0 < min_step <= max_step
    error_tolerance : float
        Tolerance on the RK4 local error proxy
    max_steps : int
        Step budget per trace direction
    max_potential : float
        Field-line termination threshold on |V|
    method : str
        'adaptive' (RK4 with step control) or a fixed stepper name
        ('euler', 'rk2', 'rk4'), which then steps with ``max_step``
    """
    min_step: float = 5e-3
    max_step: float = 5.0
    error_tolerance: float = 1e-3
    max_steps: int = 1000
    max_potential: float = DEFAULT_MAX_POTENTIAL
    method: str = ADAPTIVE

    def __post_init__(self):
        for name in ("min_step", "max_step", "error_tolerance", "max_potential"):
            value = getattr(self, name)
            if not (np.isfinite(value) and value > 0):
                raise ValueError(f"{name} must be positive and finite, got {value}")
        if self.min_step > self.max_step:
            raise ValueError(f"min_step ({self.min_step}) must not exceed max_step ({self.max_step})")
        if int(self.max_steps) != self.max_steps or self.max_steps <= 0:
            raise ValueError(f"max_steps must be a positive integer, got {self.max_steps}")
        if self.method != ADAPTIVE and self.method not in STEPPERS:
            raise ValueError(
                f"method must be '{ADAPTIVE}' or one of {sorted(STEPPERS)}, got '{self.method}'"
            )

    @property
    def is_adaptive(self) -> bool:
        return self.method == ADAPTIVE

    def trace(self, direction_fn: DirectionFn, start: np.ndarray, stop_fn: StopFn = never_stop) -> PathTrace:
        """Run one unidirectional path trace with these options."""
        if self.is_adaptive:
            return trace_adaptive(
                direction_fn,
                start,
                self.min_step,
                self.max_step,
                self.error_tolerance,
                int(self.max_steps),
                stop_fn,
            )
        return trace_fixed(
            direction_fn,
            start,
            self.max_step,
            int(self.max_steps),
            stop_fn,
            method=self.method,
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
