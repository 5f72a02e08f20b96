# fieldtrace/integrators/base.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Protocol
import numpy as np

# Direction field: maps a point (2,) to a direction vector (2,)
DirectionFn = Callable[[np.ndarray], np.ndarray]
"""
Direction field protocol.

Parameters
----------
point : np.ndarray
    Current position, shape (2,)

Returns
-------
np.ndarray
    Direction (usually unit length) at ``point``, shape (2,)
"""

# Stop predicate: (accepted point, step length used) -> stop?
StopFn = Callable[[np.ndarray, float], bool]


class StepperFn(Protocol):
    """
    Protocol for fixed-step stepper functions.

    All steppers share this signature so path tracers can switch between
    them by name.
    """

    def __call__(self, x: np.ndarray, h: float, direction_fn: DirectionFn) -> np.ndarray:
        """
        Advance a point by one step.

        Parameters
        ----------
        x : np.ndarray
            Current position, shape (2,)
        h : float
            Step length
        direction_fn : DirectionFn
            Direction field

        Returns
        -------
        np.ndarray
            New position, shape (2,)
        """
        ...


class StopReason(str, Enum):
    """Why a path trace ended."""
    STOP_CONDITION = "stop_condition"   # caller's predicate fired
    MAX_STEPS = "max_steps"             # step budget exhausted
    NON_FINITE = "non_finite"           # next point was NaN/inf and was discarded


class AdaptStep(str, Enum):
    """Step-length adaptation applied while accepting one step."""
    NO_CHANGE = "no_change"
    DECREASE = "decrease"
    INCREASE = "increase"


StepperRegistry = Dict[str, StepperFn]
"""Registry mapping stepper names to functions."""


def never_stop(point: np.ndarray, h: float) -> bool:
    """Stop predicate that only lets the step budget end a trace."""
    return False


@dataclass
class PathTrace:
    """
    Accepted points of one unidirectional path trace.

    The start point is not included. Per-step arrays are aligned with
    ``points``: entry i describes the step that produced ``points[i]``.

    Attributes
    ----------
    points : np.ndarray
        Accepted points, shape (n, 2)
    step_lengths : np.ndarray
        Step length used for each accepted step, shape (n,)
    errors : np.ndarray
        Local error proxy of each accepted step, shape (n,); NaN for
        fixed-step traces
    adaptations : list of AdaptStep
        Step-length change applied while accepting each step
    stop_reason : StopReason
        Why the trace ended
    """
    points: np.ndarray
    step_lengths: np.ndarray
    errors: np.ndarray
    adaptations: List[AdaptStep] = field(default_factory=list)
    stop_reason: StopReason = StopReason.MAX_STEPS

    def __post_init__(self):
        self.points = np.asarray(self.points).reshape(-1, 2)
        self.step_lengths = np.asarray(self.step_lengths, dtype=float).reshape(-1)
        self.errors = np.asarray(self.errors, dtype=float).reshape(-1)
        if not (len(self.points) == len(self.step_lengths) == len(self.errors)):
            raise ValueError("points, step_lengths and errors must have the same length")

    def __len__(self) -> int:
        return len(self.points)

    @property
    def truncated(self) -> bool:
        """True when the trace ended on a non-finite point."""
        return self.stop_reason is StopReason.NON_FINITE
