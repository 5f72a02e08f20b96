# fieldtrace/tracing/curves.py
"""
Traced curve storage.

A TracedCurve is produced once per trace call and is read-only afterwards:
its point array is flagged non-writeable and accessors hand out copies.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple, Union
import warnings
import numpy as np

from ..integrators import StopReason
from ..utils.config import get_config
from ..utils.vectors import as_point, length

ISOPOTENTIAL = "isopotential"
FIELD_LINE = "field_line"


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


@dataclass
class TracedCurve:
    """
    Container for one traced curve.

    Behaves as an ordered, read-only sequence of (2,) points: ``len``,
    indexing, iteration and ``numpy.asarray`` all work on ``points``.

    Attributes
    ----------
    points : np.ndarray
        Curve points, shape (N, 2). Isopotentials exclude the seed; field
        lines contain it once, at ``metadata['seed_index']``.
    seed : np.ndarray
        Seed point, shape (2,)
    kind : str
        'isopotential' or 'field_line'
    closed : bool
        True when an isopotential came back to its seed
    stop_reasons : tuple of StopReason
        One entry per traced direction (forward, backward for field lines)
    step_lengths : np.ndarray, optional
        Step length of every traced point, aligned with ``points`` where
        the seed (if present) has NaN
    metadata : dict
        Additional trace information (options, seed index, ...)
    """
    points: np.ndarray
    seed: np.ndarray
    kind: str = ISOPOTENTIAL
    closed: bool = False
    stop_reasons: Tuple[StopReason, ...] = ()
    step_lengths: Optional[np.ndarray] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.points = _readonly(np.array(self.points).reshape(-1, 2))
        self.seed = _readonly(as_point(self.seed))
        self.stop_reasons = tuple(StopReason(r) for r in self.stop_reasons)
        if self.step_lengths is not None:
            self.step_lengths = _readonly(np.array(self.step_lengths, dtype=float).reshape(-1))
            if len(self.step_lengths) != len(self.points):
                raise ValueError(
                    f"step_lengths length {len(self.step_lengths)} doesn't match {len(self.points)} points"
                )
        if self.kind not in (ISOPOTENTIAL, FIELD_LINE):
            raise ValueError(f"Unknown curve kind '{self.kind}'")

        self.metadata.setdefault("n_points", len(self.points))

    # ---------- Sequence protocol ----------

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, key: Union[int, slice]) -> np.ndarray:
        return self.points[key].copy()

    def __iter__(self) -> Iterator[np.ndarray]:
        for p in self.points:
            yield p.copy()

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self.points, dtype=dtype)

    # ---------- Status ----------

    @property
    def stop_reason(self) -> StopReason:
        """
        Overall stop reason: NON_FINITE if any direction was truncated,
        else STOP_CONDITION if any direction hit its stop condition, else
        MAX_STEPS.
        """
        for reason in (StopReason.NON_FINITE, StopReason.STOP_CONDITION):
            if reason in self.stop_reasons:
                return reason
        return StopReason.MAX_STEPS

    @property
    def truncated(self) -> bool:
        return StopReason.NON_FINITE in self.stop_reasons

    # ---------- Geometry ----------

    def length(self) -> float:
        """Arc length of the polyline through ``points``."""
        if len(self.points) < 2:
            return 0.0
        return float(np.sum(length(np.diff(self.points, axis=0))))

    def as_polygon(self) -> np.ndarray:
        """
        Vertices for drawing.

        Isopotentials start at the seed; closed ones also end at it, giving
        a closed loop. Field lines are returned unchanged.
        """
        if self.kind == FIELD_LINE:
            return self.points.copy()
        parts = [self.seed[None, :], self.points]
        if self.closed:
            parts.append(self.seed[None, :])
        return np.vstack(parts)

    def summary(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "n_points": len(self.points),
            "closed": self.closed,
            "stop_reason": self.stop_reason.value,
            "length": self.length(),
        }


def warn_if_truncated(curve: TracedCurve) -> None:
    """Report a truncated trace when the package is configured verbose."""
    if curve.truncated and get_config().verbose:
        warnings.warn(
            f"{curve.kind} trace from {tuple(curve.seed)} stopped at a non-finite point "
            f"after {len(curve)} points"
        )
