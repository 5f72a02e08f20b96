# fieldtrace/tracing/tracer.py
"""
Curve tracer bound to one field-source snapshot.

- Shared TraceOptions for isopotentials and field lines
- Batch field-line tracing from seed sets or from traced isopotentials
- Single-line progress updates or tqdm progress bar
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional
import numpy as np

from ..sources import FieldSource
from ..utils.config import get_config
from ..utils.logging import make_progress
from ..utils.vectors import as_points
from .curves import TracedCurve
from .field_lines import _trace_field_line
from .isopotential import _trace_isopotential
from .options import TraceOptions
from .seeding import subdivide_isopotential


@dataclass
class CurveTracer:
    """
    Traces isopotentials and field lines of a source.

    The tracer only reads ``source``; any kinematic update of the scene must
    happen between calls, never during one.
    """
    source: FieldSource
    options: TraceOptions = field(default_factory=TraceOptions)
    progress_desc: str = "Field lines"
    progress_style: Optional[str] = None   # None: use the package config

    def __post_init__(self):
        for name in ("position", "field_at", "potential_at", "advance"):
            if not callable(getattr(self.source, name, None)):
                raise ValueError(f"source must provide {name}()")

    # ------------------------ Single curves ------------------------

    def isopotential(self, seed: np.ndarray) -> TracedCurve:
        return _trace_isopotential(self.source, seed, self.options)

    def field_line(self, seed: np.ndarray) -> TracedCurve:
        return _trace_field_line(self.source, seed, self.options)

    # ------------------------ Batches ------------------------

    def _progress_style(self) -> str:
        if self.progress_style is not None:
            return self.progress_style
        return get_config().effective_progress_style()

    def field_lines(self, seeds: np.ndarray) -> List[TracedCurve]:
        """Trace one field line per seed, in seed order."""
        seeds = as_points(seeds).reshape(-1, 2)
        if len(seeds) == 0:
            return []

        update, close = make_progress(len(seeds), desc=self.progress_desc, style=self._progress_style())
        lines = []
        try:
            for i, seed in enumerate(seeds, start=1):
                lines.append(self.field_line(seed))
                update(i)
        finally:
            close()
        return lines

    def field_lines_from_isopotential(
        self,
        contour: TracedCurve,
        spacing: float,
        metric: str = "arclength",
    ) -> List[TracedCurve]:
        """
        Seed field lines along a traced isopotential and trace them.

        Closed contours are walked all the way round, seed to seed.
        """
        seeds = subdivide_isopotential(contour.as_polygon(), spacing, source=self.source, metric=metric)
        return self.field_lines(seeds)

    def field_lines_from_isopotentials(
        self,
        contours: Iterable[TracedCurve],
        spacing: float,
        metric: str = "arclength",
    ) -> List[TracedCurve]:
        """Field lines seeded from every contour, contour by contour."""
        seed_sets = [
            subdivide_isopotential(c.as_polygon(), spacing, source=self.source, metric=metric)
            for c in contours
        ]
        if not seed_sets:
            return []
        return self.field_lines(np.concatenate(seed_sets, axis=0))
