"""
fieldtrace tracing

Isopotential and field-line tracers built on the adaptive RK4 path tracer,
seed generation along contours, and a batch CurveTracer.
"""

from .options import TraceOptions, DEFAULT_MAX_POTENTIAL
from .curves import TracedCurve, ISOPOTENTIAL, FIELD_LINE
from .isopotential import trace_isopotential, isopotential_direction
from .field_lines import trace_field_line, field_direction
from .seeding import subdivide_isopotential, line_seeds, circle_seeds
from .tracer import CurveTracer

__all__ = [
    "TraceOptions",
    "DEFAULT_MAX_POTENTIAL",
    "TracedCurve",
    "ISOPOTENTIAL",
    "FIELD_LINE",
    "trace_isopotential",
    "isopotential_direction",
    "trace_field_line",
    "field_direction",
    "subdivide_isopotential",
    "line_seeds",
    "circle_seeds",
    "CurveTracer",
]
