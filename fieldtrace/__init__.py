"""
fieldtrace: isopotential and field-line tracing for 2D electrostatics.

A small package for tracing the geometry of planar electrostatic fields:
- Closed-form field sources (point, regularized, dipole, segment, uniform)
  combined by superposition
- Step-size adaptive RK4 curve tracing with bounded step lengths
- Isopotential contours and bidirectional field lines
- Seeding of field lines along isopotentials by arc length or flux

Core workflow:
1. Build a scene → Composite of sources
2. Trace an isopotential → trace_isopotential / CurveTracer.isopotential
3. Seed field lines along it → subdivide_isopotential
4. Trace the field lines → CurveTracer.field_lines
5. Advance the scene → step_sources, then trace again
"""

from __future__ import annotations

# Version info
__version__ = "0.1.0"
__author__ = "fieldtrace Contributors"

__all__ = [
    # Version
    "__version__",
    # Sources
    "FieldSource",
    "PointCharge",
    "RegularizedCharge",
    "Dipole",
    "SegmentCharge",
    "UniformField",
    "Composite",
    # Integrators
    "euler_step",
    "rk2_step",
    "rk4_step",
    "trace_adaptive",
    "trace_fixed",
    "PathTrace",
    "StopReason",
    "AdaptStep",
    # Tracing
    "TraceOptions",
    "TracedCurve",
    "trace_isopotential",
    "trace_field_line",
    "subdivide_isopotential",
    "line_seeds",
    "circle_seeds",
    "CurveTracer",
    # Scenes and sampling
    "interaction_fields",
    "step_sources",
    "default_scene",
    "get_scene",
    "sample_grid",
    # Configuration and diagnostics
    "get_config",
    "configure",
    "reset_config",
    "Timer",
]

from .sources import (  # noqa: E402
    FieldSource,
    PointCharge,
    RegularizedCharge,
    Dipole,
    SegmentCharge,
    UniformField,
    Composite,
)
from .integrators import (  # noqa: E402
    euler_step,
    rk2_step,
    rk4_step,
    trace_adaptive,
    trace_fixed,
    PathTrace,
    StopReason,
    AdaptStep,
)
from .tracing import (  # noqa: E402
    TraceOptions,
    TracedCurve,
    trace_isopotential,
    trace_field_line,
    subdivide_isopotential,
    line_seeds,
    circle_seeds,
    CurveTracer,
)
from .scenes import interaction_fields, step_sources, default_scene, get_scene  # noqa: E402
from .sampling import sample_grid  # noqa: E402
from .utils.config import get_config, configure, reset_config  # noqa: E402
from .utils.logging import Timer  # noqa: E402
