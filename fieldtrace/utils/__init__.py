# fieldtrace/utils/__init__.py
"""
Utilities for fieldtrace.

Contains:
- config: global package configuration (dtype, progress, verbosity)
- vectors: 2D point conversion and vector helpers
- logging: stage timer, memory figures, progress reporters
"""

from .config import (
    PackageConfig,
    get_config,
    configure,
    reset_config,
)

from .vectors import (
    as_point,
    as_points,
    dot,
    length,
    length_squared,
    normalize,
    perp,
    cross2d,
    is_finite,
    rotation_matrix,
    rotate2d,
)

from .logging import (
    Timer,
    memory_info,
    make_progress,
)

__all__ = [
    # config
    "PackageConfig",
    "get_config",
    "configure",
    "reset_config",
    # vectors
    "as_point",
    "as_points",
    "dot",
    "length",
    "length_squared",
    "normalize",
    "perp",
    "cross2d",
    "is_finite",
    "rotation_matrix",
    "rotate2d",
    # logging
    "Timer",
    "memory_info",
    "make_progress",
]
