# fieldtrace/sampling.py
"""
Grid sampling of a source's potential and field, e.g. for a heat-map or
contour layer drawn by an external renderer.
"""

from __future__ import annotations
from typing import Tuple
import numpy as np

from .sources import FieldSource
from .utils.config import get_config


def sample_grid(source: FieldSource, xs: np.ndarray, ys: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate potential and field on the tensor grid ``xs`` x ``ys``.

    Parameters
    ----------
    source : FieldSource
    xs : (nx,) x coordinates
    ys : (ny,) y coordinates

    Returns
    -------
    potential : np.ndarray, shape (ny, nx)
    field : np.ndarray, shape (ny, nx, 2)
        Row ``j`` holds ``ys[j]``, column ``i`` holds ``xs[i]``. Points on a
        singularity give non-finite entries.
    """
    dtype = get_config().np_dtype
    xs = np.asarray(xs, dtype=dtype).reshape(-1)
    ys = np.asarray(ys, dtype=dtype).reshape(-1)

    X, Y = np.meshgrid(xs, ys)
    points = np.stack([X, Y], axis=-1)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        potential = np.asarray(source.potential_at(points)).reshape(X.shape)
        field = np.asarray(source.field_at(points)).reshape(X.shape + (2,))
    return potential, field
