# fieldtrace/integrators/euler.py
"""
Forward Euler step along a direction field.

First order; mainly useful as a cheap preview and as a reference in tests.
"""

from __future__ import annotations
import numpy as np

from .base import DirectionFn


def euler_step(x: np.ndarray, h: float, direction_fn: DirectionFn) -> np.ndarray:
    """
    Forward Euler step.

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
        x + h * f(x)
    """
    return x + h * direction_fn(x)
